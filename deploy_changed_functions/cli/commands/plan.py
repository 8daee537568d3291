"""Plan command implementation"""

import json
from pathlib import Path

import click

from ..decorators import action_options
from ..utils.output import console, fail, format_plan
from ...api.exceptions import DeployToolError
from ...services import ConfigService, RunService


@click.command()
@action_options
@click.option('--json', 'as_json', is_flag=True, help='Print the plan as JSON')
def plan(inputs, workspace, settings_file, as_json):
    """Show which functions would be deployed

    Downloads the functions cache and reports the changes and the deploy
    target. Nothing is deployed and the cache is not updated.
    """
    try:
        settings = ConfigService(Path(workspace), settings_file).load_settings(inputs)
        run_plan = RunService(settings).plan()
    except DeployToolError as e:
        fail(str(e))

    if as_json:
        console.print_json(json.dumps(run_plan.to_dict()))
    else:
        format_plan(run_plan)
