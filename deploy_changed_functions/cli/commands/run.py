"""Run command implementation"""

from pathlib import Path

import click

from ..decorators import action_options
from ..utils.output import fail, format_run_result, write_github_outputs
from ...api.exceptions import DeployToolError
from ...services import ConfigService, RunService


@click.command()
@action_options
def run(inputs, workspace, settings_file):
    """Deploy changed functions and update the cache

    Downloads the functions cache, diffs it against the workspace and
    redeploys only the functions that changed. Changes to global paths,
    shared folders or firebase.json functions settings redeploy every
    function.

    Examples:

        # Deploy changed functions
        deploy-changed-functions run --project-id my-project --token $FIREBASE_TOKEN

        # Redeploy everything when package.json changes
        deploy-changed-functions run --project-id my-project --global-paths package.json

        # Show the deploy command without running it
        deploy-changed-functions run --project-id my-project --skip-deploy true
    """
    try:
        settings = ConfigService(Path(workspace), settings_file).load_settings(inputs)
        result = RunService(settings).run()
    except DeployToolError as e:
        fail(str(e))

    format_run_result(result)
    write_github_outputs({
        "targets": result.target.only_argument if result.target else "",
        "deployed": str(result.deployed).lower(),
    })
