"""Action input options shared by CLI commands"""

from functools import wraps
from typing import Any, Callable, Dict

import click

from ...constants import ENV_FIREBASE_TOKEN, ENV_INPUT_PREFIX, ENV_WORKSPACE, MissingCachePolicy


def input_env(name: str) -> str:
    """GitHub Actions exposes input ``name`` as ``INPUT_<NAME>``"""
    return f"{ENV_INPUT_PREFIX}{name.upper()}"


# Input name -> click option settings; every input is also read from INPUT_<NAME>
INPUTS = {
    'project-id': dict(help='Firebase project ID (required)'),
    'token': dict(envvar=[input_env('token'), ENV_FIREBASE_TOKEN],
                  help='Firebase CI token (required, falls back to FIREBASE_TOKEN)'),
    'cache-folder': dict(help='Snapshot folder in storage [default: functions_deploy_cache]'),
    'local-folder': dict(help='Local folder the snapshot is downloaded to '
                              '[default: local_functions_cache]'),
    'functions-folder': dict(help='Functions folder '
                                  '[default: firebase.json functions.source or "functions"]'),
    'source-dir': dict(help='Folder inside the functions folder holding one folder '
                            'per function [default: src]'),
    'global-paths': dict(help='Comma separated paths whose change redeploys every function'),
    'ignore': dict(help='Comma separated globs excluded from the diff'),
    'ignore-folders': dict(help='Comma separated shared folders whose change redeploys '
                                'every function [default: utils,constants]'),
    'skip-deploy': dict(type=click.BOOL, help='Only log the deploy command (dry run)'),
    'storage-bucket': dict(help='Storage bucket name [default: project ID]'),
    'storage-url': dict(help='Storage base URL, gs://... or a local path'),
    'on-missing-cache': dict(type=click.Choice([policy.value for policy in MissingCachePolicy]),
                             help='What to do when no snapshot exists yet [default: fail]'),
    'update-cache-on-skip': dict(type=click.BOOL,
                                 help='Update the snapshot even when the deploy is skipped '
                                      '[default: true]'),
    'firebase-bin': dict(envvar=None, help='firebase executable [default: firebase]'),
    'command-timeout': dict(envvar=None, type=float,
                            help='Timeout in seconds for external commands'),
}


def _input_option(name: str, settings: Dict[str, Any]) -> Callable:
    settings = dict(settings)
    settings.setdefault('envvar', input_env(name))
    return click.option(f'--{name}', default=None, **settings)


def action_options(func: Callable) -> Callable:
    """Decorator adding the action input options to a command

    The command receives the inputs as one ``inputs`` dict keyed by
    input name, plus ``workspace`` and ``settings_file``.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        kwargs['inputs'] = collect_inputs(kwargs)
        return func(*args, **kwargs)

    wrapper = click.option(
        '--settings-file', type=click.Path(dir_okay=False),
        help='Settings file [default: <workspace>/.deploy-changed-functions.yaml]'
    )(wrapper)
    wrapper = click.option(
        '--workspace', envvar=ENV_WORKSPACE, default='.',
        type=click.Path(file_okay=False, exists=True),
        help='Repository root [default: $GITHUB_WORKSPACE or current directory]'
    )(wrapper)

    for name in reversed(list(INPUTS)):
        wrapper = _input_option(name, INPUTS[name])(wrapper)

    return wrapper


def collect_inputs(kwargs: Dict[str, Any]) -> Dict[str, Any]:
    """Pop input values from command kwargs

    Returns:
        Input values keyed by input name
    """
    return {name: kwargs.pop(name.replace('-', '_'), None) for name in INPUTS}
