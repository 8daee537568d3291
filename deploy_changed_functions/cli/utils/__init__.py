"""CLI utility functions"""

from .output import (
    console,
    fail,
    format_plan,
    format_run_result,
    write_github_outputs,
)

__all__ = [
    'console',
    'fail',
    'format_plan',
    'format_run_result',
    'write_github_outputs',
]
