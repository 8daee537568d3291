"""Utility functions for deploy-changed-functions"""

from .async_utils import run_async, gather_fail_fast
from .process_utils import CommandResult, CommandRunner, format_command

__all__ = [
    "run_async",
    "gather_fail_fast",
    "CommandResult",
    "CommandRunner",
    "format_command",
]
