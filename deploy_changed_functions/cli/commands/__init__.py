"""CLI commands"""

from . import run
from . import plan

__all__ = [
    "run",
    "plan",
]
