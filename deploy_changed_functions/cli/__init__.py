"""Command line interface for deploy-changed-functions"""

from .main import cli, main

__all__ = ["cli", "main"]
