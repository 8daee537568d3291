"""External command execution utilities"""

import asyncio
import logging
import os
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Sequence

from ..api.exceptions import CommandTimeoutError

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Captured result of an external command"""

    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


def format_command(args: Sequence[str]) -> str:
    """Render an argument list as a shell command line"""
    return " ".join(shlex.quote(str(arg)) for arg in args)


class CommandRunner:
    """Runs external tools and captures their output

    Every external tool (diff, gsutil, firebase) is invoked through a
    runner so it can be replaced in tests.
    """

    def __init__(self, timeout: Optional[float] = None):
        """
        Args:
            timeout: Seconds before a command is killed (None waits forever)
        """
        self.timeout = timeout

    async def run(self,
                  args: Sequence[str],
                  env: Optional[Dict[str, str]] = None,
                  cwd: Optional[Path] = None) -> CommandResult:
        """
        Run a command and capture stdout and stderr

        Args:
            args: Program and arguments
            env: Extra environment variables merged over the current environment
            cwd: Working directory

        Returns:
            CommandResult

        Raises:
            FileNotFoundError: If the program does not exist
            CommandTimeoutError: If the command exceeds the timeout
        """
        args = [str(arg) for arg in args]
        logger.debug(f"Running: {format_command(args)}")

        process_env = None
        if env:
            process_env = {**os.environ, **env}

        process = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=process_env,
            cwd=str(cwd) if cwd else None
        )

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise CommandTimeoutError(format_command(args), self.timeout)

        return CommandResult(
            exit_code=process.returncode,
            stdout=stdout.decode(errors="replace"),
            stderr=stderr.decode(errors="replace")
        )

