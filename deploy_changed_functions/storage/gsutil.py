"""Google Cloud Storage backend driven by the gsutil CLI"""

import logging
from pathlib import Path
from typing import Any, Dict, List

from .base import StorageBackend
from ..api.exceptions import TransferError
from ..constants import GSUTIL_BIN, GSUTIL_DEFAULT_ARGS, GSUTIL_NO_MATCH_MARKERS
from ..utils.process_utils import CommandResult, CommandRunner, format_command


class GsutilStorage(StorageBackend):
    """Cloud Storage implementation using ``gsutil``"""

    def __init__(self, config: Dict[str, Any] = None, runner: CommandRunner = None):
        """
        Initialize gsutil storage

        Args:
            config: Configuration including:
                - base_url: Bucket URL, e.g. ``gs://my-project.appspot.com``
                - gsutil_bin: gsutil executable (optional)
            runner: Command runner instance
        """
        super().__init__(config)
        self.runner = runner or CommandRunner()
        self.base_url = self.config["base_url"].rstrip("/")
        self.gsutil_bin = self.config.get("gsutil_bin", GSUTIL_BIN)
        self.logger = logging.getLogger(self.__class__.__name__)

    async def _do_initialize(self) -> None:
        """Nothing to set up; a missing gsutil surfaces on first command"""
        pass

    def url(self, remote_path: str = "") -> str:
        remote_path = remote_path.strip("/")
        if not remote_path:
            return self.base_url
        return f"{self.base_url}/{remote_path}"

    async def _execute(self, command: List[str]) -> CommandResult:
        try:
            return await self.runner.run(command)
        except FileNotFoundError as e:
            raise TransferError(f"gsutil executable not found: {e}")

    @staticmethod
    def _failure(command: List[str], result: CommandResult) -> TransferError:
        return TransferError(
            f"Command failed ({result.exit_code}): {format_command(command)}\n"
            f"{result.stderr.strip()}"
        )

    @staticmethod
    def _matched_nothing(result: CommandResult) -> bool:
        return any(marker in result.stderr for marker in GSUTIL_NO_MATCH_MARKERS)

    async def _gsutil(self, *args: str) -> None:
        """Run a gsutil command, raising TransferError on failure"""
        command = [self.gsutil_bin] + GSUTIL_DEFAULT_ARGS + list(args)
        result = await self._execute(command)
        if not result.ok:
            raise self._failure(command, result)

    async def exists(self, remote_path: str) -> bool:
        """Check for any object under the remote path using ``gsutil ls``

        Only a "no objects matched" failure means absent. Any other failure
        such as a denied bucket raises TransferError.
        """
        await self.initialize()
        command: List[str] = [self.gsutil_bin, "-q", "ls", self.url(remote_path)]
        result = await self._execute(command)
        if result.ok:
            return bool(result.stdout.strip())
        if self._matched_nothing(result):
            return False
        raise self._failure(command, result)

    async def upload(self, local_path: Path, remote_path: str) -> None:
        await self.initialize()
        self.logger.debug(f"Uploading {local_path} to {self.url(remote_path)}")
        await self._gsutil("cp", str(local_path), self.url(remote_path))

    async def upload_directory(self, local_dir: Path, remote_prefix: str) -> None:
        await self.initialize()
        if not local_dir.is_dir():
            raise TransferError(f"Not a directory: {local_dir}")

        self.logger.debug(f"Mirroring {local_dir} to {self.url(remote_prefix)}")
        await self._gsutil("rsync", "-r", "-d", str(local_dir), self.url(remote_prefix))

    async def download_directory(self, remote_prefix: str, local_parent: Path) -> Path:
        await self.initialize()
        local_parent.mkdir(parents=True, exist_ok=True)

        source = self.url(remote_prefix)
        self.logger.debug(f"Downloading {source} to {local_parent}")
        await self._gsutil("cp", "-r", source, f"{local_parent}/")

        return local_parent / remote_prefix.strip("/").split("/")[-1]

    async def delete(self, remote_path: str) -> None:
        await self.initialize()
        command = [self.gsutil_bin] + GSUTIL_DEFAULT_ARGS + ["rm", "-r", self.url(remote_path)]
        self.logger.debug(f"Removing {self.url(remote_path)}")
        result = await self._execute(command)
        if not result.ok and not self._matched_nothing(result):
            raise self._failure(command, result)
