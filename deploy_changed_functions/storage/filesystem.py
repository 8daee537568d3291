"""Filesystem storage backend implementation"""

import asyncio
import logging
import shutil
from pathlib import Path
from typing import Any, Dict

from .base import StorageBackend
from ..api.exceptions import TransferError


class FilesystemStorage(StorageBackend):
    """Local directory storage, used for ``file://`` URLs and plain paths"""

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize filesystem storage

        Args:
            config: Configuration including:
                - base_path: Directory that holds snapshots
        """
        super().__init__(config)
        base_path = self.config.get("base_path")
        if not base_path:
            raise ValueError("Filesystem storage requires 'base_path'")
        self.base_path = Path(base_path)
        self.logger = logging.getLogger(self.__class__.__name__)

    async def _do_initialize(self) -> None:
        """Ensure base path exists"""
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, remote_path: str) -> Path:
        return self.base_path / remote_path.strip("/")

    def url(self, remote_path: str = "") -> str:
        return str(self._get_full_path(remote_path))

    async def _run(self, func, *args) -> None:
        """Run a blocking copy in the default executor"""
        try:
            await asyncio.get_running_loop().run_in_executor(None, func, *args)
        except OSError as e:
            raise TransferError(f"Filesystem copy failed: {e}")

    async def exists(self, remote_path: str) -> bool:
        await self.initialize()
        return self._get_full_path(remote_path).exists()

    async def upload(self, local_path: Path, remote_path: str) -> None:
        await self.initialize()
        if not local_path.is_file():
            raise TransferError(f"Not a file: {local_path}")

        target_path = self._get_full_path(remote_path)
        self.logger.debug(f"Copying {local_path} to {target_path}")

        def _copy():
            target_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(local_path, target_path)

        await self._run(_copy)

    async def upload_directory(self, local_dir: Path, remote_prefix: str) -> None:
        await self.initialize()
        if not local_dir.is_dir():
            raise TransferError(f"Not a directory: {local_dir}")

        target_dir = self._get_full_path(remote_prefix)
        self.logger.debug(f"Mirroring {local_dir} to {target_dir}")

        def _mirror():
            if target_dir.exists():
                shutil.rmtree(target_dir)
            shutil.copytree(local_dir, target_dir)

        await self._run(_mirror)

    async def download_directory(self, remote_prefix: str, local_parent: Path) -> Path:
        await self.initialize()

        source_dir = self._get_full_path(remote_prefix)
        if not source_dir.is_dir():
            raise TransferError(f"No such folder in storage: {source_dir}")

        target_dir = local_parent / source_dir.name
        self.logger.debug(f"Copying {source_dir} to {target_dir}")

        def _copy_tree():
            local_parent.mkdir(parents=True, exist_ok=True)
            shutil.copytree(source_dir, target_dir, dirs_exist_ok=True)

        await self._run(_copy_tree)
        return target_dir

    async def delete(self, remote_path: str) -> None:
        await self.initialize()

        target_path = self._get_full_path(remote_path)
        if target_path == self.base_path:
            raise TransferError(f"Refusing to delete storage root: {target_path}")

        def _remove():
            if target_path.is_dir() and not target_path.is_symlink():
                shutil.rmtree(target_path)
            elif target_path.exists() or target_path.is_symlink():
                target_path.unlink()

        self.logger.debug(f"Removing {target_path}")
        await self._run(_remove)
