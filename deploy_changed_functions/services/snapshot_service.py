"""Snapshot fetch and push against remote storage"""

import logging
import shutil
from pathlib import Path
from typing import Optional, Sequence

from ..api.exceptions import SnapshotNotFoundError, TransferError
from ..constants import FIREBASE_CONFIG_FILE
from ..storage.base import StorageBackend
from ..utils.async_utils import gather_fail_fast, run_async


class SnapshotService:
    """Service for moving the functions snapshot to and from storage"""

    def __init__(self, storage: StorageBackend):
        """Initialize snapshot service

        Args:
            storage: Storage backend holding snapshots
        """
        self.storage = storage
        self.logger = logging.getLogger(self.__class__.__name__)

    async def exists_async(self, snapshot_id: str) -> bool:
        return await self.storage.exists(snapshot_id)

    def exists(self, snapshot_id: str) -> bool:
        """Check if a snapshot exists in storage"""
        return run_async(self.exists_async(snapshot_id))

    async def fetch_async(self, snapshot_id: str, destination: Path) -> Path:
        """Download snapshot ``snapshot_id`` into ``destination``

        Any previous local copy is removed first.

        Args:
            snapshot_id: Remote snapshot folder
            destination: Local parent directory

        Returns:
            Local snapshot root

        Raises:
            SnapshotNotFoundError: If the snapshot does not exist
            TransferError: If the download fails
        """
        destination = Path(destination)
        local_root = destination / snapshot_id.strip("/").split("/")[-1]

        try:
            destination.mkdir(parents=True, exist_ok=True)
            if local_root.exists():
                shutil.rmtree(local_root)
        except OSError as e:
            raise TransferError(f"Error creating local cache folder: {e}")

        if not await self.storage.exists(snapshot_id):
            raise SnapshotNotFoundError(self.storage.url(snapshot_id))

        self.logger.info(
            f'Downloading cache from: "{self.storage.url(snapshot_id)}" to "{destination}"'
        )
        return await self.storage.download_directory(snapshot_id, destination)

    def fetch(self, snapshot_id: str, destination: Path) -> Path:
        """Synchronous version of :meth:`fetch_async`"""
        return run_async(self.fetch_async(snapshot_id, destination))

    async def push_async(self,
                         paths: Sequence[str],
                         destination: str,
                         base_dir: Path,
                         config_file: Optional[Path] = None) -> None:
        """Upload paths to the remote snapshot

        Directories are mirrored to ``destination/<path>``, files copied to
        ``destination/<path>``. The config file is stored as
        ``destination/firebase.json``. Paths missing locally, and the config
        file when absent, are removed from the snapshot so it mirrors the
        current workspace.

        Args:
            paths: Paths relative to ``base_dir``
            destination: Remote snapshot folder
            base_dir: Local directory the paths are relative to
            config_file: firebase.json to store alongside the sources

        Raises:
            TransferError: If any upload fails
        """
        base_dir = Path(base_dir)
        destination = destination.strip("/")
        uploads = []

        for relative_path in dict.fromkeys(paths):
            relative_path = relative_path.strip("/")
            local_path = base_dir / relative_path
            remote_path = f"{destination}/{relative_path}"

            if local_path.is_dir():
                uploads.append(self.storage.upload_directory(local_path, remote_path))
            elif local_path.is_file():
                uploads.append(self.storage.upload(local_path, remote_path))
            else:
                self.logger.warning(
                    f'Missing path "{local_path}", removing it from the functions cache'
                )
                uploads.append(self.storage.delete(remote_path))

        config_path = f"{destination}/{FIREBASE_CONFIG_FILE}"
        if config_file is not None and Path(config_file).is_file():
            uploads.append(self.storage.upload(Path(config_file), config_path))
        else:
            uploads.append(self.storage.delete(config_path))

        self.logger.info(f"Updating {len(uploads)} path(s) in {self.storage.url(destination)}")

        try:
            await gather_fail_fast(uploads)
        except TransferError as e:
            raise TransferError(f"Error uploading functions cache: {e}")

    def push(self,
             paths: Sequence[str],
             destination: str,
             base_dir: Path,
             config_file: Optional[Path] = None) -> None:
        """Synchronous version of :meth:`push_async`"""
        run_async(self.push_async(paths, destination, base_dir, config_file))
