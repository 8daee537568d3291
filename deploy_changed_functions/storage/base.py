# deploy_changed_functions/storage/base.py
"""Storage backend abstract base class"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict


class StorageBackend(ABC):
    """Abstract base class for snapshot storage backends

    Remote paths are ``/`` separated and relative to the backend's base
    location. Every transfer method raises ``TransferError`` on failure.
    """

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize storage backend

        Args:
            config: Backend-specific configuration
        """
        self.config = config or {}
        self._initialized = False

    async def initialize(self) -> None:
        """Initialize storage backend (e.g., check tools or create directories)"""
        if not self._initialized:
            await self._do_initialize()
            self._initialized = True

    @abstractmethod
    async def _do_initialize(self) -> None:
        """Actual initialization logic to be implemented by subclasses"""
        pass

    @abstractmethod
    def url(self, remote_path: str = "") -> str:
        """
        Get the full location of a remote path

        Args:
            remote_path: Remote storage path

        Returns:
            URL or filesystem path for display and tool arguments
        """
        pass

    @abstractmethod
    async def exists(self, remote_path: str) -> bool:
        """
        Check if anything exists at a remote path

        Args:
            remote_path: Remote storage path (file or folder)

        Returns:
            True if exists
        """
        pass

    @abstractmethod
    async def upload(self, local_path: Path, remote_path: str) -> None:
        """
        Upload a single file

        Args:
            local_path: Local file path
            remote_path: Remote storage path
        """
        pass

    @abstractmethod
    async def upload_directory(self, local_dir: Path, remote_prefix: str) -> None:
        """
        Mirror a local directory to a remote prefix

        Files under the remote prefix that no longer exist locally are removed.

        Args:
            local_dir: Local directory path
            remote_prefix: Remote path prefix
        """
        pass

    @abstractmethod
    async def delete(self, remote_path: str) -> None:
        """
        Remove a remote file or folder

        Deleting a path that does not exist is not an error.

        Args:
            remote_path: Remote storage path (file or folder)
        """
        pass

    @abstractmethod
    async def download_directory(self, remote_prefix: str, local_parent: Path) -> Path:
        """
        Recursively download a remote folder into a local parent directory

        Args:
            remote_prefix: Remote folder path
            local_parent: Directory that receives the folder

        Returns:
            Local path of the downloaded folder
        """
        pass

    async def close(self) -> None:
        """Close storage backend"""
        if self._initialized:
            await self._do_close()
            self._initialized = False

    async def _do_close(self) -> None:
        """Actual cleanup logic to be implemented by subclasses"""
        pass

    async def __aenter__(self):
        """Async context manager entry"""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()
