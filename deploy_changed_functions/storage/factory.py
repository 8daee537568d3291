"""Storage backend factory"""

from typing import Dict, Type
from urllib.parse import urlparse

from .base import StorageBackend
from .filesystem import FilesystemStorage
from .gsutil import GsutilStorage
from ..constants import FILE_SCHEME, GCS_SCHEME
from ..utils.process_utils import CommandRunner


class StorageFactory:
    """Factory for creating storage backend instances from a URL"""

    # Registry of storage backends by URL scheme
    _backends: Dict[str, Type[StorageBackend]] = {
        GCS_SCHEME: GsutilStorage,
        FILE_SCHEME: FilesystemStorage,
    }

    @classmethod
    def create(cls, url: str, runner: CommandRunner = None) -> StorageBackend:
        """Create storage backend for a base URL

        ``gs://bucket`` uses gsutil; ``file:///dir`` or a plain path uses
        the local filesystem.

        Args:
            url: Storage base URL
            runner: Command runner for CLI backed storage

        Returns:
            Storage backend instance

        Raises:
            ValueError: If the URL scheme is not supported
        """
        parsed = urlparse(url)
        scheme = parsed.scheme or FILE_SCHEME

        if scheme not in cls._backends:
            raise ValueError(
                f"Unsupported storage URL: {url} "
                f"(supported: {', '.join(cls.get_supported_schemes())})"
            )

        if scheme == GCS_SCHEME:
            return GsutilStorage({"base_url": url}, runner=runner)

        base_path = parsed.path if parsed.scheme else url
        backend_class = cls._backends[scheme]
        return backend_class({"base_path": base_path})

    @classmethod
    def register_backend(cls, scheme: str, backend_class: Type[StorageBackend]):
        """Register a new storage backend type

        Args:
            scheme: URL scheme
            backend_class: Backend class
        """
        cls._backends[scheme] = backend_class

    @classmethod
    def get_supported_schemes(cls) -> list[str]:
        """Get list of supported URL schemes"""
        return list(cls._backends.keys())
