# deploy_changed_functions/storage/__init__.py
"""Snapshot storage backends for deploy-changed-functions"""

from .base import StorageBackend
from .filesystem import FilesystemStorage
from .gsutil import GsutilStorage
from .factory import StorageFactory

__all__ = [
    'StorageBackend',
    'FilesystemStorage',
    'GsutilStorage',
    'StorageFactory',
]
