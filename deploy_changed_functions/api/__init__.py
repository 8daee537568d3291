# deploy_changed_functions/api/__init__.py
"""API layer for deploy-changed-functions"""

from .exceptions import (
    DeployToolError,
    ConfigError,
    ConfigParseError,
    TransferError,
    SnapshotNotFoundError,
    DiffError,
    PathMappingError,
    DeployError,
    CommandTimeoutError,
)
from .deployer import Deployer, deploy_changed

__all__ = [
    # Main classes
    "Deployer",

    # Convenience functions
    "deploy_changed",

    # Exceptions
    "DeployToolError",
    "ConfigError",
    "ConfigParseError",
    "TransferError",
    "SnapshotNotFoundError",
    "DiffError",
    "PathMappingError",
    "DeployError",
    "CommandTimeoutError",
]
