"""Deploy Changed Functions - redeploy only the Cloud Functions that changed.

The last deployed functions source is cached in Cloud Storage. Each run
diffs the workspace against that cache and deploys only what changed.
"""

from .__version__ import __version__, __version_info__, __license__

# Core API
from .api.deployer import Deployer, deploy_changed

# Data models
from .models import ActionSettings, FirebaseConfig, DeployTarget, DeployResult, RunPlan, RunResult

# Exceptions
from .api.exceptions import (
    DeployToolError,
    ConfigError,
    ConfigParseError,
    TransferError,
    SnapshotNotFoundError,
    DiffError,
    PathMappingError,
    DeployError,
)

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__license__",

    # Main classes
    "Deployer",
    "deploy_changed",

    # Data models
    "ActionSettings",
    "FirebaseConfig",
    "DeployTarget",
    "DeployResult",
    "RunPlan",
    "RunResult",

    # Exceptions
    "DeployToolError",
    "ConfigError",
    "ConfigParseError",
    "TransferError",
    "SnapshotNotFoundError",
    "DiffError",
    "PathMappingError",
    "DeployError",
]
