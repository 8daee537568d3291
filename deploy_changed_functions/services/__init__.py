"""Business logic services for deploy-changed-functions"""

from .config_service import ConfigService
from .snapshot_service import SnapshotService
from .deploy_service import DeployOrchestrator
from .run_service import RunService

__all__ = [
    "ConfigService",
    "SnapshotService",
    "DeployOrchestrator",
    "RunService",
]
