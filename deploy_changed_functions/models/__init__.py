"""Data models for deploy-changed-functions"""

from .config import ActionSettings, FirebaseConfig, split_list
from .target import DeployTarget, TargetKind
from .result import (
    DeployResult,
    DeployState,
    OperationStatus,
    RunPlan,
    RunResult,
)

__all__ = [
    "ActionSettings",
    "FirebaseConfig",
    "split_list",
    "DeployTarget",
    "TargetKind",
    "DeployResult",
    "DeployState",
    "OperationStatus",
    "RunPlan",
    "RunResult",
]
