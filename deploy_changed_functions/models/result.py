"""Operation result models"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from .target import DeployTarget


class OperationStatus(Enum):
    """Operation status"""
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"
    IN_PROGRESS = "in_progress"


class DeployState(Enum):
    """Deploy orchestration states"""
    IDLE = "idle"
    PREPARING = "preparing"
    DEPLOYING = "deploying"
    RETRYING = "retrying"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class DeployResult:
    """Outcome of one deploy tool invocation"""

    exit_code: int
    output: str = ""
    args: List[str] = field(default_factory=list)

    @property
    def is_success(self) -> bool:
        return self.exit_code == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "exit_code": self.exit_code,
            "args": self.args,
            "output": self.output
        }


@dataclass
class RunPlan:
    """Change detection outcome for a run"""

    target: DeployTarget
    snapshot_found: bool = True
    config_changed: bool = False
    changed_global_paths: List[str] = field(default_factory=list)
    changed_files: List[str] = field(default_factory=list)

    @property
    def global_changed(self) -> bool:
        """True when firebase.json or a global path changed, forcing a full deploy"""
        return self.config_changed or bool(self.changed_global_paths)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target": self.target.describe(),
            "snapshot_found": self.snapshot_found,
            "config_changed": self.config_changed,
            "changed_global_paths": self.changed_global_paths,
            "global_changed": self.global_changed,
            "changed_files": self.changed_files
        }


@dataclass
class RunResult:
    """Result of a deploy run"""

    status: OperationStatus = OperationStatus.IN_PROGRESS
    state: DeployState = DeployState.IDLE
    target: Optional[DeployTarget] = None
    attempts: List[DeployResult] = field(default_factory=list)
    history: List[DeployState] = field(default_factory=lambda: [DeployState.IDLE])
    dry_run: bool = False
    message: str = ""
    plan: Optional[RunPlan] = None
    cache_updated: bool = False
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None

    @property
    def is_success(self) -> bool:
        return self.status in (OperationStatus.SUCCESS, OperationStatus.SKIPPED)

    @property
    def deployed(self) -> bool:
        """Check if the deploy tool was invoked successfully"""
        return self.state == DeployState.SUCCESS and bool(self.attempts)

    @property
    def duration(self) -> Optional[float]:
        """Get operation duration in seconds"""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def transition(self, state: DeployState) -> None:
        """Move to a new orchestration state"""
        self.state = state
        self.history.append(state)

    def complete(self, status: Optional[OperationStatus] = None) -> None:
        """Mark operation as complete"""
        self.end_time = datetime.now()
        if status:
            self.status = status

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "state": self.state.value,
            "target": self.target.describe() if self.target else None,
            "attempts": [attempt.to_dict() for attempt in self.attempts],
            "dry_run": self.dry_run,
            "message": self.message,
            "cache_updated": self.cache_updated,
            "plan": self.plan.to_dict() if self.plan else None,
            "duration": self.duration
        }
