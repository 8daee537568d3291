"""Deploy target model"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Tuple

from ..constants import (
    DEPLOY_COMMAND,
    DEPLOY_FORCE_FLAG,
    DEPLOY_ONLY_FLAG,
    DEPLOY_PROJECT_FLAG,
    FUNCTION_TARGET_TEMPLATE,
    FUNCTIONS_TARGET,
)


class TargetKind(Enum):
    """Which functions a deploy covers"""
    ALL = "all"
    SUBSET = "subset"
    NOOP = "noop"


@dataclass(frozen=True)
class DeployTarget:
    """Resolved set of functions to redeploy, names in first-seen order"""

    kind: TargetKind
    names: Tuple[str, ...] = ()
    force: bool = False

    @classmethod
    def all_functions(cls, force: bool = False) -> 'DeployTarget':
        return cls(kind=TargetKind.ALL, force=force)

    @classmethod
    def subset(cls, names: Iterable[str]) -> 'DeployTarget':
        names = tuple(dict.fromkeys(names))
        if not names:
            return cls.noop()
        return cls(kind=TargetKind.SUBSET, names=names)

    @classmethod
    def noop(cls) -> 'DeployTarget':
        return cls(kind=TargetKind.NOOP)

    @property
    def is_noop(self) -> bool:
        return self.kind == TargetKind.NOOP

    @property
    def is_all(self) -> bool:
        return self.kind == TargetKind.ALL

    @property
    def only_argument(self) -> str:
        """Get value for ``firebase deploy --only``"""
        if self.kind == TargetKind.ALL:
            return FUNCTIONS_TARGET
        if self.kind == TargetKind.SUBSET:
            return ",".join(
                FUNCTION_TARGET_TEMPLATE.format(name=name) for name in self.names
            )
        return ""

    def deploy_args(self, project_id: str) -> List[str]:
        """Build firebase CLI arguments for this target

        Raises:
            ValueError: If the target is a no-op
        """
        if self.is_noop:
            raise ValueError("No-op target has no deploy command")

        args = [DEPLOY_COMMAND, DEPLOY_ONLY_FLAG, self.only_argument]
        if self.force:
            args.append(DEPLOY_FORCE_FLAG)
        args.extend([DEPLOY_PROJECT_FLAG, project_id])
        return args

    def describe(self) -> str:
        """Get human readable description"""
        if self.kind == TargetKind.ALL:
            return "all functions (forced)" if self.force else "all functions"
        if self.kind == TargetKind.SUBSET:
            return ", ".join(self.names)
        return "nothing"
