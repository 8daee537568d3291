"""Core change detection for deploy-changed-functions"""

from .config_loader import ConfigLoader
from .diff_engine import DiffEngine
from .target_resolver import DeployTargetResolver, FunctionPathParser, resolve_global_change
from .redeploy_matcher import RedeployMatcher, FirebaseRedeployMatcher

__all__ = [
    "ConfigLoader",
    "DiffEngine",
    "DeployTargetResolver",
    "FunctionPathParser",
    "resolve_global_change",
    "RedeployMatcher",
    "FirebaseRedeployMatcher",
]
