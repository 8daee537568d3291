"""Maps changed files to the functions that must be redeployed"""

import logging
from pathlib import PurePosixPath
from typing import Iterable, Optional, Sequence

from ..api.exceptions import PathMappingError
from ..constants import DEFAULT_IGNORE_FOLDERS, DEFAULT_SOURCE_DIR
from ..models.target import DeployTarget

logger = logging.getLogger(__name__)


def resolve_global_change(config_changed: bool, global_paths_changed: bool) -> bool:
    """Check if every function must be redeployed with ``--force``

    Args:
        config_changed: firebase.json ``functions`` settings differ from the snapshot
        global_paths_changed: Any configured global path has a non-empty diff

    Returns:
        True if either holds
    """
    return bool(config_changed) or bool(global_paths_changed)


class FunctionPathParser:
    """Extracts the function folder name from ``<source_root>/<name>/...`` paths"""

    def __init__(self, source_root: str = DEFAULT_SOURCE_DIR):
        self.source_root = PurePosixPath(source_root.strip("/"))

    def function_name(self, path: str) -> str:
        """
        Get the function folder that owns a changed path

        Args:
            path: Changed path relative to the functions folder

        Returns:
            First path segment under the source root

        Raises:
            PathMappingError: If the path is not inside a function folder
        """
        candidate = PurePosixPath(path.strip().replace("\\", "/"))
        try:
            relative = candidate.relative_to(self.source_root)
        except ValueError:
            raise PathMappingError(path, f'not under source folder "{self.source_root}"')

        parts = relative.parts
        if len(parts) < 2:
            raise PathMappingError(
                path, f'expected "{self.source_root}/<function>/..." but found a top-level entry'
            )

        return parts[0]


class DeployTargetResolver:
    """Resolves a change set into a deploy target"""

    def __init__(self,
                 source_root: str = DEFAULT_SOURCE_DIR,
                 ignore_folders: Iterable[str] = DEFAULT_IGNORE_FOLDERS):
        self.parser = FunctionPathParser(source_root)
        self.ignore_folders = frozenset(ignore_folders)

    def resolve_function_subset(self,
                                changed_paths: Sequence[str],
                                ignore_folders: Optional[Iterable[str]] = None) -> DeployTarget:
        """
        Map changed paths to a deploy target

        A change inside a shared (ignored) folder affects every function.

        Args:
            changed_paths: Changed file paths relative to the functions folder
            ignore_folders: Shared folder names, overrides the resolver default

        Returns:
            ALL if a shared folder changed, NOOP if nothing changed,
            otherwise SUBSET of the changed function names

        Raises:
            PathMappingError: If a path cannot be mapped to a function folder
        """
        shared = self.ignore_folders if ignore_folders is None else frozenset(ignore_folders)

        names = []
        for path in changed_paths:
            if not path or not path.strip():
                continue
            name = self.parser.function_name(path)
            if name not in names:
                names.append(name)

        shared_changed = [name for name in names if name in shared]
        if shared_changed:
            logger.info(
                f"Shared folder(s) changed: {', '.join(shared_changed)}, deploying all functions"
            )
            return DeployTarget.all_functions()

        if not names:
            return DeployTarget.noop()

        return DeployTarget.subset(names)
