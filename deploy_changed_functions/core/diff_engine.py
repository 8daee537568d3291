"""Tree comparison between the live functions folder and the cached snapshot"""

import logging
import re
from pathlib import Path
from typing import Iterable, List, Sequence, Union

from ..api.exceptions import DiffError
from ..constants import (
    DIFF_BASE_ARGS,
    DIFF_BIN,
    DIFF_EXIT_DIFFERENT,
    DIFF_EXIT_IDENTICAL,
)
from ..utils.async_utils import gather_fail_fast, run_async
from ..utils.process_utils import CommandRunner

PathLike = Union[str, Path]


class DiffEngine:
    """Compares paths between two directory trees with ``diff``

    Each top-level path is compared recursively, ignoring whitespace and
    blank lines. Paths are compared concurrently; the first failure
    cancels the remaining comparisons.
    """

    def __init__(self, runner: CommandRunner = None, diff_bin: str = DIFF_BIN):
        self.runner = runner or CommandRunner()
        self.diff_bin = diff_bin
        self.logger = logging.getLogger(self.__class__.__name__)

    def build_command(self,
                      relative_path: str,
                      live_root: PathLike,
                      snapshot_root: PathLike,
                      ignore_patterns: Iterable[str] = ()) -> List[str]:
        """Build the diff command for one top-level path"""
        args = [self.diff_bin] + DIFF_BASE_ARGS
        for pattern in ignore_patterns:
            if pattern:
                args.extend(["-x", pattern])
        args.append(_join(live_root, relative_path))
        args.append(_join(snapshot_root, relative_path))
        return args

    async def _diff_one(self,
                        relative_path: str,
                        live_root: PathLike,
                        snapshot_root: PathLike,
                        ignore_patterns: Sequence[str]) -> str:
        command = self.build_command(relative_path, live_root, snapshot_root, ignore_patterns)
        try:
            result = await self.runner.run(command)
        except FileNotFoundError as e:
            raise DiffError(relative_path, f"diff executable not found: {e}")

        if result.exit_code not in (DIFF_EXIT_IDENTICAL, DIFF_EXIT_DIFFERENT):
            reason = result.stderr.strip() or f"diff exited with code {result.exit_code}"
            raise DiffError(relative_path, reason)

        if result.exit_code == DIFF_EXIT_DIFFERENT and not result.stdout.strip():
            raise DiffError(relative_path, "diff reported differences but printed none")

        return result.stdout

    async def diff_async(self,
                         relative_paths: Sequence[str],
                         live_root: PathLike,
                         snapshot_root: PathLike,
                         ignore_patterns: Sequence[str] = ()) -> List[str]:
        """
        Compare each relative path between the live tree and the snapshot

        Args:
            relative_paths: Top-level paths (files or folders) to compare
            live_root: Root of the live functions folder
            snapshot_root: Root of the downloaded snapshot
            ignore_patterns: Globs excluded from the comparison

        Returns:
            One diff output per path, in input order; empty means unchanged

        Raises:
            DiffError: If diff fails for a reason other than finding differences
        """
        self.logger.info(
            f'Diffing files between paths: "{live_root}" and "{snapshot_root}"'
        )
        return await gather_fail_fast(
            self._diff_one(path, live_root, snapshot_root, list(ignore_patterns))
            for path in relative_paths
        )

    def diff(self,
             relative_paths: Sequence[str],
             live_root: PathLike,
             snapshot_root: PathLike,
             ignore_patterns: Sequence[str] = ()) -> List[str]:
        """Synchronous version of :meth:`diff_async`"""
        return run_async(self.diff_async(relative_paths, live_root, snapshot_root, ignore_patterns))

    async def changed_files_async(self,
                                  relative_paths: Sequence[str],
                                  live_root: PathLike,
                                  snapshot_root: PathLike,
                                  ignore_patterns: Sequence[str] = ()) -> List[str]:
        """
        Get changed file paths under the given top-level paths

        Returns:
            Paths relative to ``live_root``, deduplicated, in first-seen order
        """
        outputs = await self.diff_async(relative_paths, live_root, snapshot_root, ignore_patterns)

        changed: List[str] = []
        for output in outputs:
            for path in self.parse_output(output, live_root, snapshot_root):
                if path not in changed:
                    changed.append(path)
        return changed

    def changed_files(self,
                      relative_paths: Sequence[str],
                      live_root: PathLike,
                      snapshot_root: PathLike,
                      ignore_patterns: Sequence[str] = ()) -> List[str]:
        """Synchronous version of :meth:`changed_files_async`"""
        return run_async(
            self.changed_files_async(relative_paths, live_root, snapshot_root, ignore_patterns)
        )

    @staticmethod
    def changed_paths(relative_paths: Sequence[str], outputs: Sequence[str]) -> List[str]:
        """Select the top-level paths whose diff output is non-empty"""
        return [path for path, output in zip(relative_paths, outputs) if output.strip()]

    @staticmethod
    def parse_output(output: str, live_root: PathLike, snapshot_root: PathLike) -> List[str]:
        """
        Extract changed paths from ``diff -q`` output

        Args:
            output: diff stdout
            live_root: Live root used for the comparison
            snapshot_root: Snapshot root used for the comparison

        Returns:
            Changed paths relative to the roots

        Raises:
            DiffError: If a line is not a recognised diff message
        """
        live = re.escape(_root(live_root))
        snapshot = re.escape(_root(snapshot_root))

        files_differ = re.compile(rf"^Files {live}/(?P<rel>.+) and {snapshot}/(?P=rel) differ$")
        type_differs = re.compile(
            rf"^File {live}/(?P<rel>.+) is a .+ while file {snapshot}/(?P=rel) is a .+$"
        )
        only_in = re.compile(r"^Only in (?P<dir>.+): (?P<name>.+)$")

        paths: List[str] = []
        for line in output.splitlines():
            if not line.strip():
                continue

            match = files_differ.match(line) or type_differs.match(line)
            if match:
                paths.append(match.group("rel"))
                continue

            match = only_in.match(line)
            if match:
                relative_dir = _relative_to_either(match.group("dir"), live_root, snapshot_root)
                if relative_dir is not None:
                    name = match.group("name")
                    paths.append(f"{relative_dir}/{name}" if relative_dir else name)
                    continue

            raise DiffError(_root(live_root), f"Unrecognized diff output: {line}")

        return paths


def _root(path: PathLike) -> str:
    return Path(path).as_posix()


def _join(root: PathLike, relative_path: str) -> str:
    return f"{_root(root)}/{relative_path.strip('/')}"


def _relative_to_either(directory: str, *roots: PathLike):
    """Get ``directory`` relative to the first root containing it, or None"""
    for root in roots:
        root = _root(root)
        if directory == root:
            return ""
        if directory.startswith(root + "/"):
            return directory[len(root) + 1:]
    return None
