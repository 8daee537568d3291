"""End to end run: fetch snapshot, detect changes, deploy, push snapshot"""

import logging
from pathlib import Path
from typing import Optional

from ..api.exceptions import SnapshotNotFoundError
from ..constants import FIREBASE_CONFIG_FILE, MissingCachePolicy
from ..core.config_loader import ConfigLoader
from ..core.diff_engine import DiffEngine
from ..core.redeploy_matcher import RedeployMatcher
from ..core.target_resolver import DeployTargetResolver, resolve_global_change
from ..models.config import ActionSettings, FirebaseConfig
from ..models.result import RunPlan, RunResult
from ..models.target import DeployTarget
from ..storage.base import StorageBackend
from ..storage.factory import StorageFactory
from ..utils.async_utils import run_async
from ..utils.process_utils import CommandRunner
from .deploy_service import DeployOrchestrator
from .snapshot_service import SnapshotService


class RunService:
    """Drives one deploy-changed-functions run"""

    def __init__(self,
                 settings: ActionSettings,
                 storage: Optional[StorageBackend] = None,
                 runner: Optional[CommandRunner] = None,
                 matcher: Optional[RedeployMatcher] = None):
        """Initialize run service

        Args:
            settings: Run settings
            storage: Snapshot storage (derived from settings if omitted)
            runner: Runner for diff, gsutil and firebase
            matcher: Redeploy suggestion matcher
        """
        self.settings = settings
        self.runner = runner or CommandRunner(timeout=settings.command_timeout)
        self.storage = storage or StorageFactory.create(settings.storage_base_url, runner=self.runner)
        self.snapshots = SnapshotService(self.storage)
        self.diff_engine = DiffEngine(self.runner)
        self.matcher = matcher
        self.logger = logging.getLogger(self.__class__.__name__)

    async def _fetch_snapshot(self) -> bool:
        """Download the snapshot; False if absent and the policy allows it"""
        try:
            await self.snapshots.fetch_async(self.settings.cache_folder, self.settings.local_cache_dir)
        except SnapshotNotFoundError as e:
            if self.settings.on_missing_cache != MissingCachePolicy.DEPLOY_ALL:
                raise
            self.logger.info(f"{e}; deploying all functions (on-missing-cache=deploy-all)")
            return False

        self.logger.info("Successfully downloaded functions cache")
        return True

    async def _plan(self, firebase_config: Optional[FirebaseConfig], functions_dir: Path) -> RunPlan:
        settings = self.settings

        if not await self._fetch_snapshot():
            return RunPlan(target=DeployTarget.all_functions(force=True), snapshot_found=False)

        snapshot_dir = settings.snapshot_dir
        excludes = settings.exclude_patterns(firebase_config)

        cached_config = ConfigLoader.load(snapshot_dir / FIREBASE_CONFIG_FILE)
        config_changed = ConfigLoader.functions_changed(firebase_config, cached_config)
        if config_changed:
            self.logger.info("firebase.json functions settings changed")

        changed_global_paths = []
        global_paths = _present_paths(settings.global_paths, functions_dir, snapshot_dir)
        if global_paths:
            outputs = await self.diff_engine.diff_async(
                global_paths, functions_dir, snapshot_dir, excludes
            )
            changed_global_paths = DiffEngine.changed_paths(global_paths, outputs)
            if changed_global_paths:
                self.logger.info(f"Global paths changed: {', '.join(changed_global_paths)}")
        else:
            self.logger.info("No global files to check")

        self.logger.info(f"Checking for changes in {settings.source_dir} folder")
        changed_files = await self.diff_engine.changed_files_async(
            _present_paths([settings.source_dir], functions_dir, snapshot_dir),
            functions_dir, snapshot_dir, excludes
        )
        if changed_files:
            self.logger.info("List of changed source files:\n" + "\n".join(changed_files))

        if resolve_global_change(config_changed, bool(changed_global_paths)):
            self.logger.info("Global settings changed, deploying all functions")
            target = DeployTarget.all_functions(force=True)
        else:
            resolver = DeployTargetResolver(settings.source_dir, settings.ignore_folders)
            target = resolver.resolve_function_subset(changed_files)

        return RunPlan(
            target=target,
            snapshot_found=True,
            config_changed=config_changed,
            changed_global_paths=changed_global_paths,
            changed_files=changed_files
        )

    def _load_config(self):
        firebase_config = ConfigLoader.load(self.settings.firebase_json_path)
        functions_dir = self.settings.resolve_functions_dir(firebase_config)
        self.logger.info(f"Functions folder: {functions_dir}")
        return firebase_config, functions_dir

    async def plan_async(self) -> RunPlan:
        """Detect changes without deploying or updating the cache"""
        firebase_config, functions_dir = self._load_config()
        return await self._plan(firebase_config, functions_dir)

    def plan(self) -> RunPlan:
        """Synchronous version of :meth:`plan_async`"""
        return run_async(self.plan_async())

    async def run_async(self) -> RunResult:
        """
        Run change detection, deploy and cache update

        Returns:
            RunResult of the deploy

        Raises:
            DeployToolError: On any fatal error
        """
        settings = self.settings
        firebase_config, functions_dir = self._load_config()
        plan = await self._plan(firebase_config, functions_dir)

        orchestrator = DeployOrchestrator(
            project_id=settings.project_id,
            token=settings.token,
            runner=self.runner,
            matcher=self.matcher,
            firebase_bin=settings.firebase_bin,
            dry_run=settings.skip_deploy,
            cwd=settings.workspace,
            predeploy=firebase_config.predeploy if firebase_config else ()
        )
        result = await orchestrator.deploy_async(plan.target)
        result.plan = plan

        if settings.skip_deploy and not settings.update_cache_on_skip:
            self.logger.info("Deploy skipped, leaving functions cache unchanged")
            return result

        paths = list(settings.global_paths) + [settings.source_dir]
        config_file = settings.firebase_json_path if firebase_config is not None else None
        await self.snapshots.push_async(paths, settings.cache_folder, functions_dir, config_file)
        result.cache_updated = True
        self.logger.info("Successfully updated functions cache")

        return result

    def run(self) -> RunResult:
        """Synchronous version of :meth:`run_async`"""
        return run_async(self.run_async())


def _present_paths(relative_paths, functions_dir: Path, snapshot_dir: Path):
    """Drop paths absent from both trees; diff cannot compare two missing operands"""
    return [
        path for path in relative_paths
        if (functions_dir / path).exists() or (snapshot_dir / path).exists()
    ]
