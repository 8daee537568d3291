"""Deploy orchestration with a single suggested-command retry"""

import logging
import shutil
from pathlib import Path
from typing import List, Optional, Sequence

from ..api.exceptions import DeployError
from ..constants import (
    ENV_FIREBASE_TOKEN,
    FIREBASE_BIN,
    MSG_DRY_RUN,
    MSG_NOTHING_CHANGED,
    MSG_RETRY,
)
from ..core.redeploy_matcher import FirebaseRedeployMatcher, RedeployMatcher
from ..models.result import DeployResult, DeployState, OperationStatus, RunResult
from ..models.target import DeployTarget
from ..utils.async_utils import run_async
from ..utils.process_utils import CommandRunner, format_command


class DeployOrchestrator:
    """Runs ``firebase deploy`` for a resolved target

    States: IDLE -> PREPARING -> DEPLOYING -> SUCCESS, or
    DEPLOYING -> RETRYING -> SUCCESS | FAILED. A failed deploy is retried
    once, and only with the command the deploy tool itself suggests.
    """

    def __init__(self,
                 project_id: str,
                 token: str,
                 runner: CommandRunner = None,
                 matcher: RedeployMatcher = None,
                 firebase_bin: str = FIREBASE_BIN,
                 dry_run: bool = False,
                 cwd: Optional[Path] = None,
                 predeploy: Sequence[str] = ()):
        self.project_id = project_id
        self.token = token
        self.runner = runner or CommandRunner()
        self.matcher = matcher or FirebaseRedeployMatcher()
        self.firebase_bin = firebase_bin
        self.dry_run = dry_run
        self.cwd = cwd
        self.predeploy = list(predeploy)
        self.logger = logging.getLogger(self.__class__.__name__)

    def _resolve_firebase(self) -> str:
        path = shutil.which(self.firebase_bin)
        if path is None:
            raise DeployError(f"firebase executable not found: {self.firebase_bin}")
        return path

    async def _invoke(self, firebase: str, args: List[str]) -> DeployResult:
        try:
            result = await self.runner.run(
                [firebase] + args,
                env={ENV_FIREBASE_TOKEN: self.token},
                cwd=self.cwd
            )
        except FileNotFoundError as e:
            raise DeployError(f"firebase executable not found: {e}")

        if result.stdout:
            self.logger.info(result.stdout.rstrip())
        if result.stderr:
            self.logger.debug(result.stderr.rstrip())

        return DeployResult(exit_code=result.exit_code, output=result.stdout, args=list(args))

    async def deploy_async(self, target: DeployTarget) -> RunResult:
        """
        Deploy a target

        Args:
            target: Resolved deploy target

        Returns:
            RunResult; status SKIPPED for no-op and dry runs

        Raises:
            DeployError: If the deploy fails and no retry succeeds
        """
        result = RunResult(target=target, dry_run=self.dry_run)
        result.transition(DeployState.PREPARING)

        if target.is_noop:
            self.logger.info(MSG_NOTHING_CHANGED)
            result.message = MSG_NOTHING_CHANGED
            result.transition(DeployState.SUCCESS)
            result.complete(OperationStatus.SKIPPED)
            return result

        args = target.deploy_args(self.project_id)

        if self.dry_run:
            message = MSG_DRY_RUN.format(args=" ".join(args))
            self.logger.info(message)
            result.message = message
            result.transition(DeployState.SUCCESS)
            result.complete(OperationStatus.SKIPPED)
            return result

        firebase = self._resolve_firebase()
        if self.predeploy:
            self.logger.info(f"Predeploy steps from firebase.json: {'; '.join(self.predeploy)}")

        result.transition(DeployState.DEPLOYING)
        self.logger.info(f"Calling deploy with args: {format_command(args)}")
        first = await self._invoke(firebase, args)
        result.attempts.append(first)

        if first.is_success:
            result.message = f"Deployed {target.describe()}"
            result.transition(DeployState.SUCCESS)
            result.complete(OperationStatus.SUCCESS)
            return result

        self.logger.info("Deploy failed, attempting to parse redeploy message from output")
        retry_args = self.matcher.match(first.output)
        if not retry_args:
            result.transition(DeployState.FAILED)
            result.complete(OperationStatus.FAILED)
            raise DeployError(
                f"Deploy failed with exit code {first.exit_code} "
                f"and no redeploy command was suggested",
                first.output
            )

        result.transition(DeployState.RETRYING)
        self.logger.warning(MSG_RETRY.format(args=format_command(retry_args)))
        retry = await self._invoke(firebase, retry_args)
        result.attempts.append(retry)

        if not retry.is_success:
            result.transition(DeployState.FAILED)
            result.complete(OperationStatus.FAILED)
            raise DeployError(f"Redeploy failed with exit code {retry.exit_code}", retry.output)

        result.message = f"Deployed {target.describe()} after retry"
        result.transition(DeployState.SUCCESS)
        result.complete(OperationStatus.SUCCESS)
        return result

    def deploy(self, target: DeployTarget) -> RunResult:
        """Synchronous version of :meth:`deploy_async`"""
        return run_async(self.deploy_async(target))
