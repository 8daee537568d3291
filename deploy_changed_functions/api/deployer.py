"""Deployer API for programmatic runs"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..models import ActionSettings, RunPlan, RunResult
from ..services.config_service import ConfigService
from ..services.run_service import RunService


class Deployer:
    """Deployer class for deploy-changed-functions runs"""

    def __init__(self, settings: ActionSettings, **service_options):
        """
        Initialize deployer

        Args:
            settings: Run settings
            **service_options: Passed to RunService (storage, runner, matcher)
        """
        self.settings = settings
        self.service = RunService(settings, **service_options)

    @classmethod
    def from_inputs(cls,
                    workspace: Union[str, Path] = ".",
                    inputs: Optional[Dict[str, Any]] = None,
                    **service_options) -> 'Deployer':
        """
        Create deployer from action inputs and the workspace settings file

        Args:
            workspace: Repository root
            inputs: Input values keyed by input name (e.g. ``project-id``)

        Returns:
            Deployer
        """
        settings = ConfigService(Path(workspace)).load_settings(inputs)
        return cls(settings, **service_options)

    def plan(self) -> RunPlan:
        """
        Detect changed functions without deploying

        Returns:
            RunPlan: Change detection result
        """
        return self.service.plan()

    def deploy(self) -> RunResult:
        """
        Deploy changed functions and update the cache

        Returns:
            RunResult: Run result

        Raises:
            DeployToolError: If the run fails
        """
        return self.service.run()


def deploy_changed(workspace: Union[str, Path] = ".", **inputs) -> RunResult:
    """
    Convenience function for a full run

    Args:
        workspace: Repository root
        **inputs: Input values; underscores or hyphens (``project_id=...``)

    Returns:
        RunResult
    """
    return Deployer.from_inputs(workspace, inputs).deploy()
