"""Run settings management service"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..api.exceptions import ConfigError
from ..constants import SETTINGS_FILE
from ..models.config import ActionSettings

REQUIRED_INPUTS = ("project-id", "token")
BOOLEAN_INPUTS = ("skip-deploy", "update-cache-on-skip")

TRUE_VALUES = {"true", "1", "yes", "y", "on"}
FALSE_VALUES = {"false", "0", "no", "n", "off", ""}


def parse_bool(name: str, value: Any) -> bool:
    """Parse a boolean-like input value

    Raises:
        ConfigError: If the value is not boolean-like
    """
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ConfigError(f'Invalid boolean value for "{name}": {value!r}')


class ConfigService:
    """Service for building run settings

    Values come from, in increasing priority: defaults, the optional
    ``.deploy-changed-functions.yaml`` file in the workspace, and explicit
    overrides (CLI options or action inputs).
    """

    def __init__(self, workspace: Path, settings_path: Optional[Path] = None):
        """Initialize config service

        Args:
            workspace: Repository root
            settings_path: Settings file (defaults to the workspace file)
        """
        self.workspace = Path(workspace)
        self.settings_path = Path(settings_path) if settings_path else self.workspace / SETTINGS_FILE

    def load_file(self) -> Dict[str, Any]:
        """Load settings file

        Returns:
            Settings keyed by input name, empty if the file does not exist
        """
        if not self.settings_path.exists():
            return {}

        with open(self.settings_path, 'r') as f:
            content = f.read()

        # Simple environment variable expansion
        content = os.path.expandvars(content)

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid settings file {self.settings_path}: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Settings file {self.settings_path} must contain a mapping")

        return {str(key).replace("_", "-"): value for key, value in data.items()}

    def load_settings(self, overrides: Optional[Dict[str, Any]] = None) -> ActionSettings:
        """Build run settings

        Args:
            overrides: Input values by name; None values are ignored

        Returns:
            ActionSettings

        Raises:
            ConfigError: If a required input is missing or a value is invalid
        """
        data = self.load_file()
        for key, value in (overrides or {}).items():
            if value is not None:
                data[key.replace("_", "-")] = value

        for name in REQUIRED_INPUTS:
            if not data.get(name):
                raise ConfigError(f'Missing required input "{name}"')

        for name in BOOLEAN_INPUTS:
            if name in data:
                data[name] = parse_bool(name, data[name])

        data["workspace"] = self.workspace

        try:
            return ActionSettings.from_dict(data)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid settings: {e}")
