"""firebase.json loading"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from ..api.exceptions import ConfigError, ConfigParseError
from ..models.config import FirebaseConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Loads functions settings from firebase.json"""

    @staticmethod
    def load(path: Union[str, Path]) -> Optional[FirebaseConfig]:
        """Load firebase.json

        Args:
            path: Path to firebase.json

        Returns:
            Parsed config, or None if the file does not exist

        Raises:
            ConfigError: If the file cannot be read
            ConfigParseError: If the file is not a valid JSON object or its
                functions section has an unexpected shape
        """
        path = Path(path)
        if not path.exists():
            logger.warning(f'firebase.json not found at path: "{path}"')
            return None

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Error loading {path}: {e}")

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ConfigParseError(str(path), str(e))

        if not isinstance(data, dict):
            raise ConfigParseError(str(path), "top level value must be an object")

        try:
            return FirebaseConfig.from_dict(data)
        except ValueError as e:
            raise ConfigParseError(str(path), str(e))

    @staticmethod
    def functions_changed(live: Optional[FirebaseConfig],
                          cached: Optional[FirebaseConfig]) -> bool:
        """Check if the ``functions`` settings differ between two configs"""
        live_section = live.functions_section if live else None
        cached_section = cached.functions_section if cached else None
        return live_section != cached_section
