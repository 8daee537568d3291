"""Configuration data models"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..constants import (
    DEFAULT_CACHE_FOLDER,
    DEFAULT_FUNCTIONS_FOLDER,
    DEFAULT_IGNORE_FOLDERS,
    DEFAULT_LOCAL_CACHE_FOLDER,
    DEFAULT_SOURCE_DIR,
    FIREBASE_BIN,
    FIREBASE_CONFIG_FILE,
    GCS_URL_TEMPLATE,
    MissingCachePolicy,
)


@dataclass(frozen=True)
class FirebaseConfig:
    """Functions settings read from firebase.json"""

    source: Optional[str] = None
    ignore: Tuple[str, ...] = ()
    predeploy: Tuple[str, ...] = ()
    raw: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def functions_section(self) -> Optional[Dict[str, Any]]:
        """Get the raw ``functions`` settings used for change detection"""
        functions = self.raw.get("functions")
        if isinstance(functions, list):
            # Multiple codebases; the first one is the deploy source
            functions = functions[0] if functions else None
        return functions

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FirebaseConfig':
        """Create from a parsed firebase.json document

        Raises:
            ValueError: If the ``functions`` section has an unexpected shape
        """
        functions = data.get("functions")
        if isinstance(functions, list):
            functions = functions[0] if functions else None
            if functions is not None and not isinstance(functions, dict):
                raise ValueError("\"functions\" list entries must be objects")
        elif functions is not None and not isinstance(functions, dict):
            raise ValueError("\"functions\" must be an object or a list of objects")
        functions = functions or {}

        source = functions.get("source")
        if source is not None and not isinstance(source, str):
            raise ValueError("\"functions.source\" must be a string")

        return cls(
            source=source,
            ignore=_string_list(functions, "ignore"),
            predeploy=_string_list(functions, "predeploy"),
            raw=data
        )


def _string_list(section: Dict[str, Any], key: str) -> Tuple[str, ...]:
    """Read a setting that holds one string or a list of strings"""
    value = section.get(key)
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return tuple(value)
    raise ValueError(f"\"functions.{key}\" must be a string or a list of strings")


def split_list(value: Optional[str]) -> List[str]:
    """Split a comma separated input into its non-blank entries"""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class ActionSettings:
    """Settings for a single run, passed explicitly to every service"""

    project_id: str
    token: str
    workspace: Path = field(default_factory=Path.cwd)
    cache_folder: str = DEFAULT_CACHE_FOLDER
    local_folder: str = DEFAULT_LOCAL_CACHE_FOLDER
    functions_folder: Optional[str] = None
    source_dir: str = DEFAULT_SOURCE_DIR
    global_paths: List[str] = field(default_factory=list)
    ignore: List[str] = field(default_factory=list)
    ignore_folders: Tuple[str, ...] = DEFAULT_IGNORE_FOLDERS
    skip_deploy: bool = False
    storage_bucket: Optional[str] = None
    storage_url: Optional[str] = None
    on_missing_cache: MissingCachePolicy = MissingCachePolicy.FAIL
    update_cache_on_skip: bool = True
    firebase_bin: str = FIREBASE_BIN
    command_timeout: Optional[float] = None

    def __post_init__(self):
        """Normalize values coming from CLI strings"""
        self.workspace = Path(self.workspace).resolve()
        if isinstance(self.on_missing_cache, str):
            self.on_missing_cache = MissingCachePolicy(self.on_missing_cache)
        self.ignore_folders = tuple(self.ignore_folders)
        self.cache_folder = self.cache_folder.strip("/")

    @property
    def firebase_json_path(self) -> Path:
        """Get path of firebase.json in the workspace"""
        return self.workspace / FIREBASE_CONFIG_FILE

    @property
    def local_cache_dir(self) -> Path:
        """Get local folder the snapshot is downloaded into"""
        return self.workspace / self.local_folder

    @property
    def snapshot_dir(self) -> Path:
        """Get local root of the downloaded snapshot"""
        return self.local_cache_dir / self.cache_folder.split("/")[-1]

    @property
    def storage_base_url(self) -> str:
        """Get base URL of the remote snapshot storage"""
        if self.storage_url:
            return self.storage_url.rstrip("/")
        return GCS_URL_TEMPLATE.format(bucket=self.storage_bucket or self.project_id)

    def resolve_functions_dir(self, firebase_config: Optional[FirebaseConfig]) -> Path:
        """Resolve functions folder: input, then firebase.json source, then default"""
        folder = self.functions_folder
        if not folder and firebase_config is not None:
            folder = firebase_config.source
        return self.workspace / (folder or DEFAULT_FUNCTIONS_FOLDER)

    def exclude_patterns(self, firebase_config: Optional[FirebaseConfig]) -> List[str]:
        """Get diff exclude globs from input and firebase.json ``functions.ignore``"""
        patterns = list(self.ignore)
        if firebase_config is not None:
            for pattern in firebase_config.ignore:
                if pattern not in patterns:
                    patterns.append(pattern)
        return patterns

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ActionSettings':
        """Create from a dictionary of input names (hyphens or underscores)"""
        values = {key.replace("-", "_"): value for key, value in data.items()
                  if value is not None}

        for key in ("global_paths", "ignore", "ignore_folders"):
            if isinstance(values.get(key), str):
                values[key] = split_list(values[key])

        if "ignore_folders" in values and not values["ignore_folders"]:
            del values["ignore_folders"]

        return cls(**values)
