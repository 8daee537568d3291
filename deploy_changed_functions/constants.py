"""Global constants for deploy-changed-functions"""

from enum import Enum
import re

APP_NAME = "deploy-changed-functions"
LOG_FORMAT = "%(message)s"

# Project files
FIREBASE_CONFIG_FILE = "firebase.json"
SETTINGS_FILE = ".deploy-changed-functions.yaml"

# Folder defaults
DEFAULT_FUNCTIONS_FOLDER = "functions"
DEFAULT_SOURCE_DIR = "src"
DEFAULT_CACHE_FOLDER = "functions_deploy_cache"
DEFAULT_LOCAL_CACHE_FOLDER = "local_functions_cache"

# Shared code folders; a change inside one of them redeploys every function
DEFAULT_IGNORE_FOLDERS = ("utils", "constants")

# Storage
GCS_URL_TEMPLATE = "gs://{bucket}.appspot.com"
GCS_SCHEME = "gs"
FILE_SCHEME = "file"

# External tools
DIFF_BIN = "diff"
GSUTIL_BIN = "gsutil"
FIREBASE_BIN = "firebase"

# -N treat absent files as empty, -q brief, -r recursive, -w ignore all space, -B ignore blank lines
DIFF_BASE_ARGS = ["-Nqr", "-w", "-B"]
DIFF_EXIT_IDENTICAL = 0
DIFF_EXIT_DIFFERENT = 1

# -m parallel transfer, -q quiet
GSUTIL_DEFAULT_ARGS = ["-m", "-q"]
# stderr markers gsutil prints when a URL has no objects
GSUTIL_NO_MATCH_MARKERS = ("matched no objects", "No URLs matched")

# Deploy command
DEPLOY_COMMAND = "deploy"
DEPLOY_ONLY_FLAG = "--only"
DEPLOY_FORCE_FLAG = "--force"
DEPLOY_PROJECT_FLAG = "--project"
FUNCTIONS_TARGET = "functions"
FUNCTION_TARGET_TEMPLATE = "functions:{name}"
ENV_FIREBASE_TOKEN = "FIREBASE_TOKEN"

# Firebase CLI prints this after a partial failure
REDEPLOY_PATTERN = re.compile(
    r"To try redeploying those functions, run:\n\s*firebase\s(.*)"
)


class MissingCachePolicy(Enum):
    """What to do when no snapshot exists in remote storage"""
    FAIL = "fail"
    DEPLOY_ALL = "deploy-all"


# Error codes
class ErrorCode:
    CONFIG_ERROR = "DCF001"
    CONFIG_PARSE_ERROR = "DCF002"
    TRANSFER_FAILED = "DCF003"
    SNAPSHOT_NOT_FOUND = "DCF004"
    DIFF_FAILED = "DCF005"
    PATH_MAPPING_FAILED = "DCF006"
    DEPLOY_FAILED = "DCF007"
    COMMAND_TIMEOUT = "DCF008"


# Environment variables
ENV_WORKSPACE = "GITHUB_WORKSPACE"
ENV_GITHUB_ACTIONS = "GITHUB_ACTIONS"
ENV_INPUT_PREFIX = "INPUT_"

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
EMOJI_INFO = "ℹ"

# Message templates
MSG_NOTHING_CHANGED = f"{EMOJI_INFO} No functions changed, skipping deploy"
MSG_DRY_RUN = f"{EMOJI_INFO} Skipping deploy, would be using args: {{args}}"
MSG_RETRY = f"{EMOJI_WARNING} Deploy failed, retrying with: firebase {{args}}"
