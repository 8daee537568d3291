"""Exception definitions for deploy-changed-functions"""

from ..constants import ErrorCode


class DeployToolError(Exception):
    """Base exception for deploy-changed-functions"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class ConfigError(DeployToolError):
    """Configuration error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIG_ERROR)


class ConfigParseError(ConfigError):
    """Config document exists but is not valid JSON or has the wrong shape"""

    def __init__(self, path: str, reason: str = None):
        message = f"Error parsing {path}, confirm it is valid JSON"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.error_code = ErrorCode.CONFIG_PARSE_ERROR
        self.path = path


class TransferError(DeployToolError):
    """Remote snapshot copy failed"""

    def __init__(self, message: str, error_code: str = ErrorCode.TRANSFER_FAILED):
        super().__init__(message, error_code)


class SnapshotNotFoundError(TransferError):
    """No snapshot exists at the remote location"""

    def __init__(self, location: str):
        message = f"No functions cache found at: {location}"
        super().__init__(message, ErrorCode.SNAPSHOT_NOT_FOUND)
        self.location = location


class DiffError(DeployToolError):
    """Comparison tool failed to run for a path"""

    def __init__(self, path: str, reason: str):
        message = f'Error checking for diff for path "{path}": {reason}'
        super().__init__(message, ErrorCode.DIFF_FAILED)
        self.path = path


class PathMappingError(DeployToolError):
    """Changed path cannot be mapped to a function folder"""

    def __init__(self, path: str, reason: str):
        message = f'Cannot map changed path "{path}" to a function: {reason}'
        super().__init__(message, ErrorCode.PATH_MAPPING_FAILED)
        self.path = path


class DeployError(DeployToolError):
    """Deployment operation error"""

    def __init__(self, message: str, output: str = ""):
        if output:
            message = f"{message}\n{output}"
        super().__init__(message, ErrorCode.DEPLOY_FAILED)
        self.output = output


class CommandTimeoutError(DeployToolError):
    """External command exceeded its timeout"""

    def __init__(self, command: str, timeout: float):
        message = f"Command timed out after {timeout}s: {command}"
        super().__init__(message, ErrorCode.COMMAND_TIMEOUT)
        self.command = command
        self.timeout = timeout
