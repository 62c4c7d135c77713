"""
Standard exit codes and error types for commitbump.

Following Unix/POSIX conventions for command-line tools. The error
classes double as the engine's error taxonomy: configuration problems,
bad repository state and repository access failures each carry their
own exit code so callers can tell them apart.
"""
from typing import Optional

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes (64-113 are typically available)
CONFIG_ERROR = 66        # Configuration error (e.g. tag format without {version})
DATA_ERROR = 70          # Repository data could not be interpreted
REPOSITORY_ERROR = 72    # Git repository could not be read


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class ConfigError(CommandError):
    """Raised when there's a configuration error."""
    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)


class InvalidFormatError(ConfigError, ValueError):
    """Raised when a tag format does not contain the version placeholder."""


class DataError(CommandError):
    """Raised when repository data is present but cannot be interpreted."""
    def __init__(self, message: str):
        super().__init__(message, DATA_ERROR)


class MalformedVersionError(DataError, ValueError):
    """Raised when a tag's version is not exactly MAJOR.MINOR.PATCH."""
    def __init__(self, version: str, tag_name: Optional[str] = None):
        where = f" (from tag {tag_name!r})" if tag_name else ""
        super().__init__(
            f"Malformed version {version!r}{where}: expected MAJOR.MINOR.PATCH "
            f"with non-negative integer components"
        )
        self.version = version
        self.tag_name = tag_name


class RepositoryError(CommandError):
    """Raised when the git repository cannot be read."""
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, REPOSITORY_ERROR)
        self.path = path
