"""
Standard exit codes and error types for taglog.

Following Unix/POSIX conventions for command-line tools.
"""
from typing import Optional

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes (64-113 are typically available)
NO_TAGS_FOUND = 64       # Repository has no tags (matching the filter)
GIT_ERROR = 65           # git invocation failed
CONFIG_ERROR = 66        # Configuration file error
TAG_NOT_FOUND = 67       # Query matched no tags
VERSION_NOT_FOUND = 68   # Query produced no versions
DATA_ERROR = 70          # Data format or validation error
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)


def exit_with_code(code: int, message: Optional[str] = None):
    """
    Exit with a specific code and optional message.

    Args:
        code: Exit code
        message: Optional message to print to stderr
    """
    import sys
    if message:
        print(message, file=sys.stderr)
    sys.exit(code)


class TaglogError(Exception):
    """
    Base exception for taglog, carrying the exit code the CLI should use.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class GitCommandError(TaglogError):
    """Raised when a git command fails to run or exits non-zero."""
    def __init__(self, message: str, args: tuple = (), stderr: str = ""):
        super().__init__(message, GIT_ERROR)
        self.command = tuple(args)
        self.stderr = stderr


class NoTagsError(TaglogError):
    """Raised when the repository has no tags."""
    def __init__(self, message: str = "git-tag does not exist"):
        super().__init__(message, NO_TAGS_FOUND)


class DateParseError(TaglogError):
    """Raised when neither the tagger nor the author date of a tag parses."""
    def __init__(self, message: str):
        super().__init__(message, DATA_ERROR)


class TagNotFoundError(TaglogError):
    """Raised when a tag query selects nothing."""
    def __init__(self, query: str):
        super().__init__(f"No matching tag was found for query '{query}'", TAG_NOT_FOUND)
        self.query = query


class InvalidQueryError(TaglogError):
    """Raised when a tag query cannot be parsed."""
    def __init__(self, query: str):
        super().__init__(f"Invalid tag query '{query}'", USAGE_ERROR)
        self.query = query


class ComparisonError(TaglogError):
    """Raised when two values cannot be ordered against each other."""
    def __init__(self, message: str):
        super().__init__(message, DATA_ERROR)


class VersionNotFoundError(TaglogError):
    """Raised when a version query produces no versions."""
    def __init__(self, query: str):
        super().__init__(f"Version {query} not found", VERSION_NOT_FOUND)
        self.query = query


class ConfigError(TaglogError):
    """Raised when there's a configuration error."""
    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)
