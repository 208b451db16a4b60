"""Error kinds raised by the Family Guy image converter."""

from enum import Enum
from fastmcp.exceptions import ToolError


class ErrorKind(str, Enum):
    CONFIG = "config"
    AUTH = "auth"
    INVALID_INPUT = "invalid_input"
    DECODE = "decode"
    NO_IMAGE = "no_image"
    UPSTREAM = "upstream"


class ConverterError(Exception):
    """Base class for every failure the converter reports."""

    kind: ErrorKind = ErrorKind.UPSTREAM


class ConfigError(ConverterError):
    """A required environment variable is missing or malformed."""

    kind = ErrorKind.CONFIG


class AuthError(ConverterError):
    """The caller did not present the shared bearer token."""

    kind = ErrorKind.AUTH


class InvalidInputError(ConverterError):
    """Tool arguments failed validation.

    ``issues`` holds ``(field_path, reason)`` pairs, one per failing field.
    """

    kind = ErrorKind.INVALID_INPUT

    def __init__(self, issues):
        self.issues = list(issues)
        super().__init__(", ".join(f"{path}: {reason}" for path, reason in self.issues))


class DecodeError(ConverterError):
    kind = ErrorKind.DECODE


class NoImageGeneratedError(ConverterError):
    kind = ErrorKind.NO_IMAGE


class UpstreamFailure(ConverterError):
    """The image generation API call failed."""

    kind = ErrorKind.UPSTREAM


_TOOL_MESSAGES = {
    ErrorKind.CONFIG: "Server misconfigured: {}",
    ErrorKind.AUTH: "Unauthorized - {}",
    ErrorKind.INVALID_INPUT: "Invalid input: {}",
    ErrorKind.DECODE: "Failed to convert image: {}",
    ErrorKind.NO_IMAGE: "Failed to convert image: {}",
    ErrorKind.UPSTREAM: "Failed to convert image: {}",
}


def describe(exc: Exception) -> str:
    """Caller-facing message for any exception, prefixed by its error kind."""
    if not isinstance(exc, ConverterError):
        exc = UpstreamFailure(str(exc) or type(exc).__name__)
    return _TOOL_MESSAGES[exc.kind].format(exc)


def to_tool_error(exc: Exception) -> ToolError:
    """Map any exception raised during a tool call to the error sent to the caller."""
    return ToolError(describe(exc))
