"""Coral error types with typed error codes.

Error code ranges:
- 1xxx: Input (descriptor bytes)
- 2xxx: Config
- 3xxx: Graph snapshot loading
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Input (1xxx)
    EMPTY_INPUT = 1001
    INVALID_PROTOBUF = 1002
    NO_PROTO_FILES = 1003
    INPUT_READ_ERROR = 1004

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Graph snapshot (3xxx)
    GRAPH_FILE_NOT_FOUND = 3001
    GRAPH_PARSE_ERROR = 3002
    GRAPH_READ_ERROR = 3003

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class CoralError(Exception):
    """Base error with structured context for CLI and HTTP responses."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'EMPTY_INPUT')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class InputError(CoralError):
    """Descriptor input could not be decoded."""

    @classmethod
    def empty_input(cls) -> "InputError":
        return cls(
            code=ErrorCode.EMPTY_INPUT,
            message="Empty input: FileDescriptorSet binary is required",
        )

    @classmethod
    def invalid_protobuf(cls, reason: str) -> "InputError":
        return cls(
            code=ErrorCode.INVALID_PROTOBUF,
            message=f"Invalid protobuf binary format: {reason}",
            details={"reason": reason},
        )

    @classmethod
    def no_proto_files(cls) -> "InputError":
        return cls(
            code=ErrorCode.NO_PROTO_FILES,
            message="No proto files found in FileDescriptorSet",
        )

    @classmethod
    def read_error(cls, path: str, reason: str) -> "InputError":
        return cls(
            code=ErrorCode.INPUT_READ_ERROR,
            message=f"Failed to read input at {path}: {reason}",
            retryable=True,
            details={"path": path, "reason": reason},
        )


class ConfigError(CoralError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class GraphLoadError(CoralError):
    """A saved graph snapshot could not be loaded."""

    @classmethod
    def file_not_found(cls, path: str) -> "GraphLoadError":
        return cls(
            code=ErrorCode.GRAPH_FILE_NOT_FOUND,
            message=f"Graph file not found: {path}",
            details={"path": path},
        )

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "GraphLoadError":
        return cls(
            code=ErrorCode.GRAPH_PARSE_ERROR,
            message=f"Failed to parse graph at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def read_error(cls, path: str, reason: str) -> "GraphLoadError":
        return cls(
            code=ErrorCode.GRAPH_READ_ERROR,
            message=f"Failed to read graph at {path}: {reason}",
            retryable=True,
            details={"path": path, "reason": reason},
        )


class InternalError(CoralError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
