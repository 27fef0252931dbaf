"""Base exception classes for appenv.

Recoverable errors carry structured information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context (file path, key, raw value, ...)

Contract violations (a destination record that cannot be bound at all)
are raised as ``TypeError`` subclasses and never enter this hierarchy.
"""

from typing import Any, Dict, Optional


class AppEnvError(Exception):
    """Base exception for all recoverable appenv errors.

    Attributes:
        code: Machine-readable error code (e.g., "ENV_FILE_NOT_FOUND")
        message: Human-readable error message
        details: Optional additional context
    """

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.code}: {self.message} (details: {self.details})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(AppEnvError):
    """Base for errors caused by bad input data (file syntax, raw values)."""

    pass


class ResourceNotFoundError(AppEnvError):
    """Base for resource not found errors."""

    pass


class ConfigurationError(AppEnvError):
    """Raised when the loader itself is configured with invalid settings."""

    pass


class EnvFileNotFoundError(ResourceNotFoundError):
    """The environment-specific ``.env`` file does not exist."""

    def __init__(self, path: str, details: Optional[Dict[str, Any]] = None):
        self.path = path
        super().__init__(
            code="ENV_FILE_NOT_FOUND",
            message=f"env file not found: {path}",
            details={"path": path, **(details or {})},
        )


class EnvFileReadError(AppEnvError):
    """An env file exists (or may exist) but could not be opened or read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(
            code="ENV_FILE_READ_ERROR",
            message=f"cannot read env file {path}: {reason}",
            details={"path": path},
        )


class EnvFileParseError(ValidationError):
    """The dotenv parser rejected a statement in an env file."""

    def __init__(self, path: str, line: int, statement: str):
        self.path = path
        self.line = line
        super().__init__(
            code="ENV_FILE_PARSE_ERROR",
            message=f"cannot parse {path} at line {line}",
            details={"path": path, "line": line, "statement": statement},
        )


class CoercionError(ValidationError):
    """A raw string could not be converted to a field's declared type.

    Args:
        field: Attribute name on the destination record
        key: Lookup key the raw value was found under
        value: The raw string
        type_name: Declared type of the field
    """

    def __init__(self, field: str, key: str, value: str, type_name: str):
        self.field = field
        self.key = key
        self.value = value
        self.type_name = type_name
        super().__init__(
            code="COERCION_FAILED",
            message=f"set field: cannot unmarshal {value} to type {type_name}",
            details={"field": field, "key": key, "value": value, "type": type_name},
        )


class UnsupportedFieldTypeError(TypeError):
    """A tagged field declares a type outside {str, int, bool}.

    This signals a malformed destination record. It is deliberately not an
    ``AppEnvError`` so that callers catching load failures do not catch it.
    """

    def __init__(self, field: str, type_repr: str):
        self.field = field
        self.type_repr = type_repr
        super().__init__(f"set field: unsupported type: {type_repr} (field {field!r})")
