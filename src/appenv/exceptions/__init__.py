"""Exceptions raised by appenv.

Usage:
    from appenv.exceptions import (
        AppEnvError,
        EnvFileNotFoundError,
        CoercionError,
    )

    try:
        appenv.load(config, "config")
    except AppEnvError as exc:
        print(exc.to_dict())
"""

from appenv.exceptions.base import (
    AppEnvError,
    CoercionError,
    ConfigurationError,
    EnvFileNotFoundError,
    EnvFileParseError,
    EnvFileReadError,
    ResourceNotFoundError,
    UnsupportedFieldTypeError,
    ValidationError,
)

__all__ = [
    # Base exceptions
    "AppEnvError",
    "ValidationError",
    "ResourceNotFoundError",
    "ConfigurationError",
    # Load failures
    "EnvFileNotFoundError",
    "EnvFileReadError",
    "EnvFileParseError",
    "CoercionError",
    # Contract violations
    "UnsupportedFieldTypeError",
]
