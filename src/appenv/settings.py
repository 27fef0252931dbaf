"""Loader settings

Dataclass-based configuration for the loader itself: which variable
selects the environment, what the fallback environment is and how the
env files are named. Values can be overridden through ``APPENV_*``
environment variables.
"""

import os
from dataclasses import dataclass
from typing import Optional

from appenv.exceptions import ConfigurationError

#: Environment used when the selector variable is unset or empty.
#: Read at call time, so reassigning it affects subsequent loads.
DEFAULT_APP_ENV = "production"


@dataclass
class LoaderSettings:
    """Layered loader configuration

    Attributes:
        app_env_var: Process variable naming the active environment
        default_app_env: Fallback environment (None: use ``DEFAULT_APP_ENV``)
        shared_file: Name of the optional shared file
        file_suffix: Suffix appended to the environment name
        encoding: Text encoding of env files
    """

    app_env_var: str = "APP_ENV"
    default_app_env: Optional[str] = None
    shared_file: str = ".env"
    file_suffix: str = ".env"
    encoding: str = "utf-8"

    def __post_init__(self):
        for name in ("app_env_var", "shared_file", "file_suffix", "encoding"):
            if not getattr(self, name):
                raise ConfigurationError(
                    "INVALID_LOADER_SETTINGS",
                    f"{name} must not be empty",
                    details={"setting": name},
                )

    @classmethod
    def from_env(cls, prefix: str = "APPENV") -> "LoaderSettings":
        """Load loader settings from environment variables

        Environment variables:
            {prefix}_APP_ENV_VAR: Selector variable name
            {prefix}_DEFAULT_APP_ENV: Fallback environment name
            {prefix}_SHARED_FILE: Shared file name
            {prefix}_ENCODING: Env file encoding
        """
        return cls(
            app_env_var=os.environ.get(f"{prefix}_APP_ENV_VAR", "APP_ENV"),
            default_app_env=os.environ.get(f"{prefix}_DEFAULT_APP_ENV") or None,
            shared_file=os.environ.get(f"{prefix}_SHARED_FILE", ".env"),
            encoding=os.environ.get(f"{prefix}_ENCODING", "utf-8"),
        )

    def effective_default_app_env(self) -> str:
        return self.default_app_env or DEFAULT_APP_ENV

    def environment_file(self, app_env: str) -> str:
        """File name for an environment, e.g. ``production.env``."""
        return app_env + self.file_suffix


_settings: Optional[LoaderSettings] = None


def get_settings(reload: bool = False) -> LoaderSettings:
    """Get or create the global loader settings (built from the environment)."""
    global _settings
    if _settings is None or reload:
        _settings = LoaderSettings.from_env()
    return _settings


def reset_settings() -> None:
    """Drop the cached global settings. Mainly for tests."""
    global _settings
    _settings = None


__all__ = [
    "DEFAULT_APP_ENV",
    "LoaderSettings",
    "get_settings",
    "reset_settings",
]
