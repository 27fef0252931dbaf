"""appenv - layered .env configuration for dataclasses.

Values are loaded into a dataclass instance from three layers:
- <directory>/<APP_ENV>.env: mandatory environment-specific file
- <directory>/.env: optional shared file, overrides the former
- the process environment: always wins

Only fields tagged with ``env_field("KEY", ...)`` take part. Supported
field types are str, int and bool.
"""

__version__ = "1.0.0"

from appenv.binder import (
    ENV_TAG,
    FieldDescriptor,
    FieldKind,
    bind,
    env_field,
    tagged_fields,
)

from appenv.exceptions import (
    AppEnvError,
    CoercionError,
    ConfigurationError,
    EnvFileNotFoundError,
    EnvFileParseError,
    EnvFileReadError,
    UnsupportedFieldTypeError,
)

from appenv.loader import (
    EnvLoader,
    load,
    load_fs,
    load_fs_on_app_env,
    load_on_app_env,
    open_os,
    open_tree,
)

from appenv.settings import (
    LoaderSettings,
    get_settings,
    reset_settings,
)

from appenv.sources import (
    DotenvSource,
    EnvironSource,
    KeyValueSource,
    MappingSource,
)

__all__ = [
    "__version__",
    # Loading
    "load",
    "load_on_app_env",
    "load_fs",
    "load_fs_on_app_env",
    "EnvLoader",
    "open_os",
    "open_tree",
    # Binding
    "ENV_TAG",
    "env_field",
    "bind",
    "tagged_fields",
    "FieldKind",
    "FieldDescriptor",
    # Sources
    "KeyValueSource",
    "MappingSource",
    "EnvironSource",
    "DotenvSource",
    # Settings
    "LoaderSettings",
    "get_settings",
    "reset_settings",
    # Exceptions
    "AppEnvError",
    "ConfigurationError",
    "EnvFileNotFoundError",
    "EnvFileReadError",
    "EnvFileParseError",
    "CoercionError",
    "UnsupportedFieldTypeError",
]
