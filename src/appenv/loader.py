"""Layered loader: environment file, shared file, then process environment.

For an environment named ``production`` and a directory ``config``::

    config/production.env   mandatory, applied first
    config/.env             optional, overrides production.env
    os.environ              always applied last, overrides both

Each layer is a full binder pass over the same record, so overriding
happens key by key: a later layer reassigns a field whenever it has the
field's key, and leaves it alone otherwise.

Usage:
    from dataclasses import dataclass
    import appenv

    @dataclass
    class Config:
        port: int = appenv.env_field("PORT", default=8080)

    config = Config()
    appenv.load(config, "config")           # environment from APP_ENV
    appenv.load_on_app_env(config, "config", "test")
"""

import errno
import functools
import os
import posixpath
from typing import Any, Callable, List, Optional, TextIO, Union

from appenv.binder import bind
from appenv.exceptions import AppEnvError, EnvFileNotFoundError, EnvFileReadError
from appenv.logger import Logger, create_logger
from appenv.settings import LoaderSettings, get_settings
from appenv.sources import DotenvSource, EnvironSource

PathLike = Union[str, "os.PathLike[str]"]

#: ``opener(directory, name)`` returns an open text stream or raises OSError.
Opener = Callable[[str, str], TextIO]


def open_os(directory: str, name: str, encoding: str = "utf-8") -> TextIO:
    """Open ``directory/name`` on the real filesystem."""
    return open(os.path.join(directory, name), "r", encoding=encoding)


def _tree_parts(directory: str, name: str) -> List[str]:
    path = posixpath.normpath(posixpath.join(directory.replace(os.sep, "/"), name))
    if posixpath.isabs(path) or path == ".." or path.startswith("../"):
        # Not FileNotFoundError: an invalid path must fail even the optional file
        raise OSError(errno.EINVAL, "path escapes the file tree root", path)
    return [part for part in path.split("/") if part not in ("", ".")]


def open_tree(root: Any, encoding: str = "utf-8") -> Opener:
    """Opener over a path-like tree rooted at ``root``.

    ``root`` is anything supporting ``/`` and ``open(mode, encoding=...)``:
    ``pathlib.Path``, ``zipfile.Path`` or an ``importlib.resources``
    traversable. Paths are resolved relative to the root; absolute paths
    and paths climbing above it with ".." are rejected with EINVAL.
    """

    def opener(directory: str, name: str) -> TextIO:
        node = root
        for part in _tree_parts(directory, name):
            node = node / part
        return node.open("r", encoding=encoding)

    return opener


class EnvLoader:
    """Applies the three configuration layers to a dataclass instance.

    Args:
        opener: How env files are opened (default: real filesystem)
        settings: Loader settings (default: ``get_settings()``)
        logger: Logger instance. Creates one named "appenv" if not provided.
    """

    def __init__(
        self,
        opener: Optional[Opener] = None,
        settings: Optional[LoaderSettings] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self.settings = settings if settings is not None else get_settings()
        self.opener: Opener = opener or functools.partial(open_os, encoding=self.settings.encoding)
        self.logger = logger if logger is not None else _default_logger()

    def resolve_app_env(self) -> str:
        """Active environment: the selector variable, or the default if unset/empty."""
        app_env = os.environ.get(self.settings.app_env_var, "")
        if not app_env:
            app_env = self.settings.effective_default_app_env()
        return app_env

    def load(self, record: Any, directory: PathLike) -> None:
        """Load ``record`` for the environment named by the selector variable."""
        app_env = self.resolve_app_env()
        self.logger.debug("Resolved environment", app_env=app_env, variable=self.settings.app_env_var)
        self.load_on_app_env(record, directory, app_env)

    def load_on_app_env(self, record: Any, directory: PathLike, app_env: str) -> None:
        """Apply ``<app_env>.env``, the shared file and the process environment.

        Raises:
            EnvFileNotFoundError: ``<app_env>.env`` does not exist
            EnvFileReadError: An env file exists but cannot be read
            EnvFileParseError: An env file is not valid dotenv syntax
            CoercionError: A value does not parse as its field's type
        """
        directory = os.fspath(directory)
        try:
            self._bind_source(record, self.read_source(directory, self.settings.environment_file(app_env)))

            try:
                shared = self.read_source(directory, self.settings.shared_file)
            except EnvFileNotFoundError as exc:
                self.logger.debug("Shared env file not found, skipping", path=exc.path)
            else:
                self._bind_source(record, shared)

            assigned = bind(record, EnvironSource())
            self.logger.debug("Applied process environment", fields=len(assigned))
        except AppEnvError as exc:
            self.logger.error("Configuration load failed", code=exc.code, reason=exc.message)
            raise

    def read_source(self, directory: str, name: str) -> DotenvSource:
        """Open and parse one env file.

        Raises:
            EnvFileNotFoundError: The file does not exist
            EnvFileReadError: Any other I/O or decoding failure
            EnvFileParseError: Invalid dotenv syntax
        """
        path = os.path.join(directory, name)
        try:
            stream = self.opener(directory, name)
        except FileNotFoundError as exc:
            raise EnvFileNotFoundError(path) from exc
        except OSError as exc:
            raise EnvFileReadError(path, exc.strerror or str(exc)) from exc

        with stream:
            try:
                text = stream.read()
            except (OSError, UnicodeDecodeError) as exc:
                raise EnvFileReadError(path, str(exc)) from exc

        return DotenvSource.from_text(text, name=path)

    def _bind_source(self, record: Any, source: DotenvSource) -> None:
        assigned = bind(record, source)
        self.logger.debug("Loaded env file", path=source.name, keys=len(source), fields=len(assigned))


_logger: Optional[Logger] = None


def _default_logger() -> Logger:
    global _logger
    if _logger is None:
        _logger = create_logger(name="appenv")
    return _logger


def load(record: Any, directory: PathLike) -> None:
    """Load from the real filesystem for the environment named by ``APP_ENV``."""
    EnvLoader().load(record, directory)


def load_on_app_env(record: Any, directory: PathLike, app_env: str) -> None:
    """Load from the real filesystem for an explicit environment."""
    EnvLoader().load_on_app_env(record, directory, app_env)


def load_fs(record: Any, root: Any, directory: PathLike) -> None:
    """Like ``load``, with env files resolved inside the tree ``root``."""
    EnvLoader(opener=open_tree(root, encoding=get_settings().encoding)).load(record, directory)


def load_fs_on_app_env(record: Any, root: Any, directory: PathLike, app_env: str) -> None:
    """Like ``load_on_app_env``, with env files resolved inside the tree ``root``."""
    loader = EnvLoader(opener=open_tree(root, encoding=get_settings().encoding))
    loader.load_on_app_env(record, directory, app_env)


__all__ = [
    "Opener",
    "open_os",
    "open_tree",
    "EnvLoader",
    "load",
    "load_on_app_env",
    "load_fs",
    "load_fs_on_app_env",
]
