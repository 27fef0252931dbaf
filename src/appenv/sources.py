"""Key-value sources consulted by the field binder.

A source answers a single question: is ``key`` present, and with what raw
string value? Three implementations cover the layers of a load:

- ``DotenvSource``: the parsed contents of one ``.env`` file
- ``EnvironSource``: the process environment
- ``MappingSource``: any caller-supplied mapping
"""

from __future__ import annotations

import io
import os
from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional, TextIO, Tuple

from dotenv import dotenv_values
from dotenv.parser import parse_stream

from appenv.exceptions import EnvFileParseError


class KeyValueSource(ABC):
    """Lookup abstraction over one configuration layer."""

    @abstractmethod
    def lookup(self, key: str) -> Tuple[str, bool]:
        """Return ``(value, True)`` if ``key`` is present, else ``("", False)``."""


class MappingSource(KeyValueSource):
    """Source backed by a plain mapping."""

    def __init__(self, mapping: Mapping[str, str]) -> None:
        self._mapping = mapping

    def lookup(self, key: str) -> Tuple[str, bool]:
        if key in self._mapping:
            return self._mapping[key], True
        return "", False

    def __repr__(self) -> str:
        return f"MappingSource(keys={len(self._mapping)})"


class EnvironSource(KeyValueSource):
    """Source backed by the process environment.

    ``environ`` defaults to ``os.environ`` and is consulted at lookup time.
    A variable set to the empty string counts as present.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ = environ

    def lookup(self, key: str) -> Tuple[str, bool]:
        environ = os.environ if self._environ is None else self._environ
        value = environ.get(key)
        if value is None:
            return "", False
        return value, True


class DotenvSource(MappingSource):
    """Source built from dotenv text.

    Syntax is checked statement by statement with python-dotenv's parser
    before values are resolved, because ``dotenv_values`` alone only warns
    about unparsable lines and drops them.
    """

    def __init__(self, values: Mapping[str, str], name: str = "<stream>") -> None:
        super().__init__(values)
        self.name = name

    @classmethod
    def from_text(cls, text: str, name: str = "<stream>") -> "DotenvSource":
        for binding in parse_stream(io.StringIO(text)):
            if binding.error:
                raise EnvFileParseError(
                    name, binding.original.line, binding.original.string.rstrip("\n")
                )

        raw = dotenv_values(stream=io.StringIO(text))
        # "KEY" without "=" has no value; treat it as absent
        values: Dict[str, str] = {k: v for k, v in raw.items() if v is not None}
        return cls(values, name=name)

    @classmethod
    def from_stream(cls, stream: TextIO, name: Optional[str] = None) -> "DotenvSource":
        if name is None:
            name = getattr(stream, "name", "<stream>")
        return cls.from_text(stream.read(), name=str(name))

    def __len__(self) -> int:
        return len(self._mapping)

    def __repr__(self) -> str:
        return f"DotenvSource(name={self.name!r}, keys={len(self._mapping)})"


__all__ = [
    "KeyValueSource",
    "MappingSource",
    "EnvironSource",
    "DotenvSource",
]
