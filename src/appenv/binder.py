"""Field binder: populate a dataclass instance from one key-value source.

A field takes part when it carries an ``env`` tag in its dataclass
metadata::

    @dataclass
    class Config:
        host: str = env_field("HOST", default="localhost")
        port: int = env_field("PORT", default=0)
        debug: bool = env_field("DEBUG", default=False)
        _secret: str = env_field("SECRET", default="")   # private, never set
        name: str = "untagged"                          # ignored

Fields are visited in declaration order. Values are coerced to the
declared type (``str``, ``int`` or ``bool``) and assigned in place.
"""

from __future__ import annotations

import dataclasses
import enum
import functools
import re
import sys
import typing
from typing import Any, Dict, List, Optional, Tuple

from appenv.exceptions import CoercionError, UnsupportedFieldTypeError
from appenv.sources import KeyValueSource

ENV_TAG = "env"

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1

_TRUE_RE = re.compile(r"1|true", re.IGNORECASE)
_INT_RE = re.compile(r"[+-]?[0-9]+")


class FieldKind(enum.Enum):
    """Supported field value kinds."""

    STRING = "str"
    INTEGER = "int"
    BOOLEAN = "bool"


_KINDS: Dict[Any, FieldKind] = {
    str: FieldKind.STRING,
    int: FieldKind.INTEGER,
    bool: FieldKind.BOOLEAN,
    "str": FieldKind.STRING,
    "int": FieldKind.INTEGER,
    "bool": FieldKind.BOOLEAN,
}


@dataclasses.dataclass(frozen=True)
class FieldDescriptor:
    """A tagged field of a destination record.

    Attributes:
        name: Attribute name
        key: Lookup key from the ``env`` tag
        annotation: Declared type as resolved from the class
        kind: Matching ``FieldKind``, or None for an unsupported type
    """

    name: str
    key: str
    annotation: Any
    kind: Optional[FieldKind]

    @property
    def settable(self) -> bool:
        return not self.name.startswith("_")

    @property
    def type_name(self) -> str:
        if self.kind is not None:
            return self.kind.value
        return getattr(self.annotation, "__name__", None) or repr(self.annotation)


def env_field(key: str, **kwargs: Any) -> Any:
    """``dataclasses.field`` that tags the field with lookup key ``key``.

    Accepts every ``dataclasses.field`` keyword (``default``,
    ``default_factory``, ``repr``, ``metadata``, ...).
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[ENV_TAG] = key
    return dataclasses.field(metadata=metadata, **kwargs)


def _type_hints(cls: type) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError):
        pass

    # Some annotation does not resolve; resolve the others one by one
    module = sys.modules.get(cls.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    localns = dict(vars(cls))
    hints: Dict[str, Any] = {}
    for f in dataclasses.fields(cls):
        annotation = f.type
        if isinstance(annotation, str):
            try:
                annotation = eval(annotation, globalns, localns)
            except (NameError, AttributeError, SyntaxError, TypeError):
                pass
        hints[f.name] = annotation
    return hints


@functools.lru_cache(maxsize=None)
def _descriptors(cls: type) -> Tuple[FieldDescriptor, ...]:
    hints = _type_hints(cls)
    result = []
    for f in dataclasses.fields(cls):
        key = f.metadata.get(ENV_TAG)
        if key is None:
            continue
        annotation = hints.get(f.name, f.type)
        try:
            kind = _KINDS.get(annotation)
        except TypeError:  # unhashable annotation
            kind = None
        result.append(FieldDescriptor(f.name, key, annotation, kind))
    return tuple(result)


def tagged_fields(record_or_type: Any) -> List[FieldDescriptor]:
    """Tagged fields of a dataclass (instance or class), in declaration order."""
    cls = record_or_type if isinstance(record_or_type, type) else type(record_or_type)
    if not dataclasses.is_dataclass(cls):
        raise TypeError(f"not a dataclass: {cls.__qualname__}")
    return list(_descriptors(cls))


def parse_bool(raw: str) -> bool:
    """True iff ``raw`` is "1" or "true" in any letter case. Never fails."""
    return _TRUE_RE.fullmatch(raw) is not None


def parse_int(raw: str) -> int:
    """Parse a base-10 signed 64-bit integer.

    Raises:
        ValueError: non-numeric input or a value outside the 64-bit range
    """
    if not _INT_RE.fullmatch(raw):
        raise ValueError(f"invalid syntax: {raw!r}")
    value = int(raw, 10)
    if not INT_MIN <= value <= INT_MAX:
        raise ValueError(f"value out of range: {raw!r}")
    return value


def coerce(raw: str, kind: FieldKind) -> Any:
    """Convert ``raw`` to ``kind``; raises ValueError on failure."""
    if kind is FieldKind.STRING:
        return raw
    if kind is FieldKind.INTEGER:
        return parse_int(raw)
    if kind is FieldKind.BOOLEAN:
        return parse_bool(raw)
    raise AssertionError(f"unhandled field kind: {kind}")


def _check_record(record: Any) -> None:
    if isinstance(record, type):
        raise TypeError(f"expected a dataclass instance, got the class {record.__qualname__}")
    if not dataclasses.is_dataclass(record):
        raise TypeError(f"expected a dataclass instance, got {type(record).__qualname__}")
    if type(record).__dataclass_params__.frozen:
        raise TypeError(f"cannot bind into frozen dataclass {type(record).__qualname__}")


def bind(record: Any, source: KeyValueSource) -> List[str]:
    """Assign every tagged, settable field whose key ``source`` has.

    Stops at the first coercion failure; fields assigned before it keep
    their new values.

    Args:
        record: Mutable dataclass instance, modified in place
        source: Where raw values are looked up

    Returns:
        Names of the fields assigned, in declaration order.

    Raises:
        CoercionError: A raw value does not parse as the field's type
        UnsupportedFieldTypeError: A tagged field has a type other than
            str, int or bool (a bug in the record definition)
        TypeError: ``record`` is not a mutable dataclass instance
    """
    _check_record(record)

    assigned = []
    for desc in tagged_fields(record):
        raw, present = source.lookup(desc.key)
        if not present or not desc.settable:
            continue
        if desc.kind is None:
            raise UnsupportedFieldTypeError(desc.name, desc.type_name)
        try:
            value = coerce(raw, desc.kind)
        except ValueError as exc:
            raise CoercionError(desc.name, desc.key, raw, desc.type_name) from exc
        setattr(record, desc.name, value)
        assigned.append(desc.name)
    return assigned


__all__ = [
    "ENV_TAG",
    "FieldKind",
    "FieldDescriptor",
    "env_field",
    "tagged_fields",
    "parse_bool",
    "parse_int",
    "coerce",
    "bind",
]
