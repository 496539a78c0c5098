"""Value freezing and JSON-safe conversion shared by models and sinks."""

from collections.abc import Mapping, Sequence, Set
from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any

from mini_ledger.exceptions import InvalidMetadataError

# Values stored as-is by freeze; anything else must be a container it can convert
IMMUTABLE_SCALARS = (type(None), bool, int, float, Decimal, str, bytes, Enum, date)


def freeze(value: Any) -> Any:
    """Return a deeply immutable copy of ``value``.

    Mappings become read-only ``MappingProxyType`` views over a private
    copy, other sequences (lists, deques, ``UserList`` ...) become tuples,
    sets become frozensets and ``bytearray`` becomes ``bytes``. Immutable
    scalars are returned unchanged; any other value raises
    :class:`InvalidMetadataError` rather than being stored by reference.
    """
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    elif isinstance(value, bytearray):
        return bytes(value)
    elif isinstance(value, IMMUTABLE_SCALARS):
        return value
    elif isinstance(value, Sequence):
        return tuple(freeze(v) for v in value)
    elif isinstance(value, Set):
        return frozenset(freeze(v) for v in value)
    raise InvalidMetadataError(
        f"Cannot freeze value of type {type(value).__name__}: {value!r}"
    )


def thaw(value: Any) -> Any:
    """Return a fresh mutable copy of a frozen structure.

    Inverse of :func:`freeze` for containers: proxies become dicts, tuples
    become lists and frozensets become sets. Set members are hashable and
    stay as they are.
    """
    if isinstance(value, Mapping):
        return {k: thaw(v) for k, v in value.items()}
    elif isinstance(value, tuple):
        return [thaw(v) for v in value]
    elif isinstance(value, frozenset):
        return set(value)
    return value


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return float(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, bytes):
        return value.hex()
    elif isinstance(value, Mapping):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple, set, frozenset)):
        return [serialize_value(v) for v in value]
    return value


def to_dict(obj: Any) -> dict:
    """Convert a ledger object to a JSON-safe dictionary.

    Objects exposing ``to_portable()`` or ``get_snapshot()`` use those
    views. Dataclasses are read field by field; ``asdict`` is avoided
    because it deep-copies and cannot copy read-only mapping proxies.
    """
    if hasattr(obj, "to_portable"):
        return obj.to_portable()
    elif hasattr(obj, "get_snapshot"):
        return obj.get_snapshot()
    elif is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}
    elif isinstance(obj, Mapping):
        return serialize_value(obj)
    else:
        return {"value": str(obj)}
