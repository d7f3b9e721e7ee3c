"""Value coercion for typed config items.

Two separate function families live here:

* the *write side* (:func:`coerce` and the adapters in :data:`TYPE_REGISTRY`)
  normalises an arbitrary candidate value into a declared type and raises
  :class:`TypeError` or :class:`ValueError` when that is impossible;
* the *read side* (:func:`try_int`, :func:`try_float`, :func:`try_bool` and
  :func:`to_string`) converts whatever is stored on a best effort basis and
  returns ``None`` instead of raising.
"""

from __future__ import annotations

import ast
import copy
import io
import json
import math
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from pathlib import PurePath
from typing import Any, Protocol

from .dates import format_datetime, parse_datetime

TRUE_TOKENS = frozenset({"true", "yes", "on", "enabled", "1"})
FALSE_TOKENS = frozenset({"false", "no", "off", "disabled", "0"})

_INT_RX = re.compile(r"^[+-]?\d+$")
_DECIMAL_RX = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")

####################
##### ADAPTERS #####
####################


class TypeAdapter(Protocol):
    """Adapter for one declared item type.

    ``coerce`` returns the normalised value and raises :class:`TypeError` or
    :class:`ValueError` if *value* can not be represented by the type.
    """

    def coerce(self, value: Any) -> Any:
        ...


def _parse_decimal(raw: str) -> float | None:
    text = raw.strip().replace(",", ".")
    if not _DECIMAL_RX.fullmatch(text):
        return None
    number = float(text)
    return number if math.isfinite(number) else None


def _parse_flag(raw: str) -> bool | None:
    lowered = raw.strip().lower()
    if lowered in TRUE_TOKENS:
        return True
    if lowered in FALSE_TOKENS:
        return False
    return None


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float | Decimal) and not isinstance(value, bool)


class BooleanAdapter:
    """Adapter for boolean values."""

    def coerce(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if _is_number(value):
            return value != 0
        if isinstance(value, str):
            flag = _parse_flag(value)
            if flag is None:
                raise ValueError(f"invalid boolean: {value!r}")
            return flag
        raise TypeError("expected bool, number or boolean string")


class IntegerAdapter:
    """Adapter for integer values."""

    def coerce(self, value: Any) -> int:
        if isinstance(value, bool):
            raise TypeError("expected int, got bool")
        if isinstance(value, int):
            return value
        if isinstance(value, float | Decimal):
            if not math.isfinite(value) or value != int(value):
                raise ValueError(f"not a whole number: {value!r}")
            return int(value)
        if isinstance(value, str):
            text = value.strip()
            if _INT_RX.fullmatch(text):
                return int(text)
            number = _parse_decimal(text)
            if number is not None and number.is_integer():
                return int(number)
            raise ValueError(f"invalid integer: {value!r}")
        raise TypeError("expected int or numeric string")


class NumberAdapter:
    """Adapter for finite floating point numbers."""

    def coerce(self, value: Any) -> float:
        if _is_number(value):
            try:
                number = float(value)
            except OverflowError:
                raise ValueError(f"number out of range: {value!r}") from None
            if not math.isfinite(number):
                raise ValueError(f"not a finite number: {value!r}")
            return number
        if isinstance(value, str):
            number = _parse_decimal(value)
            if number is None:
                raise ValueError(f"invalid number: {value!r}")
            return number
        raise TypeError("expected number or numeric string")


class StringAdapter:
    """Adapter for plain string values."""

    _native = (int, float, Decimal, datetime, date, time, PurePath)

    def coerce(self, value: Any) -> str:
        if isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, self._native):
            return str(value)
        if isinstance(value, bytes | bytearray | io.IOBase | Mapping | list | tuple | set):
            raise TypeError(f"{type(value).__name__} is not convertible to str")
        if type(value).__str__ is not object.__str__:
            return str(value)
        raise TypeError(f"{type(value).__name__} is not convertible to str")


class ArrayAdapter:
    """Adapter for ordered (list) or keyed (dict) collections."""

    _converters = ("to_array", "to_list", "to_dict")

    def _decode(self, raw: str) -> list | dict:
        try:
            data = json.loads(raw)
        except ValueError:
            pass
        else:
            if isinstance(data, list | dict):
                return data
        try:
            data = ast.literal_eval(raw.strip())
        except (ValueError, TypeError, SyntaxError, MemoryError, RecursionError):
            data = None
        if isinstance(data, tuple):
            return list(data)
        if isinstance(data, list | dict):
            return data
        raise ValueError(f"string is not an encoded array: {raw!r}")

    def coerce(self, value: Any) -> list | dict:
        if isinstance(value, list | dict):
            # stored values never alias the caller's object
            return copy.deepcopy(value)
        if isinstance(value, str):
            return self._decode(value)
        if isinstance(value, bytes | bytearray):
            raise TypeError("expected array, got bytes")
        for attr in self._converters:
            converter = getattr(value, attr, None)
            if callable(converter):
                result = converter()
                if isinstance(result, tuple):
                    result = list(result)
                if not isinstance(result, list | dict):
                    raise TypeError(f"{attr}() did not return a list or dict")
                return result
        if isinstance(value, Mapping):
            return dict(value)
        if isinstance(value, Iterable):
            return list(value)
        raise TypeError(f"{type(value).__name__} is not convertible to an array")


class DateTimeAdapter:
    """Adapter for date-time values."""

    def coerce(self, value: Any) -> datetime:
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime.combine(value, time())
        if isinstance(value, str):
            parsed = parse_datetime(value)
            if parsed is None:
                raise ValueError(f"invalid date-time: {value!r}")
            return parsed
        raise TypeError("expected datetime, date or date-time string")


class OpaqueAdapter:
    """Adapter for caller defined types; values are stored unchanged."""

    def coerce(self, value: Any) -> Any:
        return value


@dataclass(frozen=True)
class ValueType:
    """Metadata describing a supported declared type."""

    name: str
    adapter: TypeAdapter
    scalar: bool = True


TYPE_REGISTRY: dict[str, ValueType] = {
    "bool": ValueType("bool", BooleanAdapter()),
    "int": ValueType("int", IntegerAdapter()),
    "float": ValueType("float", NumberAdapter()),
    "string": ValueType("string", StringAdapter(), scalar=False),
    "array": ValueType("array", ArrayAdapter(), scalar=False),
    "datetime": ValueType("datetime", DateTimeAdapter()),
}

OPAQUE = ValueType("other", OpaqueAdapter(), scalar=False)

TYPE_ALIASES: dict[str, str] = {
    "bool": "bool",
    "boolean": "bool",
    "int": "int",
    "integer": "int",
    "float": "float",
    "double": "float",
    "string": "string",
    "str": "string",
    "array": "array",
    "list": "array",
    "dict": "array",
    "datetime": "datetime",
    "datetimeinterface": "datetime",
}


def canonical_type(type_name: str) -> str:
    """Return the canonical tag for *type_name* or ``"other"``."""

    key = type_name.strip().lstrip("\\").lower()
    return TYPE_ALIASES.get(key, OPAQUE.name)


def value_type(type_name: str) -> ValueType:
    return TYPE_REGISTRY.get(canonical_type(type_name), OPAQUE)


def coerce(type_name: str, value: Any) -> Any:
    """Normalise *value* for the declared *type_name* (write side)."""

    return value_type(type_name).adapter.coerce(value)


#####################
##### READ SIDE #####
#####################


def try_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float | Decimal):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        if _INT_RX.fullmatch(text):
            return int(text)
        number = _parse_decimal(text)
        if number is not None and math.isfinite(number):
            return int(number)
    return None


def try_float(value: Any) -> float | None:
    if isinstance(value, bool | int | float | Decimal):
        try:
            return float(value)
        except OverflowError:
            return None
    if isinstance(value, str):
        return _parse_decimal(value)
    return None


def try_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if _is_number(value):
        return value != 0
    if isinstance(value, str):
        flag = _parse_flag(value)
        if flag is not None:
            return flag
        number = _parse_decimal(value)
        if number is not None:
            return number != 0
    return None


def encode_array(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)


def to_string(type_name: str, value: Any) -> str | None:
    """Render *value* as text according to its declared *type_name*."""

    if value is None:
        return None
    kind = canonical_type(type_name)
    if kind == "bool":
        return "true" if value else "false"
    if kind == "array":
        return encode_array(value)
    if kind == "datetime" and isinstance(value, datetime | date):
        return format_datetime(value)
    return str(value)


__all__ = [
    "ArrayAdapter",
    "BooleanAdapter",
    "DateTimeAdapter",
    "FALSE_TOKENS",
    "IntegerAdapter",
    "NumberAdapter",
    "OPAQUE",
    "OpaqueAdapter",
    "StringAdapter",
    "TRUE_TOKENS",
    "TYPE_ALIASES",
    "TYPE_REGISTRY",
    "TypeAdapter",
    "ValueType",
    "canonical_type",
    "coerce",
    "encode_array",
    "to_string",
    "try_bool",
    "try_float",
    "try_int",
    "value_type",
]
