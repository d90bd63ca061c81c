"""Cell value coercion.

Converts loosely-typed values produced by database drivers into the
declared type of a target attribute. Converters raise TypeError, ValueError
or an ArithmeticError subclass on failure; mappers wrap those into
TypeConversionError with the attribute context.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

Converter = Callable[[Any], Any]


@dataclass(frozen=True)
class IntRange:
    """Inclusive bounds for a fixed-width integer attribute."""

    label: str
    minimum: int
    maximum: int


@dataclass(frozen=True)
class SingleChar:
    """Restricts a text attribute to exactly one character."""

    label: str = "Char"


_TRUE_STRINGS = frozenset({"true"})
_FALSE_STRINGS = frozenset({"false"})


def _unsupported(value: Any, target: str) -> TypeError:
    return TypeError(f"unsupported source type {type(value).__name__} for {target}")


def to_int(value: Any) -> int:
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        if not value.is_integer():
            if math.isinf(value):
                raise OverflowError(f"{value} cannot be represented as int")
            raise ValueError(f"{value} is not an integral value")
        return int(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise OverflowError(f"{value} cannot be represented as int")
        if value != value.to_integral_value():
            raise ValueError(f"{value} is not an integral value")
        return int(value)
    if isinstance(value, str):
        return int(value.strip())
    raise _unsupported(value, "int")


def to_float(value: Any) -> float:
    if isinstance(value, float):
        return value
    if isinstance(value, (int, Decimal)):
        result = float(value)
        if math.isinf(result) and not (isinstance(value, Decimal) and value.is_infinite()):
            raise OverflowError(f"{value} is out of range for float")
        return result
    if isinstance(value, str):
        return float(value.strip())
    raise _unsupported(value, "float")


def to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        return Decimal(int(value))
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        # repr keeps the shortest round-tripping form (0.1 -> Decimal("0.1"))
        return Decimal(repr(value))
    if isinstance(value, str):
        return Decimal(value.strip())
    raise _unsupported(value, "Decimal")


def to_str(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float, Decimal, UUID)):
        return str(value)
    if isinstance(value, (date, time)):
        return value.isoformat()
    raise _unsupported(value, "str")


def to_char(value: Any) -> str:
    if isinstance(value, str):
        if len(value) != 1:
            raise ValueError(f"expected a single character, got {len(value)} characters")
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return chr(value)
    raise _unsupported(value, "Char")


def to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float, Decimal)):
        return value != 0
    if isinstance(value, str):
        folded = value.strip().casefold()
        if folded in _TRUE_STRINGS:
            return True
        if folded in _FALSE_STRINGS:
            return False
        raise ValueError(f"'{value}' is not a recognized boolean string")
    raise _unsupported(value, "bool")


def to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, str):
        return datetime.fromisoformat(value.strip())
    raise _unsupported(value, "datetime")


def to_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip())
    raise _unsupported(value, "date")


def to_time(value: Any) -> time:
    if isinstance(value, time):
        return value
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, str):
        return time.fromisoformat(value.strip())
    raise _unsupported(value, "time")


def to_timedelta(value: Any) -> timedelta:
    if isinstance(value, timedelta):
        return value
    raise _unsupported(value, "timedelta")


def to_uuid(value: Any) -> UUID:
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        return UUID(value.strip())
    if isinstance(value, (bytes, bytearray)):
        return UUID(bytes=bytes(value))
    raise _unsupported(value, "UUID")


def to_bytes(value: Any) -> bytes:
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    raise _unsupported(value, "bytes")


def to_enum(value: Any, enum_class: type[Enum]) -> Enum:
    if isinstance(value, enum_class):
        return value
    try:
        return enum_class(value)
    except ValueError:
        if isinstance(value, str) and value in enum_class.__members__:
            return enum_class[value]
        raise


_BUILTIN_CONVERTERS: dict[Any, Converter] = {
    int: to_int,
    float: to_float,
    Decimal: to_decimal,
    str: to_str,
    bool: to_bool,
    datetime: to_datetime,
    date: to_date,
    time: to_time,
    timedelta: to_timedelta,
    UUID: to_uuid,
    bytes: to_bytes,
}

# Types that are cell values rather than mappable classes.
SCALAR_TYPES = frozenset(_BUILTIN_CONVERTERS) | {bytearray, complex}

# Targets whose text cells are parsed, subject to parse_strings.
_PARSED_TARGETS = frozenset({int, float, Decimal, bool, datetime, date, time, UUID})


def type_label(target: Any, constraints: Iterable[Any] = ()) -> str:
    """Human-readable name of a target type for error messages."""
    for constraint in constraints:
        if isinstance(constraint, (IntRange, SingleChar)):
            return constraint.label
    if target is Any:
        return "Any"
    return getattr(target, "__name__", repr(target))


class Coercer:
    """Converts cell values to declared attribute types.

    Args:
        parse_strings: Allow text cells to be parsed into non-text targets.
    """

    def __init__(self, parse_strings: bool = True) -> None:
        self._parse_strings = parse_strings
        self._converters: dict[Any, Converter] = dict(_BUILTIN_CONVERTERS)
        self._custom: set[Any] = set()

    @property
    def parse_strings(self) -> bool:
        return self._parse_strings

    def register(self, target_type: Any, converter: Converter) -> None:
        """Register (or replace) the converter for a target type.

        Custom converters receive every non-null value for the type,
        text included, regardless of ``parse_strings``.
        """
        self._converters[target_type] = converter
        self._custom.add(target_type)

    def has_converter(self, target_type: Any) -> bool:
        return target_type in self._converters

    def coerce(self, value: Any, target: Any, constraints: Iterable[Any] = ()) -> Any:
        """Convert ``value`` to ``target``, applying any constraint markers.

        Raises:
            TypeError: Incompatible source type.
            ValueError: Unparseable or invalid value.
            OverflowError: Value outside the target range.
        """
        constraints = tuple(constraints)
        for constraint in constraints:
            if isinstance(constraint, SingleChar):
                return to_char(value)

        if target is Any or target is object:
            return value

        if (
            isinstance(value, str)
            and not self._parse_strings
            and target in _PARSED_TARGETS
            and target not in self._custom
        ):
            raise TypeError(f"text parsing is disabled for {type_label(target)} targets")

        converter = self._converters.get(target)
        if converter is not None:
            result = converter(value)
        elif isinstance(target, type) and issubclass(target, Enum):
            result = to_enum(value, target)
        elif isinstance(target, type) and isinstance(value, target):
            result = value
        else:
            raise _unsupported(value, type_label(target))

        for constraint in constraints:
            if isinstance(constraint, IntRange) and not (
                constraint.minimum <= result <= constraint.maximum
            ):
                raise OverflowError(
                    f"{result} is outside the {constraint.label} range "
                    f"[{constraint.minimum}, {constraint.maximum}]"
                )
        return result
