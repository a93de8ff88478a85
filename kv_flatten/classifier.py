"""Value classification and stringification.

This module decides, for any JSON-like value, how the flattener treats it
(leaf or container) and how a leaf value is rendered as a string. The
stringification is an ordered list of strategies; the first one that
returns a string wins, and a strategy may also decide that the value
produces no output at all.
"""

from __future__ import annotations

import dataclasses
import datetime as dt
import json
import logging
import math
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Iterator, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)


class _Undefined:
    """Marker for a value that is absent rather than null."""

    _instance: Optional["_Undefined"] = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()


class ValueKind(Enum):
    """Categories a value can fall into."""

    PRIMITIVE = "primitive"
    DATE = "date"
    OBJECT = "object"
    ARRAY = "array"
    OPAQUE = "opaque"


_PRIMITIVE_TYPES = (bool, int, float, Decimal, str)


def is_primitive(value: Any) -> bool:
    """Return True for null, undefined, booleans, numbers and strings."""
    return value is None or value is UNDEFINED or isinstance(value, _PRIMITIVE_TYPES)


def is_scalar(value: Any) -> bool:
    """Return True if value is a primitive or a date."""
    return is_primitive(value) or isinstance(value, dt.date)


def is_plain_object(value: Any) -> bool:
    """Return True for mappings and dataclass instances."""
    if isinstance(value, Mapping):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def classify(value: Any) -> ValueKind:
    """Classify a value.

    Parameters
    ----------
    value : Any
        Value to classify.

    Returns
    -------
    ValueKind
        Exactly one category, checked in priority order: primitive, date,
        array, object, opaque.
    """
    if is_primitive(value):
        return ValueKind.PRIMITIVE
    # datetime.datetime is a subclass of datetime.date
    if isinstance(value, dt.date):
        return ValueKind.DATE
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if is_plain_object(value):
        return ValueKind.OBJECT
    return ValueKind.OPAQUE


def safe_text(value: Any) -> str:
    """Return ``str(value)``, or the default object repr if ``__str__`` raises."""
    try:
        return str(value)
    except Exception as exc:  # arbitrary user __str__
        logger.debug("str() failed for %s: %s", type(value).__name__, exc)
        return object.__repr__(value)


def iter_fields(value: Any) -> Iterator[Tuple[str, Any]]:
    """Yield ``(name, field_value)`` pairs of a plain object in definition order."""
    if isinstance(value, Mapping):
        for key, item in value.items():
            yield key if isinstance(key, str) else safe_text(key), item
        return
    for field in dataclasses.fields(value):
        yield field.name, getattr(value, field.name)


def format_date(value: dt.date) -> str:
    """Format a date as an ISO-8601 UTC timestamp with milliseconds.

    Years are zero-padded to four digits. An aware datetime whose UTC
    conversion falls outside the supported range keeps its own offset.

    >>> format_date(dt.datetime(2024, 1, 15, 10, 30))
    '2024-01-15T10:30:00.000Z'
    """
    if not isinstance(value, dt.datetime):
        value = dt.datetime(value.year, value.month, value.day)
    moment = value
    if value.tzinfo is not None:
        try:
            moment = value.astimezone(dt.timezone.utc)
        except (OverflowError, ValueError) as exc:
            logger.debug("cannot convert %r to UTC: %s", value, exc)
            return value.isoformat(timespec="milliseconds")
    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
        f".{moment.microsecond // 1000:03d}Z"
    )


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return repr(value)


class _Skip:
    def __repr__(self) -> str:
        return "SKIP"


# Strategy result meaning "emit nothing for this value".
SKIP = _Skip()

Strategy = Callable[[Any, bool], Union[str, _Skip, None]]


def _null_strategy(value: Any, include_null_undefined: bool) -> Union[str, _Skip, None]:
    if value is None or value is UNDEFINED:
        if not include_null_undefined:
            return SKIP
        return "null" if value is None else "undefined"
    return None


def _date_strategy(value: Any, include_null_undefined: bool) -> Optional[str]:
    if isinstance(value, dt.date):
        return format_date(value)
    return None


def _primitive_strategy(value: Any, include_null_undefined: bool) -> Optional[str]:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, (int, Decimal, str)):
        return str(value)
    return None


def _json_strategy(value: Any, include_null_undefined: bool) -> Optional[str]:
    try:
        return json.dumps(value)
    except (TypeError, ValueError, RecursionError) as exc:
        logger.debug("json serialization failed for %s: %s", type(value).__name__, exc)
        return None


def _text_strategy(value: Any, include_null_undefined: bool) -> str:
    return safe_text(value)


STRATEGIES: Tuple[Strategy, ...] = (
    _null_strategy,
    _date_strategy,
    _primitive_strategy,
    _json_strategy,
    _text_strategy,
)


def to_str(value: Any, include_null_undefined: bool = False) -> Optional[str]:
    """Render a leaf value as a string.

    Parameters
    ----------
    value : Any
        Leaf value (primitive, date or opaque).
    include_null_undefined : bool, optional
        Render ``None`` and ``UNDEFINED`` as ``"null"`` / ``"undefined"``
        instead of skipping them (default: False).

    Returns
    -------
    Optional[str]
        The rendered string, or None if the value produces no output.
    """
    for strategy in STRATEGIES:
        result = strategy(value, include_null_undefined)
        if result is SKIP:
            return None
        if result is not None:
            return result
    return object.__repr__(value)
