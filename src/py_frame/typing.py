"""
Kinds of observations held in a Series or a Frame column.

Cells are never restricted to a type. A DataType only summarises what a run
of observations holds, for ``schema()`` and for aligning rendered columns.
Two value-level helpers sit alongside it: ``cast_value`` checks and
``convert_value`` converts, and both fail with PyFrameTypeError.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, Optional, Type

from .errors import PyFrameTypeError


# Order matters: bool is an int and datetime is a date
_KNOWN_KINDS = (bool, int, float, str, datetime, date)

# Kinds that widen into one another, narrowest first
_NUMERIC_RANK = (bool, int, float)
_TEMPORAL_RANK = (date, datetime)


def _common_kind(a: Type, b: Type) -> Type:
    """Narrowest kind that holds observations of both ``a`` and ``b``."""
    if a is b:
        return a
    for rank in (_NUMERIC_RANK, _TEMPORAL_RANK):
        if a in rank and b in rank:
            return max(a, b, key=rank.index)
    return object


@dataclass(frozen=True)
class DataType:
    """
    Kind of a run of observations, and whether any of them is None.

    >>> DataType(int, nullable=True)
    <int nullable>
    """

    kind: Type[Any]
    nullable: bool = False

    def __repr__(self):
        suffix = " nullable" if self.nullable else ""
        return f"<{self.name}{suffix}>"

    @property
    def name(self) -> str:
        return self.kind.__name__

    @property
    def is_numeric(self) -> bool:
        return self.kind in _NUMERIC_RANK

    def with_nullable(self, nullable: bool = True) -> DataType:
        if nullable == self.nullable:
            return self
        return DataType(self.kind, nullable)

    def promote_with(self, value: Any) -> DataType:
        """
        DataType that also covers ``value``.

        Returns a new instance when anything changes. Observations that share
        no ladder with the current kind widen it to object.
        """
        if value is None:
            return self.with_nullable(True)
        kind = _common_kind(self.kind, infer_kind(value))
        if kind is self.kind:
            return self
        return DataType(kind, self.nullable)


def infer_kind(value: Any) -> Optional[Type]:
    """Kind of one observation; None for a null, object when unrecognised."""
    if value is None:
        return None
    for kind in _KNOWN_KINDS:
        if isinstance(value, kind):
            return kind
    return object


def infer_dtype(values: Iterable[Any]) -> DataType:
    """
    DataType covering every observation in ``values``.

    >>> infer_dtype([1, None, 2.5])
    <float nullable>
    >>> infer_dtype(['a', 1])
    <object>
    """
    kind = None
    nullable = False
    for value in values:
        if value is None:
            nullable = True
        elif kind is None:
            kind = infer_kind(value)
        else:
            kind = _common_kind(kind, infer_kind(value))
    return DataType(kind or object, nullable)


def cast_value(value: Any, kind: Type) -> Any:
    """
    Strict cast: the observation must already be a ``kind``.

    None casts to any kind. Nothing is converted.

    Raises
    ------
    PyFrameTypeError
        If value is not an instance of kind
    """
    if value is None or isinstance(value, kind):
        return value
    raise PyFrameTypeError(
        f"Cannot cast {type(value).__name__} observation {value!r} to {kind.__name__}"
    )


def _to_date(x):
    if isinstance(x, datetime):
        return x.date()
    if isinstance(x, date):
        return x
    return date.fromisoformat(x)


def _to_datetime(x):
    if isinstance(x, datetime):
        return x
    if isinstance(x, date):
        return datetime.combine(x, datetime.min.time())
    return datetime.fromisoformat(x)


# Kinds whose constructor cannot take an ISO string or a neighbouring kind
_CONVERTERS = {date: _to_date, datetime: _to_datetime}


def convert_value(value: Any, kind: Type) -> Any:
    """
    Lenient conversion of an observation to ``kind``.

    None stays None and exact instances are returned untouched. Dates and
    datetimes are parsed from ISO strings; anything else goes through
    ``kind(value)``.

    Raises
    ------
    PyFrameTypeError
        If the conversion fails
    """
    if value is None or type(value) is kind:
        return value
    converter = _CONVERTERS.get(kind, kind)
    try:
        return converter(value)
    except (TypeError, ValueError) as exc:
        raise PyFrameTypeError(
            f"'{value}' cannot be converted to {kind.__name__}"
        ) from exc
