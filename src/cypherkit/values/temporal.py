"""Conversion between Neo4j wire values and host values.

Outbound (database -> application) conversions turn the driver's
``neo4j.time`` values into ``datetime``, ``pandas.Timestamp`` or epoch
milliseconds. Inbound conversions accept "any date-like thing" and encode it
as one of the five Neo4j temporal variants; they fail soft to ``None``
instead of raising on malformed input.
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
from typing import Any, Mapping, Optional, Union

import pandas as pd
from neo4j.time import Date, DateTime, Time

logger = logging.getLogger(__name__)

# Date portion given to Time / LocalTime values when they become datetimes.
TIME_EPOCH_DAY = date(1899, 12, 31)

DEFAULT_INPUT_FORMAT = "%d/%m/%Y"

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

DATE_FIELDS = ("year", "month", "day", "hour", "minute", "second")

WireTemporal = Union[Date, DateTime, Time]


class TemporalType(str, Enum):
    """The Neo4j temporal variants, named after their Cypher functions."""

    DATE = "date"
    DATE_TIME = "datetime"
    LOCAL_DATE_TIME = "localdatetime"
    TIME = "time"
    LOCAL_TIME = "localtime"


class DateType(str, Enum):
    """Representation used for temporal values in parsed results."""

    PANDAS = "pandas"
    NATIVE = "native"
    TIMESTAMP = "timestamp"
    RAW = "raw"

    @classmethod
    def coerce(cls, value: Any) -> "DateType":
        """Map user input to a DateType; unknown values leave dates untouched."""
        if value is None:
            return cls.PANDAS
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.RAW


def temporal_type_of(value: Any) -> Optional[TemporalType]:
    """Return the temporal variant of a driver value, or None."""
    if isinstance(value, TemporalValue):
        return value.kind
    if isinstance(value, DateTime):
        return TemporalType.DATE_TIME if value.tzinfo is not None else TemporalType.LOCAL_DATE_TIME
    if isinstance(value, Date):
        return TemporalType.DATE
    if isinstance(value, Time):
        return TemporalType.TIME if value.tzinfo is not None else TemporalType.LOCAL_TIME
    return None


def is_temporal(value: Any) -> bool:
    return temporal_type_of(value) is not None


def is_wire_integer(value: Any) -> bool:
    """True for values the driver sends as a Bolt integer as-is."""
    return type(value) is int


def to_wire_integer(value: numbers.Integral) -> int:
    return int(value)


def is_date_object(value: Any) -> bool:
    """True for mappings/objects exposing calendar fields (year, month, ...)."""
    if isinstance(value, Mapping):
        return any(field in value for field in DATE_FIELDS)
    if isinstance(value, (str, bytes, numbers.Number)) or value is None:
        return False
    return any(hasattr(value, field) for field in DATE_FIELDS)


def _wire_value(value: Any) -> Any:
    return value.value if isinstance(value, TemporalValue) else value


def to_native(value: Any) -> Optional[datetime]:
    """Convert any Neo4j temporal value to a ``datetime.datetime``.

    Missing time fields default to zero; ``Time``/``LocalTime`` are placed on
    ``TIME_EPOCH_DAY``. Nanoseconds are truncated to microseconds.
    """
    kind = temporal_type_of(value)
    if kind is None:
        return None

    value = _wire_value(value)
    if kind is TemporalType.DATE:
        return datetime(value.year, value.month, value.day)

    micro = getattr(value, "nanosecond", 0) // 1000
    if kind in (TemporalType.DATE_TIME, TemporalType.LOCAL_DATE_TIME):
        return datetime(
            value.year,
            value.month,
            value.day,
            value.hour,
            value.minute,
            int(value.second),
            micro,
            tzinfo=value.tzinfo,
        )

    clock = time(value.hour, value.minute, int(value.second), micro, tzinfo=value.tzinfo)
    return datetime.combine(TIME_EPOCH_DAY, clock)


def to_timestamp(value: Any) -> Optional[pd.Timestamp]:
    """Convert a Neo4j temporal value to a ``pandas.Timestamp``."""
    native = to_native(value)
    return pd.Timestamp(native) if native is not None else None


def to_epoch_millis(value: Any) -> Optional[int]:
    """Milliseconds since the Unix epoch; naive values are read as UTC."""
    native = to_native(value)
    if native is None:
        return None
    if native.tzinfo is None:
        native = native.replace(tzinfo=timezone.utc)
    return (native - UNIX_EPOCH) // timedelta(milliseconds=1)


def _from_fields(value: Any) -> Optional[datetime]:
    if isinstance(value, Mapping):
        get = value.get
    else:
        def get(field: str) -> Any:
            return getattr(value, field, None)

    try:
        return datetime(
            int(get("year") or 1900),
            int(get("month") or 1),
            int(get("day") or 1),
            int(get("hour") or 0),
            int(get("minute") or 0),
            int(get("second") or 0),
        )
    except (TypeError, ValueError, OverflowError):
        return None


def _parse_loose(value: Any, input_format: Optional[str]) -> Optional[datetime]:
    try:
        if isinstance(value, numbers.Integral) and not isinstance(value, bool) and not input_format:
            parsed = pd.to_datetime(int(value), unit="ms", errors="coerce")
        else:
            parsed = pd.to_datetime(str(value), format=input_format or DEFAULT_INPUT_FORMAT, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None

    if parsed is pd.NaT or pd.isna(parsed):
        return None
    return parsed.to_pydatetime()


def to_host_datetime(value: Any, input_format: Optional[str] = None) -> Optional[datetime]:
    """Normalize any supported date-like input to a ``datetime``, or None."""
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, (str, bytes, numbers.Number)) and not value:
        return None

    if is_temporal(value):
        return to_native(value)
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if is_date_object(value):
        return _from_fields(value)
    return _parse_loose(value, input_format)


def to_wire(native: datetime, temporal_type: TemporalType) -> WireTemporal:
    """Encode a ``datetime`` as the requested Neo4j temporal variant."""
    temporal_type = TemporalType(temporal_type)

    if temporal_type is TemporalType.DATE:
        return Date.from_native(native.date())
    if temporal_type is TemporalType.DATE_TIME:
        zoned = native if native.tzinfo is not None else native.replace(tzinfo=timezone.utc)
        return DateTime.from_native(zoned)
    if temporal_type is TemporalType.LOCAL_DATE_TIME:
        return DateTime.from_native(native.replace(tzinfo=None))
    if temporal_type is TemporalType.TIME:
        clock = native.timetz()
        if clock.tzinfo is None:
            clock = clock.replace(tzinfo=timezone.utc)
        return Time.from_native(clock)
    return Time.from_native(native.time())


def parse_date(
    value: Any,
    temporal_type: TemporalType = TemporalType.LOCAL_DATE_TIME,
    input_format: Optional[str] = None,
) -> Optional[WireTemporal]:
    """Encode a date-like value as a Neo4j temporal value.

    Accepts Neo4j temporal values, ``pandas.Timestamp`` (not ``NaT``),
    ``datetime``/``date``, mappings or objects with calendar fields, and
    strings or numbers parsed with ``input_format`` (strftime syntax,
    ``%d/%m/%Y`` by default; integers without a format are epoch
    milliseconds).

    Returns:
        The encoded value, or None when the input is empty or unparseable.
    """
    native = to_host_datetime(value, input_format)
    if native is None:
        logger.debug("Could not parse %r as a date", value)
        return None

    try:
        return to_wire(native, temporal_type)
    except (ValueError, OverflowError) as e:
        logger.debug("Could not encode %r as %s: %s", value, temporal_type, e)
        return None


@dataclass(frozen=True)
class TemporalValue:
    """Adapter around one Neo4j temporal value and its conversions."""

    value: WireTemporal

    def __post_init__(self) -> None:
        if temporal_type_of(self.value) is None:
            raise TypeError(f"Not a Neo4j temporal value: {self.value!r}")

    @property
    def kind(self) -> TemporalType:
        return temporal_type_of(self.value)

    def to_native(self) -> datetime:
        return to_native(self.value)

    def to_timestamp(self) -> pd.Timestamp:
        return to_timestamp(self.value)

    def to_epoch_millis(self) -> int:
        return to_epoch_millis(self.value)

    def convert(self, date_type: Union[DateType, str, None] = DateType.PANDAS) -> Any:
        """Return the representation selected by ``date_type``."""
        date_type = DateType.coerce(date_type)
        if date_type is DateType.PANDAS:
            return self.to_timestamp()
        if date_type is DateType.NATIVE:
            return self.to_native()
        if date_type is DateType.TIMESTAMP:
            return self.to_epoch_millis()
        return self.value
