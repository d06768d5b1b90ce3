"""Result containers and helpers for values returned by ``Neo4jClient``.

Every query call returns exactly one of:
- ``Empty`` when nothing was run
- ``Single`` for one query (its value is not wrapped in a list)
- ``Many`` for a batch, in input order

The module-level helpers (`first`, `then_map`, `unwrap`) work on any of
the three.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable, Generic, List, Optional, Sequence, Tuple, TypeVar, Union

from neo4j import EagerResult

from ..values import DateType, parse_response

T = TypeVar("T")


class ReturnType(IntEnum):
    """Shape of each query's value."""

    PARSER = 0
    PARSER_RAW = 1
    RAW = 2

    @classmethod
    def coerce(cls, value: Any) -> "ReturnType":
        """Accept members, their integer values or their (case-insensitive) names."""
        if value is None:
            return cls.PARSER
        if isinstance(value, str):
            try:
                return cls[value.upper()]
            except KeyError:
                raise ValueError(f"Unknown return type: {value!r}") from None
        return cls(value)


@dataclass(frozen=True)
class QueryOptions:
    """Per-call options for query execution."""

    return_type: ReturnType = ReturnType.PARSER
    date_type: DateType = DateType.PANDAS
    debug: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "return_type", ReturnType.coerce(self.return_type))
        object.__setattr__(self, "date_type", DateType.coerce(self.date_type))


class Result:
    """Raw driver result together with its parsed rows."""

    def __init__(self, raw_result: EagerResult, options: Optional[QueryOptions] = None) -> None:
        self.options = options or QueryOptions()
        self.raw_result = raw_result
        self.value = parse_response(raw_result.records, self.options)

    def __repr__(self) -> str:
        return f"Result(rows={len(self.value)}, options={self.options!r})"


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class Single(Generic[T]):
    value: T


@dataclass(frozen=True)
class Many(Generic[T]):
    values: Tuple[T, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self):
        return iter(self.values)


QueryResult = Union[Empty, Single[T], Many[T]]


def from_values(values: Sequence[T]) -> QueryResult:
    """Pick the result variant matching the number of values."""
    if len(values) == 0:
        return Empty()
    if len(values) == 1:
        return Single(values[0])
    return Many(values)


def unwrap(result: QueryResult) -> Any:
    """Return None, the bare value, or a list of values."""
    if isinstance(result, Single):
        return result.value
    if isinstance(result, Many):
        return list(result.values)
    return None


def _rows(value: Any) -> Optional[List[Any]]:
    if isinstance(value, Result):
        return value.value
    if isinstance(value, EagerResult):
        return list(value.records)
    if isinstance(value, list):
        return value
    return None


def first(result: QueryResult, selector: Union[str, Callable[[Any], Any], None] = None) -> Any:
    """First row of a single query, or the first query's value of a batch.

    A batch mirrors ``then_map``: its elements are whole query values, so
    ``first`` on ``Many`` returns the first query's value, not its first row.

    Args:
        result: Value returned by ``execute`` or a transaction.
        selector: Key to read from the row, or a callable applied to it.
    """
    if isinstance(result, Single):
        rows = _rows(result.value)
        row = rows[0] if rows else None
    elif isinstance(result, Many) and result.values:
        row = result.values[0]
    else:
        return None

    if row is None or selector is None:
        return row
    if callable(selector):
        return selector(row)
    if isinstance(selector, str):
        return row.get(selector) if hasattr(row, "get") else None
    return row


def then_map(result: QueryResult, fn: Callable[[Any], Any]) -> QueryResult:
    """Apply ``fn`` to each row of a single query, or to each query of a batch."""
    if isinstance(result, Single):
        rows = _rows(result.value)
        if rows is None:
            return result
        return Single([fn(row) for row in rows])
    if isinstance(result, Many):
        return Many([fn(value) for value in result.values])
    return result
