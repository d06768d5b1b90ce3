"""Conversion of Neo4j records into plain Python structures.

Each record becomes a ``dict`` keyed by the last segment of its field
names (``"n.name"`` -> ``"name"``). Nodes and relationships are replaced by
their properties, paths by their node/relationship lists, durations and
spatial points by dicts of their named fields, and temporal values by the
representation selected with ``date_type``.

Two aliases sharing the same terminal segment collide; the last one wins.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from neo4j.graph import Node, Path, Relationship
from neo4j.spatial import Point
from neo4j.time import Duration

from .temporal import DateType, TemporalValue, is_temporal

ParsedObject = Dict[str, Any]


def field_name(name: str) -> str:
    """Flatten a qualified field name to its last dot-segment."""
    return name.split(".")[-1] if "." in name else name


def _record_items(record: Any) -> List[Tuple[str, Any]]:
    if hasattr(record, "items"):
        return list(record.items())
    return list(record)


def has_fields(records: Optional[Sequence[Any]]) -> bool:
    """Cheap structural check: only the first record is inspected."""
    if not records:
        return False
    return len(_record_items(records[0])) > 0


def _properties(value: Any) -> Optional[Mapping[str, Any]]:
    """Return the property mapping of node/relationship-shaped values."""
    if isinstance(value, (Node, Relationship)):
        return dict(value.items())
    if isinstance(value, Mapping):
        props = value.get("properties")
        return props if isinstance(props, Mapping) else None
    props = getattr(value, "properties", None)
    return props if isinstance(props, Mapping) else None


def _convert(value: Any, date_type: DateType) -> Any:
    if is_temporal(value):
        temporal = value if isinstance(value, TemporalValue) else TemporalValue(value)
        return temporal.convert(date_type)

    if isinstance(value, Path):
        return {
            "nodes": [_convert(node, date_type) for node in value.nodes],
            "relationships": [_convert(rel, date_type) for rel in value.relationships],
        }

    if isinstance(value, Duration):
        return {
            "months": value.months,
            "days": value.days,
            "seconds": value.seconds,
            "nanoseconds": value.nanoseconds,
        }
    if isinstance(value, Point):
        return {"srid": value.srid, **dict(zip(("x", "y", "z"), value))}

    props = _properties(value)
    if props is not None:
        return _convert_items(props.items(), date_type)
    if isinstance(value, Mapping):
        return _convert_items(value.items(), date_type)
    if isinstance(value, (list, tuple)):
        return [_convert(item, date_type) for item in value]
    return value


def _convert_items(items: Iterable[Tuple[str, Any]], date_type: DateType) -> ParsedObject:
    obj: ParsedObject = {}
    for key, value in items:
        obj[field_name(str(key))] = _convert(value, date_type)
    return obj


def _date_type(options: Any) -> DateType:
    if options is None:
        return DateType.PANDAS
    if isinstance(options, Mapping):
        return DateType.coerce(options.get("date_type"))
    return DateType.coerce(getattr(options, "date_type", None))


def parse_response(
    records: Optional[Sequence[Any]],
    options: Union[Mapping[str, Any], Any, None] = None,
) -> List[ParsedObject]:
    """Convert driver records into a list of plain dicts.

    Args:
        records: ``neo4j.Record`` objects (or any mappings with ``items()``).
        options: Object or mapping with a ``date_type`` entry; defaults to
            ``DateType.PANDAS``.
    """
    if not has_fields(records):
        return []

    date_type = _date_type(options)
    return [_convert_items(_record_items(record), date_type) for record in records]
