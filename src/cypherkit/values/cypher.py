"""Helpers for building Cypher fragments by hand."""

from __future__ import annotations

import json
import re
from typing import Any, Mapping, Optional

from .temporal import TemporalType, parse_date

# Matches the quoted keys json.dumps produces: "key":
_QUOTED_KEY = re.compile(r'"([^"()]+)":')

_REGEX_SPECIALS = re.compile(r"([\\|()\[\]{}])")


def _merge(*mappings: Optional[Mapping[str, Any]]) -> dict:
    merged: dict = {}
    for mapping in mappings:
        if mapping:
            merged.update(mapping)
    return merged


def obj_to_string(*mappings: Optional[Mapping[str, Any]]) -> str:
    """Render mappings as one Cypher map literal, e.g. ``{name:"Ana"}``.

    Returns an empty string when no non-empty mapping was given.
    """
    merged = _merge(*mappings)
    if not merged:
        return ""
    return _QUOTED_KEY.sub(r"\1:", json.dumps(merged, default=str, ensure_ascii=False, separators=(",", ":")))


def obj_to_params(prefix: Optional[str], *mappings: Optional[Mapping[str, Any]]) -> str:
    """Like ``obj_to_string`` but with every key qualified by ``prefix``.

    ``obj_to_params("n", {"name": "Ana"})`` -> ``{n.name:"Ana"}``
    """
    if not prefix or not isinstance(prefix, str):
        return obj_to_string(*mappings)

    merged = _merge(*mappings)
    return obj_to_string({f"{prefix}.{key}": value for key, value in merged.items()})


def parse_date_cypher(
    value: Any,
    temporal_type: TemporalType = TemporalType.LOCAL_DATE_TIME,
    input_format: Optional[str] = None,
) -> Optional[str]:
    """Render a date-like value as a Cypher temporal literal.

    ``parse_date_cypher("02/01/2020")`` -> ``localdatetime("2020-01-02T00:00:00.000000000")``
    """
    parsed = parse_date(value, temporal_type, input_format)
    if parsed is None:
        return None
    return f'{TemporalType(temporal_type).value}("{parsed.iso_format()}")'


def to_int_or_none(value: Any) -> Optional[int]:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def to_float_or_none(value: Any) -> Optional[float]:
    try:
        return float(str(value).strip())
    except (TypeError, ValueError):
        return None


def clear_string_for_regex(value: Optional[str]) -> Optional[str]:
    """Escape user text for use inside a Cypher ``=~`` pattern.

    Leading ``*`` characters are dropped.
    """
    if not value:
        return None
    return _REGEX_SPECIALS.sub(r"\\\1", value.lstrip("*"))
