"""Query specifications accepted by ``Neo4jClient``.

A query can be given as:
- a bare Cypher string
- a ``QuerySpec``
- a ``(cypher, params)`` tuple
- a mapping with a ``cypher`` key and optional ``params``

A list of any of these is a batch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ..errors import QuerySpecError
from ..values import normalize_params


@dataclass(frozen=True)
class QuerySpec:
    """A Cypher query paired with its parameters."""

    cypher: str
    params: Optional[Mapping[str, Any]] = field(default=None)

    def normalized(self) -> Tuple[str, Optional[Dict[str, Any]]]:
        """Return the query text and a wire-safe copy of its parameters."""
        return self.cypher, normalize_params(self.params)


QueryInput = Union[str, QuerySpec, Tuple[str, Mapping[str, Any]], Mapping[str, Any]]


def to_query_spec(query: QueryInput) -> QuerySpec:
    if isinstance(query, QuerySpec):
        return query
    if isinstance(query, str):
        return QuerySpec(query)
    if isinstance(query, tuple) and len(query) == 2 and isinstance(query[0], str):
        return QuerySpec(query[0], query[1])
    if isinstance(query, Mapping) and isinstance(query.get("cypher"), str):
        return QuerySpec(query["cypher"], query.get("params"))
    raise QuerySpecError(f"Unsupported query specification: {query!r}")


def to_query_specs(query: Union[QueryInput, Sequence[QueryInput], None]) -> List[QuerySpec]:
    """Turn a single query or a batch into a list of ``QuerySpec``."""
    if query is None:
        return []
    if isinstance(query, list):
        return [to_query_spec(item) for item in query]
    return [to_query_spec(query)]
