"""Logging helpers shared by the query layer and the CLI."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

query_logger = logging.getLogger("cypherkit.queries")


def log_query(
    operation: str,
    phase: str,
    *,
    return_type: str,
    query_count: Optional[int] = None,
    duration: Optional[float] = None,
) -> None:
    """Log one query operation as ``<operation> <phase> key=value ...``.

    The same fields are attached to the record (``extra``) so structured
    handlers can read them without parsing the message.
    """
    fields: Dict[str, Any] = {"operation": operation, "phase": phase, "return_type": return_type}
    if query_count is not None:
        fields["query_count"] = query_count
    if duration is not None:
        fields["duration_ms"] = round(duration * 1000, 3)

    details = " ".join(f"{key}={fields[key]}" for key in ("return_type", "query_count", "duration_ms") if key in fields)
    query_logger.info("%s %s %s", operation, phase, details, extra=fields)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for command line use."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
