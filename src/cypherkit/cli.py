"""Simple CLI for running Cypher through cypherkit.

Usage examples (from project root):

    cypherkit run "MATCH (p:Person) RETURN p.name, p.born LIMIT 5"

    cypherkit run 'MATCH (p:Person {name: $name}) RETURN p' \
        --param name='"Keanu Reeves"' --date-type native

    cypherkit ping

The CLI uses:
- .env configuration (NEO4J_URI, NEO4J_USERNAME, NEO4J_PASSWORD, NEO4J_DATABASE)
- Neo4jClient for connection and result parsing
"""

import argparse
import asyncio
import json
import sys
from typing import Any, Dict, List, Optional

from .config import Config
from .logs import configure_logging
from .neo4j import Neo4jClient, QuerySpec, ReturnType, unwrap
from .values import DateType


def _parse_param(value: str) -> tuple:
    """Parse ``KEY=VALUE``; VALUE is read as JSON, falling back to a string."""
    key, sep, raw = value.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f'param must look like KEY=VALUE, got "{value}"')
    try:
        return key, json.loads(raw)
    except json.JSONDecodeError:
        return key, raw


def _jsonable(value: Any) -> Any:
    """Make raw driver results printable."""
    if hasattr(value, "records") and hasattr(value, "keys"):
        return [record.data() for record in value.records]
    if hasattr(value, "raw_result") and hasattr(value, "value"):
        return value.value
    return value


def _cmd_run(args: argparse.Namespace) -> int:
    """Run one Cypher query and print its results."""

    config = Config()
    configure_logging(config.log_level)
    params: Dict[str, Any] = dict(args.param or [])

    async def run() -> Any:
        async with Neo4jClient(config=config) as client:
            return unwrap(
                await client.execute(
                    QuerySpec(args.cypher, params or None),
                    return_type=args.return_type,
                    date_type=args.date_type,
                )
            )

    records = _jsonable(asyncio.run(run()))
    results: List[Any] = records if isinstance(records, list) else [records]

    serializable: Dict[str, Any] = {
        "count": len(results),
        "results": results,
    }

    # Temporal values (pandas / neo4j.time) are rendered as strings.
    print(json.dumps(serializable, indent=2, sort_keys=True, default=str))
    return 0


def _cmd_ping(args: argparse.Namespace) -> int:
    """Check that the configured database is reachable."""

    config = Config()
    configure_logging(config.log_level)

    async def ping() -> bool:
        async with Neo4jClient(config=config) as client:
            return await client.verify_connectivity()

    ok = asyncio.run(ping())
    print(json.dumps({"url": config.url, "connected": ok}))
    return 0 if ok else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run Cypher queries against Neo4j and print parsed results",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    p_run = subparsers.add_parser(
        "run",
        help="Run a Cypher query and print the parsed records as JSON",
    )
    p_run.add_argument("cypher", type=str, help="Cypher query text")
    p_run.add_argument(
        "--param",
        type=_parse_param,
        action="append",
        help="Query parameter as KEY=JSON_VALUE (repeatable)",
    )
    p_run.add_argument(
        "--return-type",
        type=str.lower,
        choices=[member.name.lower() for member in ReturnType],
        default="parser",
        help="parser (default), parser_raw or raw",
    )
    p_run.add_argument(
        "--date-type",
        type=str.lower,
        choices=[member.value for member in DateType],
        default=None,
        help="Temporal output form; defaults to CYPHERKIT_DATE_TYPE",
    )
    p_run.set_defaults(func=_cmd_run)

    p_ping = subparsers.add_parser(
        "ping",
        help="Verify connectivity to the configured database",
    )
    p_ping.set_defaults(func=_cmd_ping)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return

    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
