"""Exceptions raised by cypherkit itself.

Driver errors (connectivity, authentication, Cypher failures) are never
wrapped; they reach the caller as the driver raised them.
"""


class CypherkitError(Exception):
    """Base class for errors raised by cypherkit."""


class QuerySpecError(CypherkitError, ValueError):
    """A query specification could not be understood."""
