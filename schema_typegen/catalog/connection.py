"""Scoped PostgreSQL connection for catalog reads."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import psycopg

from ..shared import CatalogError


@contextmanager
def open_connection(conninfo: str | None = None) -> Iterator[psycopg.Connection]:
    """Open one catalog connection and always close it on exit.

    An empty ``conninfo`` lets libpq fall back to the ``PG*`` environment
    variables.

    Usage:
        with open_connection(url) as conn:
            snapshot = read_catalog(conn)

    Raises:
        CatalogError: If the connection cannot be established.
    """
    try:
        conn = psycopg.connect(conninfo or "", autocommit=True)
    except psycopg.Error as e:
        raise CatalogError(f"Failed to connect to the database: {e}") from e

    try:
        yield conn
    finally:
        conn.close()
