"""Reads enum and column metadata from the PostgreSQL catalog."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final, Sequence

import psycopg
from psycopg.rows import dict_row

from ..shared import DEFAULT_EXCLUDED_TABLES, CatalogError

ENUM_QUERY: Final[str] = """
    SELECT pg_type.typname AS type_key, pg_enum.enumlabel AS raw_value
    FROM pg_type
    JOIN pg_enum ON pg_enum.enumtypid = pg_type.oid
    ORDER BY pg_type.typname, pg_enum.enumsortorder
"""

COLUMN_QUERY: Final[str] = """
    SELECT table_name, column_name, is_nullable, data_type, udt_name, ordinal_position
    FROM information_schema.columns
    WHERE table_schema = %s
      AND NOT (table_name = ANY(%s))
    ORDER BY table_name, ordinal_position
"""


@dataclass(frozen=True, slots=True)
class EnumRow:
    """One member of a catalog-defined enum type."""

    type_key: str
    raw_value: str


@dataclass(frozen=True, slots=True)
class ColumnRow:
    """One column of a user table."""

    table: str
    column: str
    nullable: bool
    sql_type: str
    udt_name: str
    ordinal_position: int


@dataclass(frozen=True, slots=True)
class CatalogSnapshot:
    """Enum rows and column rows read in a single run."""

    enums: tuple[EnumRow, ...]
    columns: tuple[ColumnRow, ...]


def _fetch_all(
    conn: psycopg.Connection,
    name: str,
    query: str,
    params: Sequence[Any] | None = None,
) -> list[dict[str, Any]]:
    try:
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(query, params)
            return cur.fetchall()
    except psycopg.Error as e:
        raise CatalogError(str(e), query=name) from e


def read_enum_rows(conn: psycopg.Connection) -> list[EnumRow]:
    """Return enum members ordered by type name, then declaration order."""
    rows = _fetch_all(conn, "enums", ENUM_QUERY)
    return [EnumRow(type_key=row["type_key"], raw_value=row["raw_value"]) for row in rows]


def read_column_rows(
    conn: psycopg.Connection,
    schema: str = "public",
    excluded_tables: Sequence[str] = DEFAULT_EXCLUDED_TABLES,
) -> list[ColumnRow]:
    """Return columns of ``schema`` ordered by table name, then ordinal position."""
    rows = _fetch_all(conn, "columns", COLUMN_QUERY, (schema, list(excluded_tables)))
    return [
        ColumnRow(
            table=row["table_name"],
            column=row["column_name"],
            nullable=row["is_nullable"] == "YES",
            sql_type=row["data_type"],
            udt_name=row["udt_name"],
            ordinal_position=int(row["ordinal_position"]),
        )
        for row in rows
    ]


def read_catalog(
    conn: psycopg.Connection,
    *,
    schema: str = "public",
    excluded_tables: Sequence[str] = DEFAULT_EXCLUDED_TABLES,
) -> CatalogSnapshot:
    """Read both catalog views over one connection.

    Raises:
        CatalogError: If either query fails.
    """
    enums = read_enum_rows(conn)
    columns = read_column_rows(conn, schema, excluded_tables)
    return CatalogSnapshot(enums=tuple(enums), columns=tuple(columns))
