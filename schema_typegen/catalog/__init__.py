"""Catalog access - reads enum and column metadata from PostgreSQL."""

from .connection import open_connection
from .reader import (
    CatalogSnapshot,
    ColumnRow,
    EnumRow,
    read_catalog,
    read_column_rows,
    read_enum_rows,
)

__all__ = [
    "open_connection",
    "CatalogSnapshot",
    "ColumnRow",
    "EnumRow",
    "read_catalog",
    "read_column_rows",
    "read_enum_rows",
]
