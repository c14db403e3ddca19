"""
Type Code Generator - Generates TypeScript types from a PostgreSQL catalog.

Reads enum types and table columns from the database, renders one
``export enum`` block per enum type and one ``export type`` block per table,
and merges the result into the target file below its anchor line.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from collections import Counter
from dataclasses import dataclass, field
from functools import lru_cache
from itertools import groupby
from pathlib import Path
from typing import Callable, Final, Hashable, Iterable, Mapping, Sequence, TypeVar

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..catalog import CatalogSnapshot, ColumnRow, EnumRow, open_connection, read_catalog
from ..shared import (
    TypegenConfig,
    TypegenError,
    resolve_config,
    sanitize_member_key,
    singularize,
    to_pascal_case,
)
from .merger import merge_generated

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)

NUMERIC_SQL_TYPES: Final[frozenset[str]] = frozenset({"integer", "numeric", "decimal"})
NULL_UNION: Final[str] = " | null"

# Template configuration
TEMPLATE_DIR: Final[Path] = Path(__file__).parent / "templates"


@dataclass(frozen=True, slots=True)
class EnumMember:
    """A single enum member: sanitized key plus the catalog label."""

    key: str
    raw_value: str


@dataclass(frozen=True, slots=True)
class EnumDefinition:
    """An enum type as it will be emitted."""

    type_key: str
    display_name: str
    members: tuple[EnumMember, ...]


@dataclass(frozen=True, slots=True)
class RecordField:
    """Represents a table column as a TypeScript field."""

    name: str
    type_expression: str
    nullable: bool


@dataclass(frozen=True, slots=True)
class RecordTypeDefinition:
    """A table row type as it will be emitted."""

    table: str
    name: str
    fields: tuple[RecordField, ...]


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Outcome of one generator run."""

    target: Path
    enum_count: int
    record_count: int
    document: str
    changed: bool


@lru_cache(maxsize=256)
def _quote(value: str) -> str:
    """Quote a string for TypeScript literal embedding. Cached for performance."""
    return json.dumps(value, ensure_ascii=False)


@dataclass
class GeneratorContext:
    """Context for code generation with cached resources."""

    template_env: Environment = field(init=False)

    def __post_init__(self) -> None:
        self.template_env = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
            auto_reload=False,
        )
        self.template_env.filters["quote"] = _quote
        # Pre-compile templates
        self._enum_template = self.template_env.get_template("enum.ts.j2")
        self._record_template = self.template_env.get_template("record.ts.j2")

    @property
    def enum_template(self):
        return self._enum_template

    @property
    def record_template(self):
        return self._record_template


def group_runs(items: Iterable[T], key: Callable[[T], K]) -> list[tuple[K, list[T]]]:
    """Split an ordered sequence into maximal runs of items sharing a key.

    Runs keep their first-appearance order; a key that reappears after a
    different one starts a new run.
    """
    return [(k, list(run)) for k, run in groupby(items, key=key)]


def build_enum_definitions(rows: Iterable[EnumRow]) -> list[EnumDefinition]:
    """Group enum rows into one definition per type key."""
    return [
        EnumDefinition(
            type_key=type_key,
            display_name=to_pascal_case(type_key),
            members=tuple(
                EnumMember(key=sanitize_member_key(row.raw_value), raw_value=row.raw_value)
                for row in run
            ),
        )
        for type_key, run in group_runs(rows, key=lambda row: row.type_key)
    ]


def find_member_collisions(definition: EnumDefinition) -> list[str]:
    """Return member keys that occur more than once after sanitization."""
    counts = Counter(member.key for member in definition.members)
    return [key for key, count in counts.items() if count > 1]


def map_column_type(
    column: ColumnRow,
    enums: Mapping[str, EnumDefinition],
) -> str:
    """Resolve the TypeScript type expression for a column.

    Rules are checked in order; anything unrecognised maps to ``string``.
    Nullable columns get a ``| null`` union.
    """
    sql_type = column.sql_type

    if sql_type in NUMERIC_SQL_TYPES:
        expression = "number"
    elif sql_type == "boolean":
        expression = "boolean"
    elif sql_type == "jsonb":
        expression = "any"
    elif sql_type == "ARRAY" and column.udt_name == "_text":
        expression = "string[]"
    elif sql_type.startswith("timestamp") or sql_type == "date":
        expression = "Date"
    elif sql_type == "USER-DEFINED" and column.udt_name in enums:
        expression = enums[column.udt_name].display_name
    else:
        expression = "string"

    return expression + NULL_UNION if column.nullable else expression


def build_record_definitions(
    rows: Iterable[ColumnRow],
    enums: Sequence[EnumDefinition],
) -> list[RecordTypeDefinition]:
    """Group column rows into one row type per table."""
    enums_by_key = {definition.type_key: definition for definition in enums}

    return [
        RecordTypeDefinition(
            table=table,
            name=to_pascal_case(singularize(table)),
            fields=tuple(
                RecordField(
                    name=column.column,
                    type_expression=map_column_type(column, enums_by_key),
                    nullable=column.nullable,
                )
                for column in run
            ),
        )
        for table, run in group_runs(rows, key=lambda row: row.table)
    ]


def render_enum_blocks(
    definitions: Iterable[EnumDefinition],
    ctx: GeneratorContext,
) -> list[str]:
    return [ctx.enum_template.render(definition=d) for d in definitions]


def render_record_blocks(
    definitions: Iterable[RecordTypeDefinition],
    ctx: GeneratorContext,
) -> list[str]:
    return [ctx.record_template.render(definition=d) for d in definitions]


def render_declarations(
    enums: Sequence[EnumDefinition],
    records: Sequence[RecordTypeDefinition],
    ctx: GeneratorContext,
) -> str:
    """Join enum blocks and record blocks, separated by blank lines."""
    blocks = render_enum_blocks(enums, ctx) + render_record_blocks(records, ctx)
    return "\n".join(blocks)


def render_document(
    snapshot: CatalogSnapshot,
    ctx: GeneratorContext | None = None,
) -> str:
    """Render the full generated document for a catalog snapshot."""
    ctx = ctx or GeneratorContext()
    enums = build_enum_definitions(snapshot.enums)
    records = build_record_definitions(snapshot.columns, enums)
    return render_declarations(enums, records, ctx)


def _warn_member_collisions(enums: Iterable[EnumDefinition]) -> None:
    for definition in enums:
        for key in find_member_collisions(definition):
            print(
                f"Warning: enum '{definition.type_key}' has several members "
                f"sanitized to '{key}'",
                file=sys.stderr,
            )


def generate(
    config: TypegenConfig,
    *,
    dry_run: bool = False,
    ctx: GeneratorContext | None = None,
) -> GenerationResult:
    """Regenerate the types section of the target file.

    The connection is held for the whole run and closed even when reading,
    merging or writing fails. The target is only written when its content
    changes, and never when ``dry_run`` is set.

    Raises:
        CatalogError: If the catalog cannot be read.
        MergeError: If the target file has no anchor line.
        OSError: If the target file cannot be read or written.
        UnicodeDecodeError: If the target file is not valid UTF-8.
    """
    ctx = ctx or GeneratorContext()
    target = config.target

    with open_connection(config.database_url) as conn:
        snapshot = read_catalog(
            conn,
            schema=config.schema,
            excluded_tables=config.excluded_tables,
        )
        enums = build_enum_definitions(snapshot.enums)
        _warn_member_collisions(enums)
        records = build_record_definitions(snapshot.columns, enums)
        document = render_declarations(enums, records, ctx)

        with target.open(encoding="utf-8", newline="") as f:
            source = f.read()
        merged = merge_generated(
            source,
            document,
            anchor=config.anchor,
            banner=config.banner,
            path=str(target),
        )
        changed = merged != source
        if changed and not dry_run:
            target.write_text(merged, encoding="utf-8", newline="")

    return GenerationResult(
        target=target,
        enum_count=len(enums),
        record_count=len(records),
        document=document,
        changed=changed,
    )


def print_document(config: TypegenConfig, ctx: GeneratorContext | None = None) -> str:
    """Render the generated document without touching any file."""
    ctx = ctx or GeneratorContext()
    with open_connection(config.database_url) as conn:
        snapshot = read_catalog(
            conn,
            schema=config.schema,
            excluded_tables=config.excluded_tables,
        )
    enums = build_enum_definitions(snapshot.enums)
    _warn_member_collisions(enums)
    records = build_record_definitions(snapshot.columns, enums)
    return render_declarations(enums, records, ctx)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate TypeScript types from a PostgreSQL schema",
    )
    parser.add_argument(
        "--target",
        type=Path,
        default=None,
        help="File to update (default: src/db.ts)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML config file (default: typegen.yaml if present)",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="Connection URL (default: $DATABASE_URL, then libpq PG* variables)",
    )
    parser.add_argument(
        "--schema",
        default=None,
        help="Schema whose tables are described (default: public)",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="TABLE",
        help="Table to skip; repeat for several (replaces the default list)",
    )
    parser.add_argument(
        "--anchor",
        default=None,
        help="Line after which generated code is placed",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--check",
        action="store_true",
        help="Exit with an error if the target file is out of date",
    )
    mode.add_argument(
        "--stdout",
        action="store_true",
        help="Print the generated declarations instead of updating the file",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = resolve_config(args, os.environ)

        if args.stdout:
            sys.stdout.write(print_document(config))
            return

        result = generate(config, dry_run=args.check)

        if args.check:
            if result.changed:
                raise SystemExit(
                    f"Error: {result.target} is out of date; run the generator"
                )
            print(f"{result.target} is up to date")
            return

        summary = (
            f"{result.enum_count} enum(s) and {result.record_count} record type(s)"
        )
        if result.changed:
            print(f"Generated {summary} into {result.target}")
        else:
            print(f"Generated {summary}; {result.target} already up to date")
    except (TypegenError, OSError, UnicodeDecodeError) as e:
        raise SystemExit(f"Error: {e}") from e


if __name__ == "__main__":
    main()
