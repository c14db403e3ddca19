"""Type Code Generator - Generates TypeScript types from a PostgreSQL catalog."""

from .main import (
    EnumMember,
    EnumDefinition,
    RecordField,
    RecordTypeDefinition,
    GenerationResult,
    GeneratorContext,
    group_runs,
    build_enum_definitions,
    build_record_definitions,
    map_column_type,
    render_document,
    generate,
)
from .merger import merge_generated

__all__ = [
    "EnumMember",
    "EnumDefinition",
    "RecordField",
    "RecordTypeDefinition",
    "GenerationResult",
    "GeneratorContext",
    "group_runs",
    "build_enum_definitions",
    "build_record_definitions",
    "map_column_type",
    "render_document",
    "generate",
    "merge_generated",
]
