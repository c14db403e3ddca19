"""Configuration loading for the type generator."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Final, Mapping

import yaml

from .errors import ConfigError

DEFAULT_CONFIG_FILE: Final[Path] = Path("typegen.yaml")
DEFAULT_ANCHOR: Final[str] = "export default db;"
DEFAULT_BANNER: Final[str] = (
    "// The TypeScript definitions below are automatically generated.\n"
    "// Do not touch them, or risk, your modifications being lost."
)
DEFAULT_EXCLUDED_TABLES: Final[tuple[str, ...]] = ("migrations", "migrations_lock")


@dataclass(frozen=True, slots=True)
class TypegenConfig:
    """Settings for one generator run."""

    database_url: str | None = None
    schema: str = "public"
    excluded_tables: tuple[str, ...] = DEFAULT_EXCLUDED_TABLES
    target: Path = Path("src/db.ts")
    anchor: str = DEFAULT_ANCHOR
    banner: str = DEFAULT_BANNER

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        path: str | None = None,
    ) -> TypegenConfig:
        """Build a config from a parsed YAML mapping.

        Raises:
            ConfigError: On unknown keys or values of the wrong shape.
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}

        for key, value in data.items():
            if key not in known:
                raise ConfigError("unknown setting", path, key=str(key))
            if key == "excluded_tables":
                if not isinstance(value, list) or not all(
                    isinstance(item, str) for item in value
                ):
                    raise ConfigError("must be a list of table names", path, key=key)
                values[key] = tuple(value)
            elif key == "target":
                values[key] = Path(str(value))
            elif value is None and key == "database_url":
                values[key] = None
            elif not isinstance(value, str):
                raise ConfigError("must be a string", path, key=key)
            else:
                values[key] = value

        if "anchor" in values and not values["anchor"].strip():
            raise ConfigError("must not be empty", path, key="anchor")

        return cls(**values)


def load_config(config_path: Path) -> dict[str, Any]:
    """Load a generator config from a YAML file.

    Args:
        config_path: Path to the config file.

    Returns:
        The parsed config mapping (empty for an empty file).

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read config file: {e}", str(config_path)) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}", str(config_path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("Config root must be a mapping", str(config_path))

    return data


def resolve_config(
    args: argparse.Namespace,
    environ: Mapping[str, str],
) -> TypegenConfig:
    """Layer defaults, the YAML file, the environment and CLI options.

    Later layers win: defaults < config file < ``DATABASE_URL`` < CLI flags.
    An explicit ``--config`` must exist; the default ``typegen.yaml`` is
    optional.
    """
    config_path: Path | None = args.config
    if config_path is None and DEFAULT_CONFIG_FILE.is_file():
        config_path = DEFAULT_CONFIG_FILE

    if config_path is not None:
        config = TypegenConfig.from_mapping(load_config(config_path), str(config_path))
    else:
        config = TypegenConfig()

    if environ.get("DATABASE_URL"):
        config = replace(config, database_url=environ["DATABASE_URL"])

    overrides: dict[str, Any] = {}
    if args.database_url:
        overrides["database_url"] = args.database_url
    if args.schema:
        overrides["schema"] = args.schema
    if args.exclude:
        overrides["excluded_tables"] = tuple(args.exclude)
    if args.target is not None:
        overrides["target"] = args.target
    if args.anchor:
        overrides["anchor"] = args.anchor

    return replace(config, **overrides) if overrides else config
