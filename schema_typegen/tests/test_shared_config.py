import argparse
from pathlib import Path

import pytest

from schema_typegen.shared.config import (
    DEFAULT_ANCHOR,
    DEFAULT_EXCLUDED_TABLES,
    TypegenConfig,
    load_config,
    resolve_config,
)
from schema_typegen.shared.errors import ConfigError


def _args(**overrides) -> argparse.Namespace:
    values = {
        "config": None,
        "database_url": None,
        "schema": None,
        "exclude": None,
        "target": None,
        "anchor": None,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


class TestTypegenConfig:
    def test_defaults(self):
        config = TypegenConfig()
        assert config.database_url is None
        assert config.schema == "public"
        assert config.excluded_tables == ("migrations", "migrations_lock")
        assert config.target == Path("src/db.ts")
        assert config.anchor == DEFAULT_ANCHOR == "export default db;"

    def test_frozen(self):
        config = TypegenConfig()
        with pytest.raises(AttributeError):
            config.schema = "other"

    def test_from_mapping(self):
        config = TypegenConfig.from_mapping(
            {
                "schema": "app",
                "excluded_tables": ["knex_migrations"],
                "target": "web/src/db.ts",
            }
        )
        assert config.schema == "app"
        assert config.excluded_tables == ("knex_migrations",)
        assert config.target == Path("web/src/db.ts")
        assert config.anchor == DEFAULT_ANCHOR

    def test_from_mapping_unknown_key(self):
        with pytest.raises(ConfigError) as exc_info:
            TypegenConfig.from_mapping({"tables": []}, "typegen.yaml")
        assert "Key 'tables'" in str(exc_info.value)
        assert exc_info.value.path == "typegen.yaml"

    def test_from_mapping_bad_excluded_tables(self):
        with pytest.raises(ConfigError):
            TypegenConfig.from_mapping({"excluded_tables": "migrations"})

    def test_from_mapping_non_string_value(self):
        with pytest.raises(ConfigError):
            TypegenConfig.from_mapping({"schema": 42})

    def test_from_mapping_empty_anchor(self):
        with pytest.raises(ConfigError):
            TypegenConfig.from_mapping({"anchor": "  "})

    def test_from_mapping_null_database_url(self):
        config = TypegenConfig.from_mapping({"database_url": None})
        assert config.database_url is None


class TestLoadConfig:
    def test_load_valid_config(self, tmp_path):
        config_path = tmp_path / "typegen.yaml"
        config_path.write_text("schema: app\ntarget: src/db.ts\n")

        assert load_config(config_path) == {"schema": "app", "target": "src/db.ts"}

    def test_load_empty_config(self, tmp_path):
        config_path = tmp_path / "typegen.yaml"
        config_path.write_text("")

        assert load_config(config_path) == {}

    def test_load_invalid_yaml(self, tmp_path):
        config_path = tmp_path / "typegen.yaml"
        config_path.write_text("schema: [unclosed")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(config_path)

    def test_load_non_mapping(self, tmp_path):
        config_path = tmp_path / "typegen.yaml"
        config_path.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="must be a mapping"):
            load_config(config_path)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Failed to read config file"):
            load_config(tmp_path / "missing.yaml")


class TestResolveConfig:
    def test_defaults_without_config_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        config = resolve_config(_args(), {})

        assert config == TypegenConfig()

    def test_default_config_file_is_picked_up(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "typegen.yaml").write_text("schema: app\n")

        config = resolve_config(_args(), {})

        assert config.schema == "app"

    def test_explicit_config_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config_path = tmp_path / "custom.yaml"
        config_path.write_text("anchor: 'export { db };'\n")

        config = resolve_config(_args(config=config_path), {})

        assert config.anchor == "export { db };"

    def test_explicit_config_file_must_exist(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ConfigError):
            resolve_config(_args(config=tmp_path / "missing.yaml"), {})

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "typegen.yaml").write_text("database_url: postgresql://file/db\n")

        config = resolve_config(_args(), {"DATABASE_URL": "postgresql://env/db"})

        assert config.database_url == "postgresql://env/db"

    def test_cli_overrides_everything(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "typegen.yaml").write_text("schema: app\n")

        config = resolve_config(
            _args(
                database_url="postgresql://cli/db",
                schema="other",
                exclude=["knex_migrations", "knex_migrations_lock"],
                target=Path("web/db.ts"),
                anchor="export { db };",
            ),
            {"DATABASE_URL": "postgresql://env/db"},
        )

        assert config.database_url == "postgresql://cli/db"
        assert config.schema == "other"
        assert config.excluded_tables == ("knex_migrations", "knex_migrations_lock")
        assert config.target == Path("web/db.ts")
        assert config.anchor == "export { db };"

    def test_default_exclusions_kept_without_flag(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        config = resolve_config(_args(), {})

        assert config.excluded_tables == DEFAULT_EXCLUDED_TABLES
