"""
Tests for Schema Scanner

Tests dialect fallback, warnings for unparseable files, and table extraction
(columns, keys, indexes, foreign keys).
"""

import logging
from datetime import timezone
from unittest.mock import patch

import pytest
from sqlglot import exp

from mcpgen.exceptions import ConfigurationError, DialectParseError, SchemaParseError
from mcpgen.schema import SchemaScanner, build_strategies
from mcpgen.schema.dialects import is_unparsed_schema_statement
from mcpgen.schema.tables import index_name


def _warnings(caplog):
    return [r for r in caplog.records if r.levelno == logging.WARNING]


class TestDialectStrategies:
    """Test strategy construction and parsing."""

    def test_default_order(self):
        assert [s.name for s in build_strategies()] == ["mysql", "postgresql", "sqlite", "mssql"]

    def test_sqlglot_names(self):
        assert [s.sqlglot_dialect for s in build_strategies()] == ["mysql", "postgres", "sqlite", "tsql"]

    def test_unknown_dialect(self):
        with pytest.raises(ConfigurationError):
            build_strategies(["oracle"])

    def test_empty_dialects(self):
        with pytest.raises(ConfigurationError):
            build_strategies([])

    def test_try_parse_error(self):
        strategy = build_strategies(["mysql"])[0]
        with pytest.raises(DialectParseError) as exc_info:
            strategy.try_parse("CREATE TABLE broken (id INT")
        assert exc_info.value.dialect == "mysql"

    def test_unparsed_create_table_rejected(self):
        strategy = build_strategies(["mysql"])[0]
        command = exp.Command(this="CREATE", expression=" TABLE notes (id INTEGER) WITHOUT ROWID")
        with patch("mcpgen.schema.dialects.sqlglot.parse", return_value=[command]):
            with pytest.raises(DialectParseError):
                strategy.try_parse("CREATE TABLE notes (id INTEGER) WITHOUT ROWID;")

    def test_unparsed_other_command_accepted(self):
        strategy = build_strategies(["postgresql"])[0]
        command = exp.Command(this="CREATE", expression=" FUNCTION touch() RETURNS TABLE (id INT)")
        with patch("mcpgen.schema.dialects.sqlglot.parse", return_value=[command]):
            parsed = strategy.try_parse("CREATE FUNCTION touch() ...")
        assert parsed.statements == [command]

    @pytest.mark.parametrize(
        "text,expected",
        [
            (" TABLE t (id INT)", True),
            (" TEMPORARY TABLE t (id INT)", True),
            (" UNIQUE INDEX idx ON t (id)", True),
            ("  OR REPLACE\n TABLE t (id INT)", True),
            (" FUNCTION f() RETURNS TABLE (id INT)", False),
            (" VIEW v AS SELECT 1", False),
        ],
    )
    def test_schema_command_detection(self, text, expected):
        command = exp.Command(this="CREATE", expression=text)
        assert is_unparsed_schema_statement(command) is expected


class TestSchemaScanner:
    """Test resource extraction from SQL files."""

    def test_mysql_schema(self, temp_dir, sample_schema_file):
        resources = SchemaScanner(temp_dir).scan([sample_schema_file])
        assert [r.name for r in resources] == ["users", "orders"]

        users = resources[0]
        assert users.dialect == "mysql"
        assert users.source_file == "db/schema.sql"
        assert users.last_modified is not None
        assert users.last_modified.tzinfo == timezone.utc

        assert users.columns["id"].type == "int"
        assert users.columns["id"].primary_key
        assert users.columns["id"].auto_increment
        assert not users.columns["id"].nullable
        assert users.columns["email"].length == 255
        assert not users.columns["email"].nullable
        assert users.columns["nickname"].nullable

    def test_foreign_keys(self, temp_dir, sample_schema_file):
        orders = SchemaScanner(temp_dir).scan([sample_schema_file])[1]
        assert orders.columns["id"].primary_key
        assert orders.columns["total"].default_value == 0
        assert len(orders.foreign_keys) == 1
        fk = orders.foreign_keys[0]
        assert (fk.column, fk.references_table, fk.references_column) == ("user_id", "users", "id")

    def test_inline_references_and_defaults(self, temp_dir, project_file):
        path = project_file("schema.sql", '''
CREATE TABLE posts (
    id INT PRIMARY KEY,
    author_id INT REFERENCES users(id),
    status VARCHAR(20) DEFAULT 'draft',
    body TEXT NULL
);
''')
        posts = SchemaScanner(temp_dir).scan([path])[0]
        assert posts.foreign_keys[0].column == "author_id"
        assert posts.foreign_keys[0].references_table == "users"
        assert posts.columns["status"].default_value == "draft"
        assert posts.columns["body"].nullable
        assert posts.columns["body"].type == "text"

    def test_indexes(self, temp_dir, project_file):
        path = project_file("schema.sql", '''
CREATE TABLE products (
    id INT NOT NULL,
    sku VARCHAR(32) NOT NULL,
    name VARCHAR(100),
    PRIMARY KEY (id),
    INDEX idx_name (name)
);

CREATE INDEX idx_sku ON products (sku);
''')
        products = SchemaScanner(temp_dir).scan([path])[0]
        assert "idx_name" in products.indexes
        assert "idx_sku" in products.indexes

    def test_index_name_fallback(self):
        assert index_name("users", ["email", "org_id"]) == "users_email_org_id_idx"
        assert index_name("users", ["email"], "explicit") == "explicit"

    def test_valid_file_without_tables(self, temp_dir, project_file, caplog):
        path = project_file("queries.sql", "SELECT 1;\n")
        with caplog.at_level(logging.WARNING, logger="mcpgen"):
            resources = SchemaScanner(temp_dir).scan([path])
        assert resources == []
        assert _warnings(caplog) == []

    def test_empty_file_skipped_silently(self, temp_dir, project_file, caplog):
        path = project_file("empty.sql", "   \n\n")
        with caplog.at_level(logging.WARNING, logger="mcpgen"):
            resources = SchemaScanner(temp_dir).scan([path])
        assert resources == []
        assert _warnings(caplog) == []

    def test_unparseable_file_one_warning(self, temp_dir, project_file, sample_schema_file, caplog):
        broken = project_file("broken.sql", "CREATE TABLE broken (id INT")
        with caplog.at_level(logging.WARNING, logger="mcpgen"):
            resources = SchemaScanner(temp_dir).scan([broken, sample_schema_file])
        assert [r.name for r in resources] == ["users", "orders"]
        warnings = _warnings(caplog)
        assert len(warnings) == 1
        assert "broken.sql" in warnings[0].getMessage()

    def test_unmatched_file_warns_once_across_loggers(self, temp_dir, project_file, caplog):
        broken = project_file("mixed.sql", '''
CREATE FUNCTION touch_updated() RETURNS trigger AS $$
BEGIN
    NEW.updated_at = now();
    RETURN NEW;
END;
$$ LANGUAGE plpgsql;

CREATE TABLE half (id INT
''')
        with caplog.at_level(logging.WARNING):
            resources = SchemaScanner(temp_dir).scan([broken])
        assert resources == []
        warnings = _warnings(caplog)
        assert len(warnings) == 1
        assert warnings[0].name == "mcpgen.schema.scanner"
        assert "mixed.sql" in warnings[0].getMessage()

    def test_table_never_silently_dropped(self, temp_dir, project_file, caplog):
        path = project_file("notes.sql", "CREATE TABLE notes (id INTEGER PRIMARY KEY, body TEXT) WITHOUT ROWID;\n")
        with caplog.at_level(logging.WARNING):
            resources = SchemaScanner(temp_dir).scan([path])
        warnings = _warnings(caplog)
        assert all(r.name.startswith("mcpgen") for r in warnings)
        if resources:
            assert [r.name for r in resources] == ["notes"]
            assert resources[0].dialect != "mysql"
            assert warnings == []
        else:
            assert len(warnings) == 1
            assert "notes.sql" in warnings[0].getMessage()

    def test_parse_with_fallback_raises(self, temp_dir):
        with pytest.raises(SchemaParseError):
            SchemaScanner(temp_dir).parse_with_fallback("CREATE TABLE broken (id INT", "broken.sql")

    def test_fallback_to_next_dialect(self, temp_dir, project_file):
        path = project_file("tsql.sql", '''
CREATE TABLE [dbo].[users] (
    [id] INT IDENTITY(1,1) PRIMARY KEY,
    [name] NVARCHAR(100) NOT NULL
);
''')
        resources = SchemaScanner(temp_dir, dialects=("mysql", "mssql")).scan([path])
        assert [r.name for r in resources] == ["users"]
        assert resources[0].dialect == "mssql"
        assert not resources[0].columns["name"].nullable

    def test_configured_dialect_order(self, temp_dir, project_file):
        path = project_file("lite.sql", "CREATE TABLE notes (id INTEGER PRIMARY KEY AUTOINCREMENT);")
        resources = SchemaScanner(temp_dir, dialects=("sqlite",)).scan([path])
        assert resources[0].dialect == "sqlite"
        assert resources[0].columns["id"].auto_increment

    def test_missing_file_warns(self, temp_dir, caplog):
        with caplog.at_level(logging.WARNING, logger="mcpgen"):
            resources = SchemaScanner(temp_dir).scan([temp_dir / "gone.sql"])
        assert resources == []
        assert len(_warnings(caplog)) == 1

    def test_to_dict(self, temp_dir, sample_schema_file):
        data = SchemaScanner(temp_dir).scan([sample_schema_file])[0].to_dict()
        assert data["name"] == "users"
        assert data["columns"]["email"] == {
            "type": "varchar",
            "nullable": False,
            "primaryKey": False,
            "autoIncrement": False,
            "length": 255,
        }
        assert data["lastModified"].endswith("+00:00")
