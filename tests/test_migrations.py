"""Tests for the versioned Alembic migrations."""

import io
import re

from alembic import command
from alembic.autogenerate import compare_metadata
from alembic.migration import MigrationContext
from sqlalchemy import create_engine, inspect
from sqlalchemy.dialects import postgresql
from sqlmodel import SQLModel

from app.database import alembic_config, run_migrations

CATALOG_TABLES = {"products", "product_details", "subscription_plans"}


def _postgres_column_ddl() -> dict[str, set[str]]:
    """
    Render the migrations as Postgres DDL (offline mode, no server needed)
    and return the column definitions of each CREATE TABLE, e.g.
    {"products": {"id UUID NOT NULL", "kind VARCHAR(20)", ...}}.
    """
    cfg = alembic_config("postgresql+psycopg2://catalog@localhost/catalog")
    buffer = io.StringIO()
    cfg.output_buffer = buffer
    command.upgrade(cfg, "head", sql=True)

    tables: dict[str, set[str]] = {}
    for match in re.finditer(r"CREATE TABLE (\w+) \((.*?)\n\);", buffer.getvalue(), re.S):
        lines = (line.strip().rstrip(",").strip() for line in match.group(2).splitlines())
        tables[match.group(1)] = {line for line in lines if line}
    return tables


def test_upgrade_creates_catalog_schema(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'catalog.db'}"

    run_migrations(url)

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        assert CATALOG_TABLES <= set(inspector.get_table_names())

        for table in CATALOG_TABLES:
            migrated = {c["name"] for c in inspector.get_columns(table)}
            declared = set(SQLModel.metadata.tables[table].columns.keys())
            assert migrated == declared, table

        detail_indexes = {
            ix["name"]: ix for ix in inspector.get_indexes("product_details")
        }
        assert detail_indexes["ix_product_details_product_id"]["unique"]

        fks = inspector.get_foreign_keys("product_details")
        assert len(fks) == 1
        assert fks[0]["referred_table"] == "products"
        assert fks[0]["constrained_columns"] == ["product_id", "kind"]

        assert inspector.get_foreign_keys("subscription_plans") == []
    finally:
        engine.dispose()


def test_migrated_schema_matches_models(tmp_path) -> None:
    """Autogenerate finds nothing left to do after upgrade head."""
    url = f"sqlite:///{tmp_path / 'catalog.db'}"
    run_migrations(url)

    engine = create_engine(url)
    try:
        with engine.connect() as conn:
            context = MigrationContext.configure(conn, opts={"compare_type": False})
            diff = compare_metadata(context, SQLModel.metadata)
    finally:
        engine.dispose()

    assert diff == []


def test_migration_column_types_match_models_on_postgres() -> None:
    """Every column has the same Postgres type and nullability as its model."""
    dialect = postgresql.dialect()
    migrated = _postgres_column_ddl()

    assert CATALOG_TABLES <= set(migrated)
    for table_name in CATALOG_TABLES:
        table = SQLModel.metadata.tables[table_name]
        for column in table.columns:
            expected = f"{column.name} {column.type.compile(dialect=dialect)}"
            if not column.nullable:
                expected += " NOT NULL"
            assert expected in migrated[table_name], (table_name, expected)


def test_timestamps_are_timezone_aware_on_postgres() -> None:
    products = _postgres_column_ddl()["products"]

    assert "created_at TIMESTAMP WITH TIME ZONE NOT NULL" in products
    assert "updated_at TIMESTAMP WITH TIME ZONE NOT NULL" in products


def test_upgrade_is_repeatable_and_downgrade_drops_tables(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'catalog.db'}"

    run_migrations(url)
    run_migrations(url)
    command.downgrade(alembic_config(url), "base")

    engine = create_engine(url)
    try:
        remaining = set(inspect(engine).get_table_names())
        assert not (CATALOG_TABLES & remaining)
    finally:
        engine.dispose()
