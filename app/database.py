# app/database.py
import logging
from contextlib import contextmanager
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, create_engine

from app.core.config import get_settings
from app.core.errors import StoreError

settings = get_settings()

logger = logging.getLogger(__name__)

# Repository root: holds alembic.ini and migrations/
BASE_DIR = Path(__file__).resolve().parent.parent
ALEMBIC_INI = BASE_DIR / "alembic.ini"

# ---------------------------------------------------------
# Postgres connection
#
# - sslmode is part of settings.database_url (DB_SSLMODE)
# - pool_pre_ping=True: validate connections before using them
#
# The engine's pool is shared by every request thread; sessions are not.
# ---------------------------------------------------------

engine = create_engine(
    settings.database_url,
    echo=False,        # set to True if you want to debug SQL queries
    pool_pre_ping=True,
)


def check_connection() -> None:
    """
    Open a connection and run a trivial query.

    Called once on application startup so a bad DB config fails fast.
    """
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def alembic_config(database_url: str | None = None) -> Config:
    """
    Build an Alembic config from alembic.ini for run_migrations().

    The URL defaults to settings.database_url; Alembic's file logging
    config is skipped so the service's logging setup stays in place.
    """
    cfg = Config(str(ALEMBIC_INI))
    cfg.set_main_option("script_location", str(BASE_DIR / "migrations"))
    cfg.set_main_option(
        "sqlalchemy.url",
        (database_url or settings.database_url).replace("%", "%%"),
    )
    cfg.attributes["configure_logger"] = False
    return cfg


def run_migrations(database_url: str | None = None) -> None:
    """
    Apply every pending versioned migration (alembic upgrade head).

    The schema is owned by migrations/versions; nothing here generates
    tables from the models.
    """
    logger.info("Applying database migrations")
    command.upgrade(alembic_config(database_url), "head")
    logger.info("Database schema is up to date")


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session


@contextmanager
def store_operation(session: Session, action: str):
    """
    Run repository work, turning SQLAlchemy failures into StoreError.

    The session is rolled back before the error propagates so it can be
    reused by the caller. `action` reads like "create product <id>".

        with store_operation(session, f"delete product {product_id}"):
            session.delete(product)
            session.commit()
    """
    try:
        yield session
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Store failure (%s): %s", action, exc)
        raise StoreError(f"failed to {action}: {exc}") from exc
