"""Database initialization utilities."""
from typing import Optional

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from hotelbook.core.logging import get_logger
from hotelbook.db.base import Base, import_models

logger = get_logger(__name__)


def _resolve(bind: Optional[Engine]) -> Engine:
    if bind is not None:
        return bind
    from hotelbook.db.session import engine
    return engine


def init_db(bind: Optional[Engine] = None) -> None:
    """
    Create any missing tables.

    Suitable for development and tests. Production schemas are managed
    with migrations.
    """
    bind = _resolve(bind)
    import_models()

    existing_tables = set(inspect(bind).get_table_names())
    missing = [t for t in Base.metadata.sorted_tables if t.name not in existing_tables]

    if not missing:
        logger.info(f"Database already initialized with {len(existing_tables)} tables")
        return

    Base.metadata.create_all(bind=bind)
    logger.info(f"Created {len(missing)} database tables")


def drop_db(bind: Optional[Engine] = None) -> None:
    """
    Drop all database tables.

    WARNING: This deletes all data.
    """
    Base.metadata.drop_all(bind=_resolve(bind))
    logger.warning("All database tables dropped")
