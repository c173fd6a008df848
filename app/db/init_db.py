"""
Database initialization.

Creates all tables.
"""

import logging

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

from app.db.session import engine as default_engine

logger = logging.getLogger(__name__)


def init_db(engine: Engine = default_engine) -> None:
    """Create every SQLModel table that does not exist yet."""

    # Import all models so SQLModel.metadata has them
    from app.models.plan import SavedPlan  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Database tables created (%s)", engine.url)


if __name__ == "__main__":
    init_db()
