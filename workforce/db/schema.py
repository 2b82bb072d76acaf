"""Schema creation for fresh databases (tests, local sample data)."""
from __future__ import annotations

from sqlalchemy.engine import Engine

from workforce.core.logger import get_logger
from workforce.models import Base

LOGGER = get_logger(__name__)


def create_schema(engine: Engine) -> None:
    """Create every mapped table that does not exist yet."""

    Base.metadata.create_all(engine)
    LOGGER.debug("Schema ready", extra={"tables": sorted(Base.metadata.tables)})


def drop_schema(engine: Engine) -> None:
    Base.metadata.drop_all(engine)
