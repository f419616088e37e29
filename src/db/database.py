import logging
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import settings

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str, echo: bool = False):
    # SQLite connections are used from FastAPI's threadpool
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, echo=echo, connect_args=connect_args, pool_pre_ping=True)


engine = create_db_engine(settings.database_url, echo=settings.sql_echo)

# Create a configured "Session" class
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error(f"Error in get_db during yield: {e}", exc_info=True)
        raise
    finally:
        db.close()
