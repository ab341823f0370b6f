import os
import logging
from sqlalchemy import create_engine
from sqlmodel import Session

logger = logging.getLogger(__name__)


def _get_database_url_from_env_vars():
    DB_SCHEME = os.getenv("DB_SCHEME", "postgresql")
    DB_USER = os.getenv("DB_USER", "postgres")
    DB_PASSWORD = os.getenv("DB_PASSWORD", "postgres")
    DB_HOST = os.getenv("DB_HOST", "db")
    DB_PORT = os.getenv("DB_PORT", "5432")
    DB_NAME = os.getenv("DB_NAME", "iuran")
    return f"{DB_SCHEME}://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"


def get_database_url():
    url = os.getenv("DATABASE_URL", _get_database_url_from_env_vars())
    logger.debug(f"Using database at {url.split('@')[-1]}")
    return url


DATABASE_URL = get_database_url()

# The engine connects lazily, so importing this module never opens a connection
engine = create_engine(
    DATABASE_URL,
    echo=os.getenv("ENV") not in ("production", "test"),
)


def get_db():
    with Session(engine) as session:
        yield session
