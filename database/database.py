from functools import lru_cache
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from core.config_loader import get_config

_database_url: Optional[str] = None


def configure_database(url: str) -> None:
    """Point the engine at a different database; takes effect on next use."""
    global _database_url
    _database_url = url
    get_engine.cache_clear()
    get_session_factory.cache_clear()


def get_database_url() -> str:
    # get_config() already applies the DATABASE_URL env override
    return _database_url or get_config().database.url


@lru_cache()
def get_engine() -> Engine:
    """Engine is built on first use so importing this module never connects."""
    return create_engine(get_database_url(), pool_pre_ping=True)


@lru_cache()
def get_session_factory() -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def SessionLocal():
    return get_session_factory()()

