from functools import lru_cache
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from .settings import get_settings

# Define the base class that all models should inherit from
class Base(DeclarativeBase):
    pass

@lru_cache
def get_engine() -> Engine:
    # Built on first use so the memory backend never needs a database driver
    return create_engine(get_settings().DATABASE_URL, pool_pre_ping=True)

# Session factory
def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)
