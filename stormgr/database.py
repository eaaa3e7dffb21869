from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from stormgr.config import STORE_URL
from stormgr.models import Base


def make_engine(url: str = STORE_URL):
    """Build an engine for the store database; SQLite URLs get thread-safe settings."""
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return create_engine(url, pool_pre_ping=True)

    if parsed.database in (None, "", ":memory:"):
        # one shared connection, otherwise every session sees its own empty database
        return create_engine(url, connect_args={"check_same_thread": False}, poolclass=StaticPool)

    Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, connect_args={"check_same_thread": False})


def make_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine):
    Base.metadata.create_all(bind=engine)
