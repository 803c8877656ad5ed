import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import BigInteger, Integer, create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from store_admin.core.config import DatabaseConfig

logger = logging.getLogger(__name__)

Base = declarative_base()

# SQLite only autoincrements INTEGER PRIMARY KEY columns.
IdType = BigInteger().with_variant(Integer(), "sqlite")


def build_engine(db_config: DatabaseConfig) -> Engine:
    """
    Create the SQLAlchemy engine for the configured database.

    An in-memory SQLite URL gets a StaticPool so every session sees the
    same database; that is what the test-suite runs against.
    """
    url = db_config.url
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]

    if url.startswith("sqlite"):
        kwargs = {"echo": db_config.echo, "connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, **kwargs)

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            # SQLite ignores FOREIGN KEY clauses unless enabled per connection
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(
        url,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_recycle=db_config.pool_recycle,
        pool_pre_ping=True,
        echo=db_config.echo,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, expire_on_commit=False)


@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    """Commit on success, roll back on any error, always close."""
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(engine: Engine) -> None:
    """Create all tables known to Base.metadata."""
    # Importing the package registers every model with Base.metadata
    import store_admin.models  # noqa: F401

    Base.metadata.create_all(engine)
    logger.info("Database schema created")


if __name__ == "__main__":
    from store_admin.core.config import config

    logging.basicConfig(level=logging.INFO)
    init_db(build_engine(config.database))
