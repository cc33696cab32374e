"""Database configuration and session management."""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .core.config import Settings, get_settings


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


def build_engine(settings: Settings) -> Engine:
    """Create the engine with database-specific tuning."""
    url = settings.database_url
    if not url.startswith("sqlite"):
        # PostgreSQL: connection pool sized for typical web workloads.
        return create_engine(
            url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=settings.db_pool_recycle,
            # Detects stale connections before use (prevents "server closed the connection" errors).
            pool_pre_ping=True,
        )

    kwargs = {"connect_args": {"check_same_thread": False}}
    if _is_memory_sqlite(url):
        # One shared connection, otherwise every checkout sees an empty database.
        kwargs["poolclass"] = StaticPool
    sqlite_engine = create_engine(url, **kwargs)

    # SQLite defaults foreign_keys to OFF, and pysqlite only emits BEGIN
    # lazily before DML. Take over transaction control so every unit of work
    # (reads included) runs in one real transaction and SAVEPOINT works.
    @event.listens_for(sqlite_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(sqlite_engine, "begin")
    def _do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return sqlite_engine


engine = build_engine(get_settings())

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create base class for models
Base = declarative_base()


def init_db(bind: Engine = None) -> None:
    """Create all tables that do not exist yet."""
    from . import models  # noqa: F401  (registers the mappers on Base)

    Base.metadata.create_all(bind=bind or engine)


def begin_serializable(db: Session) -> None:
    """Open the session's transaction at SERIALIZABLE isolation.

    Must run before the first query of a read-evaluate-write unit. SQLite
    transactions are already serializable, so only PostgreSQL needs the
    explicit isolation level.
    """
    if db.in_transaction():
        return
    if db.get_bind().dialect.name == "postgresql":
        db.connection(execution_options={"isolation_level": "SERIALIZABLE"})


def get_db():
    """Dependency for FastAPI routes to get database session.

    Rolls back the transaction on unhandled exceptions so that the
    connection is returned to the pool in a clean state.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
