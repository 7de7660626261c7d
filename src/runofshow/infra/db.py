from collections.abc import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.schema import MetaData

from runofshow.infra.settings import settings

# Deterministic constraint/index names (prevents Alembic churn)
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


def _engine_kwargs(url: str) -> dict[str, object]:
    kwargs: dict[str, object] = {"pool_pre_ping": True, "future": True}
    if "postgresql" in url:
        kwargs.update(
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
            pool_timeout=settings.pool_timeout,
            connect_args={"connect_timeout": settings.connect_timeout},
        )
    elif "sqlite" in url:
        kwargs["connect_args"] = {"check_same_thread": False, "timeout": settings.connect_timeout}
    return kwargs


def _install_listeners(target: Engine) -> None:
    if target.dialect.name == "sqlite":

        @event.listens_for(target, "connect")
        def _sqlite_connect(dbapi_conn, _):
            # Hand transaction control to SQLAlchemy so SAVEPOINT works
            dbapi_conn.isolation_level = None
            cursor = dbapi_conn.cursor()
            # SQLite ignores ON DELETE CASCADE unless asked per connection
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        @event.listens_for(target, "begin")
        def _sqlite_begin(conn):
            # Write lock taken at BEGIN; other writers wait out the busy timeout
            conn.exec_driver_sql("BEGIN IMMEDIATE")

    elif target.dialect.name == "postgresql":

        @event.listens_for(target, "connect")
        def _set_search_path(dbapi_conn, _):
            with dbapi_conn.cursor() as cur:
                cur.execute("SET search_path TO public")


engine = create_engine(settings.database_url, echo=settings.echo_sql, **_engine_kwargs(settings.database_url))
_install_listeners(engine)


SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    future=True,
)


def get_engine(db_url: str | None = None, for_test: bool = False) -> Engine:
    """Get or create a database engine.

    If ``for_test`` is True and ``settings.test_database_url`` is set, that URL is used.
    Otherwise falls back to the provided ``db_url`` or the default ``settings.database_url``.
    Returns the global engine when using the default, to avoid unnecessary engine creation.
    """
    if for_test and settings.test_database_url:
        chosen_url = settings.test_database_url
    else:
        chosen_url = db_url or settings.database_url

    if not db_url and not for_test and chosen_url == settings.database_url:
        return engine

    new_engine = create_engine(chosen_url, echo=False, **_engine_kwargs(chosen_url))
    _install_listeners(new_engine)
    return new_engine


def get_sessionmaker(for_test: bool = False) -> sessionmaker:
    """Get a session factory.

    Returns the global sessionmaker for default usage. When ``for_test`` is True,
    returns a temporary sessionmaker bound to a test engine.
    """
    if not for_test:
        return SessionLocal
    test_engine = get_engine(for_test=True)
    return sessionmaker(bind=test_engine, autoflush=False, autocommit=False, future=True)


def get_session(for_test: bool = False) -> Generator[Session, None, None]:
    """Get a database session for dependency injection."""
    if for_test:
        SessionForContext = get_sessionmaker(for_test=True)
        db = SessionForContext()
    else:
        db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
