from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from sqlalchemy.pool import StaticPool

from ..config import settings

DATABASE_URL = settings.database_url


class Base(DeclarativeBase):
    pass


def _engine_kwargs(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True}

    kwargs: dict = {"connect_args": {"check_same_thread": False}}  # needed for SQLite
    if url in ("sqlite://", "sqlite:///:memory:"):
        # one shared connection, otherwise every session sees an empty db
        kwargs["poolclass"] = StaticPool
    return kwargs


engine = create_engine(
    DATABASE_URL,
    echo=settings.sql_echo,
    **_engine_kwargs(DATABASE_URL),
)


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


if engine.dialect.name == "sqlite":
    @event.listens_for(engine, "connect")
    def _register_sqlite_functions(dbapi_conn, connection_record):
        # built-in lower() only folds ASCII; the unique index and ILIKE rely on it
        dbapi_conn.create_function("lower", 1, _unicode_lower, deterministic=True)


SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


# FastAPI dependency
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
