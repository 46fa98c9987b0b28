from __future__ import annotations

from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import get_settings


Base = declarative_base()


def _is_memory_sqlite(db_url: str) -> bool:
    return db_url in ("sqlite://", "sqlite:///:memory:")


def _ensure_parent_directory(db_url: str) -> None:
    if db_url.startswith("sqlite:") and not _is_memory_sqlite(db_url):
        # sqlite:///relative/path.db or sqlite:////abs/path.db
        file_path = db_url.split("sqlite:///")[-1]
        parent = Path(file_path).parent
        parent.mkdir(parents=True, exist_ok=True)


def get_engine():
    settings = get_settings()
    db_url = settings.database_url
    if not db_url.startswith("sqlite:"):
        return create_engine(db_url, pool_pre_ping=True)
    _ensure_parent_directory(db_url)
    if _is_memory_sqlite(db_url):
        # one shared connection, otherwise every thread sees an empty database
        return create_engine(db_url, connect_args={"check_same_thread": False}, poolclass=StaticPool)
    return create_engine(db_url, connect_args={"check_same_thread": False})


engine = get_engine()


if engine.dialect.name == "sqlite":

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragmas(dbapi_connection, connection_record):  # type: ignore[no-redef]
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON;")
        cursor.execute("PRAGMA synchronous=NORMAL;")
        cursor.close()


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
