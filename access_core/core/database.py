"""Database engine and session management."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator
from urllib.parse import urlparse

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from access_core.core.config import get_settings


def _ensure_sqlite_directory(database_url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""

    parsed = urlparse(database_url)
    if parsed.scheme != "sqlite":
        return
    if parsed.path in ("", ":memory:", "/:memory:"):
        return

    # sqlite:///./data/access.db parses to "/./data/access.db"
    db_path = Path(parsed.path[1:] if parsed.path.startswith("/.") else parsed.path)
    db_path.expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)


def _create_engine() -> Engine:
    settings = get_settings()
    url = settings.database_url
    if url.startswith("sqlite"):
        _ensure_sqlite_directory(url)
        engine_kwargs: dict[str, object] = {
            "future": True,
            "echo": settings.sql_echo,
            "connect_args": {"check_same_thread": False},
        }
        if url.endswith(":memory:") or url == "sqlite://":
            engine_kwargs["poolclass"] = StaticPool
        return create_engine(url, **engine_kwargs)

    return create_engine(
        url,
        future=True,
        echo=settings.sql_echo,
        pool_pre_ping=True,
    )


engine: Engine = _create_engine()

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    future=True,
    class_=Session,
)


def get_session() -> Iterator[Session]:
    """FastAPI dependency for acquiring a database session."""

    session: Session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@contextmanager
def session_scope() -> Iterator[Session]:
    """Provide a transactional scope for scripts and startup hooks."""

    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
