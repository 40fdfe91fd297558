import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

os.environ.setdefault("ACR_ENVIRONMENT", "test")
os.environ.setdefault("ACR_DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ACR_LOG_JSON", "false")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from access_core.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

from access_core.core.database import SessionLocal, engine  # noqa: E402
from access_core.main import create_app  # noqa: E402
from access_core.models import Base  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client() -> TestClient:  # noqa: ANN001
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def enforce_authorization():
    settings = get_settings()
    settings.enforce_authorization = True
    yield settings
    settings.enforce_authorization = False


@pytest.fixture()
def db_session():
    session = SessionLocal()
    try:
        yield session
        session.commit()
    finally:
        session.close()


@pytest.fixture()
def file_session_factory(tmp_path):
    """Sessions on a file-backed database, each on its own connection."""

    file_engine = create_engine(f"sqlite:///{tmp_path / 'access.db'}", future=True)
    Base.metadata.create_all(bind=file_engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=file_engine, future=True)
    yield factory
    file_engine.dispose()
