"""Pytest configuration and fixtures."""
import uuid
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from worksheet_viewer.core.config import Settings
from worksheet_viewer.core.db import connect_store, create_session_factory, create_store_engine
from worksheet_viewer.db.base import Base
from worksheet_viewer.db.models import Worksheet
from worksheet_viewer.db.repositories import WorksheetRepository
from worksheet_viewer.domains.worksheets.normalization import format_timestamp
from worksheet_viewer.domains.worksheets.services import WorksheetService
from worksheet_viewer.main import create_app

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def days_ago(days: int, now: datetime = NOW) -> str:
    return format_timestamp(now - timedelta(days=days))


@pytest.fixture
async def session():
    """Async session over an in-memory SQLite store."""
    engine = create_store_engine("sqlite+aiosqlite:///:memory:")
    await connect_store(engine)
    session_factory = create_session_factory(engine)

    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def repository(session):
    return WorksheetRepository(session)


@pytest.fixture
def service(session):
    return WorksheetService(session)


@pytest.fixture
def store_path(tmp_path):
    """Temporary SQLite file shared by the seeding engine and the app."""
    path = tmp_path / "worksheets.db"
    engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(engine)
    engine.dispose()
    return path


@pytest.fixture
def seed(store_path):
    """Insert raw documents synchronously; returns their ids in order."""
    def _seed(*documents):
        engine = create_engine(f"sqlite:///{store_path}")
        ids = []
        with Session(engine) as db:
            for document in documents:
                worksheet_uuid = uuid.uuid4()
                db.add(Worksheet(uuid=worksheet_uuid, document=dict(document)))
                ids.append(str(worksheet_uuid))
            db.commit()
        engine.dispose()
        return ids
    return _seed


@pytest.fixture
def app(store_path):
    return create_app(Settings(database_url=f"sqlite+aiosqlite:///{store_path}"))


@pytest.fixture
def client(app):
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
