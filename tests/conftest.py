"""Shared fixtures for PlantKeeper tests."""

import pytest
from fastapi.testclient import TestClient

from plantkeeper.core import config
from plantkeeper.core.config import Settings
from plantkeeper.core.garden import GardenService
from plantkeeper.core.storage import Storage
from plantkeeper.models import Base, create_session_factory


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'plantkeeper.db'}"


@pytest.fixture
def session_factory(database_url):
    engine, SessionFactory = create_session_factory(database_url)
    Base.metadata.create_all(bind=engine)
    yield SessionFactory
    engine.dispose()


@pytest.fixture
def storage(session_factory):
    return Storage(session_factory)


@pytest.fixture
def settings(database_url):
    return Settings(database_url=database_url, timezone="UTC")


@pytest.fixture
def garden(settings, session_factory):
    service = GardenService(settings, session_factory)
    service.initialize()
    return service


@pytest.fixture
def client(database_url, monkeypatch):
    monkeypatch.setenv("PLANTKEEPER_DATABASE_URL", database_url)
    monkeypatch.setenv("PLANTKEEPER_TIMEZONE", "UTC")
    monkeypatch.setattr(config, "_settings", None)

    from plantkeeper.api.main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client
