"""Shared fixtures: a migrated temporary database, DAOs bound to it and a test client."""

import pytest
from fastapi.testclient import TestClient

from nuleaf_api.app.api.v1.dependencies import get_event_dao, get_team_dao
from nuleaf_api.app.core.config import settings
from nuleaf_api.app.core.db import get_connection, init_db
from nuleaf_api.app.dao import EventDAO, TeamDAO
from nuleaf_api.app.main import app


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    """Temporary SQLite file with all migrations applied."""
    path = str(tmp_path / "nuleaf-test.db")
    monkeypatch.setattr(settings, "database_url", path)
    init_db(path)
    return path


@pytest.fixture
def event_dao(db_path):
    return EventDAO(connect=lambda: get_connection(db_path))


@pytest.fixture
def team_dao(db_path):
    return TeamDAO(connect=lambda: get_connection(db_path))


@pytest.fixture
def client(event_dao, team_dao):
    """Test client with DAOs pointed at the temporary database."""
    app.dependency_overrides[get_event_dao] = lambda: event_dao
    app.dependency_overrides[get_team_dao] = lambda: team_dao

    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
