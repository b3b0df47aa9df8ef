"""Unit tests for the event and team DAOs."""

import asyncio
import sqlite3

import pytest

from nuleaf_api.app.core.errors import CastError, DocumentValidationError, PersistenceError
from nuleaf_api.app.dao import EventDAO
from nuleaf_api.app.dao.base import filter_out_empty
from nuleaf_api.app.schemas.event import EventCriteria
from nuleaf_api.app.schemas.team import TeamCriteria


def run(coro):
    return asyncio.run(coro)


def test_filter_out_empty_drops_none_and_blank():
    data = {"title": "", "date": None, "location": "Barn", "count": 0}

    assert filter_out_empty(data) == {"location": "Barn", "count": 0}


def test_create_and_get_event(event_dao):
    created = run(event_dao.create({"title": "Harvest", "date": "2025-10-01", "location": "Field"}))

    fetched = run(event_dao.get(created.id))

    assert fetched == created
    assert fetched.date.tzinfo is not None


def test_get_accepts_numeric_string_id(event_dao):
    created = run(event_dao.create({"title": "Harvest", "date": "2025-10-01"}))

    assert run(event_dao.get(str(created.id))) == created


def test_create_ignores_unknown_fields(event_dao):
    created = run(event_dao.create({"title": "Harvest", "date": "2025-10-01", "colour": "green"}))

    assert created.title == "Harvest"
    assert created.location is None


def test_create_requires_title_and_date(event_dao):
    with pytest.raises(DocumentValidationError) as excinfo:
        run(event_dao.create({"location": "Field"}))

    assert excinfo.value.missing == ["title", "date"]
    assert run(event_dao.count()) == 0


def test_get_missing_returns_none(event_dao):
    assert run(event_dao.get(99)) is None


@pytest.mark.parametrize("raw", ["abc", "-1", "1.5", "", None, "99999999999999999999999", 2**63])
def test_malformed_ids_raise_cast_error(event_dao, raw):
    with pytest.raises(CastError):
        run(event_dao.get(raw))


def test_find_with_default_criteria(event_dao):
    for day in (1, 2, 3):
        run(event_dao.create({"title": f"Day {day}", "date": f"2025-06-0{day}"}))

    assert len(run(event_dao.find())) == 3


def test_find_respects_limit_and_sort(event_dao):
    for day in (1, 2, 3):
        run(event_dao.create({"title": f"Day {day}", "date": f"2025-06-0{day}"}))

    criteria = EventCriteria.from_query(sort_by="title", sort="-1", limit="2")
    titles = [event.title for event in run(event_dao.find(criteria))]

    assert titles == ["Day 3", "Day 2"]


def test_update_without_changes_returns_current(event_dao):
    created = run(event_dao.create({"title": "Harvest", "date": "2025-10-01"}))

    assert run(event_dao.update(created.id, {"title": None})) == created


def test_update_missing_returns_none(event_dao):
    assert run(event_dao.update(99, {"title": "Nope"})) is None


def test_update_with_bad_date_raises_cast_error(event_dao):
    created = run(event_dao.create({"title": "Harvest", "date": "2025-10-01"}))

    with pytest.raises(CastError) as excinfo:
        run(event_dao.update(created.id, {"date": "soon"}))

    assert excinfo.value.path == "date"


def test_delete_is_silent_for_missing_ids(event_dao):
    assert run(event_dao.delete(99)) is None


def test_driver_errors_become_persistence_errors(tmp_path):
    # A database without migrations has no events table.
    path = str(tmp_path / "empty.db")
    dao = EventDAO(connect=lambda: _plain_connection(path))

    with pytest.raises(PersistenceError):
        run(dao.count())


def _plain_connection(path):
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    return conn


def test_team_find_by_name_returns_first_match(team_dao):
    first = run(team_dao.create({"name": "Seed Keepers"}))
    run(team_dao.create({"name": "Seed Keepers"}))

    assert run(team_dao.find_by_name("Seed Keepers")) == first
    assert run(team_dao.find_by_name("Seed")) is None


def test_team_find_by_regex(team_dao):
    run(team_dao.create({"name": "Seed Keepers"}))
    run(team_dao.create({"name": "Compost Crew"}))

    found = run(team_dao.find(TeamCriteria.from_query(name="^seed")))

    assert [team.name for team in found] == ["Seed Keepers"]


def test_team_update_and_delete(team_dao):
    team = run(team_dao.create({"name": "Seed Keepers"}))

    updated = run(team_dao.update(team.id, {"name": "Seed Guardians"}))
    run(team_dao.delete(team.id))

    assert updated.name == "Seed Guardians"
    assert run(team_dao.get(team.id)) is None
