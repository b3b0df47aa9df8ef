"""Tests for query criteria parsing and date normalisation."""

from datetime import date, datetime, timedelta, timezone

import pytest

from nuleaf_api.app.core.config import settings
from nuleaf_api.app.core.dates import to_storage
from nuleaf_api.app.core.errors import CastError
from nuleaf_api.app.schemas.common import PageCriteria
from nuleaf_api.app.schemas.event import EventCriteria


def test_page_defaults():
    criteria = PageCriteria.from_query()

    assert criteria.skip == 0
    assert criteria.limit == settings.default_page_limit
    assert criteria.sort == 1
    assert criteria.sort_by is None


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("5", 5),
        ("2.7", 2),
        ("0", None),
        ("-3", None),
        ("many", None),
        ("", None),
        ("inf", None),
        ("-inf", None),
        ("1e30", None),
    ],
)
def test_limit_parsing(raw, expected):
    criteria = PageCriteria.from_query(limit=raw)

    assert criteria.limit == (expected if expected is not None else settings.default_page_limit)


@pytest.mark.parametrize(
    "raw, expected",
    [("10", 10), ("-4", 0), ("x", 0), ("inf", 0), ("-inf", 0), ("1e30", 0)],
)
def test_skip_parsing(raw, expected):
    assert PageCriteria.from_query(skip=raw).skip == expected


@pytest.mark.parametrize("raw, expected", [("-1", -1), ("1", 1), ("desc", 1), (None, 1)])
def test_sort_direction(raw, expected):
    assert PageCriteria.from_query(sort=raw).sort == expected


def test_blank_filters_are_unset():
    criteria = EventCriteria.from_query(title="  ", location="", start_date="", sort_by="")

    assert criteria.title is None
    assert criteria.location is None
    assert criteria.start_date is None
    assert criteria.sort_by is None


def test_dates_are_parsed():
    criteria = EventCriteria.from_query(start_date="2025-02-10", end_date="2025-03-01T12:00:00Z")

    assert criteria.start_date == datetime(2025, 2, 10)
    assert criteria.end_date == datetime(2025, 3, 1, 12, tzinfo=timezone.utc)


def test_unparseable_date_raises_cast_error():
    with pytest.raises(CastError) as excinfo:
        EventCriteria.from_query(end_date="whenever")

    assert excinfo.value.kind == "Date"
    assert excinfo.value.path == "end_date"
    assert excinfo.value.value == "whenever"


def test_to_storage_normalises_to_utc():
    offset = timezone(timedelta(hours=2))

    assert to_storage("2025-01-01T10:00:00Z") == "2025-01-01T10:00:00.000000+00:00"
    assert to_storage(datetime(2025, 1, 1, 12, tzinfo=offset)) == "2025-01-01T10:00:00.000000+00:00"
    assert to_storage(date(2025, 1, 1)) == "2025-01-01T00:00:00.000000+00:00"


def test_to_storage_rejects_garbage():
    with pytest.raises(ValueError):
        to_storage("not a date")


def test_space_before_offset_is_read_as_plus():
    criteria = EventCriteria.from_query(start_date="2025-09-01T10:00:00 02:00")

    assert to_storage(criteria.start_date) == "2025-09-01T08:00:00.000000+00:00"
