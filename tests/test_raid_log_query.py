"""Tests for raid-log visibility and query filters."""

from __future__ import annotations

from datetime import date

import pytest

from core.raid_logs import LogQuery, annotate_alerts, fetch_raid_logs


@pytest.fixture
def world(make):
    """Two users with a mix of public / private / anonymous logs."""
    u1 = make.user(username="u1")
    u2 = make.user(username="u2")
    cape = make.region(name="Western Cape", country="South Africa")
    algarve = make.region(name="Algarve", country="Portugal", continent="Europe")
    muizenberg = make.beach(cape, name="Muizenberg")
    arrifana = make.beach(algarve, name="Arrifana")

    logs = {
        "u1_public": make.log(u1, muizenberg, date(2024, 6, 1), surfer_rating=4),
        "u1_private": make.log(u1, muizenberg, date(2024, 6, 2), is_private=True),
        "u1_anon": make.log(u1, arrifana, date(2024, 6, 3), is_anonymous=True),
        "u2_public": make.log(u2, arrifana, date(2024, 6, 10), surfer_rating=2),
        "u2_private": make.log(u2, arrifana, date(2024, 6, 11), is_private=True),
        "u2_anon": make.log(u2, muizenberg, date(2024, 6, 12), is_anonymous=True),
        "u2_late": make.log(u2, muizenberg, date(2024, 6, 20), surfer_rating=5),
    }
    return dict(u1=u1, u2=u2, cape=cape, algarve=algarve, logs=logs)


def _ids(world, entries):
    names = {entry.id: name for name, entry in world["logs"].items()}
    return [names[entry.id] for entry in entries]


def _visible(entry, caller_id):
    return (not entry.is_private and not entry.is_anonymous) or entry.user_id == caller_id


def test_anonymous_caller_sees_only_public_logs_newest_first(db, world):
    entries = fetch_raid_logs(db, LogQuery(), caller_id=None)
    assert _ids(world, entries) == ["u2_late", "u2_public", "u1_public"]


def test_authenticated_caller_also_sees_own_logs(db, world):
    entries = fetch_raid_logs(db, LogQuery(), caller_id=world["u1"].id)
    assert _ids(world, entries) == ["u2_late", "u2_public", "u1_anon", "u1_private", "u1_public"]


def test_viewing_other_user_shows_only_their_public_logs(db, world):
    query = LogQuery(user_id=world["u2"].id)
    entries = fetch_raid_logs(db, query, caller_id=world["u1"].id)
    assert _ids(world, entries) == ["u2_late", "u2_public"]


def test_viewing_own_profile_shows_everything(db, world):
    query = LogQuery(user_id=world["u2"].id)
    entries = fetch_raid_logs(db, query, caller_id=world["u2"].id)
    assert _ids(world, entries) == ["u2_late", "u2_anon", "u2_private", "u2_public"]


def test_private_only_for_authenticated_caller(db, world):
    entries = fetch_raid_logs(db, LogQuery(private_only=True), caller_id=world["u1"].id)
    assert _ids(world, entries) == ["u1_private"]


def test_private_only_ignored_for_anonymous_caller(db, world):
    entries = fetch_raid_logs(db, LogQuery(private_only=True), caller_id=None)
    assert _ids(world, entries) == ["u2_late", "u2_public", "u1_public"]


def test_private_only_never_exposes_other_users(db, world):
    query = LogQuery(private_only=True, user_id=world["u2"].id)
    entries = fetch_raid_logs(db, query, caller_id=world["u1"].id)
    assert _ids(world, entries) == ["u2_late", "u2_public"]


@pytest.mark.parametrize("private_only", [False, True])
@pytest.mark.parametrize("target", [None, "u1", "u2"])
@pytest.mark.parametrize("caller", [None, "u1", "u2"])
def test_visibility_rule_always_holds(db, world, caller, target, private_only):
    caller_id = world[caller].id if caller else None
    query = LogQuery(user_id=world[target].id if target else None, private_only=private_only)
    for entry in fetch_raid_logs(db, query, caller_id):
        assert _visible(entry, caller_id)


def test_end_date_is_inclusive(db, world):
    query = LogQuery(start_date=date(2024, 6, 1), end_date=date(2024, 6, 10))
    entries = fetch_raid_logs(db, query, caller_id=None)
    assert _ids(world, entries) == ["u2_public", "u1_public"]


def test_start_date_is_inclusive(db, world):
    entries = fetch_raid_logs(db, LogQuery(start_date=date(2024, 6, 10)), caller_id=None)
    assert _ids(world, entries) == ["u2_late", "u2_public"]


def test_rating_bounds(db, world):
    assert _ids(world, fetch_raid_logs(db, LogQuery(min_rating=4), None)) == ["u2_late", "u1_public"]
    assert _ids(world, fetch_raid_logs(db, LogQuery(max_rating=3), None)) == ["u2_public"]
    assert _ids(world, fetch_raid_logs(db, LogQuery(min_rating=3, max_rating=4), None)) == ["u1_public"]


def test_beach_region_and_country_filters(db, world):
    by_beach = fetch_raid_logs(db, LogQuery(beaches=["Arrifana"]), None)
    assert _ids(world, by_beach) == ["u2_public"]

    by_region = fetch_raid_logs(db, LogQuery(regions=[world["cape"].id]), None)
    assert _ids(world, by_region) == ["u2_late", "u1_public"]

    by_country = fetch_raid_logs(db, LogQuery(countries=["Portugal", "Spain"]), None)
    assert _ids(world, by_country) == ["u2_public"]


def test_pagination(db, world):
    caller_id = world["u1"].id
    first = fetch_raid_logs(db, LogQuery(page=1, limit=2), caller_id)
    second = fetch_raid_logs(db, LogQuery(page=2, limit=2), caller_id)
    third = fetch_raid_logs(db, LogQuery(page=3, limit=2), caller_id)

    assert _ids(world, first) == ["u2_late", "u2_public"]
    assert _ids(world, second) == ["u1_anon", "u1_private"]
    assert _ids(world, third) == ["u1_public"]


def test_offset():
    assert LogQuery().offset == 0
    assert LogQuery(page=3, limit=50).offset == 100


def test_annotate_alerts(db, make, world):
    entry = world["logs"]["u2_public"]
    first = make.alert(world["u1"], entry, name="first")
    make.alert(world["u2"], entry, name="second")

    [loaded] = fetch_raid_logs(db, LogQuery(beaches=["Arrifana"]), None)

    assert annotate_alerts(loaded, world["u2"].id) == {
        "has_alert": True,
        "alert_id": first.id,
        "is_my_alert": True,
    }
    assert annotate_alerts(loaded, None)["is_my_alert"] is False


def test_annotate_without_alerts(db, world):
    [loaded] = fetch_raid_logs(db, LogQuery(beaches=["Arrifana"]), None)
    assert annotate_alerts(loaded, world["u1"].id) == {
        "has_alert": False,
        "alert_id": None,
        "is_my_alert": False,
    }
