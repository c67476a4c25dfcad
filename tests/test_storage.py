from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from Records import storage


def _person(badge, **extra):
    return {"badge_number": badge, "first_name": "Efua", "last_name": "Asante",
            "rank": "Constable", "unit": "Patrol", **extra}


def test_create_and_get_personnel(db):
    person = storage.create_personnel(db, _person("B100"))
    assert person.id is not None
    assert storage.get_personnel_by_id(db, person.id).badge_number == "B100"


def test_duplicate_badge_raises_and_session_stays_usable(db):
    storage.create_personnel(db, _person("B100"))
    with pytest.raises(IntegrityError):
        storage.create_personnel(db, _person("B100"))

    storage.create_personnel(db, _person("B101"))
    assert len(storage.get_all_personnel(db)) == 2


def test_update_bumps_updated_at(db):
    person = storage.create_personnel(db, _person("B100"))
    before = person.updated_at

    updated = storage.update_personnel(db, person.id, {"unit": "Traffic"})

    assert updated.unit == "Traffic"
    assert updated.updated_at >= before


def test_update_and_delete_missing_rows(db):
    assert storage.update_case(db, 42, {"title": "x"}) is None
    assert storage.delete_case(db, 42) is False


def test_get_all_is_newest_first(db):
    first = storage.create_personnel(db, _person("B100"))
    second = storage.create_personnel(db, _person("B101"))
    assert [p.id for p in storage.get_all_personnel(db)] == [second.id, first.id]


def test_search_cases_is_case_insensitive(db):
    storage.create_case(db, {"case_number": "CASE-9", "title": "Armed Robbery", "type": "robbery"})
    storage.create_case(db, {"case_number": "CASE-10", "title": "Lost goat", "type": "other",
                             "description": "Goat wandered off"})

    assert [c.case_number for c in storage.search_cases(db, "robbery")] == ["CASE-9"]
    assert [c.case_number for c in storage.search_cases(db, "case-1")] == ["CASE-10"]
    assert storage.search_cases(db, "nothing") == []


def test_dashboard_stats_counts(db):
    storage.create_personnel(db, _person("B100"))
    storage.create_personnel(db, _person("B101"))
    storage.create_case(db, {"case_number": "C1", "title": "t", "type": "theft"})
    storage.create_case(db, {"case_number": "C2", "title": "t", "type": "theft", "status": "closed"})
    storage.create_duty(db, {"title": "d", "start_time": datetime(2024, 1, 1, 8),
                             "end_time": datetime(2024, 1, 1, 16), "status": "in_progress"})
    storage.create_alert(db, {"title": "a", "message": "m", "type": "info"})

    assert storage.get_dashboard_stats(db) == {
        "total_personnel": 2, "active_cases": 1, "pending_duties": 0, "active_alerts": 1,
    }


def test_user_lookup_by_email(db):
    user = storage.create_user(db, {"email": "abena@police.gov.gh", "first_name": "Abena",
                                    "last_name": "Darko", "password": "x"})
    assert user.role == "personnel"
    assert storage.get_user_by_email(db, "abena@police.gov.gh").id == user.id
    assert storage.get_user_by_email(db, "ABENA@police.gov.gh") is None


def test_search_cases_escapes_like_wildcards(db):
    storage.create_case(db, {"case_number": "CASE_A", "title": "Fraud", "type": "fraud"})
    storage.create_case(db, {"case_number": "CASE-B", "title": "Fraud", "type": "fraud"})

    assert [c.case_number for c in storage.search_cases(db, "case_")] == ["CASE_A"]
    assert storage.search_cases(db, "%%") == []


def test_times_come_back_as_utc(db):
    duty = storage.create_duty(db, {
        "title": "d", "start_time": datetime(2024, 1, 1, 10, tzinfo=timezone(timedelta(hours=2))),
        "end_time": datetime(2024, 1, 1, 16)})
    db.expire_all()

    fetched = storage.get_duty_by_id(db, duty.id)
    assert fetched.start_time == datetime(2024, 1, 1, 8, tzinfo=timezone.utc)
    assert fetched.start_time.tzinfo is not None
    assert fetched.end_time == datetime(2024, 1, 1, 16, tzinfo=timezone.utc)
    assert fetched.created_at.utcoffset() == timedelta(0)


def test_duty_status_leaves_location_unless_given(db):
    person = storage.create_personnel(db, _person("B100", current_location="Harbour"))

    assert storage.update_personnel_duty_status(db, person.id, True).current_location == "Harbour"
    assert storage.update_personnel_duty_status(db, person.id, False, None).current_location is None


def test_delete_referenced_personnel_raises(db):
    person = storage.create_personnel(db, _person("B100"))
    storage.create_case(db, {"case_number": "C1", "title": "t", "type": "theft", "assigned_to": person.id})

    with pytest.raises(IntegrityError):
        storage.delete_personnel(db, person.id)
    assert storage.get_personnel_by_id(db, person.id) is not None
