from datetime import datetime
from types import SimpleNamespace

import pytest

from services.attendance_rules import (
    AttendancePatch,
    AttendanceRules,
    day_window,
    merge_attendance,
    parse_instant,
)
from services.attendance_service import AttendanceService
from services.attendance_store import AttendanceFilter
from services.exceptions import (
    DuplicateRecord,
    InvalidField,
    LimitExceeded,
    MissingField,
    NotFound,
    StoreFailure,
)

S1, S2 = 1, 2
SUBJ1, SUBJ2 = 10, 20


def _day_count(store, student_id, subject_id, day):
    start, end = day_window(day)
    return store.count(
        AttendanceFilter(student_id=student_id, subject_id=subject_id, date_from=start, date_to=end)
    )


@pytest.fixture
def service(fake_store):
    return AttendanceService(fake_store)


@pytest.fixture
def full_day(fake_store):
    """(S1, SUBJ1, 2024-01-10)에 기록 4건"""
    return [
        fake_store.add(S1, SUBJ1, datetime(2024, 1, 10, hour))
        for hour in (9, 10, 11, 12)
    ]


def test_day_window_covers_whole_calendar_day():
    start, end = day_window(datetime(2024, 1, 10, 15, 30))
    assert start == datetime(2024, 1, 10, 0, 0, 0)
    assert end == datetime(2024, 1, 10, 23, 59, 59, 999000)


def test_parse_instant_accepts_date_only_and_converts_aware_values():
    from zoneinfo import ZoneInfo

    assert parse_instant("2024-01-10") == datetime(2024, 1, 10)
    assert parse_instant("2024-01-10T09:00:00") == datetime(2024, 1, 10, 9)
    # 2024-01-10 20:00 UTC → 2024-01-11 05:00 서울
    assert parse_instant("2024-01-10T20:00:00Z", ZoneInfo("Asia/Seoul")) == datetime(2024, 1, 11, 5)


def test_parse_instant_truncates_to_milliseconds():
    assert parse_instant("2024-01-10T23:59:59.999999") == datetime(2024, 1, 10, 23, 59, 59, 999000)
    assert parse_instant(datetime(2024, 1, 10, 9, 0, 0, 123456)) == datetime(2024, 1, 10, 9, 0, 0, 123000)


def test_parse_instant_rejects_garbage():
    with pytest.raises(InvalidField):
        parse_instant("yesterday-ish")


def test_create_persists_full_instant(service, fake_store):
    record = service.create(student_id=S1, subject_id=SUBJ1, date="2024-01-10T09:15:30", status="PRESENT")

    assert record.date == datetime(2024, 1, 10, 9, 15, 30)
    assert record.status == "PRESENT"
    assert fake_store.count(AttendanceFilter()) == 1


def test_create_normalizes_status_case(service):
    record = service.create(student_id=S1, subject_id=SUBJ1, date="2024-01-10T09:00:00", status="absent")
    assert record.status == "ABSENT"


@pytest.mark.parametrize("missing", ["student_id", "subject_id", "date", "status"])
def test_create_requires_every_field(service, fake_store, missing):
    payload = {"student_id": S1, "subject_id": SUBJ1, "date": "2024-01-10", "status": "PRESENT"}
    payload[missing] = "" if missing in ("date", "status") else None

    with pytest.raises(MissingField) as exc:
        service.create(**payload)

    assert exc.value.fields == [missing]
    assert fake_store.writes == 0


def test_create_rejects_unknown_status(service, fake_store):
    with pytest.raises(InvalidField):
        service.create(student_id=S1, subject_id=SUBJ1, date="2024-01-10", status="LATE")
    assert fake_store.writes == 0


def test_fifth_record_on_same_day_is_rejected(service, fake_store, full_day):
    writes_before = fake_store.writes

    with pytest.raises(LimitExceeded) as exc:
        service.create(student_id=S1, subject_id=SUBJ1, date="2024-01-10T15:00:00", status="ABSENT")

    assert "Maximum 4" in exc.value.message
    assert fake_store.writes == writes_before
    assert _day_count(fake_store, S1, SUBJ1, datetime(2024, 1, 10)) == 4


def test_limit_is_per_student_subject_and_day(service, fake_store, full_day):
    service.create(student_id=S2, subject_id=SUBJ1, date="2024-01-10T15:00:00", status="PRESENT")
    service.create(student_id=S1, subject_id=SUBJ2, date="2024-01-10T15:00:00", status="PRESENT")
    service.create(student_id=S1, subject_id=SUBJ1, date="2024-01-11T00:00:00", status="PRESENT")

    assert _day_count(fake_store, S1, SUBJ1, datetime(2024, 1, 10)) == 4


def test_day_boundaries_count_toward_the_limit(fake_store):
    rules = AttendanceRules(fake_store, daily_limit=2)
    fake_store.add(S1, SUBJ1, datetime(2024, 1, 10, 0, 0, 0))
    fake_store.add(S1, SUBJ1, datetime(2024, 1, 10, 23, 59, 59, 999000))

    with pytest.raises(LimitExceeded):
        rules.check_create(S1, SUBJ1, "2024-01-10T12:00:00", "PRESENT")

    # 전날 23:59:59.999 기록은 다음 날 범위에 포함되지 않음
    rules.check_create(S1, SUBJ1, "2024-01-11T12:00:00", "PRESENT")


def test_status_only_update_of_full_day_succeeds(service, fake_store, full_day):
    target = full_day[1]

    updated = service.update(target.id, AttendancePatch(status="ABSENT"))

    assert updated.status == "ABSENT"
    assert updated.date == target.date
    assert _day_count(fake_store, S1, SUBJ1, datetime(2024, 1, 10)) == 4


def test_moving_record_into_full_day_is_rejected(service, fake_store, full_day):
    other = fake_store.add(S1, SUBJ1, datetime(2024, 1, 11, 9))

    with pytest.raises(LimitExceeded):
        service.update(other.id, AttendancePatch(date="2024-01-10T18:00:00"))

    assert fake_store.get(other.id).date == datetime(2024, 1, 11, 9)


def test_update_onto_existing_instant_is_duplicate(service, fake_store):
    a = fake_store.add(S1, SUBJ1, datetime(2024, 1, 10, 9))
    b = fake_store.add(S1, SUBJ1, datetime(2024, 1, 11, 9))

    with pytest.raises(DuplicateRecord):
        service.update(b.id, AttendancePatch(date="2024-01-10T09:00:00"))

    assert fake_store.get(b.id).date == datetime(2024, 1, 11, 9)
    assert fake_store.get(a.id).date == datetime(2024, 1, 10, 9)


def test_same_day_different_instant_is_not_duplicate(service, fake_store):
    fake_store.add(S1, SUBJ1, datetime(2024, 1, 10, 9))
    b = fake_store.add(S1, SUBJ1, datetime(2024, 1, 11, 9))

    updated = service.update(b.id, AttendancePatch(date="2024-01-10T09:00:01"))

    assert updated.date == datetime(2024, 1, 10, 9, 0, 1)


def test_update_of_unknown_record_is_not_found(service):
    with pytest.raises(NotFound):
        service.update(999, AttendancePatch(status="PRESENT"))


def test_limit_is_checked_before_duplicate(fake_store, full_day):
    other = fake_store.add(S1, SUBJ1, datetime(2024, 1, 12, 9))
    rules = AttendanceRules(fake_store)

    # 4건이 찬 날의 같은 시각으로 이동 → 개수 초과가 먼저 보고됨
    with pytest.raises(LimitExceeded):
        rules.check_update(other.id, AttendancePatch(date="2024-01-10T09:00:00"))


def test_merge_keeps_existing_values_for_blank_patch_fields():
    existing = SimpleNamespace(
        id=1, student_id=S1, subject_id=SUBJ1, date=datetime(2024, 1, 10, 9), status="PRESENT"
    )

    merged = merge_attendance(existing, AttendancePatch(subject_id=SUBJ2, date="", status=None))

    assert merged.student_id == S1
    assert merged.subject_id == SUBJ2
    assert merged.date == datetime(2024, 1, 10, 9)
    assert merged.status == "PRESENT"
    assert existing.subject_id == SUBJ1


def test_delete_unknown_record_is_not_found(service, fake_store):
    with pytest.raises(NotFound):
        service.delete(42)
    assert fake_store.writes == 0


def test_delete_removes_record(service, fake_store):
    record = fake_store.add(S1, SUBJ1, datetime(2024, 1, 10, 9))

    service.delete(record.id)

    assert fake_store.get(record.id) is None


def test_sub_millisecond_difference_is_still_duplicate(service, fake_store):
    fake_store.add(S1, SUBJ1, datetime(2024, 1, 10, 9, 0, 0, 123000))
    b = fake_store.add(S1, SUBJ1, datetime(2024, 1, 11, 9))

    # 저장 정밀도(밀리초) 아래 차이는 같은 시각으로 취급
    with pytest.raises(DuplicateRecord):
        service.update(b.id, AttendancePatch(date="2024-01-10T09:00:00.123456"))


# ==========================================================
# 저장소 오류 전파
# ==========================================================
class BrokenWriteStore:
    """조회는 정상, 쓰기는 항상 실패하는 저장소"""

    def __init__(self, inner):
        self._inner = inner

    def __getattr__(self, name):
        return getattr(self._inner, name)

    def create(self, fields):
        raise StoreFailure()

    def update(self, record_id, fields):
        raise StoreFailure()


def test_store_failure_on_create_propagates(fake_store):
    service = AttendanceService(BrokenWriteStore(fake_store))

    with pytest.raises(StoreFailure) as exc_info:
        service.create(student_id=S1, subject_id=SUBJ1, date="2024-01-10T09:00:00", status="PRESENT")

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "Server error"
    assert fake_store.rows == {}


def test_store_failure_on_update_keeps_record(fake_store):
    record = fake_store.add(S1, SUBJ1, datetime(2024, 1, 10, 9))
    service = AttendanceService(BrokenWriteStore(fake_store))

    with pytest.raises(StoreFailure):
        service.update(record.id, AttendancePatch(status="ABSENT"))

    assert fake_store.get(record.id).status == "PRESENT"
