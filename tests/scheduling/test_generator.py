import pytest
from datetime import date, datetime, timezone

from staff_scheduler.core.enums import ConflictKind, ConflictSeverity, ScheduleStatus, SlotCategory, TimeOffStatus, TimeOffReason
from staff_scheduler.db.models import TimeOffRequests
from staff_scheduler.services.scheduling import (
    ConflictRecord,
    ConflictReporter,
    InputError,
    NotFoundError,
    ScheduleStore,
    StaffDirectory,
    TemplateStore,
    generate_from_base,
    generate_schedule,
    load_assembly_context,
)
from staff_scheduler.services.scheduling.generator import parse_week_starting

from conftest import get_test_monday


def fixed_clock():
    return datetime(2025, 9, 29, 8, 0, tzinfo=timezone.utc)


class TestParseWeekStarting:

    def test_monday(self):
        assert parse_week_starting("2025-09-29") == get_test_monday()

    @pytest.mark.parametrize("value", ["2025-09-30", "29/09/2025", "", "next monday"])
    def test_rejects(self, value):
        with pytest.raises(InputError):
            parse_week_starting(value)


class TestLoadAssemblyContext:

    def test_loads_active_staff_and_availability(self, seeded_db):
        StaffDirectory(seeded_db).deactivate("S5")

        context = load_assembly_context(seeded_db, "T1", get_test_monday())

        assert context.template.template_id == "T1"
        assert "S5" not in {s.id for s in context.staff}
        assert len(context.staff) == 5
        assert len(context.availability) == 6 * 7 * 2

    def test_only_approved_time_off_in_week(self, seeded_db):
        seeded_db.add_all([
            TimeOffRequests(staff_id="S1", start_date=date(2025, 9, 26), end_date=date(2025, 9, 29),
                            status=TimeOffStatus.APPROVED, reason_type=TimeOffReason.HOLIDAY),
            TimeOffRequests(staff_id="S2", start_date=date(2025, 9, 29), end_date=date(2025, 9, 29),
                            status=TimeOffStatus.PENDING, reason_type=TimeOffReason.HOLIDAY),
            TimeOffRequests(staff_id="S3", start_date=date(2025, 10, 6), end_date=date(2025, 10, 7),
                            status=TimeOffStatus.APPROVED, reason_type=TimeOffReason.SICK_LEAVE),
        ])
        seeded_db.commit()

        context = load_assembly_context(seeded_db, "T1", get_test_monday())

        assert [r.staff_id for r in context.time_off] == ["S1"]

    def test_unknown_template(self, seeded_db):
        with pytest.raises(InputError):
            load_assembly_context(seeded_db, "NOPE", get_test_monday())


class TestGenerateSchedule:

    def test_persists_draft_and_conflicts(self, seeded_db, business_hours):
        StaffDirectory(seeded_db).deactivate("S5")
        StaffDirectory(seeded_db).deactivate("S4")

        outcome = generate_schedule(seeded_db, "T1", "2025-09-29", business_hours, clock=fixed_clock)

        assert outcome.schedule_id == "SCH_1759132800000000"
        assert outcome.conflict_count == 1

        schedule = ScheduleStore(seeded_db).get_schedule(outcome.schedule_id)
        assert schedule.status == ScheduleStatus.DRAFT
        assert schedule.week_starting == get_test_monday()
        assert len(schedule.assignments) == 4
        assert all(a.assignment_id is not None for a in schedule.assignments)

        conflicts = ConflictReporter(seeded_db).list_conflicts(outcome.schedule_id)
        assert len(conflicts) == 1
        assert conflicts[0].kind == ConflictKind.UNDERSTAFFED
        assert conflicts[0].category == SlotCategory.FULL

    def test_same_instant_generations_get_distinct_ids(self, seeded_db, business_hours):
        first = generate_schedule(seeded_db, "T1", "2025-09-29", business_hours, clock=fixed_clock)
        second = generate_schedule(seeded_db, "T1", "2025-09-29", business_hours, clock=fixed_clock)

        assert first.schedule_id == "SCH_1759132800000000"
        assert second.schedule_id == "SCH_1759132800000000_1"
        store = ScheduleStore(seeded_db)
        assert len(store.list_schedules()) == 2
        assert len(store.get_schedule(second.schedule_id).assignments) == 5

    def test_time_off_request_respected(self, seeded_db, business_hours):
        seeded_db.add(TimeOffRequests(staff_id="S1", start_date=get_test_monday(), end_date=get_test_monday(),
                                      status=TimeOffStatus.APPROVED, reason_type=TimeOffReason.HOLIDAY))
        seeded_db.commit()

        outcome = generate_schedule(seeded_db, "T1", "2025-09-29", business_hours)

        schedule = ScheduleStore(seeded_db).get_schedule(outcome.schedule_id)
        assert "S1" not in {a.staff_id for a in schedule.assignments}
        assert outcome.conflict_count == 0

    def test_unknown_template_writes_nothing(self, seeded_db, business_hours):
        with pytest.raises(InputError):
            generate_schedule(seeded_db, "NOPE", "2025-09-29", business_hours)
        assert ScheduleStore(seeded_db).list_schedules() == []

    def test_from_base_uses_default_template(self, seeded_db, business_hours):
        outcome = generate_from_base(seeded_db, "2025-09-29", business_hours)

        assert ScheduleStore(seeded_db).get_schedule(outcome.schedule_id).template_id == "T1"

    def test_from_base_without_default(self, db, business_hours):
        with pytest.raises(InputError):
            generate_from_base(db, "2025-09-29", business_hours)


class TestScheduleStore:

    def test_list_by_week(self, seeded_db, business_hours):
        generate_schedule(seeded_db, "T1", "2025-09-29", business_hours, clock=fixed_clock)
        generate_schedule(seeded_db, "T1", "2025-10-06", business_hours,
                          clock=lambda: datetime(2025, 10, 6, tzinfo=timezone.utc))
        store = ScheduleStore(seeded_db)

        assert len(store.list_schedules()) == 2
        assert [s.week_starting for s in store.list_schedules(week_starting=get_test_monday())] == [get_test_monday()]

    def test_unknown_schedule(self, db):
        with pytest.raises(NotFoundError):
            ScheduleStore(db).get_schedule("SCH_0")


class TestConflictReporter:

    def _schedule(self, seeded_db, business_hours):
        return generate_schedule(seeded_db, "T1", "2025-09-29", business_hours).schedule_id

    def test_saved_in_day_then_kind_order(self, seeded_db, business_hours):
        schedule_id = self._schedule(seeded_db, business_hours)
        reporter = ConflictReporter(seeded_db)
        reporter.save_conflicts(schedule_id, [
            ConflictRecord(schedule_id, 2, ConflictKind.DOUBLE_BOOKED, "b", SlotCategory.PARTIAL, "S1"),
            ConflictRecord(schedule_id, 2, ConflictKind.UNDERSTAFFED, "a", SlotCategory.PARTIAL),
            ConflictRecord(schedule_id, 0, ConflictKind.UNAVAILABLE_ASSIGNED, "c", SlotCategory.FULL, "S2"),
        ])

        conflicts = reporter.list_conflicts(schedule_id)
        assert [(c.day_of_week, c.kind) for c in conflicts] == [
            (0, ConflictKind.UNAVAILABLE_ASSIGNED),
            (2, ConflictKind.UNDERSTAFFED),
            (2, ConflictKind.DOUBLE_BOOKED),
        ]
        assert [c.severity for c in conflicts] == [
            ConflictSeverity.HIGH,
            ConflictSeverity.MEDIUM,
            ConflictSeverity.MEDIUM,
        ]

    def test_acknowledge_keeps_record(self, seeded_db, business_hours):
        schedule_id = self._schedule(seeded_db, business_hours)
        reporter = ConflictReporter(seeded_db)
        saved = reporter.save_conflicts(schedule_id, [
            ConflictRecord(schedule_id, 0, ConflictKind.UNDERSTAFFED, "short", SlotCategory.FULL),
        ])

        acknowledged = reporter.acknowledge(saved[0].conflict_id)

        assert acknowledged.acknowledged is True
        assert acknowledged.acknowledged_at is not None
        assert len(reporter.list_conflicts(schedule_id)) == 1
        assert reporter.list_conflicts(schedule_id, include_acknowledged=False) == []

    def test_acknowledge_unknown(self, db):
        with pytest.raises(NotFoundError):
            ConflictReporter(db).acknowledge(999)

    def test_empty_save(self, db):
        assert ConflictReporter(db).save_conflicts("SCH_0", []) == []


def test_template_store_sees_generated_templates_unchanged(seeded_db, business_hours):
    before = TemplateStore(seeded_db).get_template("T1")
    generate_schedule(seeded_db, "T1", "2025-09-29", business_hours)
    assert TemplateStore(seeded_db).get_template("T1") == before
