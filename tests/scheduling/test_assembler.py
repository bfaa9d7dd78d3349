import pytest
from datetime import date, datetime, time, timezone

from staff_scheduler.core.enums import (
    AvailabilityFlag,
    ConflictKind,
    ConflictSeverity,
    ScheduleStatus,
    ShiftWindow,
    SlotCategory,
    StaffStatus,
    MANAGER_ROLE,
)
from staff_scheduler.services.scheduling.types import (
    AssemblyContext,
    AvailabilityEntry,
    Requirement,
    ShiftProfile,
    StaffMember,
    Template,
    TimeOffRequest,
)
from staff_scheduler.services.scheduling.assembler import (
    ScheduleAssembler,
    assemble_schedule,
    dominant_window,
    make_schedule_id,
)
from staff_scheduler.services.scheduling.business_hours import BusinessHours
from staff_scheduler.services.scheduling.errors import InputError

from conftest import available_all_week, get_test_monday


def make_context(template, staff, availability=None, time_off=None, week_start=None) -> AssemblyContext:
    return AssemblyContext(
        template=template,
        week_start=week_start or get_test_monday(),
        staff=staff,
        availability=availability or [],
        time_off=time_off or [],
    )


class TestHelpers:

    def test_schedule_id_from_clock(self):
        now = datetime(2025, 9, 29, tzinfo=timezone.utc)
        assert make_schedule_id(now) == "SCH_1759104000000000"

    def test_dominant_window(self):
        assert dominant_window(Requirement(full_count=2, partial_count=1, manager_count=1)) == ShiftWindow.FULL
        assert dominant_window(Requirement(full_count=0, partial_count=2, manager_count=1)) == ShiftWindow.PARTIAL
        assert dominant_window(Requirement(manager_count=1)) == ShiftWindow.FULL


class TestMondayScenarios:

    def test_fully_staffed_monday(self, monday_only_template, five_staff, manager, business_hours):
        staff = five_staff + [manager]
        context = make_context(monday_only_template, staff, available_all_week([s.id for s in staff]))

        result = assemble_schedule(context, business_hours, schedule_id="SCH_TEST")

        monday = result.schedule.assignments_for_day(0)
        assert len(monday) == 5
        assert result.conflicts == []
        assert result.success is True

        managers = [a for a in monday if a.category == SlotCategory.MANAGER]
        assert [a.staff_id for a in managers] == ["M1"]
        assert managers[0].role == MANAGER_ROLE

        full = [a for a in monday if a.category == SlotCategory.FULL]
        # alphabetical within the AVAILABLE tier: Alice, Bob, Cara, Dan
        assert [a.staff_id for a in full] == ["S1", "S2", "S3", "S4"]
        assert all(a.start_time == time(10, 0) and a.end_time == time(18, 0) for a in monday)

    def test_conditional_fills_before_understaffed(self, monday_only_template, manager, business_hours):
        staff = [
            StaffMember(id="S1", display_name="Alice"),
            StaffMember(id="S2", display_name="Bob"),
            StaffMember(id="S3", display_name="Cara"),
            StaffMember(id="S4", display_name="Aaron"),
        ]
        # S4 has no entries, so it sits in the CONDITIONAL tier
        availability = available_all_week(["S1", "S2", "S3", "M1"])
        context = make_context(monday_only_template, staff + [manager], availability)

        result = assemble_schedule(context, business_hours)

        full = [a.staff_id for a in result.schedule.assignments if a.category == SlotCategory.FULL]
        assert full == ["S1", "S2", "S3", "S4"]
        assert result.conflict_count == 0

    def test_two_staff_yields_two_understaffed(self, monday_only_template, manager, business_hours):
        staff = [StaffMember(id="S1", display_name="Alice"), StaffMember(id="S2", display_name="Bob")]
        context = make_context(monday_only_template, staff + [manager], available_all_week(["S1", "S2", "M1"]))

        result = assemble_schedule(context, business_hours)

        full = [a for a in result.schedule.assignments if a.category == SlotCategory.FULL]
        assert len(full) == 2
        assert len(result.conflicts) == 2
        for conflict in result.conflicts:
            assert conflict.kind == ConflictKind.UNDERSTAFFED
            assert conflict.day_of_week == 0
            assert conflict.category == SlotCategory.FULL
            assert conflict.severity == ConflictSeverity.HIGH

    def test_overlapping_slots_record_double_booking(self, business_hours):
        template = Template(
            template_id="T2",
            name="Miscounted",
            per_day={0: Requirement(full_count=1, partial_count=1, manager_count=0)},
        )
        staff = [StaffMember(id="S1", display_name="Alice")]
        context = make_context(template, staff, available_all_week(["S1"]))

        result = assemble_schedule(context, business_hours)

        assert len(result.schedule.assignments) == 1
        assert result.schedule.assignments[0].category == SlotCategory.FULL
        double_booked = [c for c in result.conflicts if c.kind == ConflictKind.DOUBLE_BOOKED]
        assert len(double_booked) == 1
        assert double_booked[0].staff_id == "S1"
        assert double_booked[0].category == SlotCategory.PARTIAL


class TestEligibility:

    def test_unavailable_staff_never_assigned(self, monday_only_template, manager, business_hours):
        staff = [StaffMember(id="S1", display_name="Alice"), StaffMember(id="S2", display_name="Bob")]
        availability = available_all_week(["M1", "S2"]) + [
            AvailabilityEntry("S1", 0, ShiftWindow.FULL, AvailabilityFlag.UNAVAILABLE),
        ]
        context = make_context(monday_only_template, staff + [manager], availability)

        result = assemble_schedule(context, business_hours)

        assert "S1" not in {a.staff_id for a in result.schedule.assignments}
        assert len([c for c in result.conflicts if c.kind == ConflictKind.UNDERSTAFFED]) == 3

    def test_inactive_and_on_leave_staff_skipped(self, monday_only_template, manager, business_hours):
        staff = [
            StaffMember(id="S1", display_name="Alice", status=StaffStatus.INACTIVE),
            StaffMember(id="S2", display_name="Bob", status=StaffStatus.ON_LEAVE),
            StaffMember(id="S3", display_name="Cara"),
        ]
        context = make_context(monday_only_template, staff + [manager])

        result = assemble_schedule(context, business_hours)

        assert {a.staff_id for a in result.schedule.assignments} == {"M1", "S3"}

    def test_time_off_excludes_staff_for_the_day(self, monday_only_template, five_staff, manager, business_hours):
        monday = get_test_monday()
        staff = five_staff + [manager]
        time_off = [TimeOffRequest("S1", monday, monday)]
        context = make_context(monday_only_template, staff, available_all_week([s.id for s in staff]), time_off)

        result = assemble_schedule(context, business_hours)

        full = [a.staff_id for a in result.schedule.assignments if a.category == SlotCategory.FULL]
        assert full == ["S2", "S3", "S4", "S5"]

    def test_managers_do_not_fill_staff_slots(self, monday_only_template, manager, business_hours):
        second_manager = StaffMember(id="M2", display_name="Nadia", role=MANAGER_ROLE)
        context = make_context(monday_only_template, [manager, second_manager])

        result = assemble_schedule(context, business_hours)

        assert [a.staff_id for a in result.schedule.assignments] == ["M1"]
        assert len(result.conflicts) == 4
        assert all(c.category == SlotCategory.FULL for c in result.conflicts)

    def test_missing_manager_is_understaffed(self, monday_only_template, five_staff, business_hours):
        context = make_context(monday_only_template, five_staff, available_all_week([s.id for s in five_staff]))

        result = assemble_schedule(context, business_hours)

        assert len(result.conflicts) == 1
        assert result.conflicts[0].category == SlotCategory.MANAGER


class TestWeekShape:

    def test_closed_days_get_no_assignments(self, monday_only_template, five_staff, manager, business_hours):
        context = make_context(monday_only_template, five_staff + [manager])

        result = assemble_schedule(context, business_hours)

        assert {a.day_of_week for a in result.schedule.assignments} == {0}

    def test_explicit_zero_day_is_closed(self, five_staff, manager, business_hours):
        # imported templates list every day, closed ones as all-zero requirements
        template = Template(
            template_id="T5",
            name="Imported",
            per_day={
                0: Requirement(full_count=2, manager_count=1),
                1: Requirement(),
            },
        )
        context = make_context(template, five_staff + [manager])

        result = assemble_schedule(context, business_hours)

        assert result.schedule.assignments_for_day(1) == []
        assert [c for c in result.conflicts if c.day_of_week == 1] == []
        assert len(result.schedule.assignments_for_day(0)) == 3

    def test_partial_shift_and_manager_window(self, five_staff, manager, business_hours):
        template = Template(
            template_id="T3",
            name="Partial Sunday",
            per_day={6: Requirement(full_count=0, partial_count=2, manager_count=1)},
        )
        context = make_context(template, five_staff + [manager])

        result = assemble_schedule(context, business_hours)

        sunday = result.schedule.assignments_for_day(6)
        assert len(sunday) == 3
        # Sunday opens 10-15, partial shifts are 4 hours
        assert all(a.start_time == time(10, 0) and a.end_time == time(14, 0) for a in sunday)

    def test_conflicts_sorted_day_then_kind(self, business_hours):
        template = Template(
            template_id="T4",
            name="Short week",
            per_day={
                1: Requirement(full_count=1),
                0: Requirement(full_count=1, partial_count=1),
            },
        )
        staff = [StaffMember(id="S1", display_name="Alice")]
        context = make_context(template, staff)

        result = assemble_schedule(context, business_hours)

        assert [(c.day_of_week, c.kind) for c in result.conflicts] == [
            (0, ConflictKind.UNDERSTAFFED),
            (0, ConflictKind.DOUBLE_BOOKED),
        ]
        assert len(result.schedule.assignments_for_day(1)) == 1

    def test_result_is_draft_for_week(self, monday_only_template, business_hours):
        context = make_context(monday_only_template, [])

        result = ScheduleAssembler(context, business_hours, schedule_id="SCH_X").assemble()

        assert result.schedule.status == ScheduleStatus.DRAFT
        assert result.schedule.schedule_id == "SCH_X"
        assert result.schedule.template_id == "T1"
        assert result.schedule.week_end == date(2025, 10, 5)
        assert all(c.schedule_id == "SCH_X" for c in result.conflicts)

    def test_same_input_same_output(self, monday_only_template, five_staff, manager, business_hours):
        staff = five_staff + [manager]
        availability = available_all_week(["S2", "S4"]) + [
            AvailabilityEntry("S1", 0, ShiftWindow.FULL, AvailabilityFlag.UNAVAILABLE),
        ]
        first = assemble_schedule(make_context(monday_only_template, staff, availability), business_hours, "SCH_A")
        second = assemble_schedule(make_context(monday_only_template, list(reversed(staff)), availability), business_hours, "SCH_A")

        assert first.schedule == second.schedule
        assert first.conflicts == second.conflicts


class TestInputErrors:

    def test_week_must_start_on_monday(self, monday_only_template, business_hours):
        context = make_context(monday_only_template, [], week_start=date(2025, 9, 30))
        with pytest.raises(InputError):
            assemble_schedule(context, business_hours)

    def test_template_without_days(self, business_hours):
        context = make_context(Template(template_id="EMPTY", name="Empty"), [])
        with pytest.raises(InputError):
            assemble_schedule(context, business_hours)

    def test_open_day_without_business_hours(self, five_staff):
        hours = BusinessHours({0: ShiftProfile(time(10, 0), time(18, 0))})
        template = Template(template_id="T5", name="Tuesday", per_day={1: Requirement(full_count=1)})
        with pytest.raises(InputError):
            assemble_schedule(make_context(template, five_staff), hours)
