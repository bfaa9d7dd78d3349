"""
Tests for the development seed data: the default template must be fully
staffable from the seeded roster.
"""
import pytest

from scripts.seed_data import STAFF, clear_tables, seed_all
from staff_scheduler.services.scheduling import (
    ScheduleStore,
    StaffDirectory,
    TemplateStore,
    generate_from_base,
)


@pytest.fixture
def seeded(db):
    seed_all(db, "TEMPLATE_001")
    return db


def test_default_template(seeded):
    template = TemplateStore(seeded).get_default_template()

    assert template.template_id == "TEMPLATE_001"
    assert template.per_day[0].manager_count == 1
    assert template.per_day[6].full_count == 3
    assert template.per_day[6].manager_count == 0


def test_roster(seeded):
    staff = StaffDirectory(seeded).list_staff()
    assert len(staff) == len(STAFF)
    assert len([s for s in staff if s.is_manager]) == 2


def test_seeded_week_has_no_conflicts(seeded, business_hours):
    outcome = generate_from_base(seeded, "2025-09-29", business_hours)

    assert outcome.conflict_count == 0
    schedule = ScheduleStore(seeded).get_schedule(outcome.schedule_id)
    # Mon-Sat 1 manager + 4 staff, Sunday 3 staff
    assert len(schedule.assignments) == 6 * 5 + 3
    # part-time only staff never land on a full shift
    assert "S009" not in {a.staff_id for a in schedule.assignments}


def test_clear_tables(seeded, business_hours):
    generate_from_base(seeded, "2025-09-29", business_hours)

    clear_tables(seeded)

    assert StaffDirectory(seeded).list_staff(include_inactive=True) == []
    assert ScheduleStore(seeded).list_schedules() == []
