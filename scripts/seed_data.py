"""
Seed script for the staff scheduler development database.

- Default template TEMPLATE_001: Mon-Sat 1 manager + 4 staff, Sunday 3 staff
- 2 managers, 7 staff (one of them part-time only)
- Availability: mostly green, a few yellow/red cells to exercise the tiers
- No schedules, no time off

Run with: python -m scripts.seed_data
"""

import sys
from sqlalchemy import delete
from sqlalchemy.orm import Session

from staff_scheduler.core.config import get_settings
from staff_scheduler.core.enums import AvailabilityFlag, ShiftWindow, MANAGER_ROLE
from staff_scheduler.db.database import build_engine, build_session_factory, init_db
from staff_scheduler.db.models import (
    AvailabilityEntries,
    ScheduleAssignments,
    ScheduleConflicts,
    Schedules,
    ScheduleTemplates,
    StaffMembers,
    TemplateDayRequirements,
    TimeOffRequests,
)
from staff_scheduler.services.scheduling import (
    AvailabilityEntry,
    AvailabilityMatrix,
    Requirement,
    StaffDirectory,
    StaffMember,
    Template,
    TemplateStore,
)


STAFF = [
    StaffMember(id="S001", display_name="Morgan", full_name="Morgan Reyes", role=MANAGER_ROLE, email="morgan@example.com"),
    StaffMember(id="S002", display_name="Priya", full_name="Priya Shah", role=MANAGER_ROLE, email="priya@example.com"),
    StaffMember(id="S003", display_name="Alex", full_name="Alex Kim", role="Instructor", email="alex@example.com"),
    StaffMember(id="S004", display_name="Bea", full_name="Beatriz Costa", role="Floor Staff", email="bea@example.com"),
    StaffMember(id="S005", display_name="Chris", full_name="Chris Doyle", role="Floor Staff"),
    StaffMember(id="S006", display_name="Dana", full_name="Dana Okafor", role="Instructor", email="dana@example.com"),
    StaffMember(id="S007", display_name="Eli", full_name="Eli Novak", role="Floor Staff", email="eli@example.com"),
    StaffMember(id="S008", display_name="Fern", full_name="Fern Walsh", role="Staff"),
    StaffMember(id="S009", display_name="Gus", full_name="Gus Ito", role="Staff", email="gus@example.com"),
]

# (staff_id, day_of_week, window) -> flag; everything else AVAILABLE
EXCEPTIONS = {
    ("S001", 6, ShiftWindow.FULL): AvailabilityFlag.UNAVAILABLE,
    ("S002", 0, ShiftWindow.FULL): AvailabilityFlag.CONDITIONAL,
    ("S004", 2, ShiftWindow.FULL): AvailabilityFlag.UNAVAILABLE,
    ("S005", 5, ShiftWindow.FULL): AvailabilityFlag.CONDITIONAL,
    ("S007", 6, ShiftWindow.FULL): AvailabilityFlag.UNAVAILABLE,
}
PART_TIME_ONLY = {"S009"}


def default_template(template_id: str) -> Template:
    weekday = Requirement(full_count=4, partial_count=0, manager_count=1)
    return Template(
        template_id=template_id,
        name="Standard Weekly Template",
        per_day={
            0: weekday, 1: weekday, 2: weekday, 3: weekday, 4: weekday, 5: weekday,
            6: Requirement(full_count=3, partial_count=0, manager_count=0),
        },
        is_default=True,
        notes="Default template based on business requirements",
    )


def seed_availability() -> list[AvailabilityEntry]:
    entries = []
    for member in STAFF:
        for day in range(7):
            for window in ShiftWindow:
                flag = EXCEPTIONS.get((member.id, day, window), AvailabilityFlag.AVAILABLE)
                if member.id in PART_TIME_ONLY and window == ShiftWindow.FULL:
                    flag = AvailabilityFlag.UNAVAILABLE
                entries.append(AvailabilityEntry(member.id, day, window, flag))
    return entries


def clear_tables(db: Session):
    """Delete all rows, children first."""
    print("Clearing tables...")
    for model in (
        ScheduleConflicts,
        ScheduleAssignments,
        Schedules,
        TimeOffRequests,
        AvailabilityEntries,
        TemplateDayRequirements,
        ScheduleTemplates,
        StaffMembers,
    ):
        db.execute(delete(model))
    db.commit()
    print("All tables cleared.")


def seed_all(db: Session, template_id: str):
    directory = StaffDirectory(db)
    for member in STAFF:
        directory.upsert_staff(member)
    print(f"Seeded {len(STAFF)} staff members.")

    count = AvailabilityMatrix(db).bulk_import(seed_availability())
    print(f"Seeded {count} availability entries.")

    TemplateStore(db).upsert_template(default_template(template_id))
    print(f"Seeded default template {template_id}.")


def main():
    """Main seed function."""
    settings = get_settings()
    print("\n" + "=" * 50)
    print("Staff Scheduler Database Seeder")
    print("=" * 50 + "\n")

    response = input(f"This will DELETE ALL EXISTING DATA in {settings.DATABASE_URL}. Continue? (yes/no): ")
    if response.lower() != "yes":
        print("Aborted.")
        sys.exit(0)

    engine = build_engine(settings.DATABASE_URL)
    init_db(engine)
    db = build_session_factory(engine)()

    try:
        clear_tables(db)
        seed_all(db, settings.DEFAULT_TEMPLATE_ID)
        print("\nSeeding complete! Try:")
        print(f'  POST /api/v1/schedules/assemble {{"template_id": "{settings.DEFAULT_TEMPLATE_ID}", "week_starting": "2025-09-29"}}')
    except Exception as e:
        db.rollback()
        print(f"\nError during seeding: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
