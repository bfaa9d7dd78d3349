import pytest
from datetime import date, time

from fastapi.testclient import TestClient

from staff_scheduler.core.config import Settings
from staff_scheduler.core.enums import AvailabilityFlag, ShiftWindow, MANAGER_ROLE
from staff_scheduler.db.database import build_engine, build_session_factory, init_db
from staff_scheduler.main import create_app
from staff_scheduler.services.scheduling import AvailabilityMatrix, StaffDirectory, TemplateStore
from staff_scheduler.services.scheduling.business_hours import BusinessHours
from staff_scheduler.services.scheduling.types import (
    AvailabilityEntry,
    Requirement,
    ShiftProfile,
    StaffMember,
    Template,
)


def get_test_monday() -> date:
    # returns a fixed Monday for deterministic tests
    return date(2025, 9, 29)


def available_all_week(staff_ids: list[str], flag: AvailabilityFlag = AvailabilityFlag.AVAILABLE) -> list[AvailabilityEntry]:
    return [
        AvailabilityEntry(staff_id, day, window, flag)
        for staff_id in staff_ids
        for day in range(7)
        for window in ShiftWindow
    ]


@pytest.fixture
def business_hours() -> BusinessHours:
    # Mon-Thu 10-18, Fri 10-17, Sat 10-16, Sun 10-15
    closing = {0: 18, 1: 18, 2: 18, 3: 18, 4: 17, 5: 16, 6: 15}
    return BusinessHours({day: ShiftProfile(time(10, 0), time(end, 0)) for day, end in closing.items()})


@pytest.fixture
def manager() -> StaffMember:
    return StaffMember(id="M1", display_name="Morgan", role=MANAGER_ROLE, email="morgan@example.com")


@pytest.fixture
def five_staff() -> list[StaffMember]:
    # names out of id order so sorting is observable
    return [
        StaffMember(id="S5", display_name="Eve", role="Instructor"),
        StaffMember(id="S1", display_name="Alice", role="Instructor", email="alice@example.com"),
        StaffMember(id="S4", display_name="Dan", role="Floor Staff"),
        StaffMember(id="S2", display_name="Bob", role="Floor Staff"),
        StaffMember(id="S3", display_name="Cara", role="Instructor"),
    ]


@pytest.fixture
def monday_only_template() -> Template:
    # T1: Monday needs 1 manager + 4 full-shift staff, every other day closed
    return Template(
        template_id="T1",
        name="Monday only",
        per_day={0: Requirement(full_count=4, partial_count=0, manager_count=1)},
    )


@pytest.fixture
def db():
    engine = build_engine("sqlite://")
    init_db(engine)
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client():
    app = create_app(Settings(DATABASE_URL="sqlite://", LOG_LEVEL="WARNING"))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seeded_db(db, monday_only_template, five_staff, manager):
    # five_staff + manager, everyone AVAILABLE all week, T1 stored as default
    directory = StaffDirectory(db)
    for member in five_staff + [manager]:
        directory.upsert_staff(member)
    AvailabilityMatrix(db).bulk_import(available_all_week([s.id for s in five_staff] + [manager.id]))
    monday_only_template.is_default = True
    TemplateStore(db).upsert_template(monday_only_template)
    return db
