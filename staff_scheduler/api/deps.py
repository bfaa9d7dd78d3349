from typing import Generator
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from staff_scheduler.core.config import Settings
from staff_scheduler.services.scheduling import (
    AvailabilityMatrix,
    BusinessHours,
    ConflictReporter,
    ScheduleEditor,
    ScheduleStore,
    StaffDirectory,
    TemplateStore,
)


def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_business_hours(request: Request) -> BusinessHours:
    return request.app.state.business_hours


def get_staff_directory(db: Session = Depends(get_db)) -> StaffDirectory:
    return StaffDirectory(db)


def get_availability_matrix(db: Session = Depends(get_db)) -> AvailabilityMatrix:
    return AvailabilityMatrix(db)


def get_template_store(db: Session = Depends(get_db)) -> TemplateStore:
    return TemplateStore(db)


def get_schedule_store(db: Session = Depends(get_db)) -> ScheduleStore:
    return ScheduleStore(db)


def get_conflict_reporter(db: Session = Depends(get_db)) -> ConflictReporter:
    return ConflictReporter(db)


def get_schedule_editor(
    db: Session = Depends(get_db),
    business_hours: BusinessHours = Depends(get_business_hours),
) -> ScheduleEditor:
    return ScheduleEditor(db, business_hours)
