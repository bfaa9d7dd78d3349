from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from staff_scheduler.api.deps import get_db, get_settings
from staff_scheduler.core.config import Settings
from staff_scheduler.schemas.imports import (
    BaseScheduleImportRequest,
    BaseScheduleImportResponse,
    SkippedEntryResponse,
    StaffImportRequest,
    StaffImportResponse,
)
from staff_scheduler.schemas.staff import StaffResponse
from staff_scheduler.schemas.templates import TemplateResponse
from staff_scheduler.services.scheduling import (
    StaffDirectory,
    apply_base_schedule_import,
    apply_staff_import,
    parse_base_schedule,
    parse_staff_import,
)

router = APIRouter(prefix="/imports", tags=["imports"])


@router.post("/base-schedule", response_model=BaseScheduleImportResponse)
def import_base_schedule(
    payload: BaseScheduleImportRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Bootstrap a template and availability from a filled-in weekly schedule."""
    template_id = payload.template_id or settings.BASE_TEMPLATE_ID
    staff = StaffDirectory(db).list_staff()
    result = parse_base_schedule(payload.rows, staff, template_id)
    apply_base_schedule_import(db, result, make_default=payload.make_default)

    return BaseScheduleImportResponse(
        template=TemplateResponse.model_validate(result.template, from_attributes=True),
        staff_ids=result.staff_ids,
        assignment_count=len(result.rows),
        availability_count=len(result.availability),
        skipped=[SkippedEntryResponse.model_validate(s, from_attributes=True) for s in result.skipped],
    )


@router.post("/staff", response_model=StaffImportResponse)
def import_staff(payload: StaffImportRequest, db: Session = Depends(get_db)):
    """Add a roster in one go; staff already on file are reported, not changed."""
    result = parse_staff_import(payload.rows, StaffDirectory(db).list_staff(include_inactive=True))
    members = apply_staff_import(db, result)

    return StaffImportResponse(
        staff=[StaffResponse.model_validate(m, from_attributes=True) for m in members],
        availability_count=len(result.availability),
        duplicates=result.duplicates,
        skipped=[SkippedEntryResponse.model_validate(s, from_attributes=True) for s in result.skipped],
    )
