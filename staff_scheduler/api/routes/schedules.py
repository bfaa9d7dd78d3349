from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from staff_scheduler.api.deps import (
    get_business_hours,
    get_conflict_reporter,
    get_db,
    get_schedule_editor,
    get_schedule_store,
)
from staff_scheduler.schemas.conflicts import ConflictResponse
from staff_scheduler.schemas.schedules import (
    AssembleFromBaseRequest,
    AssembleRequest,
    AssembleResponse,
    AssignmentCreate,
    AssignmentResponse,
    PublishResponse,
    ScheduleResponse,
    ShiftChangeNoticeResponse,
)
from staff_scheduler.services.scheduling import (
    BusinessHours,
    ConflictReporter,
    ScheduleEditor,
    ScheduleStore,
    generate_from_base,
    generate_schedule,
)

router = APIRouter(prefix="/schedules", tags=["schedules"])


@router.post("/assemble", response_model=AssembleResponse, status_code=status.HTTP_201_CREATED)
def assemble_schedule(
    payload: AssembleRequest,
    db: Session = Depends(get_db),
    business_hours: BusinessHours = Depends(get_business_hours),
):
    """Build a Draft schedule from a template; shortfalls come back as conflicts."""
    return generate_schedule(db, payload.template_id, payload.week_starting, business_hours)


@router.post("/assemble-from-base", response_model=AssembleResponse, status_code=status.HTTP_201_CREATED)
def assemble_from_base(
    payload: AssembleFromBaseRequest,
    db: Session = Depends(get_db),
    business_hours: BusinessHours = Depends(get_business_hours),
):
    return generate_from_base(db, payload.week_starting, business_hours)


@router.get("", response_model=List[ScheduleResponse])
def list_schedules(
    week_starting: Optional[date] = None,
    store: ScheduleStore = Depends(get_schedule_store),
):
    return store.list_schedules(week_starting=week_starting)


@router.get("/{schedule_id}", response_model=ScheduleResponse)
def get_schedule(schedule_id: str, store: ScheduleStore = Depends(get_schedule_store)):
    return store.get_schedule(schedule_id)


@router.get("/{schedule_id}/conflicts", response_model=List[ConflictResponse])
def list_conflicts(
    schedule_id: str,
    include_acknowledged: bool = True,
    store: ScheduleStore = Depends(get_schedule_store),
    reporter: ConflictReporter = Depends(get_conflict_reporter),
):
    store.get_schedule(schedule_id)
    conflicts = reporter.list_conflicts(schedule_id, include_acknowledged=include_acknowledged)
    return [ConflictResponse.model_validate(c, from_attributes=True) for c in conflicts]


@router.post("/{schedule_id}/assignments", response_model=AssignmentResponse, status_code=status.HTTP_201_CREATED)
def add_assignment(
    schedule_id: str,
    payload: AssignmentCreate,
    editor: ScheduleEditor = Depends(get_schedule_editor),
):
    return editor.add_assignment(
        schedule_id,
        payload.staff_id,
        payload.day_of_week,
        payload.category,
        start_time=payload.start_time,
        end_time=payload.end_time,
    )


@router.delete("/{schedule_id}/assignments/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_assignment(
    schedule_id: str,
    assignment_id: int,
    editor: ScheduleEditor = Depends(get_schedule_editor),
):
    editor.remove_assignment(schedule_id, assignment_id)


@router.post("/{schedule_id}/publish", response_model=PublishResponse)
def publish_schedule(
    schedule_id: str,
    editor: ScheduleEditor = Depends(get_schedule_editor),
    store: ScheduleStore = Depends(get_schedule_store),
):
    notices = editor.publish(schedule_id)
    return PublishResponse(
        schedule=ScheduleResponse.model_validate(store.get_schedule(schedule_id), from_attributes=True),
        notices=[ShiftChangeNoticeResponse.model_validate(n, from_attributes=True) for n in notices],
    )


@router.post("/{schedule_id}/reopen", response_model=ScheduleResponse)
def reopen_schedule(schedule_id: str, editor: ScheduleEditor = Depends(get_schedule_editor)):
    return editor.reopen(schedule_id)
