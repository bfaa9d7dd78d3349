from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from staff_scheduler.api.deps import get_db
from staff_scheduler.core.enums import TimeOffStatus
from staff_scheduler.db.models.staff_members import StaffMembers
from staff_scheduler.db.models.time_off_requests import TimeOffRequests
from staff_scheduler.schemas.time_off_requests import (
    TimeOffRequestCreate,
    TimeOffRequestResponse,
    TimeOffRequestUpdate,
)

router = APIRouter(prefix="/time-off-requests", tags=["time-off-requests"])


@router.post("", response_model=TimeOffRequestResponse, status_code=status.HTTP_201_CREATED)
def create_time_off_request(
    payload: TimeOffRequestCreate,
    db: Session = Depends(get_db),
):
    staff = db.query(StaffMembers).filter(StaffMembers.id == payload.staff_id).first()
    if not staff:
        raise HTTPException(status_code=404, detail="Staff member not found")
    if payload.end_date < payload.start_date:
        raise HTTPException(status_code=422, detail="end_date must not be before start_date")

    request = TimeOffRequests(**payload.model_dump(), status=TimeOffStatus.PENDING)
    db.add(request)
    db.commit()
    db.refresh(request)
    return request


@router.get("", response_model=List[TimeOffRequestResponse])
def list_time_off_requests(
    staff_id: Optional[str] = None,
    request_status: Optional[TimeOffStatus] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
):
    query = db.query(TimeOffRequests)
    if staff_id:
        query = query.filter(TimeOffRequests.staff_id == staff_id)
    if request_status:
        query = query.filter(TimeOffRequests.status == request_status)

    return query.order_by(TimeOffRequests.start_date).offset(skip).limit(limit).all()


@router.put("/{request_id}", response_model=TimeOffRequestResponse)
def update_time_off_request(
    request_id: int,
    payload: TimeOffRequestUpdate,
    db: Session = Depends(get_db),
):
    request = db.query(TimeOffRequests).filter(TimeOffRequests.id == request_id).first()
    if not request:
        raise HTTPException(status_code=404, detail="Time off request not found")

    update_data = payload.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(request, field, value)
    if request.end_date < request.start_date:
        db.rollback()
        raise HTTPException(status_code=422, detail="end_date must not be before start_date")

    db.commit()
    db.refresh(request)
    return request
