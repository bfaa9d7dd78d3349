from pydantic import BaseModel
from datetime import date, datetime
from typing import Optional
from staff_scheduler.core.enums import TimeOffStatus, TimeOffReason


class TimeOffRequestBase(BaseModel):
    staff_id: str
    start_date: date
    end_date: date
    reason_type: TimeOffReason
    comments: Optional[str] = None


class TimeOffRequestCreate(TimeOffRequestBase):
    pass


class TimeOffRequestUpdate(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[TimeOffStatus] = None
    reason_type: Optional[TimeOffReason] = None
    comments: Optional[str] = None


class TimeOffRequestResponse(TimeOffRequestBase):
    id: int
    status: TimeOffStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
