from pydantic import BaseModel
from typing import Optional
from staff_scheduler.core.enums import StaffStatus, DEFAULT_ROLE


class StaffBase(BaseModel):
    display_name: str
    full_name: Optional[str] = None
    role: str = DEFAULT_ROLE
    status: StaffStatus = StaffStatus.ACTIVE
    email: Optional[str] = None


class StaffUpsert(StaffBase):
    pass


class StaffResponse(StaffBase):
    id: str

    class Config:
        from_attributes = True
