from pydantic import BaseModel, Field
from staff_scheduler.core.enums import AvailabilityFlag, ShiftWindow


class AvailabilityEntryBase(BaseModel):
    staff_id: str
    day_of_week: int = Field(ge=0, le=6)
    shift_window: ShiftWindow
    flag: AvailabilityFlag


class AvailabilityEntryResponse(AvailabilityEntryBase):

    class Config:
        from_attributes = True


class AvailabilityUpdate(BaseModel):
    flag: AvailabilityFlag


class AvailabilityBulkImport(BaseModel):
    entries: list[AvailabilityEntryBase]


class AvailabilityBulkImportResponse(BaseModel):
    imported: int
