from pydantic import BaseModel
from datetime import datetime
from typing import Optional
from staff_scheduler.core.enums import ConflictKind, ConflictSeverity, SlotCategory


class ConflictResponse(BaseModel):
    conflict_id: Optional[int]
    schedule_id: str
    day_of_week: int
    kind: ConflictKind
    category: Optional[SlotCategory]
    staff_id: Optional[str]
    detail: str
    severity: ConflictSeverity
    acknowledged: bool
    acknowledged_at: Optional[datetime]
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
