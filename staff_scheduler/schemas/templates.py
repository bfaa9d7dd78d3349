from pydantic import BaseModel, Field
from typing import Optional
from staff_scheduler.core.enums import TemplateStatus


class RequirementSchema(BaseModel):
    # negative counts are rejected by the template store, not here
    full_count: int = 0
    partial_count: int = 0
    manager_count: int = 0

    class Config:
        from_attributes = True


class TemplateBase(BaseModel):
    name: str
    per_day: dict[int, RequirementSchema] = Field(default_factory=dict)
    status: TemplateStatus = TemplateStatus.ACTIVE
    is_default: bool = False
    notes: Optional[str] = None


class TemplateUpsert(TemplateBase):
    pass


class TemplateResponse(TemplateBase):
    template_id: str

    class Config:
        from_attributes = True
