from typing import List
from fastapi import APIRouter, Depends

from staff_scheduler.api.deps import get_template_store
from staff_scheduler.schemas.templates import TemplateUpsert, TemplateResponse
from staff_scheduler.services.scheduling import Requirement, Template, TemplateStore

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("", response_model=List[TemplateResponse])
def list_active_templates(store: TemplateStore = Depends(get_template_store)):
    return store.list_active_templates()


@router.get("/default", response_model=TemplateResponse)
def get_default_template(store: TemplateStore = Depends(get_template_store)):
    return store.get_default_template()


@router.get("/{template_id}", response_model=TemplateResponse)
def get_template(template_id: str, store: TemplateStore = Depends(get_template_store)):
    return store.get_template(template_id)


@router.put("/{template_id}", response_model=TemplateResponse)
def upsert_template(
    template_id: str,
    payload: TemplateUpsert,
    store: TemplateStore = Depends(get_template_store),
):
    template = Template(
        template_id=template_id,
        name=payload.name,
        per_day={day: Requirement(**req.model_dump()) for day, req in payload.per_day.items()},
        status=payload.status,
        is_default=payload.is_default,
        notes=payload.notes,
    )
    store.upsert_template(template)
    return store.get_template(template_id)


@router.post("/{template_id}/default", response_model=TemplateResponse)
def set_default_template(template_id: str, store: TemplateStore = Depends(get_template_store)):
    return store.set_default_template(template_id)


@router.post("/{template_id}/retire", response_model=TemplateResponse)
def retire_template(template_id: str, store: TemplateStore = Depends(get_template_store)):
    return store.retire_template(template_id)
