"""
Template store: named weekly staffing templates keyed by template id.
"""

import logging
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from staff_scheduler.core.enums import DAY_NAMES, TemplateStatus
from staff_scheduler.db.models.schedule_templates import ScheduleTemplates, TemplateDayRequirements

from .errors import NotFoundError, ValidationError
from .types import Requirement, Template


logger = logging.getLogger(__name__)


def to_template(row: ScheduleTemplates) -> Template:
    return Template(
        template_id=row.id,
        name=row.name,
        per_day={
            d.day_of_week: Requirement(
                full_count=d.full_count,
                partial_count=d.partial_count,
                manager_count=d.manager_count,
            )
            for d in row.days
        },
        status=row.status,
        is_default=row.is_default,
        notes=row.notes,
    )


def validate_template(template: Template) -> None:
    if not template.template_id or not template.template_id.strip():
        raise ValidationError("Template id must not be empty")
    if not template.name or not template.name.strip():
        raise ValidationError("Template name must not be empty")
    for day, req in template.per_day.items():
        if not 0 <= day <= 6:
            raise ValidationError(f"day_of_week must be 0-6, got {day}")
        if req.full_count < 0 or req.partial_count < 0 or req.manager_count < 0:
            raise ValidationError(f"Negative staffing count for {DAY_NAMES[day]} in template {template.template_id}")


class TemplateStore:
    def __init__(self, db: Session):
        self.db = db

    def _get_row(self, template_id: str) -> ScheduleTemplates:
        row = self.db.get(ScheduleTemplates, template_id)
        if row is None:
            raise NotFoundError(f"Template {template_id} not found")
        return row

    def get_template(self, template_id: str) -> Template:
        return to_template(self._get_row(template_id))

    def list_active_templates(self) -> list[Template]:
        stmt = (
            select(ScheduleTemplates)
            .where(ScheduleTemplates.status == TemplateStatus.ACTIVE)
            .order_by(ScheduleTemplates.name, ScheduleTemplates.id)
        )
        return [to_template(r) for r in self.db.execute(stmt).scalars().all()]

    def upsert_template(self, template: Template) -> None:
        validate_template(template)

        row: Optional[ScheduleTemplates] = self.db.get(ScheduleTemplates, template.template_id)
        if row is None:
            row = ScheduleTemplates(id=template.template_id)
            self.db.add(row)
        row.name = template.name
        row.status = template.status
        row.notes = template.notes
        self._sync_days(row, template)
        if template.is_default:
            self._clear_default(except_id=template.template_id)
        row.is_default = template.is_default

        self.db.commit()
        logger.info("Template %s saved (%d days)", template.template_id, len(template.per_day))

    def _sync_days(self, row: ScheduleTemplates, template: Template):
        # update in place; replacing the collection would insert before the
        # orphan deletes and trip the (template_id, day_of_week) constraint
        existing = {d.day_of_week: d for d in row.days}
        for day, day_row in existing.items():
            if day not in template.per_day:
                row.days.remove(day_row)
        for day, req in sorted(template.per_day.items()):
            day_row = existing.get(day)
            if day_row is None:
                day_row = TemplateDayRequirements(day_of_week=day)
                row.days.append(day_row)
            day_row.full_count = req.full_count
            day_row.partial_count = req.partial_count
            day_row.manager_count = req.manager_count

    def _clear_default(self, except_id: str):
        self.db.execute(
            update(ScheduleTemplates)
            .where(ScheduleTemplates.id != except_id, ScheduleTemplates.is_default.is_(True))
            .values(is_default=False)
        )

    def set_default_template(self, template_id: str) -> Template:
        """Exactly one template may be the default used by create-from-base."""
        row = self._get_row(template_id)
        self._clear_default(except_id=template_id)
        row.is_default = True
        self.db.commit()
        self.db.refresh(row)
        return to_template(row)

    def get_default_template(self) -> Template:
        stmt = select(ScheduleTemplates).where(ScheduleTemplates.is_default.is_(True))
        row = self.db.execute(stmt).scalars().first()
        if row is None:
            raise NotFoundError("No default template configured")
        return to_template(row)

    def retire_template(self, template_id: str) -> Template:
        row = self._get_row(template_id)
        row.status = TemplateStatus.RETIRED
        self.db.commit()
        return to_template(row)
