from typing import Optional
from datetime import datetime
from sqlalchemy import Boolean, DateTime, Enum as SQLEnum, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from staff_scheduler.core.enums import TemplateStatus
from staff_scheduler.db.database import Base


class ScheduleTemplates(Base):
    __tablename__ = "schedule_templates"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    status: Mapped[TemplateStatus] = mapped_column(SQLEnum(TemplateStatus, name="template_status_enum"), nullable=False, default=TemplateStatus.ACTIVE)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    days: Mapped[list["TemplateDayRequirements"]] = relationship(
        back_populates="template",
        cascade="all, delete-orphan",
        order_by="TemplateDayRequirements.day_of_week",
    )


class TemplateDayRequirements(Base):
    __tablename__ = "template_day_requirements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    template_id: Mapped[str] = mapped_column(String(64), ForeignKey("schedule_templates.id"), nullable=False, index=True)
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)  # 0–6
    full_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    partial_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    manager_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    template: Mapped[ScheduleTemplates] = relationship(back_populates="days")

    __table_args__ = (
        UniqueConstraint("template_id", "day_of_week", name="uix_template_day_requirements_day"),
    )
