from typing import Optional
from datetime import date, datetime, time
from sqlalchemy import JSON, Date, DateTime, Enum as SQLEnum, ForeignKey, Index, Integer, String, Time, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from staff_scheduler.core.enums import ScheduleStatus, SlotCategory
from staff_scheduler.db.database import Base


class Schedules(Base):
    __tablename__ = "schedules"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    template_id: Mapped[str] = mapped_column(String(64), ForeignKey("schedule_templates.id"), nullable=False)
    week_starting: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    status: Mapped[ScheduleStatus] = mapped_column(SQLEnum(ScheduleStatus, name="schedule_status_enum"), nullable=False, default=ScheduleStatus.DRAFT)
    published_snapshot: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
    published_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    assignments: Mapped[list["ScheduleAssignments"]] = relationship(
        back_populates="schedule",
        cascade="all, delete-orphan",
        order_by="ScheduleAssignments.position",
    )


class ScheduleAssignments(Base):
    __tablename__ = "schedule_assignments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    schedule_id: Mapped[str] = mapped_column(String(64), ForeignKey("schedules.id"), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)  # order within the schedule
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)  # 0–6
    staff_id: Mapped[str] = mapped_column(String(64), ForeignKey("staff_members.id"), nullable=False)
    role: Mapped[str] = mapped_column(String(60), nullable=False)
    category: Mapped[SlotCategory] = mapped_column(SQLEnum(SlotCategory, name="slot_category_enum"), nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)

    schedule: Mapped[Schedules] = relationship(back_populates="assignments")

    __table_args__ = (
        Index("ix_schedule_assignments_schedule_staff", "schedule_id", "staff_id"),
    )
