from typing import Optional
from datetime import datetime
from sqlalchemy import Boolean, DateTime, Enum as SQLEnum, ForeignKey, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from staff_scheduler.core.enums import ConflictKind, ConflictSeverity, SlotCategory
from staff_scheduler.db.database import Base


class ScheduleConflicts(Base):
    __tablename__ = "schedule_conflicts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    schedule_id: Mapped[str] = mapped_column(String(64), ForeignKey("schedules.id"), nullable=False)
    sequence: Mapped[int] = mapped_column(Integer, nullable=False)
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)  # 0–6
    kind: Mapped[ConflictKind] = mapped_column(SQLEnum(ConflictKind, name="conflict_kind_enum"), nullable=False)
    category: Mapped[Optional[SlotCategory]] = mapped_column(SQLEnum(SlotCategory, name="conflict_slot_category_enum"), nullable=True)
    staff_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    detail: Mapped[str] = mapped_column(String, nullable=False)
    severity: Mapped[ConflictSeverity] = mapped_column(SQLEnum(ConflictSeverity, name="conflict_severity_enum"), nullable=False)
    acknowledged: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    acknowledged_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        Index("ix_schedule_conflicts_schedule_sequence", "schedule_id", "sequence"),
    )
