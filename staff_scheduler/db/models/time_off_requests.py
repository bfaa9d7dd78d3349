from typing import Optional
from datetime import date, datetime
from sqlalchemy import Date, DateTime, Enum as SQLEnum, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from staff_scheduler.core.enums import TimeOffReason, TimeOffStatus
from staff_scheduler.db.database import Base


class TimeOffRequests(Base):
    __tablename__ = "time_off_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    staff_id: Mapped[str] = mapped_column(String(64), ForeignKey("staff_members.id"), nullable=False, index=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)  # inclusive
    status: Mapped[TimeOffStatus] = mapped_column(SQLEnum(TimeOffStatus, name="time_off_request_status_enum"), nullable=False)
    reason_type: Mapped[TimeOffReason] = mapped_column(SQLEnum(TimeOffReason, name="time_off_request_reason_type_enum"), nullable=False)
    comments: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
