from typing import Optional
from datetime import datetime
from sqlalchemy import String, DateTime, Enum as SQLEnum, func
from sqlalchemy.orm import Mapped, mapped_column

from staff_scheduler.core.enums import StaffStatus, DEFAULT_ROLE
from staff_scheduler.db.database import Base


class StaffMembers(Base):
    __tablename__ = "staff_members"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    display_name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    full_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    role: Mapped[str] = mapped_column(String(60), nullable=False, default=DEFAULT_ROLE)
    status: Mapped[StaffStatus] = mapped_column(SQLEnum(StaffStatus, name="staff_status_enum"), nullable=False, default=StaffStatus.ACTIVE)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
