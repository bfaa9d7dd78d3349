from datetime import datetime
from sqlalchemy import DateTime, Enum as SQLEnum, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from staff_scheduler.core.enums import AvailabilityFlag, ShiftWindow
from staff_scheduler.db.database import Base


class AvailabilityEntries(Base):
    __tablename__ = "availability_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    staff_id: Mapped[str] = mapped_column(String(64), ForeignKey("staff_members.id"), nullable=False, index=True)
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)  # 0–6
    shift_window: Mapped[ShiftWindow] = mapped_column(SQLEnum(ShiftWindow, name="shift_window_enum"), nullable=False)
    flag: Mapped[AvailabilityFlag] = mapped_column(SQLEnum(AvailabilityFlag, name="availability_flag_enum"), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("staff_id", "day_of_week", "shift_window", name="uix_availability_entries_cell"),
    )
