from staff_scheduler.db.database import Base

# Import models
from staff_scheduler.db.models.staff_members import StaffMembers
from staff_scheduler.db.models.availability_entries import AvailabilityEntries
from staff_scheduler.db.models.schedule_templates import ScheduleTemplates, TemplateDayRequirements
from staff_scheduler.db.models.schedules import Schedules, ScheduleAssignments
from staff_scheduler.db.models.schedule_conflicts import ScheduleConflicts
from staff_scheduler.db.models.time_off_requests import TimeOffRequests

__all__ = [
    "Base",
    # Models
    "StaffMembers",
    "AvailabilityEntries",
    "ScheduleTemplates",
    "TemplateDayRequirements",
    "Schedules",
    "ScheduleAssignments",
    "ScheduleConflicts",
    "TimeOffRequests",
]
