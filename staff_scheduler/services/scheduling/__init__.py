"""
Scheduling service package.

Usage:
    from staff_scheduler.services.scheduling import BusinessHours, generate_schedule

    hours = BusinessHours.from_settings(get_settings())

    # Simple usage - load data, assemble and persist in one call
    outcome = generate_schedule(db, "TEMPLATE_001", "2025-09-29", hours)

    # Or load context separately for inspection/testing
    from staff_scheduler.services.scheduling import load_assembly_context, generate_schedule_from_context

    context = load_assembly_context(db, "TEMPLATE_001", date(2025, 9, 29))
    result = generate_schedule_from_context(context, hours)
"""

from .types import (
    StaffMember,
    AvailabilityEntry,
    TimeOffRequest,
    Requirement,
    Template,
    ShiftProfile,
    Assignment,
    Schedule,
    ConflictRecord,
    AssemblyContext,
    AssemblyResult,
    GenerationOutcome,
    ShiftChangeNotice,
)
from .errors import (
    SchedulingError,
    InputError,
    ReferentialError,
    ValidationError,
    NotFoundError,
    ScheduleStateError,
)
from .business_hours import BusinessHours
from .assembler import ScheduleAssembler, assemble_schedule
from .availability_matrix import AvailabilityMatrix
from .conflict_reporter import ConflictReporter
from .data_loader import load_assembly_context
from .editor import ScheduleEditor
from .generator import generate_schedule, generate_from_base, generate_schedule_from_context
from .importer import parse_base_schedule, apply_base_schedule_import, BaseScheduleImport
from .schedule_store import ScheduleStore
from .staff_directory import StaffDirectory
from .staff_import import parse_staff_import, apply_staff_import, StaffRosterImport
from .template_store import TemplateStore

__all__ = [
    # Types
    "StaffMember",
    "AvailabilityEntry",
    "TimeOffRequest",
    "Requirement",
    "Template",
    "ShiftProfile",
    "Assignment",
    "Schedule",
    "ConflictRecord",
    "AssemblyContext",
    "AssemblyResult",
    "GenerationOutcome",
    "ShiftChangeNotice",
    # Errors
    "SchedulingError",
    "InputError",
    "ReferentialError",
    "ValidationError",
    "NotFoundError",
    "ScheduleStateError",
    # Main entry points
    "generate_schedule",
    "generate_from_base",
    "generate_schedule_from_context",
    "parse_base_schedule",
    "apply_base_schedule_import",
    "BaseScheduleImport",
    "parse_staff_import",
    "apply_staff_import",
    "StaffRosterImport",
    # Components
    "BusinessHours",
    "ScheduleAssembler",
    "assemble_schedule",
    "AvailabilityMatrix",
    "ConflictReporter",
    "ScheduleEditor",
    "ScheduleStore",
    "StaffDirectory",
    "TemplateStore",
    # Lower-level functions
    "load_assembly_context",
]
