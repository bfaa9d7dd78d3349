from typing import List, Optional
from fastapi import APIRouter, Depends

from staff_scheduler.api.deps import get_availability_matrix
from staff_scheduler.core.enums import ShiftWindow
from staff_scheduler.schemas.availability import (
    AvailabilityBulkImport,
    AvailabilityBulkImportResponse,
    AvailabilityEntryResponse,
    AvailabilityUpdate,
)
from staff_scheduler.services.scheduling import AvailabilityEntry, AvailabilityMatrix

router = APIRouter(prefix="/availability", tags=["availability"])


@router.get("", response_model=List[AvailabilityEntryResponse])
def list_availability(
    staff_id: Optional[str] = None,
    matrix: AvailabilityMatrix = Depends(get_availability_matrix),
):
    return matrix.list_entries(staff_id=staff_id)


@router.get("/{staff_id}/{day_of_week}/{shift_window}", response_model=AvailabilityEntryResponse)
def get_availability(
    staff_id: str,
    day_of_week: int,
    shift_window: ShiftWindow,
    matrix: AvailabilityMatrix = Depends(get_availability_matrix),
):
    flag = matrix.get_availability(staff_id, day_of_week, shift_window)
    return AvailabilityEntry(staff_id, day_of_week, shift_window, flag)


@router.put("/{staff_id}/{day_of_week}/{shift_window}", response_model=AvailabilityEntryResponse)
def set_availability(
    staff_id: str,
    day_of_week: int,
    shift_window: ShiftWindow,
    payload: AvailabilityUpdate,
    matrix: AvailabilityMatrix = Depends(get_availability_matrix),
):
    return matrix.set_availability(staff_id, day_of_week, shift_window, payload.flag)


@router.post("/bulk", response_model=AvailabilityBulkImportResponse)
def bulk_import_availability(
    payload: AvailabilityBulkImport,
    matrix: AvailabilityMatrix = Depends(get_availability_matrix),
):
    """Replace the whole matrix. Rejected as a whole if any staff id is unknown."""
    entries = [AvailabilityEntry(**e.model_dump()) for e in payload.entries]
    return AvailabilityBulkImportResponse(imported=matrix.bulk_import(entries))
