from fastapi import APIRouter, Depends

from staff_scheduler.api.deps import get_conflict_reporter
from staff_scheduler.schemas.conflicts import ConflictResponse
from staff_scheduler.services.scheduling import ConflictReporter

router = APIRouter(prefix="/conflicts", tags=["conflicts"])


@router.post("/{conflict_id}/acknowledge", response_model=ConflictResponse)
def acknowledge_conflict(
    conflict_id: int,
    reporter: ConflictReporter = Depends(get_conflict_reporter),
):
    """Mark reviewed. The record itself is kept."""
    conflict = reporter.acknowledge(conflict_id)
    return ConflictResponse.model_validate(conflict, from_attributes=True)
