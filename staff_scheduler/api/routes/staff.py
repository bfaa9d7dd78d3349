from typing import List
from fastapi import APIRouter, Depends

from staff_scheduler.api.deps import get_staff_directory
from staff_scheduler.schemas.staff import StaffUpsert, StaffResponse
from staff_scheduler.services.scheduling import StaffDirectory, StaffMember

router = APIRouter(prefix="/staff", tags=["staff"])


@router.get("", response_model=List[StaffResponse])
def list_staff(
    include_inactive: bool = False,
    directory: StaffDirectory = Depends(get_staff_directory),
):
    return directory.list_staff(include_inactive=include_inactive)


@router.get("/{staff_id}", response_model=StaffResponse)
def get_staff(staff_id: str, directory: StaffDirectory = Depends(get_staff_directory)):
    return directory.get_staff(staff_id)


@router.put("/{staff_id}", response_model=StaffResponse)
def upsert_staff(
    staff_id: str,
    payload: StaffUpsert,
    directory: StaffDirectory = Depends(get_staff_directory),
):
    return directory.upsert_staff(StaffMember(id=staff_id, **payload.model_dump()))


@router.post("/{staff_id}/deactivate", response_model=StaffResponse)
def deactivate_staff(staff_id: str, directory: StaffDirectory = Depends(get_staff_directory)):
    """Soft delete: the record stays, the member gets no new assignments."""
    return directory.deactivate(staff_id)
