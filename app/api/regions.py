from fastapi import APIRouter, Depends, HTTPException
from app.db.session import get_storage
from app.api.deps import parse_id, get_or_404, internal_error
from app.schemas.schemas import Region, RegionCreate, RegionUpdate
from app.storage.base import Storage

router = APIRouter(prefix="/api/regions", tags=["regions"])

NOT_FOUND = "Region not found"


@router.get("", response_model=list[Region])
def list_regions(storage: Storage = Depends(get_storage)):
    with internal_error("Failed to retrieve regions"):
        return storage.list_regions()


@router.get("/{region_id}", response_model=Region)
def get_region(region_id: str, storage: Storage = Depends(get_storage)):
    rid = parse_id(region_id, NOT_FOUND)
    with internal_error("Failed to retrieve region"):
        return get_or_404(storage.get_region(rid), NOT_FOUND)


@router.post("", response_model=Region, status_code=201)
def create_region(data: RegionCreate, storage: Storage = Depends(get_storage)):
    with internal_error("Failed to create region"):
        return storage.create_region(data)


@router.put("/{region_id}", response_model=Region)
def update_region(region_id: str, data: RegionUpdate, storage: Storage = Depends(get_storage)):
    rid = parse_id(region_id, NOT_FOUND)
    with internal_error("Failed to update region"):
        return get_or_404(storage.update_region(rid, data), NOT_FOUND)


@router.delete("/{region_id}", status_code=204)
def delete_region(region_id: str, storage: Storage = Depends(get_storage)):
    rid = parse_id(region_id, NOT_FOUND)
    with internal_error("Failed to delete region"):
        deleted = storage.delete_region(rid)
    if not deleted:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
