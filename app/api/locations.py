from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from app.db.session import get_storage
from app.api.deps import parse_id, get_or_404, internal_error, query_int
from app.schemas.schemas import Location, LocationCreate, LocationUpdate
from app.storage.base import Storage

router = APIRouter(prefix="/api/locations", tags=["locations"])

NOT_FOUND = "Location not found"


@router.get("", response_model=list[Location])
def list_locations(
    region_id: Optional[str] = Query(None, alias="regionId"),
    storage: Storage = Depends(get_storage)
):
    rid = query_int(region_id)
    with internal_error("Failed to retrieve locations"):
        if rid is not None:
            return storage.list_locations_by_region(rid)
        return storage.list_locations()


@router.get("/{location_id}", response_model=Location)
def get_location(location_id: str, storage: Storage = Depends(get_storage)):
    lid = parse_id(location_id, NOT_FOUND)
    with internal_error("Failed to retrieve location"):
        return get_or_404(storage.get_location(lid), NOT_FOUND)


@router.post("", response_model=Location, status_code=201)
def create_location(data: LocationCreate, storage: Storage = Depends(get_storage)):
    with internal_error("Failed to create location"):
        return storage.create_location(data)


@router.put("/{location_id}", response_model=Location)
def update_location(location_id: str, data: LocationUpdate, storage: Storage = Depends(get_storage)):
    lid = parse_id(location_id, NOT_FOUND)
    with internal_error("Failed to update location"):
        return get_or_404(storage.update_location(lid, data), NOT_FOUND)


@router.delete("/{location_id}", status_code=204)
def delete_location(location_id: str, storage: Storage = Depends(get_storage)):
    lid = parse_id(location_id, NOT_FOUND)
    with internal_error("Failed to delete location"):
        deleted = storage.delete_location(lid)
    if not deleted:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
