from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from app.db.session import get_storage
from app.api.deps import parse_id, get_or_404, internal_error, query_limit
from app.schemas.schemas import Activity, ActivityCreate, ActivityUpdate
from app.storage.base import Storage

router = APIRouter(prefix="/api/activities", tags=["activities"])

NOT_FOUND = "Activity not found"


@router.get("", response_model=list[Activity])
def list_activities(
    limit: Optional[str] = Query(None, description="Most recent first when a positive integer"),
    storage: Storage = Depends(get_storage)
):
    count = query_limit(limit)
    with internal_error("Failed to retrieve activities"):
        if count:
            return storage.list_recent_activities(count)
        return storage.list_activities()


@router.get("/{activity_id}", response_model=Activity)
def get_activity(activity_id: str, storage: Storage = Depends(get_storage)):
    aid = parse_id(activity_id, NOT_FOUND)
    with internal_error("Failed to retrieve activity"):
        return get_or_404(storage.get_activity(aid), NOT_FOUND)


@router.post("", response_model=Activity, status_code=201)
def create_activity(data: ActivityCreate, storage: Storage = Depends(get_storage)):
    with internal_error("Failed to create activity"):
        return storage.create_activity(data)


@router.put("/{activity_id}", response_model=Activity)
def update_activity(activity_id: str, data: ActivityUpdate, storage: Storage = Depends(get_storage)):
    aid = parse_id(activity_id, NOT_FOUND)
    with internal_error("Failed to update activity"):
        return get_or_404(storage.update_activity(aid, data), NOT_FOUND)


@router.delete("/{activity_id}", status_code=204)
def delete_activity(activity_id: str, storage: Storage = Depends(get_storage)):
    aid = parse_id(activity_id, NOT_FOUND)
    with internal_error("Failed to delete activity"):
        deleted = storage.delete_activity(aid)
    if not deleted:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
