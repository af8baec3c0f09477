from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from app.db.session import get_storage
from app.api.deps import parse_id, get_or_404, internal_error
from app.schemas.schemas import Metric, MetricCreate, MetricUpdate
from app.storage.base import Storage

router = APIRouter(prefix="/api/metrics", tags=["metrics"])

NOT_FOUND = "Metric not found"


@router.get("", response_model=list[Metric])
def list_metrics(
    latest: Optional[str] = Query(None, description="\"true\" for only the newest metric of each category"),
    storage: Storage = Depends(get_storage)
):
    with internal_error("Failed to retrieve metrics"):
        if latest == "true":
            return storage.list_latest_metrics()
        return storage.list_metrics()


@router.get("/{metric_id}", response_model=Metric)
def get_metric(metric_id: str, storage: Storage = Depends(get_storage)):
    mid = parse_id(metric_id, NOT_FOUND)
    with internal_error("Failed to retrieve metric"):
        return get_or_404(storage.get_metric(mid), NOT_FOUND)


@router.post("", response_model=Metric, status_code=201)
def create_metric(data: MetricCreate, storage: Storage = Depends(get_storage)):
    with internal_error("Failed to create metric"):
        return storage.create_metric(data)


@router.put("/{metric_id}", response_model=Metric)
def update_metric(metric_id: str, data: MetricUpdate, storage: Storage = Depends(get_storage)):
    mid = parse_id(metric_id, NOT_FOUND)
    with internal_error("Failed to update metric"):
        return get_or_404(storage.update_metric(mid, data), NOT_FOUND)


@router.delete("/{metric_id}", status_code=204)
def delete_metric(metric_id: str, storage: Storage = Depends(get_storage)):
    mid = parse_id(metric_id, NOT_FOUND)
    with internal_error("Failed to delete metric"):
        deleted = storage.delete_metric(mid)
    if not deleted:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
