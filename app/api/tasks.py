from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from app.db.session import get_storage
from app.api.deps import parse_id, get_or_404, internal_error, query_limit
from app.schemas.schemas import Task, TaskCreate, TaskUpdate
from app.storage.base import Storage

router = APIRouter(prefix="/api/tasks", tags=["tasks"])

NOT_FOUND = "Task not found"


@router.get("", response_model=list[Task])
def list_tasks(
    limit: Optional[str] = Query(None, description="Upcoming uncompleted tasks, soonest first, when a positive integer"),
    storage: Storage = Depends(get_storage)
):
    count = query_limit(limit)
    with internal_error("Failed to retrieve tasks"):
        if count:
            return storage.list_upcoming_tasks(count)
        return storage.list_tasks()


@router.get("/{task_id}", response_model=Task)
def get_task(task_id: str, storage: Storage = Depends(get_storage)):
    tid = parse_id(task_id, NOT_FOUND)
    with internal_error("Failed to retrieve task"):
        return get_or_404(storage.get_task(tid), NOT_FOUND)


@router.post("", response_model=Task, status_code=201)
def create_task(data: TaskCreate, storage: Storage = Depends(get_storage)):
    with internal_error("Failed to create task"):
        return storage.create_task(data)


@router.put("/{task_id}", response_model=Task)
def update_task(task_id: str, data: TaskUpdate, storage: Storage = Depends(get_storage)):
    tid = parse_id(task_id, NOT_FOUND)
    with internal_error("Failed to update task"):
        return get_or_404(storage.update_task(tid, data), NOT_FOUND)


@router.put("/{task_id}/complete", response_model=Task)
def complete_task(task_id: str, storage: Storage = Depends(get_storage)):
    tid = parse_id(task_id, NOT_FOUND)
    with internal_error("Failed to complete task"):
        return get_or_404(storage.complete_task(tid), NOT_FOUND)


@router.delete("/{task_id}", status_code=204)
def delete_task(task_id: str, storage: Storage = Depends(get_storage)):
    tid = parse_id(task_id, NOT_FOUND)
    with internal_error("Failed to delete task"):
        deleted = storage.delete_task(tid)
    if not deleted:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
