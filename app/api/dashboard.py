from collections import Counter
from fastapi import APIRouter, Depends
from app.db.session import get_storage
from app.api.deps import internal_error
from app.schemas.schemas import DashboardStats, InventoryStatus, LOCATION_STATUSES, TaskStatus
from app.storage.base import Storage

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])

ATTENTION_STATUSES = {InventoryStatus.LOW_SUPPLY, InventoryStatus.MAINTENANCE, InventoryStatus.DEPLETED}


@router.get("/stats", response_model=DashboardStats)
def get_stats(storage: Storage = Depends(get_storage)):
    with internal_error("Failed to retrieve dashboard stats"):
        locations = storage.list_locations()
        inventory = storage.list_inventory_items()
        tasks = storage.list_tasks()

        by_status = {status: 0 for status in LOCATION_STATUSES}
        by_status.update(Counter(loc.status for loc in locations))

        return DashboardStats(
            total_users=len(storage.list_users()),
            total_regions=len(storage.list_regions()),
            total_locations=len(locations),
            locations_by_status=by_status,
            inventory_items=len(inventory),
            inventory_needing_attention=sum(1 for i in inventory if i.status in ATTENTION_STATUSES),
            pending_tasks=sum(1 for t in tasks if t.status == TaskStatus.PENDING),
            completed_tasks=sum(1 for t in tasks if t.completed),
            upcoming_tasks=len(storage.list_upcoming_tasks(len(tasks))),
            total_activities=len(storage.list_activities()),
        )
