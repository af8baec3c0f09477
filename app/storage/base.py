"""Storage contract shared by every backend.

Lookups return ``None`` for a missing id and deletes return ``False``;
absence is a normal outcome, never an exception. Server-owned fields
(ids, ``timestamp``, ``last_updated``, ``completed``, ``completed_at``) are
always assigned here, whatever the caller sent.
"""
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable, Optional

from app.schemas.schemas import (
    Activity, ActivityCreate, ActivityUpdate,
    InventoryCreate, InventoryItem, InventoryUpdate,
    Location, LocationCreate, LocationUpdate,
    Metric, MetricCategory, MetricCreate, MetricUpdate,
    Region, RegionCreate, RegionUpdate,
    Task, TaskCreate, TaskUpdate,
    User, UserCreate, UserUpdate,
)

Clock = Callable[[], datetime]

# Order of the "latest metrics" result.
METRIC_CATEGORIES = [
    MetricCategory.COVERAGE,
    MetricCategory.SPECIES,
    MetricCategory.RISK,
    MetricCategory.HEALTH,
]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def latest_per_category(metrics: list[Metric]) -> list[Metric]:
    latest = []
    for category in METRIC_CATEGORIES:
        candidates = [m for m in metrics if m.category == category]
        if candidates:
            # on a timestamp tie the earliest recorded metric wins
            latest.append(max(candidates, key=lambda m: (m.timestamp, -m.id)))
    return latest


class Storage(ABC):
    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock or utcnow

    # Users
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    def list_users(self) -> list[User]: ...

    @abstractmethod
    def create_user(self, data: UserCreate) -> User: ...

    @abstractmethod
    def update_user(self, user_id: int, data: UserUpdate) -> Optional[User]: ...

    @abstractmethod
    def delete_user(self, user_id: int) -> bool: ...

    # Regions
    @abstractmethod
    def get_region(self, region_id: int) -> Optional[Region]: ...

    @abstractmethod
    def list_regions(self) -> list[Region]: ...

    @abstractmethod
    def create_region(self, data: RegionCreate) -> Region: ...

    @abstractmethod
    def update_region(self, region_id: int, data: RegionUpdate) -> Optional[Region]: ...

    @abstractmethod
    def delete_region(self, region_id: int) -> bool: ...

    # Locations
    @abstractmethod
    def get_location(self, location_id: int) -> Optional[Location]: ...

    @abstractmethod
    def list_locations(self) -> list[Location]: ...

    @abstractmethod
    def list_locations_by_region(self, region_id: int) -> list[Location]:
        """Locations whose ``region_id`` matches; the region itself is not checked."""

    @abstractmethod
    def create_location(self, data: LocationCreate) -> Location: ...

    @abstractmethod
    def update_location(self, location_id: int, data: LocationUpdate) -> Optional[Location]: ...

    @abstractmethod
    def delete_location(self, location_id: int) -> bool: ...

    # Inventory
    @abstractmethod
    def get_inventory_item(self, item_id: int) -> Optional[InventoryItem]: ...

    @abstractmethod
    def list_inventory_items(self) -> list[InventoryItem]: ...

    @abstractmethod
    def create_inventory_item(self, data: InventoryCreate) -> InventoryItem: ...

    @abstractmethod
    def update_inventory_item(self, item_id: int, data: InventoryUpdate) -> Optional[InventoryItem]: ...

    @abstractmethod
    def delete_inventory_item(self, item_id: int) -> bool: ...

    # Activities
    @abstractmethod
    def get_activity(self, activity_id: int) -> Optional[Activity]: ...

    @abstractmethod
    def list_activities(self) -> list[Activity]: ...

    @abstractmethod
    def list_recent_activities(self, limit: int) -> list[Activity]:
        """Newest first, at most ``limit`` entries."""

    @abstractmethod
    def create_activity(self, data: ActivityCreate) -> Activity: ...

    @abstractmethod
    def update_activity(self, activity_id: int, data: ActivityUpdate) -> Optional[Activity]: ...

    @abstractmethod
    def delete_activity(self, activity_id: int) -> bool: ...

    # Tasks
    @abstractmethod
    def get_task(self, task_id: int) -> Optional[Task]: ...

    @abstractmethod
    def list_tasks(self) -> list[Task]: ...

    @abstractmethod
    def list_upcoming_tasks(self, limit: int) -> list[Task]:
        """Uncompleted tasks scheduled strictly after now, soonest first."""

    @abstractmethod
    def create_task(self, data: TaskCreate) -> Task: ...

    @abstractmethod
    def update_task(self, task_id: int, data: TaskUpdate) -> Optional[Task]: ...

    @abstractmethod
    def complete_task(self, task_id: int) -> Optional[Task]:
        """Mark completed and stamp ``completed_at``; repeated calls restamp it."""

    @abstractmethod
    def delete_task(self, task_id: int) -> bool: ...

    # Metrics
    @abstractmethod
    def get_metric(self, metric_id: int) -> Optional[Metric]: ...

    @abstractmethod
    def list_metrics(self) -> list[Metric]: ...

    @abstractmethod
    def list_latest_metrics(self) -> list[Metric]:
        """Newest metric of each category, in ``METRIC_CATEGORIES`` order."""

    @abstractmethod
    def create_metric(self, data: MetricCreate) -> Metric: ...

    @abstractmethod
    def update_metric(self, metric_id: int, data: MetricUpdate) -> Optional[Metric]: ...

    @abstractmethod
    def delete_metric(self, metric_id: int) -> bool: ...
