import threading
from typing import Callable, Generic, Optional, TypeVar

from pydantic import BaseModel

from app.schemas.schemas import (
    Activity, ActivityCreate, ActivityUpdate,
    InventoryCreate, InventoryItem, InventoryUpdate,
    Location, LocationCreate, LocationUpdate,
    Metric, MetricCreate, MetricUpdate,
    Region, RegionCreate, RegionUpdate,
    Task, TaskCreate, TaskStatus, TaskUpdate,
    User, UserCreate, UserUpdate,
)
from app.storage.base import Clock, Storage, latest_per_category

RecordT = TypeVar("RecordT", bound=BaseModel)


def _detached(record: RecordT) -> RecordT:
    # callers get copies; stored records change only through merge
    return record.model_copy(deep=True)


class Collection(Generic[RecordT]):
    """Records of one entity keyed by id, with their own id counter."""

    def __init__(self, record_type: type[RecordT]):
        self.record_type = record_type
        self._records: dict[int, RecordT] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def get(self, record_id: int) -> Optional[RecordT]:
        with self._lock:
            record = self._records.get(record_id)
            return _detached(record) if record is not None else None

    def values(self) -> list[RecordT]:
        with self._lock:
            return [_detached(r) for r in self._records.values()]

    def find(self, predicate: Callable[[RecordT], bool]) -> list[RecordT]:
        return [r for r in self.values() if predicate(r)]

    def add(self, fields: dict) -> RecordT:
        with self._lock:
            record = self.record_type(id=self._next_id, **fields)
            self._records[record.id] = record
            self._next_id += 1
            return _detached(record)

    def merge(self, record_id: int, changes: dict) -> Optional[RecordT]:
        with self._lock:
            existing = self._records.get(record_id)
            if existing is None:
                return None
            updated = existing.model_copy(update=changes)
            self._records[record_id] = updated
            return _detached(updated)

    def remove(self, record_id: int) -> bool:
        with self._lock:
            return self._records.pop(record_id, None) is not None


class MemoryStorage(Storage):
    """Volatile storage; everything is lost when the process exits."""

    def __init__(self, clock: Optional[Clock] = None):
        super().__init__(clock)
        self.users = Collection(User)
        self.regions = Collection(Region)
        self.locations = Collection(Location)
        self.inventory = Collection(InventoryItem)
        self.activities = Collection(Activity)
        self.tasks = Collection(Task)
        self.metrics = Collection(Metric)

    # Users
    def get_user(self, user_id):
        return self.users.get(user_id)

    def get_user_by_username(self, username):
        matches = self.users.find(lambda u: u.username == username)
        return matches[0] if matches else None

    def list_users(self):
        return self.users.values()

    def create_user(self, data: UserCreate):
        return self.users.add(data.model_dump())

    def update_user(self, user_id, data: UserUpdate):
        return self.users.merge(user_id, data.changes())

    def delete_user(self, user_id):
        return self.users.remove(user_id)

    # Regions
    def get_region(self, region_id):
        return self.regions.get(region_id)

    def list_regions(self):
        return self.regions.values()

    def create_region(self, data: RegionCreate):
        return self.regions.add(data.model_dump())

    def update_region(self, region_id, data: RegionUpdate):
        return self.regions.merge(region_id, data.changes())

    def delete_region(self, region_id):
        return self.regions.remove(region_id)

    # Locations
    def get_location(self, location_id):
        return self.locations.get(location_id)

    def list_locations(self):
        return self.locations.values()

    def list_locations_by_region(self, region_id):
        return self.locations.find(lambda loc: loc.region_id == region_id)

    def create_location(self, data: LocationCreate):
        return self.locations.add({**data.model_dump(), "last_updated": self.clock()})

    def update_location(self, location_id, data: LocationUpdate):
        return self.locations.merge(location_id, {**data.changes(), "last_updated": self.clock()})

    def delete_location(self, location_id):
        return self.locations.remove(location_id)

    # Inventory
    def get_inventory_item(self, item_id):
        return self.inventory.get(item_id)

    def list_inventory_items(self):
        return self.inventory.values()

    def create_inventory_item(self, data: InventoryCreate):
        return self.inventory.add({**data.model_dump(), "last_updated": self.clock()})

    def update_inventory_item(self, item_id, data: InventoryUpdate):
        return self.inventory.merge(item_id, {**data.changes(), "last_updated": self.clock()})

    def delete_inventory_item(self, item_id):
        return self.inventory.remove(item_id)

    # Activities
    def get_activity(self, activity_id):
        return self.activities.get(activity_id)

    def list_activities(self):
        return self.activities.values()

    def list_recent_activities(self, limit):
        ordered = sorted(self.activities.values(), key=lambda a: (a.timestamp, a.id), reverse=True)
        return ordered[:limit]

    def create_activity(self, data: ActivityCreate):
        return self.activities.add({**data.model_dump(), "timestamp": self.clock()})

    def update_activity(self, activity_id, data: ActivityUpdate):
        return self.activities.merge(activity_id, data.changes())

    def delete_activity(self, activity_id):
        return self.activities.remove(activity_id)

    # Tasks
    def get_task(self, task_id):
        return self.tasks.get(task_id)

    def list_tasks(self):
        return self.tasks.values()

    def list_upcoming_tasks(self, limit):
        now = self.clock()
        upcoming = self.tasks.find(lambda t: not t.completed and t.scheduled_date > now)
        upcoming.sort(key=lambda t: t.scheduled_date)
        return upcoming[:limit]

    def create_task(self, data: TaskCreate):
        return self.tasks.add({**data.model_dump(), "completed": False, "completed_at": None})

    def update_task(self, task_id, data: TaskUpdate):
        return self.tasks.merge(task_id, data.changes())

    def complete_task(self, task_id):
        return self.tasks.merge(task_id, {
            "completed": True,
            "status": TaskStatus.COMPLETED,
            "completed_at": self.clock(),
        })

    def delete_task(self, task_id):
        return self.tasks.remove(task_id)

    # Metrics
    def get_metric(self, metric_id):
        return self.metrics.get(metric_id)

    def list_metrics(self):
        return self.metrics.values()

    def list_latest_metrics(self):
        return latest_per_category(self.metrics.values())

    def create_metric(self, data: MetricCreate):
        return self.metrics.add({**data.model_dump(), "timestamp": self.clock()})

    def update_metric(self, metric_id, data: MetricUpdate):
        return self.metrics.merge(metric_id, data.changes())

    def delete_metric(self, metric_id):
        return self.metrics.remove(metric_id)
