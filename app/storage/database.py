import enum
from contextlib import contextmanager
from typing import Optional

from sqlalchemy.orm import Session, sessionmaker

from app.models import models
from app.models.base import Base
from app.schemas.schemas import (
    Activity, InventoryItem, Location, Metric, Region, Task, TaskStatus, User,
)
from app.storage.base import Clock, Storage, latest_per_category


def _column_values(fields: dict) -> dict:
    return {k: (v.value if isinstance(v, enum.Enum) else v) for k, v in fields.items()}


class DatabaseStorage(Storage):
    """Storage backed by any SQLAlchemy engine.

    Each call runs in its own session and transaction; a failure rolls the
    transaction back so nothing is half-written.
    """

    def __init__(self, session_factory: sessionmaker, clock: Optional[Clock] = None):
        super().__init__(clock)
        self.SessionLocal = session_factory

    @classmethod
    def from_engine(cls, engine, clock: Optional[Clock] = None) -> "DatabaseStorage":
        Base.metadata.create_all(bind=engine)
        return cls(sessionmaker(bind=engine, autoflush=False, expire_on_commit=False), clock)

    @contextmanager
    def _session(self):
        db: Session = self.SessionLocal()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def _get(self, model, record_type, record_id):
        with self._session() as db:
            row = db.query(model).filter(model.id == record_id).first()
            return record_type.model_validate(row) if row else None

    def _list(self, model, record_type, *criteria):
        with self._session() as db:
            rows = db.query(model).filter(*criteria).order_by(model.id).all()
            return [record_type.model_validate(r) for r in rows]

    def _create(self, model, record_type, fields: dict):
        with self._session() as db:
            row = model(**_column_values(fields))
            db.add(row)
            db.flush()
            return record_type.model_validate(row)

    def _update(self, model, record_type, record_id, changes: dict):
        with self._session() as db:
            row = db.query(model).filter(model.id == record_id).first()
            if not row:
                return None
            for field, value in _column_values(changes).items():
                setattr(row, field, value)
            db.flush()
            return record_type.model_validate(row)

    def _delete(self, model, record_id) -> bool:
        with self._session() as db:
            row = db.query(model).filter(model.id == record_id).first()
            if not row:
                return False
            db.delete(row)
            return True

    # Users
    def get_user(self, user_id):
        return self._get(models.User, User, user_id)

    def get_user_by_username(self, username):
        matches = self._list(models.User, User, models.User.username == username)
        return matches[0] if matches else None

    def list_users(self):
        return self._list(models.User, User)

    def create_user(self, data):
        return self._create(models.User, User, data.model_dump())

    def update_user(self, user_id, data):
        return self._update(models.User, User, user_id, data.changes())

    def delete_user(self, user_id):
        return self._delete(models.User, user_id)

    # Regions
    def get_region(self, region_id):
        return self._get(models.Region, Region, region_id)

    def list_regions(self):
        return self._list(models.Region, Region)

    def create_region(self, data):
        return self._create(models.Region, Region, data.model_dump())

    def update_region(self, region_id, data):
        return self._update(models.Region, Region, region_id, data.changes())

    def delete_region(self, region_id):
        return self._delete(models.Region, region_id)

    # Locations
    def get_location(self, location_id):
        return self._get(models.Location, Location, location_id)

    def list_locations(self):
        return self._list(models.Location, Location)

    def list_locations_by_region(self, region_id):
        return self._list(models.Location, Location, models.Location.region_id == region_id)

    def create_location(self, data):
        return self._create(models.Location, Location, {**data.model_dump(), "last_updated": self.clock()})

    def update_location(self, location_id, data):
        return self._update(models.Location, Location, location_id,
                            {**data.changes(), "last_updated": self.clock()})

    def delete_location(self, location_id):
        return self._delete(models.Location, location_id)

    # Inventory
    def get_inventory_item(self, item_id):
        return self._get(models.InventoryItem, InventoryItem, item_id)

    def list_inventory_items(self):
        return self._list(models.InventoryItem, InventoryItem)

    def create_inventory_item(self, data):
        return self._create(models.InventoryItem, InventoryItem,
                            {**data.model_dump(), "last_updated": self.clock()})

    def update_inventory_item(self, item_id, data):
        return self._update(models.InventoryItem, InventoryItem, item_id,
                            {**data.changes(), "last_updated": self.clock()})

    def delete_inventory_item(self, item_id):
        return self._delete(models.InventoryItem, item_id)

    # Activities
    def get_activity(self, activity_id):
        return self._get(models.Activity, Activity, activity_id)

    def list_activities(self):
        return self._list(models.Activity, Activity)

    def list_recent_activities(self, limit):
        with self._session() as db:
            rows = db.query(models.Activity).order_by(
                models.Activity.timestamp.desc(), models.Activity.id.desc()
            ).limit(limit).all()
            return [Activity.model_validate(r) for r in rows]

    def create_activity(self, data):
        return self._create(models.Activity, Activity, {**data.model_dump(), "timestamp": self.clock()})

    def update_activity(self, activity_id, data):
        return self._update(models.Activity, Activity, activity_id, data.changes())

    def delete_activity(self, activity_id):
        return self._delete(models.Activity, activity_id)

    # Tasks
    def get_task(self, task_id):
        return self._get(models.Task, Task, task_id)

    def list_tasks(self):
        return self._list(models.Task, Task)

    def list_upcoming_tasks(self, limit):
        now = self.clock()
        with self._session() as db:
            rows = db.query(models.Task).filter(
                models.Task.completed == False,
                models.Task.scheduled_date > now,
            ).order_by(models.Task.scheduled_date, models.Task.id).limit(limit).all()
            return [Task.model_validate(r) for r in rows]

    def create_task(self, data):
        return self._create(models.Task, Task,
                            {**data.model_dump(), "completed": False, "completed_at": None})

    def update_task(self, task_id, data):
        return self._update(models.Task, Task, task_id, data.changes())

    def complete_task(self, task_id):
        return self._update(models.Task, Task, task_id, {
            "completed": True,
            "status": TaskStatus.COMPLETED,
            "completed_at": self.clock(),
        })

    def delete_task(self, task_id):
        return self._delete(models.Task, task_id)

    # Metrics
    def get_metric(self, metric_id):
        return self._get(models.Metric, Metric, metric_id)

    def list_metrics(self):
        return self._list(models.Metric, Metric)

    def list_latest_metrics(self):
        return latest_per_category(self.list_metrics())

    def create_metric(self, data):
        return self._create(models.Metric, Metric, {**data.model_dump(), "timestamp": self.clock()})

    def update_metric(self, metric_id, data):
        return self._update(models.Metric, Metric, metric_id, data.changes())

    def delete_metric(self, metric_id):
        return self._delete(models.Metric, metric_id)
