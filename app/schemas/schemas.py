import enum
from datetime import datetime, timezone
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    FIELD_WORKER = "field_worker"


class InventoryStatus(str, enum.Enum):
    AVAILABLE = "available"
    LOW_SUPPLY = "low_supply"
    MAINTENANCE = "maintenance"
    DEPLETED = "depleted"


class TaskPriority(str, enum.Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


class TaskStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class MetricTrend(str, enum.Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class MetricCategory(str, enum.Enum):
    COVERAGE = "coverage"
    SPECIES = "species"
    RISK = "risk"
    HEALTH = "health"


# Location status is free text; these are the values the UI knows about.
LOCATION_STATUSES = ("healthy", "monitoring", "critical", "unclassified")

GeoJSON = dict[str, Any]


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire, datetimes in UTC."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    @field_validator("*", mode="after")
    @classmethod
    def _datetimes_in_utc(cls, value):
        if isinstance(value, datetime):
            if value.tzinfo is None:
                return value.replace(tzinfo=timezone.utc)
            return value.astimezone(timezone.utc)
        return value


class PartialModel(CamelModel):
    """Every field optional; a supplied field must still be valid.

    Explicit nulls are only accepted for the names in ``nullable_fields``.
    """

    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_nulls(self):
        fields = type(self).model_fields
        nulls = [
            fields[name].alias or name
            for name in sorted(self.model_fields_set)
            if getattr(self, name) is None and name not in self.nullable_fields
        ]
        if nulls:
            raise ValueError(f"{', '.join(nulls)} may not be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


def _check_confirmation(password: Optional[str], confirm_password: Optional[str]):
    if confirm_password is not None and confirm_password != password:
        raise ValueError("confirmPassword must equal password")


# -----------------------------
# Users
# -----------------------------
class UserCreate(CamelModel):
    username: str
    password: str = Field(min_length=6)
    full_name: str
    email: str
    role: UserRole = UserRole.FIELD_WORKER
    profile_image: Optional[str] = None
    confirm_password: Optional[str] = Field(default=None, exclude=True)

    @model_validator(mode="after")
    def _passwords_match(self):
        _check_confirmation(self.password, self.confirm_password)
        return self


class UserUpdate(PartialModel):
    nullable_fields: ClassVar[frozenset[str]] = frozenset({"profile_image", "confirm_password"})

    username: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=6)
    full_name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[UserRole] = None
    profile_image: Optional[str] = None
    confirm_password: Optional[str] = Field(default=None, exclude=True)

    @model_validator(mode="after")
    def _passwords_match(self):
        _check_confirmation(self.password, self.confirm_password)
        return self


class User(CamelModel):
    id: int
    username: str
    password: str
    full_name: str
    email: str
    role: UserRole
    profile_image: Optional[str] = None


class UserResponse(CamelModel):
    id: int
    username: str
    full_name: str
    email: str
    role: UserRole
    profile_image: Optional[str] = None


# -----------------------------
# Regions
# -----------------------------
class RegionCreate(CamelModel):
    name: str
    description: Optional[str] = None
    coordinates: GeoJSON


class RegionUpdate(PartialModel):
    nullable_fields: ClassVar[frozenset[str]] = frozenset({"description"})

    name: Optional[str] = None
    description: Optional[str] = None
    coordinates: Optional[GeoJSON] = None


class Region(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    coordinates: GeoJSON


# -----------------------------
# Locations
# -----------------------------
class LocationCreate(CamelModel):
    region_id: int
    name: str
    status: str = "healthy"
    coordinates: GeoJSON


class LocationUpdate(PartialModel):
    region_id: Optional[int] = None
    name: Optional[str] = None
    status: Optional[str] = None
    coordinates: Optional[GeoJSON] = None


class Location(CamelModel):
    id: int
    region_id: int
    name: str
    status: str
    coordinates: GeoJSON
    last_updated: datetime


# -----------------------------
# Inventory
# -----------------------------
class InventoryCreate(CamelModel):
    type: str
    name: str
    quantity: float = Field(ge=0)
    unit: str
    status: InventoryStatus


class InventoryUpdate(PartialModel):
    type: Optional[str] = None
    name: Optional[str] = None
    quantity: Optional[float] = Field(default=None, ge=0)
    unit: Optional[str] = None
    status: Optional[InventoryStatus] = None


class InventoryItem(CamelModel):
    id: int
    type: str
    name: str
    quantity: float
    unit: str
    status: InventoryStatus
    last_updated: datetime


# -----------------------------
# Activities
# -----------------------------
class ActivityCreate(CamelModel):
    user_id: int
    type: str
    description: str
    location: str
    team: Optional[str] = None
    coordinates: Optional[GeoJSON] = None


class ActivityUpdate(PartialModel):
    nullable_fields: ClassVar[frozenset[str]] = frozenset({"team", "coordinates"})

    user_id: Optional[int] = None
    type: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    team: Optional[str] = None
    coordinates: Optional[GeoJSON] = None


class Activity(CamelModel):
    id: int
    user_id: int
    type: str
    description: str
    location: str
    team: Optional[str] = None
    timestamp: datetime
    coordinates: Optional[GeoJSON] = None


# -----------------------------
# Tasks
# -----------------------------
class TaskCreate(CamelModel):
    title: str
    description: Optional[str] = None
    location: str
    priority: TaskPriority = TaskPriority.NORMAL
    status: TaskStatus = TaskStatus.PENDING
    category: str
    assigned_to: Optional[int] = None
    scheduled_date: datetime


class TaskUpdate(PartialModel):
    nullable_fields: ClassVar[frozenset[str]] = frozenset({"description", "assigned_to"})

    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    category: Optional[str] = None
    assigned_to: Optional[int] = None
    scheduled_date: Optional[datetime] = None


class Task(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    location: str
    priority: TaskPriority
    status: TaskStatus
    category: str
    assigned_to: Optional[int] = None
    scheduled_date: datetime
    completed: bool = False
    completed_at: Optional[datetime] = None


# -----------------------------
# Metrics
# -----------------------------
class MetricCreate(CamelModel):
    name: str
    value: float
    unit: str
    previous_value: Optional[float] = None
    change_percentage: Optional[float] = None
    trend: Optional[MetricTrend] = None
    icon: Optional[str] = None
    category: MetricCategory


class MetricUpdate(PartialModel):
    nullable_fields: ClassVar[frozenset[str]] = frozenset(
        {"previous_value", "change_percentage", "trend", "icon"}
    )

    name: Optional[str] = None
    value: Optional[float] = None
    unit: Optional[str] = None
    previous_value: Optional[float] = None
    change_percentage: Optional[float] = None
    trend: Optional[MetricTrend] = None
    icon: Optional[str] = None
    category: Optional[MetricCategory] = None


class Metric(CamelModel):
    id: int
    name: str
    value: float
    unit: str
    previous_value: Optional[float] = None
    change_percentage: Optional[float] = None
    trend: Optional[MetricTrend] = None
    icon: Optional[str] = None
    category: MetricCategory
    timestamp: datetime


# -----------------------------
# Dashboard
# -----------------------------
class DashboardStats(CamelModel):
    total_users: int
    total_regions: int
    total_locations: int
    locations_by_status: dict[str, int]
    inventory_items: int
    inventory_needing_attention: int
    pending_tasks: int
    completed_tasks: int
    upcoming_tasks: int
    total_activities: int
