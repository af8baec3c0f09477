from sqlalchemy import (
    Column, String, Integer, Float, Boolean, Text, DateTime, JSON, Index
)
from app.models.base import Base

__all__ = [
    "User", "Region", "Location", "InventoryItem", "Activity", "Task", "Metric",
]

# sqlite_autoincrement keeps SQLite from handing out the id of a deleted
# last row again; other dialects never reuse sequence values.


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, index=True)
    password = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    role = Column(String(50), nullable=False, default="field_worker")
    profile_image = Column(Text, nullable=True)

    __table_args__ = {"sqlite_autoincrement": True}


class Region(Base):
    __tablename__ = "regions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    coordinates = Column(JSON, nullable=False)

    __table_args__ = {"sqlite_autoincrement": True}


class Location(Base):
    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    region_id = Column(Integer, nullable=False)
    name = Column(String(255), nullable=False)
    status = Column(String(50), nullable=False, default="healthy")
    coordinates = Column(JSON, nullable=False)
    last_updated = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("idx_location_region", "region_id"),
        {"sqlite_autoincrement": True},
    )


class InventoryItem(Base):
    __tablename__ = "inventory"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(100), nullable=False)
    name = Column(String(255), nullable=False)
    quantity = Column(Float, nullable=False)
    unit = Column(String(50), nullable=False)
    status = Column(String(50), nullable=False)
    last_updated = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = {"sqlite_autoincrement": True}


class Activity(Base):
    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False)
    type = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String(255), nullable=False)
    team = Column(String(255), nullable=True)
    timestamp = Column(DateTime(timezone=True), nullable=False)
    coordinates = Column(JSON, nullable=True)

    __table_args__ = (
        Index("idx_activity_timestamp", "timestamp"),
        {"sqlite_autoincrement": True},
    )


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=False)
    priority = Column(String(20), nullable=False, default="normal")
    status = Column(String(20), nullable=False, default="pending")
    category = Column(String(100), nullable=False)
    assigned_to = Column(Integer, nullable=True)
    scheduled_date = Column(DateTime(timezone=True), nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("idx_task_schedule", "completed", "scheduled_date"),
        {"sqlite_autoincrement": True},
    )


class Metric(Base):
    __tablename__ = "metrics"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    value = Column(Float, nullable=False)
    unit = Column(String(50), nullable=False)
    previous_value = Column(Float, nullable=True)
    change_percentage = Column(Float, nullable=True)
    trend = Column(String(20), nullable=True)
    icon = Column(String(100), nullable=True)
    category = Column(String(50), nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("idx_metric_category", "category", "timestamp"),
        {"sqlite_autoincrement": True},
    )
