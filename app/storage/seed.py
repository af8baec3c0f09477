import logging
from datetime import timedelta

from app.schemas.schemas import (
    ActivityCreate, InventoryCreate, LocationCreate, MetricCreate,
    RegionCreate, TaskCreate, UserCreate,
)
from app.schemas.validation import parse_insert
from app.storage.base import Storage

logger = logging.getLogger(__name__)

SAMPLE_USERS = [
    {"username": "admin", "password": "admin123", "fullName": "Admin User",
     "email": "admin@forestmanager.com", "role": "admin", "profileImage": None},
    {"username": "jforester", "password": "password123", "fullName": "John Forester",
     "email": "john@forestmanager.com", "role": "manager", "profileImage": None},
    {"username": "fieldworker", "password": "field123", "fullName": "Field Worker",
     "email": "field@forestmanager.com", "role": "field_worker", "profileImage": None},
]


def _polygon(ring):
    return {"type": "Polygon", "coordinates": [ring]}


def _point(lat, lng):
    return {"type": "Point", "coordinates": [lat, lng]}


SAMPLE_REGIONS = [
    {"name": "North Region", "description": "Northern forest area with pine and spruce trees",
     "coordinates": _polygon([[45.3, -122.7], [45.4, -122.7], [45.4, -122.6], [45.3, -122.6], [45.3, -122.7]])},
    {"name": "East Region", "description": "Eastern forest with mixed deciduous trees",
     "coordinates": _polygon([[45.2, -122.5], [45.3, -122.5], [45.3, -122.4], [45.2, -122.4], [45.2, -122.5]])},
    {"name": "South Region", "description": "Southern forest border with oak and maple",
     "coordinates": _polygon([[45.1, -122.6], [45.2, -122.6], [45.2, -122.5], [45.1, -122.5], [45.1, -122.6]])},
    {"name": "West Region", "description": "Western border with mixed coniferous forest",
     "coordinates": _polygon([[45.2, -122.8], [45.3, -122.8], [45.3, -122.7], [45.2, -122.7], [45.2, -122.8]])},
]

SAMPLE_LOCATIONS = [
    {"regionId": 1, "name": "North Ridge Trail", "status": "healthy", "coordinates": _point(45.35, -122.75)},
    {"regionId": 2, "name": "East Forest Boundary", "status": "monitoring", "coordinates": _point(45.25, -122.45)},
    {"regionId": 3, "name": "Southern Clearing", "status": "critical", "coordinates": _point(45.15, -122.55)},
]

SAMPLE_INVENTORY = [
    {"type": "plant", "name": "Pine Saplings", "quantity": 1250, "unit": "units", "status": "available"},
    {"type": "water", "name": "Water Reserves", "quantity": 15000, "unit": "liters", "status": "low_supply"},
    {"type": "fertilizer", "name": "Fertilizer", "quantity": 500, "unit": "kg", "status": "available"},
    {"type": "tools", "name": "Tools", "quantity": 45, "unit": "sets", "status": "maintenance"},
]

SAMPLE_ACTIVITIES = [
    {"userId": 2, "type": "planting", "description": "Planted 250 new saplings",
     "location": "North Sector", "team": "Field Team Alpha", "coordinates": _point(45.34, -122.72)},
    {"userId": 3, "type": "monitoring", "description": "Soil quality assessment completed",
     "location": "East Sector", "team": "Research Team", "coordinates": _point(45.26, -122.47)},
    {"userId": 2, "type": "maintenance", "description": "Pest detection alert",
     "location": "South Sector", "team": "Monitoring Station 4", "coordinates": _point(45.14, -122.56)},
    {"userId": 3, "type": "maintenance", "description": "Irrigation system maintenance",
     "location": "West Sector", "team": "Maintenance Team", "coordinates": _point(45.24, -122.76)},
]

# (days from now, task fields)
SAMPLE_TASKS = [
    (5, {"title": "Weekly tree health inspection",
         "description": "Complete standard health assessment for all trees in sector",
         "location": "North Region", "priority": "normal", "status": "pending",
         "category": "routine", "assignedTo": 2}),
    (7, {"title": "Trail maintenance and clearing",
         "description": "Clear fallen branches and repair walking paths",
         "location": "East Region", "priority": "normal", "status": "pending",
         "category": "maintenance", "assignedTo": 3}),
    (10, {"title": "Wildlife census preparations",
          "description": "Set up camera traps and prepare for upcoming wildlife count",
          "location": "All Regions", "priority": "high", "status": "pending",
          "category": "monitoring", "assignedTo": 2}),
]

SAMPLE_METRICS = [
    {"name": "Forest Coverage", "value": 12450, "unit": "ha", "previousValue": 12150,
     "changePercentage": 2.4, "trend": "up", "icon": "park", "category": "coverage"},
    {"name": "Tree Species", "value": 78, "unit": "species", "previousValue": 73,
     "changePercentage": 6.8, "trend": "up", "icon": "eco", "category": "species"},
    {"name": "Fire Risk Index", "value": 24, "unit": "", "previousValue": 21,
     "changePercentage": 12, "trend": "up", "icon": "local_fire_department", "category": "risk"},
    {"name": "Health Index", "value": 87.5, "unit": "%", "previousValue": 84.8,
     "changePercentage": 3.2, "trend": "up", "icon": "monitor_heart", "category": "health"},
]


def seed_demo_data(storage: Storage) -> bool:
    """Load the demo dataset unless the storage already holds users.

    Returns whether anything was written.
    """
    if storage.list_users():
        logger.info("Storage already populated, skipping demo data")
        return False

    for payload in SAMPLE_USERS:
        storage.create_user(parse_insert(UserCreate, payload))
    for payload in SAMPLE_REGIONS:
        storage.create_region(parse_insert(RegionCreate, payload))
    for payload in SAMPLE_LOCATIONS:
        storage.create_location(parse_insert(LocationCreate, payload))
    for payload in SAMPLE_INVENTORY:
        storage.create_inventory_item(parse_insert(InventoryCreate, payload))
    for payload in SAMPLE_ACTIVITIES:
        storage.create_activity(parse_insert(ActivityCreate, payload))

    now = storage.clock()
    for days, payload in SAMPLE_TASKS:
        scheduled = now + timedelta(days=days)
        storage.create_task(parse_insert(TaskCreate, {**payload, "scheduledDate": scheduled}))

    for payload in SAMPLE_METRICS:
        storage.create_metric(parse_insert(MetricCreate, payload))

    logger.info(
        "Seeded demo data: %d users, %d regions, %d locations, %d inventory items, "
        "%d activities, %d tasks, %d metrics",
        len(SAMPLE_USERS), len(SAMPLE_REGIONS), len(SAMPLE_LOCATIONS), len(SAMPLE_INVENTORY),
        len(SAMPLE_ACTIVITIES), len(SAMPLE_TASKS), len(SAMPLE_METRICS),
    )
    return True
