"""Storage contract, run against every backend."""

from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

from app.schemas.schemas import (
    ActivityCreate, ActivityUpdate, InventoryCreate, InventoryStatus, InventoryUpdate,
    LocationCreate, LocationUpdate, MetricCategory, MetricCreate, MetricUpdate,
    RegionCreate, RegionUpdate, TaskCreate, TaskStatus, TaskUpdate,
    UserCreate, UserUpdate,
)
from app.storage.base import METRIC_CATEGORIES
from app.storage.memory import MemoryStorage
from app.storage.seed import seed_demo_data

POINT = {"type": "Point", "coordinates": [45.3, -122.6]}
SQUARE = {"type": "Polygon", "coordinates": [[[45.0, -122.0], [45.1, -122.0], [45.1, -122.1], [45.0, -122.0]]]}


def _task(clock, days=1, **overrides):
    fields = {
        "title": "Check saplings",
        "location": "North Region",
        "category": "routine",
        "scheduled_date": clock.now + timedelta(days=days),
    }
    fields.update(overrides)
    return TaskCreate(**fields)


def _metric(category, value=1.0):
    return MetricCreate(name=f"{category} metric", value=value, unit="%", category=category)


# -----------------------------
# Seed data
# -----------------------------
def test_seed_counts(storage):
    assert len(storage.list_users()) == 3
    assert len(storage.list_regions()) == 4
    assert len(storage.list_locations()) == 3
    assert len(storage.list_inventory_items()) == 4
    assert len(storage.list_activities()) == 4
    assert len(storage.list_tasks()) == 3
    assert len(storage.list_metrics()) == 4


def test_seed_is_skipped_when_users_exist(storage):
    assert seed_demo_data(storage) is False
    assert len(storage.list_users()) == 3


def test_seeded_tasks_are_upcoming(storage):
    upcoming = storage.list_upcoming_tasks(10)
    assert [t.title for t in upcoming] == [
        "Weekly tree health inspection",
        "Trail maintenance and clearing",
        "Wildlife census preparations",
    ]


# -----------------------------
# Generic CRUD
# -----------------------------
def test_create_then_get_returns_input_plus_server_fields(empty_storage, clock):
    data = InventoryCreate(type="water", name="Tank", quantity=900, unit="liters", status="available")
    created = empty_storage.create_inventory_item(data)

    assert created.id == 1
    assert created.last_updated == clock.now
    fetched = empty_storage.get_inventory_item(created.id)
    assert fetched.model_dump() == {**data.model_dump(), "id": 1, "last_updated": clock.now}


def test_create_task_sets_completion_fields(empty_storage, clock):
    task = empty_storage.create_task(_task(clock))
    assert task.completed is False
    assert task.completed_at is None
    assert task.status == TaskStatus.PENDING
    assert empty_storage.get_task(task.id).model_dump() == task.model_dump()


def test_get_missing_returns_none(storage):
    assert storage.get_user(999) is None
    assert storage.get_region(999) is None
    assert storage.get_location(999) is None
    assert storage.get_inventory_item(999) is None
    assert storage.get_activity(999) is None
    assert storage.get_task(999) is None
    assert storage.get_metric(999) is None


def test_update_missing_returns_none(storage):
    assert storage.update_region(999, RegionUpdate(name="x")) is None
    assert storage.update_task(999, TaskUpdate()) is None
    assert storage.complete_task(999) is None


def test_ids_increase_after_seed_and_are_not_reused(storage):
    ids = [storage.create_region(RegionCreate(name=f"R{i}", coordinates=SQUARE)).id for i in range(3)]
    assert ids == [5, 6, 7]

    assert storage.delete_region(7) is True
    assert storage.create_region(RegionCreate(name="R8", coordinates=SQUARE)).id == 8


def test_concurrent_creates_get_unique_sequential_ids(clock):
    store = MemoryStorage(clock=clock)

    def create_many(n):
        return [store.create_region(RegionCreate(name=f"R{n}-{i}", coordinates=SQUARE)).id
                for i in range(200)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        ids = [i for batch in pool.map(create_many, range(8)) for i in batch]

    assert sorted(ids) == list(range(1, 1601))
    assert len(store.list_regions()) == 1600


def test_id_counters_are_per_entity(empty_storage):
    region = empty_storage.create_region(RegionCreate(name="Only", coordinates=SQUARE))
    location = empty_storage.create_location(LocationCreate(region_id=region.id, name="Spot", coordinates=POINT))
    assert region.id == 1
    assert location.id == 1


def test_returned_records_are_copies(storage):
    fetched = storage.get_region(1)
    fetched.name = "Renamed by caller"
    fetched.coordinates["type"] = "Point"
    storage.list_regions()[0].description = "changed"

    stored = storage.get_region(1)
    assert stored.name == "North Region"
    assert stored.coordinates["type"] == "Polygon"
    assert stored.description == "Northern forest area with pine and spruce trees"


def test_created_and_updated_records_are_copies(storage):
    created = storage.create_region(RegionCreate(name="Valley", coordinates=SQUARE))
    created.name = "Hill"
    updated = storage.update_region(created.id, RegionUpdate(description="River valley"))
    updated.description = "Dry valley"

    stored = storage.get_region(created.id)
    assert stored.name == "Valley"
    assert stored.description == "River valley"


def test_list_preserves_insertion_order(empty_storage):
    for name in ("b", "a", "c"):
        empty_storage.create_region(RegionCreate(name=name, coordinates=SQUARE))
    assert [r.name for r in empty_storage.list_regions()] == ["b", "a", "c"]


def test_update_merges_supplied_fields_only(storage):
    before = storage.get_region(1)
    after = storage.update_region(1, RegionUpdate(description="Replanted in spring"))
    assert after.description == "Replanted in spring"
    assert after.name == before.name
    assert after.coordinates == before.coordinates
    assert storage.get_region(1).model_dump() == after.model_dump()


def test_update_can_clear_nullable_field(storage):
    after = storage.update_activity(1, ActivityUpdate(team=None))
    assert after.team is None
    assert after.description == "Planted 250 new saplings"


def test_empty_update_leaves_record_unchanged(storage, clock):
    before = storage.get_metric(1)
    clock.advance(minutes=5)
    assert storage.update_metric(1, MetricUpdate()).model_dump() == before.model_dump()


def test_empty_update_only_refreshes_last_updated(storage, clock):
    before = storage.get_location(1)
    later = clock.advance(hours=1)
    after = storage.update_location(1, LocationUpdate())
    assert after.last_updated == later
    assert after.model_dump(exclude={"last_updated"}) == before.model_dump(exclude={"last_updated"})


def test_inventory_update_refreshes_last_updated(storage, clock):
    later = clock.advance(days=1)
    item = storage.update_inventory_item(2, InventoryUpdate(quantity=0, status="depleted"))
    assert item.quantity == 0
    assert item.status == InventoryStatus.DEPLETED
    assert item.last_updated == later


def test_activity_update_keeps_timestamp(storage, clock):
    before = storage.get_activity(2)
    clock.advance(hours=3)
    after = storage.update_activity(2, ActivityUpdate(description="Soil re-tested"))
    assert after.timestamp == before.timestamp


def test_delete_twice(storage):
    assert storage.delete_inventory_item(1) is True
    assert storage.get_inventory_item(1) is None
    assert storage.delete_inventory_item(1) is False
    assert len(storage.list_inventory_items()) == 3


def test_delete_missing_for_every_entity(storage):
    assert storage.delete_user(999) is False
    assert storage.delete_region(999) is False
    assert storage.delete_location(999) is False
    assert storage.delete_inventory_item(999) is False
    assert storage.delete_activity(999) is False
    assert storage.delete_task(999) is False
    assert storage.delete_metric(999) is False


# -----------------------------
# Users
# -----------------------------
def test_user_round_trip_and_lookup(storage):
    user = storage.create_user(UserCreate(
        username="ranger", password="secret99", confirm_password="secret99",
        full_name="Pat Ranger", email="pat@forestmanager.com", role="manager",
    ))
    assert user.id == 4
    assert user.password == "secret99"
    assert storage.get_user_by_username("ranger").model_dump() == user.model_dump()
    assert storage.get_user_by_username("nobody") is None


def test_user_update_changes_role(storage):
    user = storage.update_user(3, UserUpdate(role="manager", profile_image="/img/fw.png"))
    assert user.role.value == "manager"
    assert user.profile_image == "/img/fw.png"
    assert user.username == "fieldworker"


# -----------------------------
# Locations
# -----------------------------
def test_list_locations_by_region(storage):
    storage.create_location(LocationCreate(region_id=2, name="East Creek", status="unclassified", coordinates=POINT))
    east = storage.list_locations_by_region(2)
    assert [loc.name for loc in east] == ["East Forest Boundary", "East Creek"]
    assert all(loc.region_id == 2 for loc in east)


def test_list_locations_by_unknown_region_is_empty(storage):
    assert storage.list_locations_by_region(42) == []


def test_location_region_is_not_checked(storage):
    location = storage.create_location(LocationCreate(region_id=99, name="Orphan", coordinates=POINT))
    assert storage.list_locations_by_region(99)[0].id == location.id


# -----------------------------
# Activities
# -----------------------------
def test_recent_activities_newest_first(empty_storage, clock):
    for n in range(5):
        clock.advance(minutes=1)
        empty_storage.create_activity(ActivityCreate(
            user_id=1, type="monitoring", description=f"Patrol {n}", location="North Sector",
        ))
    recent = empty_storage.list_recent_activities(3)
    assert [a.description for a in recent] == ["Patrol 4", "Patrol 3", "Patrol 2"]


def test_recent_activities_limit_larger_than_collection(storage):
    assert len(storage.list_recent_activities(50)) == 4


def test_activity_timestamp_is_server_time(empty_storage, clock):
    activity = empty_storage.create_activity(ActivityCreate.model_validate({
        "userId": 1, "type": "planting", "description": "d", "location": "l",
        "timestamp": "2001-01-01T00:00:00Z",
    }))
    assert activity.timestamp == clock.now


# -----------------------------
# Tasks
# -----------------------------
def test_upcoming_tasks_filter_sort_and_limit(empty_storage, clock):
    empty_storage.create_task(_task(clock, days=3, title="later"))
    empty_storage.create_task(_task(clock, days=-1, title="overdue"))
    empty_storage.create_task(_task(clock, days=1, title="soon"))
    done = empty_storage.create_task(_task(clock, days=2, title="done"))
    empty_storage.complete_task(done.id)
    empty_storage.create_task(_task(clock, days=0, title="right now"))

    upcoming = empty_storage.list_upcoming_tasks(10)
    assert [t.title for t in upcoming] == ["soon", "later"]
    assert all(not t.completed and t.scheduled_date > clock.now for t in upcoming)
    assert [t.title for t in empty_storage.list_upcoming_tasks(1)] == ["soon"]


def test_cancelled_tasks_still_count_as_upcoming(empty_storage, clock):
    empty_storage.create_task(_task(clock, status="cancelled"))
    assert len(empty_storage.list_upcoming_tasks(5)) == 1


def test_complete_task(storage, clock):
    later = clock.advance(hours=2)
    task = storage.complete_task(1)
    assert task.completed is True
    assert task.status == TaskStatus.COMPLETED
    assert task.completed_at == later
    assert storage.get_task(1).model_dump() == task.model_dump()
    assert 1 not in [t.id for t in storage.list_upcoming_tasks(10)]


def test_completing_again_restamps_completed_at(storage, clock):
    first = storage.complete_task(2).completed_at
    later = clock.advance(minutes=30)
    second = storage.complete_task(2).completed_at
    assert first != second
    assert second == later


def test_update_cannot_set_completion_fields(storage):
    task = storage.update_task(1, TaskUpdate.model_validate({"completed": True, "completedAt": "2026-01-01T00:00:00Z"}))
    assert task.completed is False
    assert task.completed_at is None


# -----------------------------
# Metrics
# -----------------------------
def test_latest_metrics_one_per_category_in_fixed_order(storage, clock):
    clock.advance(hours=1)
    newer = storage.create_metric(_metric("health", 91.0))
    storage.create_metric(_metric("coverage", 12500))

    latest = storage.list_latest_metrics()
    assert [m.category for m in latest] == METRIC_CATEGORIES
    health = [m for m in latest if m.category == MetricCategory.HEALTH]
    assert len(health) == 1
    assert health[0].id == newer.id
    assert health[0].value == 91.0


def test_latest_metrics_skip_empty_categories(empty_storage, clock):
    empty_storage.create_metric(_metric("risk"))
    clock.advance(seconds=1)
    empty_storage.create_metric(_metric("species"))
    latest = empty_storage.list_latest_metrics()
    assert [m.category for m in latest] == [MetricCategory.SPECIES, MetricCategory.RISK]


def test_latest_metrics_tie_prefers_earliest_record(empty_storage):
    first = empty_storage.create_metric(_metric("health", 1))
    empty_storage.create_metric(_metric("health", 2))
    assert [m.id for m in empty_storage.list_latest_metrics()] == [first.id]


def test_latest_metrics_empty(empty_storage):
    assert empty_storage.list_latest_metrics() == []


def test_metric_update_keeps_timestamp(storage, clock):
    before = storage.get_metric(4)
    clock.advance(days=1)
    after = storage.update_metric(4, MetricUpdate(value=90.1, trend="stable"))
    assert after.timestamp == before.timestamp
    assert after.trend.value == "stable"
