import pytest

from venture_backend.errors import InvalidParameter
from venture_backend.models import db
from venture_backend.storage import (
    PROJECT_NUMERIC,
    PROJECT_PATCHABLE,
    PROJECT_REQUIRED,
    CounterIds,
    MemoryRepository,
    Store,
    UuidIds,
    checked_patch,
)


def test_counter_ids_are_sequential():
    ids = CounterIds()
    assert [ids(), ids(), ids()] == ["1", "2", "3"]


def test_uuid_ids_are_unique():
    ids = UuidIds()
    assert ids() != ids()


def test_checked_patch_rejects_unknown_fields():
    with pytest.raises(InvalidParameter):
        checked_patch({"name": "x", "createdAt": "now"}, PROJECT_PATCHABLE)
    assert checked_patch({"status": "Completed"}, PROJECT_PATCHABLE) == {"status": "Completed"}


def test_memory_repository_returns_copies():
    repo = MemoryRepository()
    repo.insert({"id": "1", "name": "a", "tags": []})
    fetched = repo.get("1")
    fetched["tags"].append("changed")
    assert repo.get("1")["tags"] == []


def test_memory_repository_filters_in_insertion_order():
    repo = MemoryRepository()
    for i, owner in enumerate(["x", "y", "x"]):
        repo.insert({"id": str(i), "owner": owner})
    assert [r["id"] for r in repo.list(owner="x")] == ["0", "2"]


def test_memory_repository_rejects_duplicate_ids():
    repo = MemoryRepository()
    repo.insert({"id": "1"})
    with pytest.raises(InvalidParameter):
        repo.insert({"id": "1"})


def test_memory_update_compare_and_swap():
    repo = MemoryRepository()
    repo.insert({"id": "1", "status": "Running"})
    assert repo.update("1", {"status": "Completed"}, expect={"status": "Running"})["status"] == "Completed"
    assert repo.update("1", {"status": "Completed"}, expect={"status": "Running"}) is None
    assert repo.update("missing", {"status": "Completed"}) is None


def test_memory_delete():
    repo = MemoryRepository()
    repo.insert({"id": "1"})
    assert repo.delete("1") is True
    assert repo.delete("1") is False
    assert repo.get("1") is None


def test_sql_repository_round_trip(sql_app):
    store = sql_app.extensions["venture_backend"].store
    with sql_app.app_context():
        store.time_entries.insert({
            "id": "e1",
            "projectId": "p1",
            "taskId": None,
            "description": "design",
            "startTime": "2024-03-01T09:00:00+00:00",
            "endTime": None,
            "durationMinutes": 0,
            "status": "Running",
        })
        stopped = store.time_entries.update(
            "e1",
            {"status": "Completed", "durationMinutes": 30, "endTime": "2024-03-01T09:30:00+00:00"},
            expect={"status": "Running"},
        )
        assert stopped["status"] == "Completed"
        assert stopped["durationMinutes"] == 30
        assert store.time_entries.update(
            "e1", {"status": "Completed"}, expect={"status": "Running"}
        ) is None
        assert [e["id"] for e in store.time_entries.list(projectId="p1")] == ["e1"]
        assert store.time_entries.delete("e1") is True
        assert store.time_entries.get("e1") is None


def test_store_sql_uses_shared_db(sql_app):
    with sql_app.app_context():
        assert Store.sql(db).projects.list() == []


def test_checked_patch_validates_values():
    with pytest.raises(InvalidParameter):
        checked_patch({"status": None}, PROJECT_PATCHABLE, PROJECT_REQUIRED)
    with pytest.raises(InvalidParameter):
        checked_patch({"budget": True}, PROJECT_PATCHABLE, PROJECT_REQUIRED, PROJECT_NUMERIC)
    patch = checked_patch(
        {"budget": "250", "description": None},
        PROJECT_PATCHABLE,
        PROJECT_REQUIRED,
        PROJECT_NUMERIC,
    )
    assert patch == {"budget": 250.0, "description": None}


def test_sql_update_with_empty_patch(sql_app):
    store = sql_app.extensions["venture_backend"].store
    with sql_app.app_context():
        store.time_entries.insert({
            "id": "e1",
            "projectId": "p1",
            "taskId": None,
            "description": None,
            "startTime": "2024-03-01T09:00:00+00:00",
            "endTime": None,
            "durationMinutes": 0,
            "status": "Completed",
        })
        assert store.time_entries.update("e1", {})["id"] == "e1"
        assert store.time_entries.update("e1", {}, expect={"status": "Running"}) is None
        assert store.time_entries.update("missing", {}) is None
