"""Tests for the document collection repository."""
from core.repository import CollectionRepository


def test_create_and_find(db):
    repo = CollectionRepository(db, "patients")
    record = repo.create({"name": "Asha", "dosha": "vata"})
    assert record["id"]
    assert record["created_at"]
    assert repo.find_by_id(record["id"])["name"] == "Asha"
    assert repo.find_by_id("missing") is None
    assert repo.find_by_field("dosha", "vata")[0]["id"] == record["id"]


def test_find_all_keeps_insertion_order(db):
    repo = CollectionRepository(db, "foods")
    repo.create_many([{"name": n} for n in ("Rice", "Dal", "Ghee")])
    repo.create({"name": "Tea"})
    assert [r["name"] for r in repo.find_all()] == ["Rice", "Dal", "Ghee", "Tea"]
    assert [r["name"] for r in repo.find_all(limit=2)] == ["Rice", "Dal"]


def test_collections_are_isolated(db):
    CollectionRepository(db, "foods").create({"name": "Rice"})
    assert CollectionRepository(db, "recipes").count() == 0


def test_update_replaces_whole_record(db):
    repo = CollectionRepository(db, "dietCharts")
    record = repo.create({"patient_id": "p1", "notes": "old", "status": "active"})
    updated = repo.update(record["id"], {"patient_id": "p1", "status": "completed"})
    assert updated["status"] == "completed"
    assert "notes" not in updated
    assert updated["id"] == record["id"]
    assert repo.update("missing", {"x": 1}) is None


def test_delete(db):
    repo = CollectionRepository(db, "patients")
    record = repo.create({"name": "Temp"})
    assert repo.delete(record["id"]) is True
    assert repo.delete(record["id"]) is False
    assert repo.count() == 0
