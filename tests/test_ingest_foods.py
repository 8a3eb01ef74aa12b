"""Tests for the CSV ingestion utilities in `data/ingest_foods.py`."""
from pathlib import Path

from core.repository import CollectionRepository
from data.ingest_foods import parse_foods_csv, seed_foods_from_csv

CSV_PATH = str(Path(__file__).resolve().parents[1] / "data" / "fixtures" / "foods.csv")


def _by_name(rows):
    return {row["name"]: row for row in rows}


def test_parse_foods_csv_maps_column_aliases():
    rows = _by_name(parse_foods_csv(CSV_PATH))
    assert "Ragi Malt" in rows
    ragi = rows["Ragi Malt"]
    assert ragi["calories"] == 110
    assert ragi["carbs"] == 22
    assert ragi["fat"] == 1
    assert ragi["fiber"] == 3.6
    assert ragi["guna"] == ["light", "dry"]
    assert ragi["dosha_impact"] == {"vata": "increases", "pitta": "decreases", "kapha": "decreases"}
    assert ragi["vipaka"] == "sweet"


def test_rows_without_name_are_skipped():
    rows = parse_foods_csv(CSV_PATH)
    assert len(rows) == 5
    assert all(row["name"] for row in rows)


def test_missing_attributes_get_defaults():
    rows = _by_name(parse_foods_csv(CSV_PATH))
    root = rows["Mystery Root"]
    assert root["category"] == "other"
    assert root["rasa"] == "sweet"
    assert root["virya"] == "neutral"
    assert root["guna"] == ["light"]
    assert root["season"] == ["all"]
    assert root["dosha_impact"] == {"vata": "neutral", "pitta": "neutral", "kapha": "neutral"}

    raita = rows["Cucumber Raita"]
    assert raita["allergens"] == ["dairy"]
    assert raita["season"] == ["summer"]


def test_seed_foods_is_idempotent(db):
    repo = CollectionRepository(db, "foods")
    added = seed_foods_from_csv(CSV_PATH, session=db)
    assert added == 5
    assert repo.count() == 5
    # Run again - should not duplicate
    assert seed_foods_from_csv(CSV_PATH, session=db) == 0
    assert repo.count() == 5
