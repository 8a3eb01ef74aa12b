"""Utilities to ingest food CSV files into the catalog.

This module provides:
- parse_foods_csv(csv_path): returns a list of normalized food dicts
- seed_foods_from_csv(csv_path, session): idempotently seeds the `foods` collection

Column names are matched case-insensitively against a few aliases
(`name`/`food_name`, `calories`/`energy`, `carbs`/`carbohydrates`, ...).
Per-dosha effects come from `vata_impact`, `pitta_impact` and `kapha_impact`;
list columns (`guna`, `season`, `region`, `allergens`) are comma-separated.
Missing Ayurvedic attributes get the catalog defaults when each row is
validated as a `FoodItem`.
"""
from __future__ import annotations

from typing import Dict, List, Optional
import logging
import math

import pandas as pd
from pydantic import ValidationError as PydanticValidationError

from core.repository import CollectionRepository
from database.database import WriteSessionLocal
from schemas.food_schema import FoodItem

logger = logging.getLogger("data.ingest_foods")

COLUMN_ALIASES = {
    "name": ("name", "food_name", "food", "item"),
    "category": ("category", "food_category", "type"),
    "calories": ("calories", "energy", "kcal", "energy_kcal"),
    "protein": ("protein", "protein_g"),
    "carbs": ("carbs", "carbohydrates", "carbohydrate", "carbs_g"),
    "fat": ("fat", "total_fat", "fat_g"),
    "fiber": ("fiber", "fibre", "dietary_fiber"),
    "sugar": ("sugar", "sugars", "total_sugar"),
    "sodium": ("sodium", "sodium_mg"),
    "rasa": ("rasa", "taste"),
    "virya": ("virya", "potency"),
    "vipaka": ("vipaka",),
    "guna": ("guna", "gunas", "qualities"),
    "season": ("season", "seasons"),
    "region": ("region", "regions"),
    "allergens": ("allergens", "allergen"),
}

IMPACT_COLUMNS = {
    "vata": ("vata_impact", "vata", "vata_effect"),
    "pitta": ("pitta_impact", "pitta", "pitta_effect"),
    "kapha": ("kapha_impact", "kapha", "kapha_effect"),
}


def _cell(row, columns, aliases) -> Optional[object]:
    """Return the first non-empty cell among `aliases`, or None."""
    for alias in aliases:
        column = columns.get(alias)
        if column is None:
            continue
        value = row.get(column)
        if hasattr(value, "item"):
            value = value.item()
        if value is None or (isinstance(value, float) and math.isnan(value)):
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value.strip() if isinstance(value, str) else value
    return None


def parse_foods_csv(csv_path: str) -> List[Dict]:
    """Parse the CSV and return a list of normalized food dictionaries.

    Rows without a name, or that fail validation, are skipped with a warning.

    Args:
        csv_path: Path to the foods CSV file.

    Returns:
        List of dicts ready to store in the `foods` collection.
    """
    logger.info("Parsing foods CSV: %s", csv_path)
    df = pd.read_csv(csv_path, encoding="utf-8", engine="python")
    columns = {str(c).strip().lower(): c for c in df.columns}

    foods = []
    for position, row in df.iterrows():
        raw = {field: _cell(row, columns, aliases) for field, aliases in COLUMN_ALIASES.items()}
        if raw["name"] is None:
            continue
        raw["name"] = str(raw["name"])
        raw["dosha_impact"] = {
            dosha: _cell(row, columns, aliases) for dosha, aliases in IMPACT_COLUMNS.items()
        }
        try:
            food = FoodItem(**{k: v for k, v in raw.items() if v is not None})
        except PydanticValidationError as exc:
            logger.warning("Skipping row %s (%s): %s", position, raw["name"], exc.errors()[0]["msg"])
            continue
        foods.append(food.model_dump(mode="json", exclude={"id"}))

    logger.info("Parsed %s foods from CSV", len(foods))
    return foods


def seed_foods_from_csv(csv_path: str, session=None) -> int:
    """Idempotently seed the `foods` collection from the CSV file.

    If `session` is not supplied, a `WriteSessionLocal` session is used.
    Existing foods are matched by name (case-insensitive) and skipped.

    Args:
        csv_path: Path to the foods CSV file.
        session: Optional SQLAlchemy session. If None, creates a new one.

    Returns:
        Number of foods added.
    """
    close_session = False
    if session is None:
        session = WriteSessionLocal()
        close_session = True
    try:
        repo = CollectionRepository(session, "foods")
        existing = {str(r.get("name", "")).strip().lower() for r in repo.find_all()}
        new_rows = []
        for item in parse_foods_csv(csv_path):
            key = item["name"].strip().lower()
            if key in existing:
                continue
            existing.add(key)
            new_rows.append(item)
        if new_rows:
            repo.create_many(new_rows)
        logger.info("Seeded %s new foods into DB", len(new_rows))
        return len(new_rows)
    finally:
        if close_session:
            session.close()


if __name__ == "__main__":
    import argparse

    p = argparse.ArgumentParser("Seed foods from CSV into the catalog")
    p.add_argument("csv_path", nargs="?", default="data/fixtures/foods.csv")
    args = p.parse_args()
    seed_foods_from_csv(args.csv_path)
    print("Done")
