"""Shared fixtures: in-memory database, a small Ayurvedic catalog and patients."""
from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core import config
from database import seed_catalog
from database.models import Base
from schemas.food_schema import FoodItem
from schemas.patient_schema import PatientProfile

FIXED_NOW = datetime(2024, 1, 15, 8, 30, 0)


def fixed_clock():
    return FIXED_NOW


@pytest.fixture(autouse=True)
def no_generative_by_default(monkeypatch):
    """Keep tests offline even when a Gemini key is present in the environment."""
    monkeypatch.setattr(config, "USE_GENERATIVE_PLANS", False)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded_db(db):
    seed_catalog(db)
    return db


@pytest.fixture
def make_food():
    def _make(name, **kwargs):
        kwargs.setdefault("id", name.lower().replace(" ", "-"))
        return FoodItem(name=name, **kwargs)
    return _make


@pytest.fixture
def catalog(make_food):
    """Small catalog in a fixed order; Peanut Chutney scores highest for vata."""
    return [
        make_food("Peanut Chutney", category="snacks", calories=180, protein=25, fiber=6, sugar=2,
                  rasa="sweet", dosha_impact={"vata": "decreases", "pitta": "increases", "kapha": "increases"},
                  allergens=["peanuts"]),
        make_food("Poha", category="breakfast", calories=180, protein=3.5, fiber=1.5, sugar=1, sodium=240,
                  dosha_impact={"vata": "neutral", "pitta": "decreases", "kapha": "decreases"}),
        make_food("Moong Dal Khichdi", category="main_course", calories=150, protein=6, fiber=3, sugar=1,
                  dosha_impact={"vata": "decreases", "pitta": "decreases", "kapha": "decreases"}),
        make_food("Basmati Rice", category="grains", calories=130, protein=2.7, fiber=0.4,
                  dosha_impact={"vata": "decreases", "pitta": "decreases", "kapha": "increases"}),
        make_food("Spinach", category="vegetables", calories=23, protein=2.9, fiber=2.2, sodium=79,
                  rasa="astringent", season=["winter", "spring"],
                  dosha_impact={"vata": "increases", "pitta": "neutral", "kapha": "decreases"}),
        make_food("Banana", category="fruits", calories=89, protein=1.1, fiber=2.6, sugar=12.2,
                  dosha_impact={"vata": "decreases", "pitta": "neutral", "kapha": "increases"}),
        make_food("Ginger Tea", category="beverages", calories=8, protein=0.2, fiber=0.2,
                  rasa="pungent", dosha_impact={"vata": "decreases", "pitta": "increases", "kapha": "decreases"}),
        make_food("Vegetable Soup", category="light", calories=45, protein=2, fiber=2, sugar=2.5, sodium=350,
                  rasa="salty", dosha_impact={"vata": "decreases", "pitta": "neutral", "kapha": "decreases"}),
        make_food("Chicken Curry", category="meat", calories=190, protein=20, fiber=1, sugar=2, sodium=420,
                  rasa="pungent", dosha_impact={"vata": "decreases", "pitta": "increases", "kapha": "increases"}),
        make_food("Paneer", category="dairy", calories=265, protein=18, sugar=1.2, sodium=18,
                  dosha_impact={"vata": "decreases", "pitta": "decreases", "kapha": "increases"},
                  allergens=["dairy"]),
    ]


@pytest.fixture
def vata_patient():
    """Male, 60 kg, 160 cm, 41 years: BMR 1400, target 2100 kcal."""
    return PatientProfile(
        id="patient-vata",
        name="Ravi Kumar",
        age=41,
        gender="male",
        height_cm=160,
        weight_kg=60,
        dosha="vata",
        dietary_habits="vegetarian",
        allergies=["peanuts"],
    )


@pytest.fixture
def pitta_patient():
    return PatientProfile(
        id="patient-pitta",
        name="Meera Iyer",
        age=35,
        gender="female",
        height_cm=165,
        weight_kg=58,
        dosha="pitta-kapha",
        dietary_habits="non_vegetarian",
    )
