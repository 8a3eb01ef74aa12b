"""Schemas for patient profiles.

`bmi` and `bmr` are computed fields: they are derived from height, weight,
age and gender on every access and any incoming value is ignored.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field, field_validator

from services.nutrition_calculator import nutrition_calculator


class Gender(str, Enum):
    male = "male"
    female = "female"
    other = "other"


class Dosha(str, Enum):
    vata = "vata"
    pitta = "pitta"
    kapha = "kapha"
    vata_pitta = "vata_pitta"
    pitta_kapha = "pitta_kapha"
    vata_kapha = "vata_kapha"
    tridoshic = "tridoshic"
    unknown = "unknown"


class DietaryHabit(str, Enum):
    vegetarian = "vegetarian"
    non_vegetarian = "non_vegetarian"
    vegan = "vegan"
    eggetarian = "eggetarian"
    jain = "jain"


class ActivityLevel(str, Enum):
    sedentary = "sedentary"
    light = "light"
    moderate = "moderate"
    active = "active"
    very_active = "very_active"


BASE_DOSHAS = ("vata", "pitta", "kapha")
DEFAULT_PRIMARY_DOSHA = "vata"


def _normalize_tags(values) -> List[str]:
    if values is None:
        return []
    if isinstance(values, str):
        values = values.split(",")
    out = []
    for value in values:
        tag = str(getattr(value, "value", value)).strip().lower()
        if tag and tag not in out:
            out.append(tag)
    return out


def primary_dosha_of(dosha) -> str:
    """Return the first component of a (possibly compound) dosha.

    `tridoshic`, `unknown` and missing values resolve to vata.
    """
    value = getattr(dosha, "value", dosha)
    head = str(value or "").lower().replace("-", "_").split("_")[0]
    return head if head in BASE_DOSHAS else DEFAULT_PRIMARY_DOSHA


class PatientProfile(BaseModel):
    """Identity and physiology needed for diet planning."""

    id: Optional[str] = None
    name: str = Field("", examples=["Asha Rao"])
    age: int = Field(..., ge=0, le=150, examples=[34])
    gender: Gender = Field(..., examples=["female"])
    height_cm: float = Field(..., gt=0, examples=[162.0], description="Height in centimeters")
    weight_kg: float = Field(..., gt=0, examples=[58.0], description="Weight in kilograms")
    dosha: Dosha = Field(Dosha.unknown, examples=["vata_pitta"])
    dietary_habits: DietaryHabit = Field(DietaryHabit.vegetarian, examples=["vegetarian"])
    allergies: List[str] = Field(default_factory=list, examples=[["peanuts"]])
    conditions: List[str] = Field(default_factory=list, examples=[["diabetes"]])
    activity_level: Optional[ActivityLevel] = Field(None, examples=["moderate"])
    calorie_override: Optional[float] = Field(None, gt=0, description="Supersedes the BMR-derived target")

    @field_validator("dosha", mode="before")
    @classmethod
    def _normalize_dosha(cls, value):
        if value is None or value == "":
            return Dosha.unknown
        if isinstance(value, str):
            return value.strip().lower().replace("-", "_")
        return value

    @field_validator("dietary_habits", mode="before")
    @classmethod
    def _normalize_habits(cls, value):
        if isinstance(value, str):
            return value.strip().lower().replace("-", "_").replace(" ", "_")
        return value

    @field_validator("allergies", "conditions", mode="before")
    @classmethod
    def _normalize_tag_lists(cls, value):
        return _normalize_tags(value)

    @computed_field
    @property
    def bmi(self) -> float:
        return round(nutrition_calculator.calculate_bmi(self.height_cm, self.weight_kg), 2)

    @computed_field
    @property
    def bmr(self) -> float:
        """Mifflin-St Jeor basal metabolic rate."""
        return round(nutrition_calculator.calculate_bmr(self.age, self.height_cm, self.weight_kg, self.gender), 2)

    @property
    def primary_dosha(self) -> str:
        return primary_dosha_of(self.dosha)


class PatientUpdateRequest(BaseModel):
    """Partial update for a patient; unset fields keep their stored values."""

    name: Optional[str] = None
    age: Optional[int] = Field(None, ge=0, le=150)
    gender: Optional[Gender] = None
    height_cm: Optional[float] = Field(None, gt=0)
    weight_kg: Optional[float] = Field(None, gt=0)
    dosha: Optional[str] = None
    dietary_habits: Optional[str] = None
    allergies: Optional[List[str]] = None
    conditions: Optional[List[str]] = None
    activity_level: Optional[ActivityLevel] = None
    calorie_override: Optional[float] = Field(None, gt=0)
