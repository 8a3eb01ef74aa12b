"""Schemas for the food and recipe catalog.

Ingestion defaults live here so they are applied once, whenever a record is
validated: rasa falls back to sweet, virya to neutral, guna to [light] and
vipaka is derived from rasa. Scoring code never sees an undefined attribute.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class FoodCategory(str, Enum):
    grains = "grains"
    pulses = "pulses"
    vegetables = "vegetables"
    fruits = "fruits"
    dairy = "dairy"
    nuts_seeds = "nuts_seeds"
    spices = "spices"
    oils = "oils"
    beverages = "beverages"
    sweets = "sweets"
    snacks = "snacks"
    breakfast = "breakfast"
    main_course = "main_course"
    light = "light"
    meat = "meat"
    fish = "fish"
    eggs = "eggs"
    other = "other"


class Rasa(str, Enum):
    sweet = "sweet"
    sour = "sour"
    salty = "salty"
    pungent = "pungent"
    bitter = "bitter"
    astringent = "astringent"


class Virya(str, Enum):
    heating = "heating"
    cooling = "cooling"
    neutral = "neutral"


class Vipaka(str, Enum):
    sweet = "sweet"
    sour = "sour"
    pungent = "pungent"


class Guna(str, Enum):
    heavy = "heavy"
    light = "light"
    oily = "oily"
    dry = "dry"
    hot = "hot"
    cold = "cold"
    stable = "stable"
    mobile = "mobile"
    soft = "soft"
    hard = "hard"
    smooth = "smooth"
    rough = "rough"
    dense = "dense"
    liquid = "liquid"
    slow = "slow"
    sharp = "sharp"
    subtle = "subtle"
    gross = "gross"
    clear = "clear"
    cloudy = "cloudy"


GUNA_VALUES = {g.value for g in Guna}


class Impact(str, Enum):
    increases = "increases"
    decreases = "decreases"
    neutral = "neutral"


class Season(str, Enum):
    spring = "spring"
    summer = "summer"
    monsoon = "monsoon"
    autumn = "autumn"
    winter = "winter"
    all = "all"


class MealType(str, Enum):
    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"
    snack = "snack"


RASA_TO_VIPAKA = {
    "sweet": Vipaka.sweet,
    "salty": Vipaka.sweet,
    "sour": Vipaka.sour,
    "pungent": Vipaka.pungent,
    "bitter": Vipaka.pungent,
    "astringent": Vipaka.pungent,
}

_CATEGORY_ALIASES = {
    "main-course": "main_course",
    "nuts": "nuts_seeds",
    "seeds": "nuts_seeds",
    "legumes": "pulses",
    "cereals": "grains",
    "egg": "eggs",
    "seafood": "fish",
    "general": "other",
}


def _tag_list(value, default=None) -> List[str]:
    if value is None or value == "":
        return list(default or [])
    if isinstance(value, str):
        value = value.split(",")
    tags = []
    for item in value:
        tag = str(getattr(item, "value", item)).strip().lower()
        if tag and tag not in tags:
            tags.append(tag)
    return tags or list(default or [])


def _enum_or_default(value, enum_cls, default):
    if isinstance(value, enum_cls):
        return value
    text = str(getattr(value, "value", value) or "").strip().lower()
    try:
        return enum_cls(text)
    except ValueError:
        return default


class DoshaImpact(BaseModel):
    """Effect of a food on each dosha."""

    vata: Impact = Impact.neutral
    pitta: Impact = Impact.neutral
    kapha: Impact = Impact.neutral

    @field_validator("vata", "pitta", "kapha", mode="before")
    @classmethod
    def _lenient_impact(cls, value):
        return _enum_or_default(value, Impact, Impact.neutral)


class FoodItem(BaseModel):
    """A catalog ingredient; nutrition values are per 100 g (one serving)."""

    id: Optional[str] = None
    name: str = Field(..., min_length=1)
    category: FoodCategory = FoodCategory.other
    calories: float = Field(0.0, ge=0)
    protein: float = Field(0.0, ge=0)
    carbs: float = Field(0.0, ge=0)
    fat: float = Field(0.0, ge=0)
    fiber: float = Field(0.0, ge=0)
    sugar: float = Field(0.0, ge=0, description="grams per 100 g")
    sodium: float = Field(0.0, ge=0, description="milligrams per 100 g")
    rasa: Rasa = Rasa.sweet
    virya: Virya = Virya.neutral
    guna: List[Guna] = Field(default_factory=lambda: [Guna.light], min_length=1)
    vipaka: Optional[Vipaka] = None
    dosha_impact: DoshaImpact = Field(default_factory=DoshaImpact)
    season: List[str] = Field(default_factory=lambda: ["all"])
    region: List[str] = Field(default_factory=lambda: ["all"])
    allergens: List[str] = Field(default_factory=list)

    @field_validator("category", mode="before")
    @classmethod
    def _normalize_category(cls, value):
        text = str(getattr(value, "value", value) or "").strip().lower().replace(" ", "_")
        text = _CATEGORY_ALIASES.get(text, text)
        return _enum_or_default(text, FoodCategory, FoodCategory.other)

    @field_validator("calories", "protein", "carbs", "fat", "fiber", "sugar", "sodium", mode="before")
    @classmethod
    def _missing_number_is_zero(cls, value):
        return 0.0 if value is None or value == "" else value

    @field_validator("rasa", mode="before")
    @classmethod
    def _default_rasa(cls, value):
        return _enum_or_default(value, Rasa, Rasa.sweet)

    @field_validator("virya", mode="before")
    @classmethod
    def _default_virya(cls, value):
        return _enum_or_default(value, Virya, Virya.neutral)

    @field_validator("guna", mode="before")
    @classmethod
    def _default_guna(cls, value):
        known = [g for g in _tag_list(value) if g in GUNA_VALUES]
        return known or [Guna.light]

    @field_validator("vipaka", mode="before")
    @classmethod
    def _lenient_vipaka(cls, value):
        return _enum_or_default(value, Vipaka, None)

    @field_validator("dosha_impact", mode="before")
    @classmethod
    def _default_dosha_impact(cls, value):
        return value if value is not None else {}

    @field_validator("season", "region", mode="before")
    @classmethod
    def _default_everywhere(cls, value):
        return _tag_list(value, default=["all"])

    @field_validator("allergens", mode="before")
    @classmethod
    def _normalize_allergens(cls, value):
        return _tag_list(value)

    @model_validator(mode="after")
    def _derive_vipaka(self):
        if self.vipaka is None:
            self.vipaka = RASA_TO_VIPAKA[self.rasa.value]
        return self


class DoshaSuitability(BaseModel):
    vata: bool = True
    pitta: bool = True
    kapha: bool = True


class RecipeItem(BaseModel):
    """A composed dish; ingredients are resolved catalog foods when known."""

    id: Optional[str] = None
    name: str = Field(..., min_length=2)
    meal_type: MealType
    dosha_suitability: DoshaSuitability = Field(default_factory=DoshaSuitability)
    season: List[str] = Field(default_factory=lambda: ["all"])
    allergens: List[str] = Field(default_factory=list)
    cook_time_minutes: int = Field(0, ge=0)
    ingredients: List[FoodItem] = Field(default_factory=list)
    instructions: str = ""
    ayurveda_benefit: str = ""

    @field_validator("meal_type", mode="before")
    @classmethod
    def _normalize_meal_type(cls, value):
        return str(getattr(value, "value", value) or "").strip().lower()

    @field_validator("season", mode="before")
    @classmethod
    def _default_season(cls, value):
        return _tag_list(value, default=["all"])

    @field_validator("allergens", mode="before")
    @classmethod
    def _normalize_allergens(cls, value):
        return _tag_list(value)


class FoodContext(BaseModel):
    """Selection context for filtering and ranking foods."""

    season: Season = Field(Season.all, examples=["winter"])
    meal_type: Optional[str] = Field(None, examples=["breakfast"])
    preferred_categories: List[str] = Field(default_factory=list)
    exclude_ids: List[str] = Field(default_factory=list)
    limit: Optional[int] = Field(None, ge=1)

    @field_validator("season", mode="before")
    @classmethod
    def _normalize_season(cls, value):
        return str(getattr(value, "value", value) or "all").strip().lower() or "all"
