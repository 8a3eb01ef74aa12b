"""Ayurvedic balance scorer.

Tallies rasa and per-dosha impact over a set of foods and scores how well
the set pacifies one primary dosha:

    balance_score = clamp(0, 100, round(decreases% - 0.5 * increases%))

Items may be catalog `FoodItem`s, chart foods or plain dicts; unknown rasa
or impact values are skipped rather than rejected. An empty set scores 0.
"""

from collections import OrderedDict
from typing import Any, Dict, Iterable, Optional

from schemas.patient_schema import primary_dosha_of
from schemas.plan_schema import AyurvedicBalance, DOSHAS, RASAS

IMPACTS = ("increases", "decreases", "neutral")


def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def _text(value) -> Optional[str]:
    value = getattr(value, "value", value)
    return str(value).strip().lower() if value is not None else None


def _impact_for(item: Any, dosha: str) -> str:
    impact = _field(item, "dosha_impact")
    if impact is None:
        impact = _field(item, "doshaImpact")
    if impact is None:
        return "neutral"
    value = impact.get(dosha) if isinstance(impact, dict) else getattr(impact, dosha, None)
    return _text(value) or "neutral"


def balance_score(decreases: int, increases: int, total_items: int) -> int:
    """Score the primary dosha tallies; zero items scores 0."""
    if total_items == 0:
        return 0
    decreases_pct = decreases / total_items * 100
    increases_pct = increases / total_items * 100
    score = decreases_pct - 0.5 * increases_pct
    return int(max(0, min(100, round(score))))


def compute_balance(items: Iterable[Any], primary_dosha: str = "vata") -> AyurvedicBalance:
    """Compute rasa distribution, dosha tallies and the balance score."""
    primary = primary_dosha_of(primary_dosha)
    rasa_distribution: Dict[str, int] = OrderedDict((rasa, 0) for rasa in RASAS)
    dosha_impact = OrderedDict((d, OrderedDict((i, 0) for i in IMPACTS)) for d in DOSHAS)

    total = 0
    for item in items:
        total += 1
        rasa = _text(_field(item, "rasa"))
        if rasa in rasa_distribution:
            rasa_distribution[rasa] += 1
        for dosha in DOSHAS:
            impact = _impact_for(item, dosha)
            if impact in dosha_impact[dosha]:
                dosha_impact[dosha][impact] += 1

    tallies = dosha_impact[primary]
    return AyurvedicBalance(
        primary_dosha=primary,
        total_items=total,
        rasa_distribution=dict(rasa_distribution),
        dosha_impact={d: dict(v) for d, v in dosha_impact.items()},
        balance_score=balance_score(tallies["decreases"], tallies["increases"], total),
    )


def quality_distribution(items: Iterable[Any]) -> Dict[str, float]:
    """Quantity-weighted guna counts over chart foods or catalog foods."""
    out: Dict[str, float] = {}
    for item in items:
        quantity = _field(item, "quantity") or 1
        for guna in _field(item, "guna") or []:
            key = _text(guna)
            out[key] = round(out.get(key, 0) + quantity, 2)
    return out
