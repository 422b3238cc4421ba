"""
Human-readable justification for a recommendation.

The explanation is built from an ordered list of independent rules. Each
rule returns one phrase or ``None``; the phrases that fire are joined in
rule order.
"""
from __future__ import annotations

from typing import Callable

from .models import Car, ExperienceLevel, Preferences, UseCase

FALLBACK_REASON = "meets your basic requirements"

Rule = Callable[[Car, Preferences], str | None]


def _price_reason(car: Car, prefs: Preferences) -> str | None:
    ratio = car.price / prefs.budget * 100
    if ratio < 50:
        return "excellent value for money"
    if ratio < 80:
        return "good value within budget"
    return "fits your budget"


def _fuel_reason(car: Car, prefs: Preferences) -> str | None:
    if prefs.fuel_economy_priority and car.fuel_consumption <= 6.0:
        return "excellent fuel economy"
    if car.fuel_consumption <= 8.0:
        return "good fuel efficiency"
    return None


def _experience_reason(car: Car, prefs: Preferences) -> str | None:
    if prefs.experience == ExperienceLevel.novice and car.horsepower <= 120:
        return "perfect for new drivers"
    if prefs.experience == ExperienceLevel.expert and car.horsepower >= 200:
        return "powerful engine for experienced drivers"
    return None


def _use_case_reason(car: Car, prefs: Preferences) -> str | None:
    if prefs.use_case == UseCase.city and car.is_compact:
        return "compact size ideal for city driving"
    if prefs.use_case == UseCase.highway and car.horsepower >= 150:
        return "strong performance for highway driving"
    return None


def _brand_reason(car: Car, prefs: Preferences) -> str | None:
    if car.brand in (prefs.brand_preferences or ()):
        return "matches your preferred brand"
    return None


RULES: tuple[Rule, ...] = (
    _price_reason,
    _fuel_reason,
    _experience_reason,
    _use_case_reason,
    _brand_reason,
)


def reasons_for(car: Car, prefs: Preferences) -> list[str]:
    return [phrase for rule in RULES if (phrase := rule(car, prefs))]


def explain_car(car: Car, prefs: Preferences) -> str:
    """Return a comma-separated justification; never empty."""
    reasons = reasons_for(car, prefs) or [FALLBACK_REASON]
    return ", ".join(reasons)
