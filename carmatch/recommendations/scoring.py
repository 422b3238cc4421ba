from __future__ import annotations

from typing import Callable

from .errors import coerce_enum
from .models import Car, ExperienceLevel, Preferences, UseCase

PRICE_WEIGHT = 40.0
FUEL_PRIORITY_WEIGHT = 30.0
FUEL_PRIORITY_CEILING = 10.0
FUEL_DEFAULT_WEIGHT = 15.0
FUEL_DEFAULT_CEILING = 15.0

SubScore = Callable[[Car, Preferences], float]


def price_efficiency(car: Car, prefs: Preferences) -> float:
    """Up to 40 points; negative only for cars over budget."""
    return (1.0 - car.price / prefs.budget) * PRICE_WEIGHT


def fuel_economy(car: Car, prefs: Preferences) -> float:
    if prefs.fuel_economy_priority:
        ceiling, weight = FUEL_PRIORITY_CEILING, FUEL_PRIORITY_WEIGHT
    else:
        ceiling, weight = FUEL_DEFAULT_CEILING, FUEL_DEFAULT_WEIGHT
    return max(0.0, (ceiling - car.fuel_consumption) / ceiling * weight)


def _novice_fit(hp: int) -> float:
    if hp <= 100:
        return 20.0
    if hp <= 150:
        return 10.0
    return 0.0


def _intermediate_fit(hp: int) -> float:
    return 20.0 if 100 <= hp <= 250 else 10.0


def _expert_fit(hp: int) -> float:
    if hp >= 200:
        return 20.0
    if hp >= 150:
        return 15.0
    return 5.0


_EXPERIENCE_FIT: dict[ExperienceLevel, Callable[[int], float]] = {
    ExperienceLevel.novice: _novice_fit,
    ExperienceLevel.intermediate: _intermediate_fit,
    ExperienceLevel.expert: _expert_fit,
}


def experience_fit(car: Car, prefs: Preferences) -> float:
    level = coerce_enum(ExperienceLevel, "experience", prefs.experience)
    return _EXPERIENCE_FIT[level](car.horsepower)


_USE_CASE_FIT: dict[UseCase, Callable[[Car], float]] = {
    UseCase.city: lambda car: 10.0 if car.is_compact else 0.0,
    UseCase.highway: lambda car: 10.0 if car.horsepower >= 150 else 0.0,
    UseCase.mixed: lambda car: 5.0,
    UseCase.offroad: lambda car: 0.0,
}


def use_case_fit(car: Car, prefs: Preferences) -> float:
    use_case = coerce_enum(UseCase, "use_case", prefs.use_case)
    return _USE_CASE_FIT[use_case](car)


SUB_SCORES: tuple[SubScore, ...] = (
    price_efficiency,
    fuel_economy,
    experience_fit,
    use_case_fit,
)


def score_car(car: Car, prefs: Preferences) -> float:
    """Compute the 0-100 desirability score of ``car`` for ``prefs``."""
    total = sum(sub_score(car, prefs) for sub_score in SUB_SCORES)
    return max(0.0, total)
