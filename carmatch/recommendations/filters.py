"""
Hard constraints applied before scoring.

Each gate is an independent predicate over ``(car, prefs)``; a car must
pass every gate to be scored at all.
"""
from __future__ import annotations

from typing import Callable, Iterable

from .models import Car, ExperienceLevel, Preferences, UseCase

NOVICE_MAX_HORSEPOWER = 150
ECONOMY_MAX_CONSUMPTION = 7.0

Gate = Callable[[Car, Preferences], bool]


def budget_gate(car: Car, prefs: Preferences) -> bool:
    return car.price <= prefs.budget


def experience_gate(car: Car, prefs: Preferences) -> bool:
    # Only novices are capped; horsepower is scored for everyone else.
    if prefs.experience == ExperienceLevel.novice:
        return car.horsepower <= NOVICE_MAX_HORSEPOWER
    return True


def use_case_gate(car: Car, prefs: Preferences) -> bool:
    if prefs.use_case == UseCase.city:
        return car.is_compact
    return True


def fuel_economy_gate(car: Car, prefs: Preferences) -> bool:
    if prefs.fuel_economy_priority:
        return car.fuel_consumption <= ECONOMY_MAX_CONSUMPTION
    return True


def brand_gate(car: Car, prefs: Preferences) -> bool:
    if prefs.brand_preferences:
        return car.brand in prefs.brand_preferences
    return True


GATES: tuple[Gate, ...] = (
    budget_gate,
    experience_gate,
    use_case_gate,
    fuel_economy_gate,
    brand_gate,
)


def passes_all(car: Car, prefs: Preferences) -> bool:
    return all(gate(car, prefs) for gate in GATES)


def apply_filters(cars: Iterable[Car], prefs: Preferences) -> list[Car]:
    """Return the cars passing every gate, in input order."""
    return [car for car in cars if passes_all(car, prefs)]
