"""
Car recommendation engine.

Responsibilities:
- Accept user preferences (budget, experience, use case, brands, fuel economy).
- Filter the car inventory down to cars passing every hard constraint.
- Score, explain and rank candidates using fixed, explainable rules.
- Cache results by a canonical form of the preferences.
"""
from .engine import get_recommendations, recommend, validate_preferences
from .errors import CarMatchError, InvalidPreferenceError
from .models import (
    Car,
    ExperienceLevel,
    Preferences,
    RecommendationResponse,
    RecommendationResult,
    UseCase,
)

__all__ = [
    "Car",
    "CarMatchError",
    "ExperienceLevel",
    "InvalidPreferenceError",
    "Preferences",
    "RecommendationResponse",
    "RecommendationResult",
    "UseCase",
    "get_recommendations",
    "recommend",
    "validate_preferences",
]
