from __future__ import annotations

import pytest

from carmatch.recommendations.cache import configure_cache
from carmatch.recommendations.models import Car, Preferences


@pytest.fixture
def make_car():
    def _make(**overrides) -> Car:
        fields = {
            "id": 1,
            "brand": "Acme",
            "model": "Runabout",
            "year": 2022,
            "price": 10000.0,
            "horsepower": 90,
            "fuel_consumption": 5.0,
            "fuel_type": "gasoline",
            "is_compact": True,
            "drivetrain_type": "FWD",
            "color": "Red",
        }
        fields.update(overrides)
        return Car(**fields)

    return _make


@pytest.fixture
def make_prefs():
    def _make(**overrides) -> Preferences:
        fields = {
            "budget": 20000.0,
            "experience": "novice",
            "use_case": "city",
            "brand_preferences": [],
            "fuel_economy_priority": True,
        }
        fields.update(overrides)
        return Preferences(**fields)

    return _make


@pytest.fixture(autouse=True)
def fresh_cache():
    configure_cache()
    yield
    configure_cache()
