from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from typing import Iterator, Sequence

from .cache import cache_get, cache_set, canonical_key
from .config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .data_store import get_cars
from .errors import InvalidPreferenceError, coerce_enum
from .explain import explain_car
from .filters import apply_filters
from .models import (
    Car,
    ExperienceLevel,
    Preferences,
    RecommendationResponse,
    RecommendationResult,
    UseCase,
)
from .ranking import ScoredCar, rank
from .scoring import score_car

logger = logging.getLogger(__name__)

# Per-key locks with waiter counts, so concurrent misses for the same
# preferences compute once. Entries are removed when the count drops to zero.
_key_locks: dict[str, list] = {}
_key_locks_guard = threading.Lock()


def validate_preferences(prefs: Preferences) -> None:
    """Raise InvalidPreferenceError for values the engine can't interpret."""
    budget = prefs.budget
    if not isinstance(budget, (int, float)) or isinstance(budget, bool) or budget <= 0:
        raise InvalidPreferenceError("budget", budget)
    coerce_enum(ExperienceLevel, "experience", prefs.experience)
    coerce_enum(UseCase, "use_case", prefs.use_case)


def _run_pipeline(
    cars: Sequence[Car], prefs: Preferences, limit: int
) -> tuple[list[RecommendationResult], int]:
    candidates = apply_filters(cars, prefs)
    scored = [
        ScoredCar(car, score_car(car, prefs), explain_car(car, prefs))
        for car in candidates
    ]
    return rank(scored, limit=limit), len(candidates)


def recommend(
    cars: Sequence[Car],
    prefs: Preferences,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> list[RecommendationResult]:
    """Uncached pipeline: filter, score, explain and rank ``cars``."""
    validate_preferences(prefs)
    results, _ = _run_pipeline(cars, prefs, config.top_n)
    return results


@contextmanager
def _single_flight(key: str) -> Iterator[None]:
    """Serialise work on ``key``; the lock is dropped once nobody holds or waits on it."""
    with _key_locks_guard:
        entry = _key_locks.get(key)
        if entry is None:
            entry = _key_locks[key] = [threading.Lock(), 0]
        entry[1] += 1
    try:
        with entry[0]:
            yield
    finally:
        with _key_locks_guard:
            entry[1] -= 1
            if entry[1] == 0:
                del _key_locks[key]


def get_recommendations(
    prefs: Preferences,
    cars: Sequence[Car] | None = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> RecommendationResponse:
    """
    Cached recommendations for ``prefs``.

    The cache is keyed by preferences only; ``cars`` defaults to the
    loaded inventory and is not part of the key.
    """
    start_time = time.time()
    validate_preferences(prefs)

    key = canonical_key(prefs)
    with _single_flight(key):
        cached = cache_get(prefs)
        if cached is not None:
            logger.debug("Cache hit for preferences %s", key)
            return cached.model_copy(update={"cache_hit": True})

        logger.info("Generating recommendations for preferences %s", key)
        inventory = get_cars() if cars is None else cars
        results, total_candidates = _run_pipeline(inventory, prefs, config.top_n)

        response = RecommendationResponse(
            recommendations=results,
            total_candidates=total_candidates,
        )
        cache_set(prefs, response)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    if not results:
        logger.warning("No cars matched preferences %s", key)
    logger.info(
        "Generated %d recommendations from %d candidates in %sms",
        len(results), total_candidates, elapsed_ms,
    )
    return response
