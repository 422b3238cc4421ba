from __future__ import annotations

from typing import NamedTuple, Sequence

from .models import Car, RecommendationResult

DEFAULT_TOP_N = 5


class ScoredCar(NamedTuple):
    car: Car
    score: float
    reason: str


def rank(
    scored: Sequence[tuple[Car, float, str]],
    limit: int = DEFAULT_TOP_N,
) -> list[RecommendationResult]:
    """
    Sort ``(car, score, reason)`` entries by score, highest first, and
    keep the first ``limit``.

    Equal scores keep their relative position in ``scored`` (inventory
    order once filtered); the position is part of the sort key.
    """
    indexed = [(position, ScoredCar(*entry)) for position, entry in enumerate(scored)]
    indexed.sort(key=lambda pair: (-pair[1].score, pair[0]))
    return [
        RecommendationResult.from_car(item.car, round(item.score, 4), item.reason)
        for _, item in indexed[:limit]
    ]
