from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ExperienceLevel(str, Enum):
    novice = "novice"
    intermediate = "intermediate"
    expert = "expert"


class UseCase(str, Enum):
    city = "city"
    highway = "highway"
    mixed = "mixed"
    offroad = "offroad"


class Car(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    brand: str
    model: str
    year: int
    price: float = Field(..., ge=0.0)
    horsepower: int = Field(..., ge=0)
    fuel_consumption: float = Field(..., ge=0.0, description="Litres per 100 km")
    fuel_type: str
    is_compact: bool
    drivetrain_type: str
    color: str


class Preferences(BaseModel):
    model_config = ConfigDict(frozen=True)

    budget: float = Field(..., gt=0.0, description="Upper bound on acceptable price")
    experience: ExperienceLevel
    use_case: UseCase
    brand_preferences: list[str] = Field(
        default_factory=list,
        description="Accepted brands; empty means no brand restriction",
    )
    fuel_economy_priority: bool = False


class RecommendationRequest(Preferences):
    """Preferences as accepted over HTTP, with the service's budget bounds."""

    budget: float = Field(..., ge=1000.0, le=200000.0)

    def to_preferences(self) -> Preferences:
        return Preferences(**self.model_dump())


class RecommendationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    brand: str
    model: str
    year: int
    price: float
    horsepower: int
    fuel_consumption: float
    fuel_type: str
    is_compact: bool
    drivetrain_type: str
    color: str
    score: float = Field(..., ge=0.0, le=100.0)
    reason: str = Field(..., min_length=1)

    @classmethod
    def from_car(cls, car: Car, score: float, reason: str) -> RecommendationResult:
        return cls(**car.model_dump(), score=score, reason=reason)


class RecommendationResponse(BaseModel):
    recommendations: list[RecommendationResult]
    total_candidates: int
    cache_hit: bool = False
