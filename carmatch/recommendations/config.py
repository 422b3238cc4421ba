from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DEFAULT_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "cars.csv"


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


@dataclass(frozen=True)
class EngineConfig:
    top_n: int = 5
    data_path: Path = field(
        default_factory=lambda: Path(os.getenv("CARMATCH_DATA_PATH", str(_DEFAULT_DATA_PATH)))
    )


@dataclass(frozen=True)
class CacheConfig:
    backend: str = field(default_factory=lambda: os.getenv("CARMATCH_CACHE_BACKEND", "memory"))
    redis_url: str = field(default_factory=lambda: os.getenv("REDIS_URL", "redis://localhost:6379/0"))
    key_prefix: str = "recommendations"
    # None keeps entries until they are evicted explicitly
    ttl_seconds: int | None = field(default_factory=lambda: _optional_int("CARMATCH_CACHE_TTL"))
    socket_timeout: float = 0.5


DEFAULT_ENGINE_CONFIG = EngineConfig()
DEFAULT_CACHE_CONFIG = CacheConfig()
