"""
Result cache for the recommendation pipeline.

Entries are addressed by a canonical serialisation of the preferences,
so equal preferences hit the same entry across processes when a shared
backend (Redis) is used. Nothing is invalidated implicitly: whoever
changes a user's preferences is expected to call ``evict``.

The cache is an optimisation only. Backend failures are logged and
reported as misses so the engine falls back to recomputing.
"""
from __future__ import annotations

import hashlib
import json
import logging
import threading
import time
from typing import Any, Protocol

import redis
from pydantic import ValidationError

from .config import DEFAULT_CACHE_CONFIG, CacheConfig
from .errors import coerce_enum
from .models import ExperienceLevel, Preferences, RecommendationResponse, UseCase

logger = logging.getLogger(__name__)


class CacheBackend(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, payload: str, ttl: int | None) -> None: ...

    def delete(self, key: str) -> None: ...

    def clear(self) -> None: ...

    def size(self) -> int: ...


class MemoryBackend:
    """In-process dict, optionally expiring entries after ``ttl`` seconds."""

    def __init__(self) -> None:
        self._entries: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at = entry["expires_at"]
            if expires_at is not None and time.time() >= expires_at:
                del self._entries[key]
                return None
            return entry["payload"]

    def set(self, key: str, payload: str, ttl: int | None) -> None:
        expires_at = time.time() + ttl if ttl else None
        with self._lock:
            self._entries[key] = {"payload": payload, "expires_at": expires_at}

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._entries)


class RedisBackend:
    """Redis-backed store; keys live under ``<prefix>:``."""

    def __init__(self, client: redis.Redis, key_prefix: str):
        self.client = client
        self.prefix = key_prefix

    @classmethod
    def from_config(cls, config: CacheConfig) -> RedisBackend:
        client = redis.Redis.from_url(
            config.redis_url,
            decode_responses=True,
            socket_timeout=config.socket_timeout,
            socket_connect_timeout=config.socket_timeout,
        )
        return cls(client, config.key_prefix)

    def get(self, key: str) -> str | None:
        return self.client.get(key)

    def set(self, key: str, payload: str, ttl: int | None) -> None:
        self.client.set(key, payload, ex=ttl)

    def delete(self, key: str) -> None:
        self.client.delete(key)

    def clear(self) -> None:
        keys = list(self.client.scan_iter(match=f"{self.prefix}:*"))
        if keys:
            self.client.delete(*keys)

    def size(self) -> int:
        return sum(1 for _ in self.client.scan_iter(match=f"{self.prefix}:*"))


_config: CacheConfig = DEFAULT_CACHE_CONFIG
_backend: CacheBackend | None = None
_stats_lock = threading.Lock()
_hits: int = 0
_misses: int = 0
_errors: int = 0

_BACKEND_ERRORS = (redis.RedisError, OSError)


def canonical_key(prefs: Preferences) -> str:
    """Deterministic string form of ``prefs``; equal values give equal keys."""
    normalized = {
        "budget": repr(float(prefs.budget)),
        "experience": coerce_enum(ExperienceLevel, "experience", prefs.experience).value,
        "use_case": coerce_enum(UseCase, "use_case", prefs.use_case).value,
        "brand_preferences": sorted(set(prefs.brand_preferences or [])),
        "fuel_economy_priority": bool(prefs.fuel_economy_priority),
    }
    return json.dumps(normalized, sort_keys=True, separators=(",", ":"))


def _make_key(prefs: Preferences) -> str:
    digest = hashlib.sha256(canonical_key(prefs).encode()).hexdigest()[:16]
    return f"{_config.key_prefix}:{digest}"


def get_backend() -> CacheBackend:
    global _backend
    if _backend is None:
        if _config.backend == "redis":
            _backend = RedisBackend.from_config(_config)
        else:
            _backend = MemoryBackend()
        logger.info("Using %s recommendation cache", type(_backend).__name__)
    return _backend


def configure_cache(
    config: CacheConfig = DEFAULT_CACHE_CONFIG,
    backend: CacheBackend | None = None,
) -> None:
    """Swap the cache configuration and backend, resetting statistics."""
    global _config, _backend
    _config = config
    _backend = backend
    _reset_stats()


def _count(hit: bool = False, miss: bool = False, error: bool = False) -> None:
    global _hits, _misses, _errors
    with _stats_lock:
        _hits += hit
        _misses += miss
        _errors += error


def cache_get(prefs: Preferences) -> RecommendationResponse | None:
    key = _make_key(prefs)
    try:
        raw = get_backend().get(key)
        if raw is not None:
            cached = RecommendationResponse.model_validate_json(raw)
            _count(hit=True)
            return cached
    except _BACKEND_ERRORS:
        logger.warning("Recommendation cache read failed for %s", key, exc_info=True)
        _count(error=True)
    except ValidationError:
        logger.warning("Discarding unreadable cache entry %s", key, exc_info=True)
        _count(error=True)
    _count(miss=True)
    return None


def cache_set(prefs: Preferences, value: RecommendationResponse) -> None:
    key = _make_key(prefs)
    payload = value.model_copy(update={"cache_hit": False}).model_dump_json()
    try:
        get_backend().set(key, payload, _config.ttl_seconds)
    except _BACKEND_ERRORS:
        logger.warning("Recommendation cache write failed for %s", key, exc_info=True)
        _count(error=True)


def evict(prefs: Preferences) -> None:
    """Drop the entry for ``prefs``; called when a user's preferences change."""
    key = _make_key(prefs)
    try:
        get_backend().delete(key)
    except _BACKEND_ERRORS:
        logger.warning("Recommendation cache evict failed for %s", key, exc_info=True)
        _count(error=True)


def get_cache_stats() -> dict:
    try:
        size = get_backend().size()
    except _BACKEND_ERRORS:
        logger.warning("Could not read recommendation cache size", exc_info=True)
        size = None
    with _stats_lock:
        total = _hits + _misses
        return {
            "backend": _config.backend,
            "size": size,
            "hits": _hits,
            "misses": _misses,
            "errors": _errors,
            "hit_rate": round(_hits / total * 100, 1) if total > 0 else 0.0,
        }


def _reset_stats() -> None:
    global _hits, _misses, _errors
    with _stats_lock:
        _hits = 0
        _misses = 0
        _errors = 0


def clear_cache() -> None:
    try:
        get_backend().clear()
    except _BACKEND_ERRORS:
        logger.warning("Recommendation cache clear failed", exc_info=True)
    _reset_stats()
