from __future__ import annotations

import logging
import threading
from pathlib import Path

import pandas as pd

from .config import DEFAULT_ENGINE_CONFIG
from .models import Car

logger = logging.getLogger(__name__)

CAR_COLUMNS = [
    "id",
    "brand",
    "model",
    "year",
    "price",
    "horsepower",
    "fuel_consumption",
    "fuel_type",
    "is_compact",
    "drivetrain_type",
    "color",
]
_NUMERIC_COLUMNS = ["id", "year", "price", "horsepower", "fuel_consumption"]
_TEXT_COLUMNS = ["brand", "model", "fuel_type", "drivetrain_type", "color"]
_TRUE_VALUES = {"true", "1", "yes", "y", "t"}

_cars: tuple[Car, ...] | None = None
_lock = threading.Lock()


def _parse_flag(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def _load(path: Path) -> tuple[Car, ...]:
    df = pd.read_csv(path)

    missing = [c for c in CAR_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Inventory file {path} is missing columns: {', '.join(missing)}")

    for col in _NUMERIC_COLUMNS:
        df[col] = pd.to_numeric(df[col], errors="coerce")

    # Rows without usable numbers can't be filtered or scored
    incomplete = df[_NUMERIC_COLUMNS].isna().any(axis=1)
    if incomplete.any():
        logger.warning("Skipping %d inventory rows with missing numeric fields", int(incomplete.sum()))
        df = df.loc[~incomplete].copy()

    for col in _TEXT_COLUMNS:
        df[col] = df[col].fillna("").astype(str).str.strip()
    df["is_compact"] = df["is_compact"].apply(_parse_flag)

    cars = tuple(
        Car(
            id=int(row["id"]),
            brand=row["brand"],
            model=row["model"],
            year=int(row["year"]),
            price=float(row["price"]),
            horsepower=int(row["horsepower"]),
            fuel_consumption=float(row["fuel_consumption"]),
            fuel_type=row["fuel_type"],
            is_compact=bool(row["is_compact"]),
            drivetrain_type=row["drivetrain_type"],
            color=row["color"],
        )
        for row in df[CAR_COLUMNS].to_dict(orient="records")
    )
    logger.info("Loaded %d cars from %s", len(cars), path)
    return cars


def get_cars() -> tuple[Car, ...]:
    """Return the in-memory inventory, loading it on first call."""
    global _cars
    if _cars is None:
        with _lock:
            if _cars is None:
                _cars = _load(DEFAULT_ENGINE_CONFIG.data_path)
    return _cars


def get_car(car_id: int) -> Car | None:
    return next((car for car in get_cars() if car.id == car_id), None)


def reload_inventory(path: Path | None = None) -> tuple[Car, ...]:
    """Re-read the inventory file, replacing the in-memory copy."""
    global _cars
    cars = _load(path or DEFAULT_ENGINE_CONFIG.data_path)
    with _lock:
        _cars = cars
    return cars
