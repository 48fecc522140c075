"""Configuration helpers and Settings container.

This module provides a small `Settings` dataclass and `get_settings` which
reads the dataset source and logging options from the environment.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

SOURCES = ("file", "mongodb")


@dataclass(frozen=True)
class Settings:
    """Container for service configuration read from the environment.

    Attributes:
        data_source: Where records come from, ``"file"`` or ``"mongodb"``.
        data_path: Path to the JSON/JSONL/CSV shipments file.
        mongo_uri: MongoDB connection URI (only for the mongodb source).
        mongo_db: MongoDB database name.
        mongo_collection: MongoDB collection holding shipment documents.
        log_level: Logging level name.
    """
    data_source: str
    data_path: Path
    mongo_uri: str | None
    mongo_db: str
    mongo_collection: str
    log_level: str = "INFO"


def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if `SHIPMENTS_SOURCE` is unknown, or if it is
            ``mongodb`` and `MONGO_URI` is not set.
    """
    data_source = os.getenv("SHIPMENTS_SOURCE", "file").strip().lower()
    data_path = Path(os.getenv("SHIPMENTS_PATH", "data/shipments.json"))
    mongo_uri = os.getenv("MONGO_URI", "").strip() or None
    mongo_db = os.getenv("MONGO_DB", "shipments")
    mongo_collection = os.getenv("MONGO_COLLECTION", "shipments")
    log_level = os.getenv("LOG_LEVEL", "INFO")

    if data_source not in SOURCES:
        raise RuntimeError(
            f"SHIPMENTS_SOURCE must be one of {', '.join(SOURCES)} "
            f"(got {data_source!r})."
        )
    if data_source == "mongodb" and not mongo_uri:
        raise RuntimeError(
            "MONGO_URI is required when SHIPMENTS_SOURCE=mongodb. Set it in .env."
        )

    return Settings(
        data_source=data_source,
        data_path=data_path,
        mongo_uri=mongo_uri,
        mongo_db=mongo_db,
        mongo_collection=mongo_collection,
        log_level=log_level,
    )
