"""Readers turning a raw shipments source into a pandas DataFrame.

Readers only parse; normalisation and validation happen in
`shipment_analytics.clean`. Every failure to obtain a frame is reported as
`DataUnavailable`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pandas as pd
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from shipment_analytics.db import iter_batches
from shipment_analytics.errors import DataUnavailable

log = logging.getLogger(__name__)

SUFFIXES = (".json", ".jsonl", ".ndjson", ".csv")


def read_shipments_frame(path: Path) -> pd.DataFrame:
    """Read a shipments file into a DataFrame with raw (unconverted) columns.

    Args:
        path: `.json` file holding an array of objects, `.jsonl`/`.ndjson`
            with one object per line, or `.csv` with a header row.

    Returns:
        pandas.DataFrame with one row per shipment.

    Raises:
        DataUnavailable: if the file is missing, has an unsupported suffix
            or cannot be parsed.
    """
    if not path.is_file():
        raise DataUnavailable(f"Shipments file not found: {path}")

    suffix = path.suffix.lower()
    if suffix not in SUFFIXES:
        raise DataUnavailable(
            f"Unsupported shipments file type {suffix!r} (expected one of {', '.join(SUFFIXES)})"
        )

    log.info("Reading shipments from %s", path)
    try:
        if suffix == ".csv":
            pdf = pd.read_csv(path, dtype=str, keep_default_na=False)
        else:
            pdf = pd.read_json(
                path,
                orient="records",
                lines=suffix != ".json",
                dtype=False,
                convert_dates=False,
                precise_float=True,
            )
    except (ValueError, OSError) as exc:
        raise DataUnavailable(f"Shipments file {path} is malformed: {exc}") from exc

    log.info("Read %d raw rows from %s", len(pdf), path)
    return pdf


def read_collection_frame(
    collection: Collection[dict[str, Any]],
    batch_size: int = 50_000,
) -> pd.DataFrame:
    """Read every shipment document of a MongoDB collection into a DataFrame.

    Raises:
        DataUnavailable: if the collection cannot be read.
    """
    log.info("Reading shipments from collection %s", collection.full_name)
    try:
        pdf_batches = [pd.DataFrame(batch) for batch in iter_batches(collection, batch_size)]
    except PyMongoError as exc:
        raise DataUnavailable(f"Unable to read {collection.full_name}: {exc}") from exc

    if not pdf_batches:
        return pd.DataFrame()

    pdf = pd.concat(pdf_batches, ignore_index=True)
    log.info("Read %d raw documents from %s", len(pdf), collection.full_name)
    return pdf
