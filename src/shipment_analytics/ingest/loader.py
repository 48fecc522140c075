"""Turn a raw shipments source into validated `ShipmentRecord` values.

The loader is the only component that knows about source formats. The
dataset store calls the zero-argument function returned by `make_loader`
exactly once per process.
"""

from __future__ import annotations

import logging
from typing import Callable, cast, Any as TypingAny

import pandas as pd
import dask.dataframe as dd
from dask import delayed, compute  # type: ignore[attr-defined]

from shipment_analytics.clean.transform import clean_shipments_ddf
from shipment_analytics.clean.validate import RECORD_FIELDS, validate_partition
from shipment_analytics.config import Settings
from shipment_analytics.db import get_client, get_db
from shipment_analytics.errors import DataUnavailable
from shipment_analytics.ingest.read_source import read_collection_frame, read_shipments_frame
from shipment_analytics.models import ShipmentRecord

log = logging.getLogger(__name__)

OPTIONAL_COLUMNS = ("id", "importer_website")
REQUIRED_COLUMNS = tuple(c for c in RECORD_FIELDS if c not in OPTIONAL_COLUMNS)
PARTITION_ROWS = 200_000


def frame_to_records(pdf: pd.DataFrame) -> list[ShipmentRecord]:
    """Clean and validate a raw shipments frame, preserving row order.

    Rows failing validation are dropped and counted in the log.

    Raises:
        DataUnavailable: if a non-empty frame lacks a required column.
    """
    if pdf.empty:
        log.warning("Shipments source is empty")
        return []

    missing = [c for c in REQUIRED_COLUMNS if c not in pdf.columns]
    if missing:
        raise DataUnavailable(f"Shipments source is missing columns: {', '.join(missing)}")

    pdf = pdf.copy()
    if "id" not in pdf.columns:
        pdf["id"] = [str(i) for i in range(1, len(pdf) + 1)]
    if "importer_website" not in pdf.columns:
        pdf["importer_website"] = None
    pdf = pdf[list(RECORD_FIELDS)]

    nparts = max(1, len(pdf) // PARTITION_ROWS)
    dd_mod = cast(TypingAny, dd)
    ddf = clean_shipments_ddf(dd_mod.from_pandas(pdf, npartitions=nparts))

    tasks = [delayed(validate_partition)(part) for part in ddf.to_delayed()]
    results = cast(TypingAny, compute)(*tasks)  # (records, bad) per partition, in order

    records: list[ShipmentRecord] = []
    bad_total = 0
    for good, bad in results:
        records.extend(good)
        bad_total += bad

    if bad_total:
        log.warning("Dropped %d invalid shipment rows", bad_total)
    log.info("Validated %d shipment records across %d partitions", len(records), nparts)
    return records


def load_shipments(settings: Settings) -> list[ShipmentRecord]:
    """Read the configured source and return its validated records.

    Raises:
        DataUnavailable: if the source is missing, unreachable or malformed.
    """
    if settings.data_source == "mongodb":
        client = get_client(cast(str, settings.mongo_uri))
        try:
            collection = get_db(client, settings.mongo_db)[settings.mongo_collection]
            pdf = read_collection_frame(collection)
        finally:
            client.close()
    else:
        pdf = read_shipments_frame(settings.data_path)

    return frame_to_records(pdf)


def make_loader(settings: Settings) -> Callable[[], list[ShipmentRecord]]:
    """Return a zero-argument loader bound to `settings` for the dataset store."""

    def _load() -> list[ShipmentRecord]:
        return load_shipments(settings)

    return _load
