"""Cleaning and normalization utilities.

This module contains transformations that are applied partition-wise using
Dask. The output is a Dask DataFrame whose schema is stable and suitable for
Pydantic validation into `ShipmentRecord`.
"""
from __future__ import annotations

import logging
from typing import Any

import pandas as pd

log = logging.getLogger(__name__)

TEXT_COLUMNS = (
    "id",
    "importer_name",
    "importer_country",
    "importer_website",
    "exporter_name",
    "exporter_country",
    "commodity_name",
)


def _clean_text(value: Any) -> str | None:
    """Return `value` as a trimmed string, or None when it is missing/blank."""
    if value is None:
        return None
    if not isinstance(value, str):
        if pd.isna(value):
            return None
        value = str(value)
    value = value.strip()
    return value or None


def clean_shipments_ddf(ddf: Any) -> Any:
    """Clean raw shipment rows.

    Trims text fields (blank becomes missing), coerces
    `weight_metric_tonnes` to numeric and parses `shipment_date` to the
    calendar date as written (time and offset dropped). Unparseable
    values become missing and are rejected later by validation.

    Returns:
        Transformed Dask DataFrame with the same columns.
    """
    log.info("Starting clean_shipments_ddf transformation")

    def _clean_partition(pdf: pd.DataFrame) -> pd.DataFrame:
        """Partition-level cleaning function applied via map_partitions.

        Args:
            pdf: Pandas DataFrame for the partition.

        Returns:
            Cleaned Pandas DataFrame.
        """
        pdf = pdf.copy()

        for col in TEXT_COLUMNS:
            if col in pdf.columns:
                pdf[col] = pdf[col].map(_clean_text).astype(object)

        if "weight_metric_tonnes" in pdf.columns:
            pdf["weight_metric_tonnes"] = pd.to_numeric(
                pdf["weight_metric_tonnes"],
                errors="coerce",
            )

        if "shipment_date" in pdf.columns:
            # wall-clock date as written; any time or UTC offset is ignored
            day = pdf["shipment_date"].astype("string").str.slice(0, 10)
            pdf["shipment_date"] = pd.to_datetime(day, errors="coerce", format="%Y-%m-%d")

        return pdf

    meta = _clean_partition(ddf._meta)
    return ddf.map_partitions(_clean_partition, meta=meta)
