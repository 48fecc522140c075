"""Validation utilities for cleaned shipment rows.

This module validates partition data against the Pydantic `ShipmentRecord`
model after converting pandas scalars (timestamps, NaN/NA) into native
Python values.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any

import numpy as np
import pandas as pd
from pydantic import ValidationError

from shipment_analytics.models import ShipmentRecord

RECORD_FIELDS = tuple(ShipmentRecord.model_fields)


def _to_native(value: Any) -> Any:
    if isinstance(value, (list, dict)):
        return value
    if pd.isna(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, np.generic):
        return value.item()
    return value


def validate_partition(pdf: pd.DataFrame) -> tuple[list[ShipmentRecord], int]:
    """Validate a pandas partition of shipment rows using Pydantic.

    Columns outside the `ShipmentRecord` schema are ignored.

    Args:
        pdf: Pandas DataFrame for the partition.

    Returns:
        A tuple of (list_of_validated_records, bad_count).
    """
    good: list[ShipmentRecord] = []
    bad = 0

    for rec in pdf.to_dict(orient="records"):
        row = {k: _to_native(rec.get(k)) for k in RECORD_FIELDS}
        try:
            good.append(ShipmentRecord.model_validate(row))
        except ValidationError:
            bad += 1

    return good, bad
