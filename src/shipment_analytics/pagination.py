"""Paginated listing of the raw shipment records.

Pages are slices of one fixed ordering (shipment date descending, load
order for equal dates) taken from the cached indices, so consecutive pages
never overlap or skip records.
"""

from __future__ import annotations

from typing import Any

from shipment_analytics.aggregate.indices import IndexBuilder
from shipment_analytics.models import ShipmentPage
from shipment_analytics.params import coerce_limit, coerce_offset

DEFAULT_PAGE_SIZE = 100


class PaginationService:
    """Serves slices of the date-descending record listing."""

    def __init__(self, indices: IndexBuilder) -> None:
        self._indices = indices

    def page(self, limit: Any = None, offset: Any = None) -> ShipmentPage:
        """Return records [offset, offset + limit) and the dataset size.

        Args:
            limit: Page size; absent, non-numeric or non-positive values
                fall back to 100.
            offset: Start position; absent, non-numeric or negative values
                fall back to 0.

        Returns:
            ShipmentPage whose `total` is the full dataset size. The slice
            is empty when `offset >= total`.
        """
        limit = coerce_limit(limit, DEFAULT_PAGE_SIZE)
        offset = coerce_offset(offset)
        idx = self._indices.get()
        return ShipmentPage(
            data=list(idx.by_date_desc[offset : offset + limit]),
            total=idx.total,
            limit=limit,
            offset=offset,
        )
