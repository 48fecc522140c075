"""Query gateway: the single read-only entry point for transport layers.

`build_gateway` wires loader -> store -> index builder -> engine/pagination
into one explicitly owned object. Nothing here keeps module-level state, so
tests and transports can create as many independent gateways as they need.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator

from shipment_analytics.aggregate.engine import (
    DEFAULT_MONTHS,
    DEFAULT_TOP_COMMODITIES,
    AggregationEngine,
)
from shipment_analytics.aggregate.indices import IndexBuilder
from shipment_analytics.config import Settings
from shipment_analytics.ingest.loader import make_loader
from shipment_analytics.models import (
    CompanyDetail,
    CompanyRollup,
    CompanyStats,
    MonthlyVolume,
    ShipmentPage,
    ShipmentRecord,
    StatsSummary,
    TopCommodity,
)
from shipment_analytics.pagination import DEFAULT_PAGE_SIZE, PaginationService
from shipment_analytics.store import DatasetStore, Loader

log = logging.getLogger(__name__)


class QueryGateway:
    """Dispatches analytical requests to the engine and pagination service.

    Every method may raise `DataUnavailable` if the dataset cannot be
    loaded. A missing company is reported by `company` returning None.
    """

    def __init__(self, store: DatasetStore) -> None:
        self.store = store
        indices = IndexBuilder(store)
        self._engine = AggregationEngine(indices)
        self._pages = PaginationService(indices)

    @classmethod
    def from_loader(cls, loader: Loader) -> QueryGateway:
        """Build a gateway over a fresh store fed by `loader`."""
        return cls(DatasetStore(loader))

    def warm_up(self) -> None:
        """Load the dataset and build indices ahead of the first query."""
        self._engine.company_stats()

    def shipments(self, limit: Any = None, offset: Any = None) -> ShipmentPage:
        return self._pages.page(limit, offset)

    def companies(self) -> list[CompanyRollup]:
        return self._engine.list_companies()

    def company(self, name: Any, country: str | None = None) -> CompanyDetail | None:
        return self._engine.company_detail(name, country)

    def company_stats(self) -> CompanyStats:
        return self._engine.company_stats()

    def top_commodities(self, limit: Any = DEFAULT_TOP_COMMODITIES) -> list[TopCommodity]:
        return self._engine.top_commodities(limit)

    def monthly_volume(self, months: Any = DEFAULT_MONTHS) -> list[MonthlyVolume]:
        return self._engine.monthly_volume(months)

    def stats(
        self,
        top_n: Any = DEFAULT_TOP_COMMODITIES,
        months: Any = DEFAULT_MONTHS,
    ) -> StatsSummary:
        """Return company stats, top commodities and monthly volume together."""
        return StatsSummary(
            company_stats=self.company_stats(),
            top_commodities=self.top_commodities(top_n),
            monthly_volume=self.monthly_volume(months),
        )


def iter_shipments(
    gateway: QueryGateway,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Iterator[ShipmentRecord]:
    """Yield every shipment by walking the paginated listing.

    The offset advances by the number of records each page actually
    returned, so a short final page neither truncates nor repeats records.
    """
    offset = 0
    while True:
        page = gateway.shipments(limit=page_size, offset=offset)
        if not page.data:
            return
        yield from page.data
        offset += len(page.data)
        if offset >= page.total:
            return


def build_gateway(settings: Settings) -> QueryGateway:
    """Return a gateway reading records from the source in `settings`."""
    log.info("Using %s shipments source", settings.data_source)
    return QueryGateway.from_loader(make_loader(settings))
