"""Grouping indices derived once from the dataset store.

Each index maps a grouping key to the records in that group, in load order.
Every record is referenced exactly once per index. `IndexBuilder` builds the
bundle on first use and republishes it only when the store's version
changes.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, NamedTuple, TypeVar

from shipment_analytics.models import ShipmentRecord
from shipment_analytics.store import DatasetStore

log = logging.getLogger(__name__)

Records = tuple[ShipmentRecord, ...]
K = TypeVar("K")
V = TypeVar("V")


class CompanyKey(NamedTuple):
    """Importer identity used for rollups."""
    name: str
    country: str
    website: str | None


def month_key(record: ShipmentRecord) -> str:
    """Return the sortable year-month key, e.g. ``2024-03``."""
    return record.shipment_date.strftime("%Y-%m")


def month_label(record: ShipmentRecord) -> str:
    """Return the display label for the record's month, e.g. ``Mar 2024``."""
    return record.shipment_date.strftime("%b %Y")


@dataclass(frozen=True)
class Indices:
    """Immutable bundle of grouping indices for one dataset version.

    Attributes:
        version: Store version the bundle was built from.
        by_company: CompanyKey -> records, in first-encountered key order.
        by_importer_name: importer name -> CompanyKeys carrying that name.
        by_exporter: exporter name -> records.
        by_commodity: commodity name -> records.
        by_month: year-month key -> records.
        month_labels: year-month key -> display label.
        by_date_desc: all records, most recent shipment first.
        total: number of records.
    """
    version: int
    by_company: Mapping[CompanyKey, Records]
    by_importer_name: Mapping[str, tuple[CompanyKey, ...]]
    by_exporter: Mapping[str, Records]
    by_commodity: Mapping[str, Records]
    by_month: Mapping[str, Records]
    month_labels: Mapping[str, str]
    by_date_desc: Records
    total: int


def _freeze(groups: dict[K, list[V]]) -> Mapping[K, tuple[V, ...]]:
    return MappingProxyType({k: tuple(v) for k, v in groups.items()})


def build_indices(records: Records, version: int) -> Indices:
    """Group `records` in a single pass.

    Args:
        records: Full dataset in load order.
        version: Store version stamped on the result.
    """
    by_company: dict[CompanyKey, list[ShipmentRecord]] = {}
    by_importer_name: dict[str, list[CompanyKey]] = {}
    by_exporter: dict[str, list[ShipmentRecord]] = {}
    by_commodity: dict[str, list[ShipmentRecord]] = {}
    by_month: dict[str, list[ShipmentRecord]] = {}
    month_labels: dict[str, str] = {}

    for r in records:
        key = CompanyKey(r.importer_name, r.importer_country, r.importer_website)
        if key not in by_company:
            by_company[key] = []
            by_importer_name.setdefault(key.name, []).append(key)
        by_company[key].append(r)

        by_exporter.setdefault(r.exporter_name, []).append(r)
        by_commodity.setdefault(r.commodity_name, []).append(r)

        mk = month_key(r)
        if mk not in by_month:
            by_month[mk] = []
            month_labels[mk] = month_label(r)
        by_month[mk].append(r)

    # sorted() is stable: equal dates keep load order
    by_date_desc = tuple(sorted(records, key=lambda r: r.shipment_date, reverse=True))

    return Indices(
        version=version,
        by_company=_freeze(by_company),
        by_importer_name=_freeze(by_importer_name),
        by_exporter=_freeze(by_exporter),
        by_commodity=_freeze(by_commodity),
        by_month=_freeze(by_month),
        month_labels=MappingProxyType(month_labels),
        by_date_desc=by_date_desc,
        total=len(records),
    )


class IndexBuilder:
    """Lazily builds and caches `Indices` for a `DatasetStore`.

    Concurrent first callers share one build; later callers get the cached
    bundle without locking as long as the store version is unchanged.
    """

    def __init__(self, store: DatasetStore) -> None:
        self._store = store
        self._lock = threading.Lock()
        self._current: Indices | None = None

    def get(self) -> Indices:
        """Return the indices for the store's current version.

        Raises:
            DataUnavailable: if the store cannot load its dataset.
        """
        version = self._store.version
        current = self._current
        if current is not None and current.version == version:
            return current

        with self._lock:
            current = self._current
            if current is None or current.version != version:
                current = self._build(version)
                self._current = current
            return current

    def _build(self, version: int) -> Indices:
        started = time.perf_counter()
        indices = build_indices(self._store.all(), version)
        log.info(
            "Built indices v%d in %.2fs: %d companies, %d exporters, %d commodities, %d months",
            version,
            time.perf_counter() - started,
            len(indices.by_company),
            len(indices.by_exporter),
            len(indices.by_commodity),
            len(indices.by_month),
        )
        return indices
