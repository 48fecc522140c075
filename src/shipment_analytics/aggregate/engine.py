"""Company rollups, company detail and dataset-wide statistics.

All operations are read-only and deterministic. Rankings sort descending
with Python's stable sort, so equal values keep first-encountered order.

Units:
- Company totals, detail commodities and monthly volume are whole
  kilograms: sum(tonnes * 1000) truncated to int.
- `top_commodities` reports the raw sum of tonnes.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Iterable

from shipment_analytics.aggregate.indices import CompanyKey, IndexBuilder, Records
from shipment_analytics.models import (
    Commodity,
    CompanyDetail,
    CompanyRollup,
    CompanyStats,
    MonthlyVolume,
    TopCommodity,
    TradingPartner,
)
from shipment_analytics.params import coerce_limit

log = logging.getLogger(__name__)

TOP_N = 3
DEFAULT_TOP_COMMODITIES = 5
DEFAULT_MONTHS = 6


def total_kg(records: Iterable[Any]) -> int:
    """Return the summed weight of `records` in whole kilograms."""
    return int(math.fsum(r.weight_metric_tonnes * 1000 for r in records))


def _rollup_fields(key: CompanyKey, records: Records) -> dict[str, Any]:
    return {
        "name": key.name,
        "country": key.country,
        "website": key.website,
        "type": "importer",
        "total_shipments": len(records),
        "total_weight": total_kg(records),
    }


def top_trading_partners(records: Records, n: int = TOP_N) -> list[TradingPartner]:
    """Rank exporters of `records` by shipment count.

    Args:
        records: One company's records.
        n: Number of partners to keep.
    """
    counts: dict[tuple[str, str], int] = {}
    for r in records:
        k = (r.exporter_name, r.exporter_country)
        counts[k] = counts.get(k, 0) + 1

    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)[:n]
    return [
        TradingPartner(name=name, country=country, shipments=shipments)
        for (name, country), shipments in ranked
    ]


def top_company_commodities(records: Records, n: int = TOP_N) -> list[Commodity]:
    """Rank commodities of `records` by total weight in whole kilograms.

    Args:
        records: One company's records.
        n: Number of commodities to keep.
    """
    groups: dict[str, list[Any]] = {}
    for r in records:
        groups.setdefault(r.commodity_name, []).append(r)

    weights = [(name, total_kg(group)) for name, group in groups.items()]
    ranked = sorted(weights, key=lambda kv: kv[1], reverse=True)[:n]
    return [Commodity(name=name, weight=weight) for name, weight in ranked]


class AggregationEngine:
    """Computes analytics from the cached indices of an `IndexBuilder`."""

    def __init__(self, indices: IndexBuilder) -> None:
        self._indices = indices

    def list_companies(self) -> list[CompanyRollup]:
        """Return one rollup per company key, heaviest first."""
        idx = self._indices.get()
        rollups = [
            CompanyRollup(**_rollup_fields(key, records))
            for key, records in idx.by_company.items()
        ]
        return sorted(rollups, key=lambda c: c.total_weight, reverse=True)

    def company_detail(self, name: Any, country: str | None = None) -> CompanyDetail | None:
        """Return the detail for the importer called exactly `name`.

        `name` is matched as an opaque string against the index keys; it is
        never parsed or interpolated.

        Args:
            name: Exact, case-sensitive importer name.
            country: Optional exact importer country narrowing the match
                when several companies share a name.

        Returns:
            CompanyDetail for the first matching company key, or None when
            no company matches.
        """
        if not isinstance(name, str):
            return None

        idx = self._indices.get()
        keys = idx.by_importer_name.get(name, ())
        if country is not None:
            keys = tuple(k for k in keys if k.country == country)
        if not keys:
            log.debug("Company not found: %r", name)
            return None

        key = keys[0]
        records = idx.by_company[key]
        return CompanyDetail(
            **_rollup_fields(key, records),
            top_trading_partners=top_trading_partners(records),
            top_commodities=top_company_commodities(records),
        )

    def company_stats(self) -> CompanyStats:
        """Return distinct importer-name and exporter-name counts."""
        idx = self._indices.get()
        return CompanyStats(
            total_importers=len(idx.by_importer_name),
            total_exporters=len(idx.by_exporter),
        )

    def top_commodities(self, limit: Any = DEFAULT_TOP_COMMODITIES) -> list[TopCommodity]:
        """Return the `limit` commodities with the greatest summed tonnes.

        Args:
            limit: Number of commodities; invalid values fall back to 5.
        """
        limit = coerce_limit(limit, DEFAULT_TOP_COMMODITIES)
        idx = self._indices.get()
        totals = [
            (name, math.fsum(r.weight_metric_tonnes for r in records))
            for name, records in idx.by_commodity.items()
        ]
        ranked = sorted(totals, key=lambda kv: kv[1], reverse=True)[:limit]
        return [TopCommodity(commodity=name, kg=tonnes) for name, tonnes in ranked]

    def monthly_volume(self, months: Any = DEFAULT_MONTHS) -> list[MonthlyVolume]:
        """Return volume for the most recent `months` months, oldest first.

        Args:
            months: Window size; invalid values fall back to 6.
        """
        months = coerce_limit(months, DEFAULT_MONTHS)
        idx = self._indices.get()
        recent = sorted(idx.by_month, reverse=True)[:months]
        return [
            MonthlyVolume(month=idx.month_labels[k], kg=total_kg(idx.by_month[k]))
            for k in reversed(recent)
        ]
