"""Pydantic models for shipment records and derived analytics.

`ShipmentRecord` validates loaded rows. The remaining models are the
request-scoped results handed to transport layers; they serialise with the
camelCase keys of the public JSON payloads (``model_dump(by_alias=True)``).
"""

from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ShipmentRecord(BaseModel):
    """Schema for one trade event, immutable once loaded.

    Attributes:
        id: Source identifier of the shipment.
        importer_name: Importing company name.
        importer_country: Importing company country.
        importer_website: Importing company website, if known.
        exporter_name: Exporting company name.
        exporter_country: Exporting company country.
        commodity_name: Traded commodity.
        weight_metric_tonnes: Shipment weight in metric tonnes.
        shipment_date: Date the shipment took place.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)
    id: str
    importer_name: str
    importer_country: str
    importer_website: str | None = None
    exporter_name: str
    exporter_country: str
    commodity_name: str
    weight_metric_tonnes: float = Field(..., ge=0)
    shipment_date: date


class _Output(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class TradingPartner(_Output):
    """Exporter ranked by shipments sent to one importer."""
    name: str
    country: str
    shipments: int = Field(..., ge=0)


class Commodity(_Output):
    """Commodity total for one company, in whole kilograms."""
    name: str
    weight: int = Field(..., ge=0)


class CompanyRollup(_Output):
    """Aggregated summary row for one company key."""
    name: str
    country: str
    website: str | None = None
    type: Literal["importer", "exporter"] = "importer"
    total_shipments: int = Field(..., ge=0)
    total_weight: int = Field(..., ge=0)


class CompanyDetail(CompanyRollup):
    """Company rollup enriched with its top partners and commodities."""
    top_trading_partners: list[TradingPartner] = Field(default_factory=list, max_length=3)
    top_commodities: list[Commodity] = Field(default_factory=list, max_length=3)


class CompanyStats(_Output):
    """Distinct importer and exporter tallies over the whole dataset."""
    total_importers: int = Field(..., ge=0)
    total_exporters: int = Field(..., ge=0)


class TopCommodity(_Output):
    """Dataset-wide commodity total.

    `kg` holds the raw sum of metric tonnes, unlike `Commodity.weight`
    which is converted to whole kilograms.
    """
    commodity: str
    kg: float = Field(..., ge=0)


class MonthlyVolume(_Output):
    """Total shipped weight (whole kilograms) for one calendar month."""
    month: str
    kg: int = Field(..., ge=0)


class ShipmentPage(_Output):
    """Slice of the date-descending listing plus the full dataset size."""
    data: list[ShipmentRecord]
    total: int = Field(..., ge=0)
    limit: int = Field(..., gt=0)
    offset: int = Field(..., ge=0)


class StatsSummary(_Output):
    """Combined dashboard statistics payload."""
    company_stats: CompanyStats
    top_commodities: list[TopCommodity]
    monthly_volume: list[MonthlyVolume]
