from __future__ import annotations

from datetime import date
from typing import Any, Callable

import pytest

from shipment_analytics.gateway import QueryGateway
from shipment_analytics.models import ShipmentRecord

_counter = iter(range(1, 1_000_000))


def record(**overrides: Any) -> ShipmentRecord:
    fields: dict[str, Any] = {
        "id": str(next(_counter)),
        "importer_name": "Acme",
        "importer_country": "US",
        "importer_website": "acme.example",
        "exporter_name": "Globex",
        "exporter_country": "DE",
        "commodity_name": "Steel",
        "weight_metric_tonnes": 1.0,
        "shipment_date": date(2024, 1, 15),
    }
    fields.update(overrides)
    return ShipmentRecord(**fields)


@pytest.fixture
def make_record() -> Callable[..., ShipmentRecord]:
    return record


@pytest.fixture
def sample_records() -> list[ShipmentRecord]:
    return [
        record(weight_metric_tonnes=2.5, commodity_name="Steel", shipment_date=date(2024, 1, 10)),
        record(weight_metric_tonnes=1.0, commodity_name="Steel", shipment_date=date(2024, 2, 3)),
        record(weight_metric_tonnes=3.0, commodity_name="Wood", exporter_name="Initech",
               exporter_country="FR", shipment_date=date(2024, 3, 20)),
        record(importer_name="Umbrella", importer_country="GB", importer_website=None,
               exporter_name="Acme", exporter_country="US", commodity_name="Copper",
               weight_metric_tonnes=10.0, shipment_date=date(2023, 12, 1)),
        record(importer_name="Umbrella", importer_country="GB", importer_website=None,
               exporter_name="Globex", commodity_name="Wood",
               weight_metric_tonnes=0.25, shipment_date=date(2024, 3, 1)),
    ]


@pytest.fixture
def gateway(sample_records: list[ShipmentRecord]) -> QueryGateway:
    return QueryGateway.from_loader(lambda: sample_records)
