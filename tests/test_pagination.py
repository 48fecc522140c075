from __future__ import annotations

from datetime import date, timedelta
from typing import Callable

import pytest

from shipment_analytics.gateway import QueryGateway
from shipment_analytics.models import ShipmentRecord


@pytest.fixture
def paged_gateway(make_record: Callable[..., ShipmentRecord]) -> QueryGateway:
    start = date(2024, 1, 1)
    # 23 records, several sharing a date, loaded out of date order
    records = [make_record(shipment_date=start + timedelta(days=(i * 7) % 10)) for i in range(23)]
    return QueryGateway.from_loader(lambda: records)


def test_page_total_is_dataset_size(paged_gateway: QueryGateway) -> None:
    for limit, offset in ((5, 0), (5, 20), (100, 0), (3, 50)):
        assert paged_gateway.shipments(limit, offset).total == 23


def test_page_is_date_descending(paged_gateway: QueryGateway) -> None:
    dates = [r.shipment_date for r in paged_gateway.shipments(100, 0).data]
    assert dates == sorted(dates, reverse=True)


def test_sequential_paging_enumerates_every_record_once(paged_gateway: QueryGateway) -> None:
    seen: list[str] = []
    offset = 0
    total = None
    while total is None or offset < total:
        page = paged_gateway.shipments(limit=5, offset=offset)
        total = page.total
        if not page.data:
            break
        seen.extend(r.id for r in page.data)
        offset += len(page.data)

    assert len(seen) == 23
    assert len(set(seen)) == 23
    assert seen == [r.id for r in paged_gateway.shipments(100, 0).data]


def test_short_final_page(paged_gateway: QueryGateway) -> None:
    page = paged_gateway.shipments(limit=10, offset=20)
    assert len(page.data) == 3
    assert page.total == 23


def test_offset_past_end_returns_empty_slice(paged_gateway: QueryGateway) -> None:
    page = paged_gateway.shipments(limit=10, offset=23)
    assert page.data == []
    assert page.total == 23


@pytest.mark.parametrize(
    ("limit", "offset", "expected"),
    [
        (None, None, (100, 0)),
        (0, -5, (100, 0)),
        (-1, "abc", (100, 0)),
        ("7", "2", (7, 2)),
        ("seven", 3.0, (100, 3)),
        (2.5, True, (100, 0)),
    ],
)
def test_invalid_parameters_fall_back_to_defaults(
    paged_gateway: QueryGateway,
    limit: object,
    offset: object,
    expected: tuple[int, int],
) -> None:
    page = paged_gateway.shipments(limit, offset)
    assert (page.limit, page.offset) == expected
