from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pandas as pd
import pytest
from pymongo.errors import ServerSelectionTimeoutError

from shipment_analytics.config import Settings
from shipment_analytics.errors import DataUnavailable
from shipment_analytics.gateway import build_gateway
from shipment_analytics.ingest.loader import frame_to_records, load_shipments
from shipment_analytics.ingest.read_source import read_collection_frame, read_shipments_frame

ROWS = [
    {
        "id": 1,
        "importer_name": "Acme",
        "importer_country": "US",
        "importer_website": "acme.example",
        "exporter_name": "Globex",
        "exporter_country": "DE",
        "commodity_name": "Steel",
        "weight_metric_tonnes": 2.5,
        "shipment_date": "2024-01-10",
    },
    {
        "id": 2,
        "importer_name": "Umbrella",
        "importer_country": "GB",
        "importer_website": None,
        "exporter_name": "Acme",
        "exporter_country": "US",
        "commodity_name": "Wood",
        "weight_metric_tonnes": 1,
        "shipment_date": "2024-03-05T10:30:00Z",
    },
]


def _settings(path: Path) -> Settings:
    return Settings(
        data_source="file",
        data_path=path,
        mongo_uri=None,
        mongo_db="shipments",
        mongo_collection="shipments",
    )


def test_load_shipments_from_json_array(tmp_path: Path) -> None:
    path = tmp_path / "shipments.json"
    path.write_text(json.dumps(ROWS), encoding="utf-8")
    records = load_shipments(_settings(path))
    assert [r.id for r in records] == ["1", "2"]
    assert records[1].importer_website is None
    assert records[1].shipment_date.isoformat() == "2024-03-05"


def test_load_shipments_from_json_lines(tmp_path: Path) -> None:
    path = tmp_path / "shipments.jsonl"
    path.write_text("\n".join(json.dumps(r) for r in ROWS), encoding="utf-8")
    assert len(load_shipments(_settings(path))) == 2


def test_load_shipments_from_csv(tmp_path: Path) -> None:
    path = tmp_path / "shipments.csv"
    pd.DataFrame(ROWS).to_csv(path, index=False)
    records = load_shipments(_settings(path))
    assert [r.importer_name for r in records] == ["Acme", "Umbrella"]
    assert records[0].weight_metric_tonnes == 2.5
    assert records[1].importer_website is None


def test_missing_file_is_data_unavailable(tmp_path: Path) -> None:
    with pytest.raises(DataUnavailable):
        read_shipments_frame(tmp_path / "absent.json")


def test_malformed_file_is_data_unavailable(tmp_path: Path) -> None:
    path = tmp_path / "shipments.json"
    path.write_text("[{not json", encoding="utf-8")
    with pytest.raises(DataUnavailable):
        read_shipments_frame(path)


def test_unsupported_suffix_is_data_unavailable(tmp_path: Path) -> None:
    path = tmp_path / "shipments.xml"
    path.write_text("<shipments/>", encoding="utf-8")
    with pytest.raises(DataUnavailable):
        read_shipments_frame(path)


def test_missing_required_column_is_data_unavailable() -> None:
    pdf = pd.DataFrame([{k: v for k, v in ROWS[0].items() if k != "commodity_name"}])
    with pytest.raises(DataUnavailable, match="commodity_name"):
        frame_to_records(pdf)


def test_missing_id_and_website_are_filled() -> None:
    rows = [{k: v for k, v in r.items() if k not in ("id", "importer_website")} for r in ROWS]
    records = frame_to_records(pd.DataFrame(rows))
    assert [r.id for r in records] == ["1", "2"]
    assert all(r.importer_website is None for r in records)


def test_empty_frame_yields_no_records() -> None:
    assert frame_to_records(pd.DataFrame()) == []


class _Cursor:
    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs

    def batch_size(self, _: int) -> "_Cursor":
        return self

    def __iter__(self) -> Any:
        return iter(self._docs)


class _Collection:
    full_name = "shipments.shipments"

    def __init__(self, docs: list[dict[str, Any]], fail: bool = False) -> None:
        self._docs = docs
        self._fail = fail

    def find(self, *_: Any) -> _Cursor:
        if self._fail:
            raise ServerSelectionTimeoutError("no servers")
        return _Cursor(self._docs)


def test_read_collection_frame_batches_documents() -> None:
    pdf = read_collection_frame(_Collection(ROWS * 3), batch_size=4)  # type: ignore[arg-type]
    assert len(pdf) == 6
    assert len(frame_to_records(pdf)) == 6


def test_read_collection_frame_wraps_mongo_errors() -> None:
    with pytest.raises(DataUnavailable):
        read_collection_frame(_Collection([], fail=True))  # type: ignore[arg-type]


def test_json_weights_keep_their_decimal_value(tmp_path: Path) -> None:
    rows = [
        dict(ROWS[0], id="a", weight_metric_tonnes=1.243),
        dict(ROWS[0], id="b", importer_name="Initech", weight_metric_tonnes=0.57),
        dict(ROWS[0], id="c", importer_name="Initech", weight_metric_tonnes=1.5),
    ]
    path = tmp_path / "shipments.json"
    path.write_text(json.dumps(rows), encoding="utf-8")
    gw = build_gateway(_settings(path))

    weights = {r.id: r.weight_metric_tonnes for r in gw.shipments().data}
    assert weights == {"a": 1.243, "b": 0.57, "c": 1.5}

    acme = gw.company("Acme")
    assert acme is not None
    assert acme.total_weight == 1243
