"""shipment_analytics package.

Serves shipment trade records and the analytics derived from them: paginated
raw listings, per-company rollups with top trading partners and commodities,
and dataset-wide statistics.

Architecture:
- Records are bulk-loaded once (JSON/CSV file or MongoDB) and validated
  with Pydantic
- Dask is used for partitioned cleaning of the raw frame
- Grouping indices are built lazily once and reused by every query
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
