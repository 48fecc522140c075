"""Aggregation over the loaded shipment dataset.

This package builds the cached grouping indices (by company, commodity,
exporter and calendar month) and computes company rollups, company detail
and dataset-wide statistics from them.
"""
