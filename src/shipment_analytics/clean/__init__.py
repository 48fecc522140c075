"""Cleaning utilities for loaded shipment rows.

Provides partition-wise normalisation of raw text, numeric and date fields
and Pydantic validation into `ShipmentRecord` values.
"""
