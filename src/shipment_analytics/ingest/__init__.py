"""Bulk record loading.

Reads the raw shipments source (a JSON/JSONL/CSV file or a MongoDB
collection) into a pandas DataFrame and turns it into validated
`ShipmentRecord` values for the dataset store.
"""
