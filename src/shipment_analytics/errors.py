"""Error types raised by the loader and the dataset store."""

from __future__ import annotations


class DataUnavailable(RuntimeError):
    """The shipment dataset could not be loaded.

    Fatal for every query until the process restarts; nothing retries it.
    """
