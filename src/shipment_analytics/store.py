"""Process-wide, immutable shipment dataset.

`DatasetStore` owns the loaded records. The first caller of
`ensure_loaded` runs the bulk loader; concurrent callers wait on the same
barrier and every caller afterwards reads the published tuple without
locking.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Iterable

from shipment_analytics.errors import DataUnavailable
from shipment_analytics.models import ShipmentRecord

log = logging.getLogger(__name__)

Loader = Callable[[], Iterable[ShipmentRecord]]

# The dataset never changes after load, so the version is fixed once loaded.
LOADED_VERSION = 1


class DatasetStore:
    """Holds the shipment records and guarantees a single load.

    Args:
        loader: Zero-argument callable returning the parsed records.
    """

    def __init__(self, loader: Loader) -> None:
        self._loader = loader
        self._lock = threading.Lock()
        self._ready = threading.Event()
        self._records: tuple[ShipmentRecord, ...] = ()
        self._error: DataUnavailable | None = None

    def ensure_loaded(self) -> None:
        """Load the dataset if no caller has done so yet.

        Raises:
            DataUnavailable: if the load failed, on this and every later call.
        """
        if not self._ready.is_set():
            with self._lock:
                if not self._ready.is_set():
                    self._load()
                    self._ready.set()

        if self._error is not None:
            raise DataUnavailable(str(self._error)) from self._error

    def _load(self) -> None:
        log.info("Loading shipment dataset")
        started = time.perf_counter()
        try:
            self._records = tuple(self._loader())
        except DataUnavailable as exc:
            log.error("Shipment dataset unavailable: %s", exc)
            self._error = exc
            return
        except Exception as exc:
            log.exception("Shipment loader failed")
            self._error = DataUnavailable(f"Shipment loader failed: {exc}")
            self._error.__cause__ = exc
            return

        log.info(
            "Loaded %d shipment records in %.2fs",
            len(self._records),
            time.perf_counter() - started,
        )

    def all(self) -> tuple[ShipmentRecord, ...]:
        """Return every record in load order."""
        self.ensure_loaded()
        return self._records

    def __len__(self) -> int:
        return len(self.all())

    @property
    def version(self) -> int:
        """Dataset version; derived indices are rebuilt only when it changes."""
        self.ensure_loaded()
        return LOADED_VERSION
