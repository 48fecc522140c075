"""MongoDB helpers for the optional document-store record source.

Centralizes creation of Mongo clients and the batched, read-only scan the
loader uses to pull shipment documents.
"""

from __future__ import annotations

from typing import Any, Iterator

import certifi
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database


def get_client(uri: str) -> MongoClient:
    """Return a configured PyMongo MongoClient for the provided URI.

    TLS is only enabled for ``mongodb+srv://`` URIs (hosted clusters); plain
    ``mongodb://`` URIs are treated as local deployments.

    Args:
        uri: MongoDB connection URI.

    Returns:
        Configured MongoClient instance.
    """
    options: dict[str, Any] = {
        "serverSelectionTimeoutMS": 30000,
        "socketTimeoutMS": 30000,
        "connectTimeoutMS": 30000,
    }
    if uri.startswith("mongodb+srv://"):
        options.update(tls=True, tlsCAFile=certifi.where())
    return MongoClient(uri, **options)


def get_db(
    client: MongoClient[dict[str, Any]],
    db_name: str,
) -> Database[dict[str, Any]]:
    """Return the named Database instance from a MongoClient."""
    return client[db_name]


def iter_batches(
    collection: Collection[dict[str, Any]],
    batch_size: int = 50_000,
) -> Iterator[list[dict[str, Any]]]:
    """Yield every document of `collection` in lists of `batch_size`.

    The `_id` field is projected away; shipment documents carry their own
    `id` field.

    Args:
        collection: Source PyMongo collection.
        batch_size: Cursor batch size and size of each yielded list.
    """
    cursor = collection.find({}, {"_id": False}).batch_size(batch_size)

    buffer: list[dict[str, Any]] = []
    for doc in cursor:
        buffer.append(doc)
        if len(buffer) >= batch_size:
            yield buffer
            buffer = []

    if buffer:
        yield buffer
