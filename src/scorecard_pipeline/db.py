"""MongoDB helpers and bulk upsert utility.

Centralizes creation of Mongo clients and the batched upsert used to mirror
the Raw and Gold layers into MongoDB.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

import certifi
from pymongo import MongoClient, UpdateOne
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

log = logging.getLogger(__name__)


def get_client(uri: str) -> MongoClient:
    """Return a configured PyMongo MongoClient for the provided URI.

    `mongodb+srv://` (Atlas) URIs are opened over TLS with the certifi CA
    bundle.

    Args:
        uri: MongoDB connection URI.

    Returns:
        Configured MongoClient instance.
    """
    tls_options: dict[str, Any] = {}
    if uri.startswith("mongodb+srv://"):
        tls_options = {"tls": True, "tlsCAFile": certifi.where()}

    return MongoClient(
        uri,
        serverSelectionTimeoutMS=30000,
        socketTimeoutMS=30000,
        connectTimeoutMS=30000,
        **tls_options,
    )


def get_db(
    client: MongoClient[dict[str, Any]],
    db_name: str,
) -> Database[dict[str, Any]]:
    return client[db_name]


def bulk_upsert(
    collection: Collection[dict[str, Any]],
    docs: Iterable[dict[str, Any]],
    key_field: str,
    batch_size: int = 1000,
) -> int:
    """Bulk upsert documents using `key_field` as the selector.

    Failed batches are logged and skipped; the return value counts the
    documents attempted, not the documents written.

    Args:
        collection: Target PyMongo collection.
        docs: Iterable of document dictionaries to upsert.
        key_field: Document key to use for upsert selector.
        batch_size: Number of ops per bulk_write call.

    Returns:
        Integer number of documents attempted.
    """
    ops: list[UpdateOne] = []
    attempted = 0

    def _flush() -> None:
        try:
            collection.bulk_write(ops, ordered=False)
        except PyMongoError as e:
            log.warning("bulk_upsert batch failed on %s: %s", collection.name, e)
        ops.clear()

    for d in docs:
        if key_field not in d:
            continue

        ops.append(UpdateOne({key_field: d[key_field]}, {"$set": d}, upsert=True))
        attempted += 1

        if len(ops) >= batch_size:
            _flush()

    if ops:
        _flush()

    return attempted
