"""
Firestore gateway.

The Firebase app is initialized once per process; everything else receives an
explicitly constructed FirestoreDatabase handle (FastAPI dependency `get_db`),
so tests can substitute an in-memory client.
"""

from collections.abc import Callable
from functools import lru_cache
from typing import Any, TypeVar

import firebase_admin
from firebase_admin import credentials, firestore
from loguru import logger

from models.config import settings

R = TypeVar("R")


def get_firebase_app() -> firebase_admin.App:
    """
    Return the default Firebase app, initializing it on first use.

    Uses the service account at FIREBASE_CREDENTIALS_PATH when set, otherwise
    application default credentials (Cloud Run, GCE, `gcloud auth`).
    """
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    if settings.FIREBASE_CREDENTIALS_PATH:
        credential = credentials.Certificate(settings.FIREBASE_CREDENTIALS_PATH)
    else:
        credential = credentials.ApplicationDefault()

    logger.info(f"Initializing Firebase app for project {settings.FIREBASE_PROJECT_ID}")
    return firebase_admin.initialize_app(
        credential, {"projectId": settings.FIREBASE_PROJECT_ID}
    )


class FirestoreDatabase:
    """
    Handle over a Firestore client.

    Exposes collection handles, write batches and a transaction runner.
    Repositories only talk to Firestore through this object.
    """

    def __init__(self, client: Any):
        """
        Args:
            client: A `google.cloud.firestore.Client` (or a test double with
                the same surface).
        """
        self.client = client

    def collection(self, name: str) -> Any:
        return self.client.collection(name)

    def document(self, collection_name: str, document_id: str) -> Any:
        return self.client.collection(collection_name).document(document_id)

    def batch(self) -> Any:
        return self.client.batch()

    def run_transaction(self, callback: Callable[[Any], R]) -> R:
        """
        Run `callback(transaction)` inside a Firestore transaction.

        All reads must happen before the first write. The client retries the
        callback on contention; any exception raised by the callback aborts the
        transaction and nothing is committed.
        """
        transaction = self.client.transaction()

        @firestore.transactional
        def _run(tx: Any) -> R:
            return callback(tx)

        return _run(transaction)


@lru_cache(maxsize=1)
def _default_database() -> FirestoreDatabase:
    return FirestoreDatabase(firestore.client(get_firebase_app()))


def get_db() -> FirestoreDatabase:
    """Get the process-wide Firestore handle."""
    return _default_database()
