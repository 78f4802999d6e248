"""
Document storage for MockPrep

A document collection stores plain dicts under string keys and supports the
three operations the feedback pipeline needs: upsert-by-key with merge,
partial merge-update, and query-by-field with ordering and a limit.
"""

import copy
import logging
from abc import ABC, abstractmethod
from typing import Any
from uuid import uuid4

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the persistence layer cannot complete an operation."""
    pass


class RecordNotFoundError(StoreError):
    """Raised when updating a document that does not exist."""
    pass


class DocumentCollection(ABC):
    """Interface for a keyed collection of documents."""

    def new_key(self) -> str:
        """Allocate a fresh document key."""
        return uuid4().hex

    @abstractmethod
    async def get(self, key: str) -> dict[str, Any] | None:
        pass

    @abstractmethod
    async def upsert(self, key: str, fields: dict[str, Any], merge: bool = True) -> None:
        """
        Insert the document, or update it if the key already exists.

        With ``merge`` the given fields are merged into the existing
        document; without it the document is replaced.
        """
        pass

    @abstractmethod
    async def update(self, key: str, fields: dict[str, Any]) -> None:
        """
        Merge fields into an existing document.

        Raises:
            RecordNotFoundError: If no document has this key
        """
        pass

    @abstractmethod
    async def find(
        self,
        filters: dict[str, Any],
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Return documents whose fields equal every value in ``filters``."""
        pass


class InMemoryCollection(DocumentCollection):
    """
    In-memory implementation of DocumentCollection.

    Used for local development and testing. Documents are deep-copied on the
    way in and out so callers never share state with the store.
    """

    def __init__(self):
        self._documents: dict[str, dict[str, Any]] = {}

    def __len__(self) -> int:
        return len(self._documents)

    async def get(self, key: str) -> dict[str, Any] | None:
        document = self._documents.get(key)
        return copy.deepcopy(document) if document is not None else None

    async def upsert(self, key: str, fields: dict[str, Any], merge: bool = True) -> None:
        existing = self._documents.get(key)
        if merge and existing is not None:
            existing.update(copy.deepcopy(fields))
        else:
            self._documents[key] = copy.deepcopy(fields)

    async def update(self, key: str, fields: dict[str, Any]) -> None:
        existing = self._documents.get(key)
        if existing is None:
            raise RecordNotFoundError(f"Document not found: {key}")
        existing.update(copy.deepcopy(fields))

    async def find(
        self,
        filters: dict[str, Any],
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        matches = [
            document for document in self._documents.values()
            if all(document.get(field) == value for field, value in filters.items())
        ]

        if order_by:
            present = [d for d in matches if d.get(order_by) is not None]
            missing = [d for d in matches if d.get(order_by) is None]
            present.sort(key=lambda d: d[order_by], reverse=descending)
            matches = present + missing

        if limit is not None:
            matches = matches[:limit]

        return [copy.deepcopy(document) for document in matches]
