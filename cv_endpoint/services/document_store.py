"""
Whole-document persistence keyed by a fixed string.

There is no patch primitive: callers ``load`` a document, mutate it in
memory and ``save`` the full replacement.  Concurrent writers race and the
last ``save`` wins.
"""
from __future__ import annotations

import copy
import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cv_endpoint.models.database_models import StoredDocument
from cv_endpoint.utils.helpers import utc_timestamp

logger = logging.getLogger(__name__)


class DocumentStore:
    """Load-or-absent and upsert of JSON documents in the ``cv_documents`` table."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def load(self, key: str) -> Optional[Dict[str, Any]]:
        """
        Return a private copy of the document stored under *key*.

        Returns None when nothing has been stored yet, which callers must
        distinguish from an empty document.
        """
        try:
            row = await self.db.get(StoredDocument, key)
        except SQLAlchemyError as exc:
            logger.error("Failed to load document %r: %s", key, exc)
            raise

        if row is None:
            return None
        return copy.deepcopy(row.data)

    async def save(
        self,
        key: str,
        document: Dict[str, Any],
        stamp_field: str = "updatedAt",
    ) -> Dict[str, Any]:
        """
        Stamp *document* and persist it as the full replacement for *key*.

        Args:
            key: Fixed document key
            document: Complete document; its *stamp_field* is overwritten
            stamp_field: Name of the timestamp field inside the document

        Returns:
            The persisted document (including the new timestamp)
        """
        document = dict(document)
        document[stamp_field] = utc_timestamp()

        try:
            row = await self.db.get(StoredDocument, key)
            if row is None:
                row = StoredDocument(key=key, data=document)
                self.db.add(row)
            else:
                row.data = document
            await self.db.commit()
        except SQLAlchemyError as exc:
            logger.error("Failed to save document %r: %s", key, exc)
            await self.db.rollback()
            raise

        logger.debug("Saved document %r at %s", key, document[stamp_field])
        return copy.deepcopy(document)
