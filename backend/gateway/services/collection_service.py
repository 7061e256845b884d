"""
Document Store Gateway — Collection Service
=============================================

What:  The five store operations behind the collection routes.
How:   Each method performs exactly one driver call. Driver errors are
       caught at the call site and re-raised as StoreError, carrying the
       operation and collection name; identifiers are parsed before the call
       and rejected with InvalidIdentifierError.
Who:   Called by routes/collections.py with a collection reference resolved
       by dependencies.get_collection.

Operation summary:
    list_documents   find({})              → every document, no pagination
    get_document     find_one({_id})       → document or None
    insert_document  insert_one(body)      → InsertResult
    update_document  update_one($set body) → {"msg": "success"|"error"}
    delete_document  delete_one({_id})     → {"msg": "success"|"error"}
"""

import logging
from typing import Any, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from gateway.exceptions import InvalidIdentifierError, StoreError
from gateway.schemas.document import (
    Document,
    InsertResult,
    MessageResponse,
    serialize_document,
)

logger = logging.getLogger(__name__)

# Raised by the driver for documents it cannot encode (e.g. a JSON array
# posted as a document) before anything is sent to the server.
_DRIVER_ERRORS = (PyMongoError, TypeError)


class CollectionService:
    """
    Stateless store operations on a single collection reference.

    The collection is passed to every call; nothing is cached between
    requests.
    """

    def parse_object_id(self, raw_id: str) -> ObjectId:
        """
        Convert a URL path segment into an ObjectId.

        Raises:
            InvalidIdentifierError: not a 24-character hex string (or 12 bytes).
        """
        try:
            return ObjectId(raw_id)
        except (InvalidId, TypeError) as e:
            raise InvalidIdentifierError(raw_id, context={"error": str(e)}) from e

    def _store_error(self, operation: str, collection: AsyncCollection, e: Exception) -> StoreError:
        return StoreError(
            operation=operation,
            collection=collection.name,
            context={"error": str(e), "error_type": type(e).__name__},
        )

    async def list_documents(self, collection: AsyncCollection) -> List[Any]:
        """Full scan of the collection; an unknown collection yields []."""
        try:
            documents = await collection.find({}).to_list()
        except _DRIVER_ERRORS as e:
            raise self._store_error("find", collection, e) from e
        return serialize_document(documents)

    async def get_document(
        self, collection: AsyncCollection, raw_id: str
    ) -> Optional[Any]:
        """
        Fetch one document by id.

        Returns None when no document has that id; the caller sends it as
        JSON null with status 200.
        """
        object_id = self.parse_object_id(raw_id)
        try:
            document = await collection.find_one({"_id": object_id})
        except _DRIVER_ERRORS as e:
            raise self._store_error("find_one", collection, e) from e
        return serialize_document(document)

    async def insert_document(
        self, collection: AsyncCollection, document: Document
    ) -> InsertResult:
        """Insert the body as-is; the store assigns `_id` unless one is given."""
        try:
            result = await collection.insert_one(document)
        except _DRIVER_ERRORS as e:
            raise self._store_error("insert_one", collection, e) from e
        logger.debug("Inserted %s into %s", result.inserted_id, collection.name)
        return InsertResult(
            acknowledged=result.acknowledged,
            inserted_id=serialize_document(result.inserted_id),
        )

    async def update_document(
        self, collection: AsyncCollection, raw_id: str, fields: Document
    ) -> MessageResponse:
        """
        Merge `fields` into the document with `$set`.

        Fields not named in the body are preserved. Succeeds only when
        exactly one document matched the id.
        """
        object_id = self.parse_object_id(raw_id)
        try:
            result = await collection.update_one({"_id": object_id}, {"$set": fields})
        except _DRIVER_ERRORS as e:
            raise self._store_error("update_one", collection, e) from e
        return MessageResponse.from_count(result.matched_count)

    async def delete_document(
        self, collection: AsyncCollection, raw_id: str
    ) -> MessageResponse:
        object_id = self.parse_object_id(raw_id)
        try:
            result = await collection.delete_one({"_id": object_id})
        except _DRIVER_ERRORS as e:
            raise self._store_error("delete_one", collection, e) from e
        return MessageResponse.from_count(result.deleted_count)


collection_service = CollectionService()
