"""
Document Store Gateway — Request Dependencies
===============================================

What:  FastAPI dependencies that hand the shared StoreHandle and the
       per-request collection reference to route handlers.
How:   The handle lives on `app.state.store` (set by the lifespan or by
       create_app(store=...)); the collection is resolved from the
       `collection_name` path parameter on every request.
"""

import json
import logging
from typing import Any

from fastapi import Depends, Request
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import InvalidName

from gateway.database import StoreHandle
from gateway.exceptions import MalformedBodyError, StoreError

logger = logging.getLogger(__name__)


def get_store(request: Request) -> StoreHandle:
    """Return the process-wide store handle."""
    return request.app.state.store


def get_collection(
    collection_name: str,
    request: Request,
    store: StoreHandle = Depends(get_store),
) -> AsyncCollection:
    """
    Resolve the collection named in the URL.

    Any name is accepted; the store creates collections on first write.
    The reference is also attached to `request.state.collection`.
    """
    try:
        collection = store.collection(collection_name)
    except InvalidName as e:
        # The driver rejects a few names ("$" characters, leading dots).
        raise StoreError(
            operation="get_collection",
            collection=collection_name,
            context={"error": str(e)},
        ) from e
    request.state.collection = collection
    return collection


async def read_document_body(request: Request) -> Any:
    """
    Decode the request body as a document.

    Non-JSON content types and empty bodies yield an empty document. Only
    a top-level object or array is accepted; invalid JSON and bare
    primitives such as `5` or `"abc"` raise MalformedBodyError. An array is
    passed on to the store, which rejects it.
    """
    content_type = request.headers.get("content-type", "")
    if "json" not in content_type.lower():
        return {}
    body = await request.body()
    if not body.strip():
        return {}
    try:
        document = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedBodyError(context={"error": str(e)}) from e
    if not isinstance(document, (dict, list)):
        raise MalformedBodyError(
            message="Request body must be a JSON object or array",
            context={"type": type(document).__name__},
        )
    return document
