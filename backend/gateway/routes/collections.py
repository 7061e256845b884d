"""
Document Store Gateway — Collection Route Handlers
====================================================

What:  REST access to any collection in the configured database.
How:   The collection is resolved from the path by get_collection; each
       handler delegates one operation to CollectionService and returns
       its result as JSON.

Routes:
    GET    /collections/{collection_name}          list all documents
    GET    /collections/{collection_name}/{id}     one document or null
    POST   /collections/{collection_name}          insert the body
    PUT    /collections/{collection_name}/{id}     $set the body
    DELETE /collections/{collection_name}/{id}     delete one document

Each path also matches with a trailing slash; no redirect is issued.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pymongo.asynchronous.collection import AsyncCollection

from gateway.dependencies import get_collection, read_document_body
from gateway.schemas.document import (
    Document,
    ErrorResponse,
    InsertResult,
    MessageResponse,
)
from gateway.services.collection_service import collection_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/collections", tags=["Collections"])

_ERROR_RESPONSES = {500: {"description": "Store error or invalid id", "model": ErrorResponse}}


@router.get(
    "/{collection_name}",
    responses=_ERROR_RESPONSES,
    summary="List every document in a collection",
)
@router.get("/{collection_name}/", include_in_schema=False)
async def list_documents(
    collection: AsyncCollection = Depends(get_collection),
) -> JSONResponse:
    """
    Return all documents, unfiltered and unpaginated.

    A collection that was never written to returns [].
    """
    documents = await collection_service.list_documents(collection)
    return JSONResponse(content=documents)


@router.get(
    "/{collection_name}/{document_id}",
    responses=_ERROR_RESPONSES,
    summary="Get a single document by id",
)
@router.get("/{collection_name}/{document_id}/", include_in_schema=False)
async def get_document(
    document_id: str,
    collection: AsyncCollection = Depends(get_collection),
) -> JSONResponse:
    """Return the document, or null (status 200) if no document has that id."""
    document = await collection_service.get_document(collection, document_id)
    return JSONResponse(content=document)


@router.post(
    "/{collection_name}",
    response_model=InsertResult,
    responses=_ERROR_RESPONSES,
    summary="Insert a document",
)
@router.post("/{collection_name}/", response_model=InsertResult, include_in_schema=False)
async def insert_document(
    collection: AsyncCollection = Depends(get_collection),
    document: Any = Depends(read_document_body),
) -> InsertResult:
    return await collection_service.insert_document(collection, document)


@router.put(
    "/{collection_name}/{document_id}",
    response_model=MessageResponse,
    responses=_ERROR_RESPONSES,
    summary="Overwrite the given fields of a document",
)
@router.put(
    "/{collection_name}/{document_id}/", response_model=MessageResponse, include_in_schema=False
)
async def update_document(
    document_id: str,
    collection: AsyncCollection = Depends(get_collection),
    fields: Document = Depends(read_document_body),
) -> MessageResponse:
    """
    Partial update: fields in the body are set, all others are kept.

    Responds {"msg": "success"} when exactly one document matched,
    {"msg": "error"} otherwise.
    """
    return await collection_service.update_document(collection, document_id, fields)


@router.delete(
    "/{collection_name}/{document_id}",
    response_model=MessageResponse,
    responses=_ERROR_RESPONSES,
    summary="Delete a document",
)
@router.delete(
    "/{collection_name}/{document_id}/", response_model=MessageResponse, include_in_schema=False
)
async def delete_document(
    document_id: str,
    collection: AsyncCollection = Depends(get_collection),
) -> MessageResponse:
    return await collection_service.delete_document(collection, document_id)
