"""
Document Store Gateway — Document Types and Response Schemas
=============================================================

What:  Type aliases for opaque documents and Pydantic models for the two
       fixed response shapes the gateway produces itself.
How:   Documents are plain dicts of JSON values; the gateway never
       validates them. Only the insert result and the success/error
       message have a schema.
"""

from typing import Any, Dict, List, Literal, Union

from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ConfigDict, Field

JSONValue = Union[None, bool, int, float, str, List["JSONValue"], Dict[str, "JSONValue"]]

# A document as stored: string keys, JSON values, plus the store-assigned "_id".
Document = Dict[str, Any]


def serialize_document(value: Any) -> Any:
    """
    Convert store output into JSON-compatible data.

    ObjectIds (including nested ones) become their hex string; datetimes
    become ISO-8601 strings. Everything else passes through unchanged,
    including keys that start with "_sa".
    """
    return jsonable_encoder(
        value,
        custom_encoder={ObjectId: str},
        sqlalchemy_safe=False,
    )


class InsertResult(BaseModel):
    """
    Who:   Returned by POST /collections/{name}.
    Shape: {"acknowledged": true, "insertedId": "65a1..."}

    insertedId is whatever `_id` the document was stored with: the hex
    string of a generated ObjectId, or the client-supplied value as-is.
    """

    acknowledged: bool = Field(description="Whether the store acknowledged the write")
    inserted_id: Any = Field(
        default=None,
        alias="insertedId",
        description="Identifier assigned to the new document",
    )

    model_config = ConfigDict(populate_by_name=True)


class MessageResponse(BaseModel):
    """
    Who:   Returned by PUT and DELETE /collections/{name}/{id}.
    Shape: {"msg": "success"} when exactly one document matched,
           {"msg": "error"} otherwise.
    """

    msg: Literal["success", "error"]

    @classmethod
    def from_count(cls, count: int) -> "MessageResponse":
        return cls(msg="success" if count == 1 else "error")


class ErrorResponse(BaseModel):
    """Body of every GatewayError response (used for OpenAPI docs)."""

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: str = Field(default="", description="Request correlation id")
