"""
Document Store Gateway — Root Route
=====================================

What:  Plain-text welcome message at GET /.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["Root"])

WELCOME_MESSAGE = "Welcome! Select a collection, e.g., /collections/Lessons"


@router.get("/", response_class=PlainTextResponse, summary="Welcome message")
async def welcome() -> str:
    return WELCOME_MESSAGE
