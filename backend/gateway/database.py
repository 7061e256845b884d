"""
Document Store Gateway — Store Connection Management
======================================================

What:  Opens the single MongoDB connection used by the whole process and
       wraps it in a StoreHandle.
How:   `connect_store()` creates an async pymongo client, forces one round
       trip so that network and authentication problems surface immediately,
       and returns a handle bound to the configured database.
Who:   Called once by the lifespan handler in main.py, before uvicorn binds
       its socket. Route handlers receive the handle through dependencies.py.

Failure policy:
    Any failure while connecting is logged and raised as
    StoreConnectionError. The entry point turns that into a non-zero exit.
    There is no retry and no degraded mode.
"""

import logging
from typing import Optional

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from gateway.config import ConnectionDescriptor
from gateway.exceptions import StoreConnectionError

logger = logging.getLogger(__name__)


class StoreHandle:
    """
    Live connection to one named database.

    Created once per process and shared by every request. The underlying
    client owns its own connection pool, so no locking happens here.
    """

    def __init__(self, client: AsyncMongoClient, database: AsyncDatabase):
        self.client = client
        self.database = database

    @property
    def name(self) -> str:
        return self.database.name

    def collection(self, name: str) -> AsyncCollection:
        """
        Return a reference to the named collection.

        No existence check: a collection that was never written to reads as
        empty and is created by the store on first insert.
        """
        return self.database.get_collection(name)

    async def close(self) -> None:
        await self.client.close()


async def connect_store(
    descriptor: ConnectionDescriptor,
    db_name: str,
    client_factory=AsyncMongoClient,
) -> StoreHandle:
    """
    Connect to the document store and return the process-wide handle.

    Args:
        descriptor:      Connection parameters built from settings.
        db_name:         Database whose collections are exposed.
        client_factory:  Client class, replaceable in tests.

    Raises:
        StoreConnectionError: the URI is malformed, the server is
            unreachable, or authentication was rejected.
    """
    client: Optional[AsyncMongoClient] = None
    try:
        client = client_factory(descriptor.uri, server_api=ServerApi("1"))
        await client.admin.command("ping")
    except (PyMongoError, ValueError) as e:
        logger.error(
            "Failed to connect to MongoDB at %s: %s",
            descriptor.redacted_uri,
            str(e),
        )
        if client is not None:
            await client.close()
        raise StoreConnectionError(
            context={"uri": descriptor.redacted_uri, "error": str(e)}
        ) from e

    logger.info("Connected to MongoDB (%s, database=%s)", descriptor.redacted_uri, db_name)
    return StoreHandle(client, client.get_database(db_name))
