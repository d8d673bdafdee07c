"""
Contacts API — Database Accessor
==================================

What:  Owns the single MongoDB client and the selected database handle.
How:   ``initialize()`` creates an ``AsyncMongoClient``, selects the configured
       logical database, verifies it with a ``ping`` and returns the handle.
       ``get_handle()`` hands the same handle to every request.
Who:   Created by the application factory, initialized in the lifespan,
       borrowed by the document services for each call.
When:  ``initialize`` once at startup, ``close`` once at shutdown.

Lifecycle:
    disconnected ──initialize()──▶ connected ──close()──▶ disconnected

    A failed ``initialize`` leaves the accessor disconnected. Any
    ``get_handle`` in that state raises NotInitializedError; nothing here
    retries or reconnects lazily.
"""

import logging
from typing import Any, Callable, Optional

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from contacts_api.config import Settings
from contacts_api.exceptions import NotInitializedError, StorageError

logger = logging.getLogger(__name__)


class DatabaseAccessor:
    """
    Holder of the process-wide database handle.

    Args:
        uri: MongoDB connection string.
        database_name: Logical database to select on the client.
        client_factory: Callable building a client from the URI. Defaults to
            ``AsyncMongoClient``; tests pass an in-memory replacement.
    """

    def __init__(
        self,
        uri: str,
        database_name: str,
        client_factory: Callable[[str], Any] = AsyncMongoClient,
    ):
        self._uri = uri
        self._database_name = database_name
        self._client_factory = client_factory
        self._client: Optional[Any] = None
        self._handle: Optional[AsyncDatabase] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "DatabaseAccessor":
        return cls(uri=settings.mongodb_uri, database_name=settings.mongodb_database)

    @property
    def database_name(self) -> str:
        return self._database_name

    @property
    def is_initialized(self) -> bool:
        return self._handle is not None

    async def initialize(self) -> AsyncDatabase:
        """
        Connect, select the logical database and store the handle.

        Returns:
            The selected database handle.

        Raises:
            StorageError: The client could not be created or the server did
                not answer the ping. The accessor stays disconnected.
        """
        if self._handle is not None:
            return self._handle

        client = None
        try:
            client = self._client_factory(self._uri)
            handle = client.get_database(self._database_name)
            await handle.command("ping")
        except PyMongoError as e:
            logger.error("MongoDB connection error: %s", str(e))
            if client is not None:
                await client.close()
            raise StorageError(
                message="Could not connect to the database.",
                context={"database": self._database_name, "error_type": type(e).__name__},
            ) from e

        self._client = client
        self._handle = handle
        logger.info("MongoDB connected (database=%s)", self._database_name)
        return handle

    def get_handle(self) -> AsyncDatabase:
        """
        Return the stored handle.

        Raises:
            NotInitializedError: ``initialize`` has not succeeded yet.
        """
        if self._handle is None:
            raise NotInitializedError(context={"database": self._database_name})
        return self._handle

    async def ping(self) -> bool:
        """True when the database answers a ping; never raises."""
        if self._handle is None:
            return False
        try:
            await self._handle.command("ping")
        except PyMongoError as e:
            logger.warning("Database ping failed: %s", str(e))
            return False
        return True

    async def close(self) -> None:
        """Close the client and return to the disconnected state."""
        client = self._client
        self._client = None
        self._handle = None
        if client is not None:
            await client.close()
            logger.info("MongoDB connection closed")


def get_accessor(request: Request) -> DatabaseAccessor:
    """FastAPI dependency returning the accessor attached to the running app."""
    return request.app.state.accessor
