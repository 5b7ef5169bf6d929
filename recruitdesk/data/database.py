"""
Database connection manager for RecruitDesk.

Provides MongoDB connection management with both synchronous (PyMongo)
and asynchronous (Motor) client support. MongoDB is the document store:
one collection per entity, string ids, ordering by ``created_at``.
"""

from contextlib import asynccontextmanager, contextmanager
from typing import Any, Iterator, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.client_session import ClientSession
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, PyMongoError, ServerSelectionTimeoutError

from recruitdesk.utils.config import get_settings
from recruitdesk.utils.logger import get_logger

logger = get_logger(__name__)


class DatabaseManager:
    """
    Manages MongoDB database connections.

    Supports both synchronous and asynchronous operations.
    Implements singleton pattern for connection reuse.
    """

    _instance: Optional["DatabaseManager"] = None
    _sync_client: Optional[MongoClient] = None
    _async_client: Optional[AsyncIOMotorClient] = None

    def __new__(cls) -> "DatabaseManager":
        """Ensure singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize database manager with settings."""
        if hasattr(self, "_initialized") and self._initialized:
            return

        self._settings = get_settings()
        self._db_name = self._settings.database.name
        self._uri = self._build_uri()
        self._initialized = True

    def _build_uri(self) -> str:
        """
        Build MongoDB connection URI from settings.

        Security: URL-encodes credentials to prevent injection attacks.
        """
        from urllib.parse import quote_plus

        db_settings = self._settings.database

        host = db_settings.host.strip()
        if not host or any(c in host for c in [";", "&", "|", "$", "`"]):
            raise ValueError(f"Invalid database host: {host}")

        auth = ""
        if db_settings.username and db_settings.password:
            encoded_user = quote_plus(db_settings.username)
            encoded_pass = quote_plus(db_settings.password)
            auth = f"{encoded_user}:{encoded_pass}@"

        uri = f"mongodb://{auth}{host}:{db_settings.port}"
        if db_settings.replica_set:
            uri += f"/?replicaSet={quote_plus(db_settings.replica_set)}"
        return uri

    def _client_options(self) -> dict[str, Any]:
        # tz_aware keeps datetimes read back comparable with the ones we write
        return {
            "serverSelectionTimeoutMS": 5000,
            "connectTimeoutMS": 5000,
            "maxPoolSize": 50,
            "minPoolSize": 5,
            "tz_aware": True,
        }

    @property
    def supports_transactions(self) -> bool:
        """Whether cross-document writes should run in a transaction."""
        return self._settings.database.use_transactions

    # -------------------------------------------------------------------------
    # Synchronous Client
    # -------------------------------------------------------------------------

    def get_sync_client(self) -> MongoClient:
        """Get or create synchronous MongoDB client."""
        if self._sync_client is None:
            logger.info("Creating synchronous MongoDB client")
            try:
                self._sync_client = MongoClient(self._uri, **self._client_options())
            except PyMongoError as e:
                self._sync_client = None
                logger.error(f"Failed to create sync client: {e}")
                raise
        return self._sync_client

    def get_sync_database(self) -> Database:
        """Get synchronous database instance."""
        return self.get_sync_client()[self._db_name]

    def get_sync_collection(self, collection_name: str) -> Any:
        """Get a synchronous collection by name."""
        return self.get_sync_database()[collection_name]

    @contextmanager
    def sync_session(self) -> Iterator[ClientSession]:
        """Context manager for synchronous database session."""
        client = self.get_sync_client()
        session = client.start_session()
        try:
            yield session
        finally:
            session.end_session()

    @contextmanager
    def sync_transaction(self) -> Iterator[Optional[ClientSession]]:
        """
        Run a block of writes in one transaction when transactions are enabled.

        Yields the session to pass to each write, or None when transactions
        are disabled (the writes then apply independently).
        """
        if not self.supports_transactions:
            yield None
            return

        with self.sync_session() as session:
            with session.start_transaction():
                yield session

    def check_sync_connection(self) -> bool:
        """Check if synchronous connection is healthy."""
        try:
            self.get_sync_client().admin.command("ping")
            return True
        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.error(f"Sync connection check failed: {e}")
            self._sync_client = None
            return False
        except PyMongoError as e:
            logger.error(f"Unexpected sync connection error: {e}")
            self._sync_client = None
            return False

    # -------------------------------------------------------------------------
    # Asynchronous Client
    # -------------------------------------------------------------------------

    def get_async_client(self) -> AsyncIOMotorClient:
        """Get or create asynchronous MongoDB client."""
        if self._async_client is None:
            logger.info("Creating asynchronous MongoDB client")
            self._async_client = AsyncIOMotorClient(self._uri, **self._client_options())
        return self._async_client

    def get_async_database(self) -> AsyncIOMotorDatabase:
        """Get asynchronous database instance."""
        return self.get_async_client()[self._db_name]

    def get_async_collection(self, collection_name: str) -> Any:
        """Get an asynchronous collection by name."""
        return self.get_async_database()[collection_name]

    @asynccontextmanager
    async def async_session(self):
        """Context manager for asynchronous database session."""
        client = self.get_async_client()
        session = await client.start_session()
        try:
            yield session
        finally:
            await session.end_session()

    async def check_async_connection(self) -> bool:
        """Check if asynchronous connection is healthy."""
        try:
            await self.get_async_client().admin.command("ping")
            return True
        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.error(f"Async connection check failed: {e}")
            return False

    # -------------------------------------------------------------------------
    # Lifecycle Management
    # -------------------------------------------------------------------------

    def close_sync(self) -> None:
        """Close synchronous client connection."""
        if self._sync_client:
            logger.info("Closing synchronous MongoDB client")
            self._sync_client.close()
            self._sync_client = None

    def close_async(self) -> None:
        """Close asynchronous client connection."""
        if self._async_client:
            logger.info("Closing asynchronous MongoDB client")
            self._async_client.close()
            self._async_client = None

    def close_all(self) -> None:
        """Close all database connections."""
        self.close_sync()
        self.close_async()

    # -------------------------------------------------------------------------
    # Index Management
    # -------------------------------------------------------------------------

    def ensure_indexes(self) -> dict[str, list[str]]:
        """
        Create the indexes declared on each model's ``Settings`` class.

        ``created_at`` is indexed descending to serve the default ordering.

        Returns:
            Mapping of collection name to the index names created
        """
        from recruitdesk.data.models import DOCUMENT_MODELS

        logger.info("Ensuring database indexes")
        created: dict[str, list[str]] = {}

        for model in DOCUMENT_MODELS:
            collection = self.get_sync_collection(model.Settings.name)
            names = []
            for field in model.Settings.indexes:
                direction = DESCENDING if field == "created_at" else ASCENDING
                names.append(collection.create_index([(field, direction)]))
            created[model.Settings.name] = names

        # One account per email
        self.get_sync_collection("users").create_index("email", unique=True)

        logger.info(f"Database indexes ensured for {len(created)} collections")
        return created


# Global database manager instance
_db_manager: Optional[DatabaseManager] = None


def get_database_manager() -> DatabaseManager:
    """Get the global database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


def get_sync_db() -> Database:
    """Convenience function to get synchronous database."""
    return get_database_manager().get_sync_database()


def get_async_db() -> AsyncIOMotorDatabase:
    """Convenience function to get asynchronous database."""
    return get_database_manager().get_async_database()
