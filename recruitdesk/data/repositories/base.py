"""
Base repository class providing common CRUD operations.

All entity-specific repositories inherit from this base class. Writes accept
an optional ``session`` so several of them can share one transaction.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Iterable, Optional, TypeVar

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import DESCENDING
from pymongo.client_session import ClientSession
from pymongo.collection import Collection
from pymongo.results import DeleteResult, UpdateResult

from recruitdesk.data.database import get_database_manager
from recruitdesk.data.models.base import BaseDocument, to_bson, utc_now
from recruitdesk.utils.logger import get_logger

logger = get_logger(__name__)

# Type variable for document models
T = TypeVar("T", bound=BaseDocument)


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base repository providing common database operations.

    Subclasses define the model class; the collection name comes from the
    model's ``Settings``.
    """

    @property
    @abstractmethod
    def model_class(self) -> type[T]:
        """Pydantic model class for this repository."""
        pass

    @property
    def collection_name(self) -> str:
        """Name of the MongoDB collection."""
        return self.model_class.Settings.name

    def __init__(self, db_manager: Any = None) -> None:
        """Initialize repository with database connection."""
        self._db_manager = db_manager or get_database_manager()

    # -------------------------------------------------------------------------
    # Collection Access
    # -------------------------------------------------------------------------

    def _get_sync_collection(self) -> Collection:
        """Get synchronous collection instance."""
        return self._db_manager.get_sync_collection(self.collection_name)

    def _get_async_collection(self) -> AsyncIOMotorCollection:
        """Get asynchronous collection instance."""
        return self._db_manager.get_async_collection(self.collection_name)

    # -------------------------------------------------------------------------
    # Document Conversion
    # -------------------------------------------------------------------------

    def _to_model(self, document: Optional[dict[str, Any]]) -> Optional[T]:
        """Convert MongoDB document to Pydantic model."""
        if document is None:
            return None
        return self.model_class.model_validate(document)

    def _to_models(self, documents: Iterable[dict[str, Any]]) -> list[T]:
        """Convert MongoDB documents to Pydantic models."""
        return [self._to_model(doc) for doc in documents if doc is not None]

    def _to_document(self, model: T) -> dict[str, Any]:
        """Convert Pydantic model to MongoDB document."""
        return model.model_dump_mongo()

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_by_id(self, id_value: str) -> Optional[T]:
        """Get a document by its ID."""
        collection = self._get_sync_collection()
        document = collection.find_one({"_id": str(id_value)})
        return self._to_model(document)

    def get_many(self, ids: Iterable[str]) -> list[T]:
        """Get the documents whose ids are in ``ids``; missing ones are skipped."""
        id_list = [str(i) for i in ids]
        if not id_list:
            return []
        return self.find({"_id": {"$in": id_list}}, limit=0)

    def get_all(
        self,
        skip: int = 0,
        limit: int = 0,
        sort_by: Optional[str] = None,
        sort_order: int = DESCENDING,
    ) -> list[T]:
        """Get all documents, newest first. ``limit=0`` means no limit."""
        return self.find({}, skip=skip, limit=limit, sort_by=sort_by, sort_order=sort_order)

    def find(
        self,
        query: dict[str, Any],
        skip: int = 0,
        limit: int = 100,
        sort_by: Optional[str] = None,
        sort_order: int = DESCENDING,
    ) -> list[T]:
        """Find documents matching a query."""
        collection = self._get_sync_collection()
        cursor = collection.find(query).sort(sort_by or "created_at", sort_order)
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return self._to_models(cursor)

    def find_one(self, query: dict[str, Any]) -> Optional[T]:
        """Find a single document matching a query."""
        collection = self._get_sync_collection()
        document = collection.find_one(query)
        return self._to_model(document)

    def count(self, query: Optional[dict[str, Any]] = None) -> int:
        """Count documents matching a query."""
        collection = self._get_sync_collection()
        return collection.count_documents(query or {})

    def exists(self, query: dict[str, Any]) -> bool:
        """Check if any document matches the query."""
        collection = self._get_sync_collection()
        return collection.count_documents(query, limit=1) > 0

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create(self, model: T, session: Optional[ClientSession] = None) -> T:
        """Create a new document, assigning an id if it has none."""
        collection = self._get_sync_collection()
        model.ensure_id()
        now = utc_now()
        model.created_at = now
        model.updated_at = now

        collection.insert_one(self._to_document(model), session=session)
        logger.debug(f"Created {self.collection_name} document: {model.id}")
        return model

    def update(
        self,
        id_value: str,
        update_data: dict[str, Any],
        session: Optional[ClientSession] = None,
    ) -> Optional[T]:
        """Set fields on a document by ID; returns the updated document or None."""
        collection = self._get_sync_collection()
        update_data = {**to_bson(update_data), "updated_at": utc_now()}

        result: UpdateResult = collection.update_one(
            {"_id": str(id_value)},
            {"$set": update_data},
            session=session,
        )

        if result.matched_count > 0:
            logger.debug(f"Updated {self.collection_name} document: {id_value}")
            return self.get_by_id(id_value)
        return None

    def save(self, model: T, session: Optional[ClientSession] = None) -> T:
        """Upsert the whole document under its id."""
        collection = self._get_sync_collection()
        model.ensure_id()
        model.updated_at = utc_now()
        document = self._to_document(model)
        document.pop("_id", None)

        collection.replace_one({"_id": model.id}, document, upsert=True, session=session)
        logger.debug(f"Saved {self.collection_name} document: {model.id}")
        return model

    def delete(self, id_value: str, session: Optional[ClientSession] = None) -> bool:
        """Delete a document by ID."""
        collection = self._get_sync_collection()
        result: DeleteResult = collection.delete_one({"_id": str(id_value)}, session=session)
        if result.deleted_count > 0:
            logger.debug(f"Deleted {self.collection_name} document: {id_value}")
            return True
        return False

    # -------------------------------------------------------------------------
    # Id-array Membership
    # -------------------------------------------------------------------------

    def add_to_array(
        self,
        id_value: str,
        field: str,
        value: str,
        session: Optional[ClientSession] = None,
    ) -> bool:
        """Add ``value`` to the array ``field`` once; True if the document exists."""
        collection = self._get_sync_collection()
        result: UpdateResult = collection.update_one(
            {"_id": str(id_value)},
            {"$addToSet": {field: value}, "$set": {"updated_at": utc_now()}},
            session=session,
        )
        return result.matched_count > 0

    def remove_from_array(
        self,
        id_value: str,
        field: str,
        value: str,
        session: Optional[ClientSession] = None,
    ) -> bool:
        """Remove ``value`` from the array ``field``; True if the document exists."""
        collection = self._get_sync_collection()
        result: UpdateResult = collection.update_one(
            {"_id": str(id_value)},
            {"$pull": {field: value}, "$set": {"updated_at": utc_now()}},
            session=session,
        )
        return result.matched_count > 0

    # -------------------------------------------------------------------------
    # Asynchronous CRUD Operations
    # -------------------------------------------------------------------------

    async def create_async(self, model: T) -> T:
        """Create a new document asynchronously."""
        collection = self._get_async_collection()
        model.ensure_id()
        now = utc_now()
        model.created_at = now
        model.updated_at = now

        await collection.insert_one(self._to_document(model))
        logger.debug(f"Created {self.collection_name} document: {model.id}")
        return model

    async def get_by_id_async(self, id_value: str) -> Optional[T]:
        """Get a document by its ID asynchronously."""
        collection = self._get_async_collection()
        document = await collection.find_one({"_id": str(id_value)})
        return self._to_model(document)

    async def find_async(
        self,
        query: dict[str, Any],
        skip: int = 0,
        limit: int = 100,
        sort_by: Optional[str] = None,
        sort_order: int = DESCENDING,
    ) -> list[T]:
        """Find documents matching a query asynchronously. ``limit=0`` means no limit."""
        collection = self._get_async_collection()
        cursor = collection.find(query).sort(sort_by or "created_at", sort_order)
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)

        documents = await cursor.to_list(length=limit or None)
        return self._to_models(documents)

    async def get_all_async(self, limit: int = 0) -> list[T]:
        """Get all documents asynchronously, newest first."""
        return await self.find_async({}, limit=limit)

    async def update_async(self, id_value: str, update_data: dict[str, Any]) -> Optional[T]:
        """Update a document by ID asynchronously."""
        collection = self._get_async_collection()
        update_data = {**to_bson(update_data), "updated_at": utc_now()}

        result: UpdateResult = await collection.update_one(
            {"_id": str(id_value)},
            {"$set": update_data},
        )

        if result.matched_count > 0:
            logger.debug(f"Updated {self.collection_name} document: {id_value}")
            return await self.get_by_id_async(id_value)
        return None

    async def delete_async(self, id_value: str) -> bool:
        """Delete a document by ID asynchronously."""
        collection = self._get_async_collection()
        result: DeleteResult = await collection.delete_one({"_id": str(id_value)})
        if result.deleted_count > 0:
            logger.debug(f"Deleted {self.collection_name} document: {id_value}")
            return True
        return False

    async def count_async(self, query: Optional[dict[str, Any]] = None) -> int:
        """Count documents matching a query asynchronously."""
        collection = self._get_async_collection()
        return await collection.count_documents(query or {})
