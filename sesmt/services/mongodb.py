# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
MongoDB service layer with connection pooling and per-entity repositories.
"""

import os
import logging
from typing import List, Dict, Optional, Any, Type
from pymongo import MongoClient, ASCENDING
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from ..models.base import utc_now
from .repository import Repository, T

logger = logging.getLogger(__name__)


class MongoDBService:
    """MongoDB service with connection pooling."""

    def __init__(self, connection_string: str = None, database_name: str = None):
        """Initialize MongoDB service with connection pooling."""
        self.connection_string = connection_string or os.getenv(
            'MONGODB_URI',
            'mongodb://localhost:27017/sesmt_dev'
        )
        self.database_name = database_name or os.getenv('MONGODB_DATABASE', 'sesmt_dev')
        self._client: Optional[MongoClient] = None
        self._database: Optional[Database] = None

        # Connection pool settings
        self.max_pool_size = int(os.getenv('MONGODB_MAX_POOL_SIZE', '10'))
        self.min_pool_size = int(os.getenv('MONGODB_MIN_POOL_SIZE', '1'))
        self.server_selection_timeout_ms = int(os.getenv('MONGODB_SERVER_SELECTION_TIMEOUT_MS', '5000'))

        logger.info(f"MongoDB service initialized for database: {self.database_name}")

    @property
    def client(self) -> MongoClient:
        """Get MongoDB client with connection pooling."""
        if self._client is None:
            try:
                self._client = MongoClient(
                    self.connection_string,
                    maxPoolSize=self.max_pool_size,
                    minPoolSize=self.min_pool_size,
                    serverSelectionTimeoutMS=self.server_selection_timeout_ms,
                    retryWrites=True,
                    retryReads=True
                )
                self._client.admin.command('ping')
                logger.info("MongoDB connection established successfully")
            except (ConnectionFailure, ServerSelectionTimeoutError) as e:
                logger.error(f"Failed to connect to MongoDB: {e}")
                raise

        return self._client

    @property
    def database(self) -> Database:
        """Get MongoDB database."""
        if self._database is None:
            self._database = self.client[self.database_name]
        return self._database

    def get_collection(self, collection_name: str) -> Collection:
        """Get MongoDB collection."""
        return self.database[collection_name]

    def close_connection(self) -> None:
        """Close MongoDB connection."""
        if self._client:
            self._client.close()
            self._client = None
            self._database = None
            logger.info("MongoDB connection closed")

    def health_check(self) -> Dict[str, Any]:
        """Check MongoDB connection health."""
        try:
            result = self.client.admin.command('ping')
            return {
                'status': 'healthy',
                'ping': result.get('ok') == 1,
                'database': self.database_name
            }
        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.error(f"MongoDB health check failed: {e}")
            return {
                'status': 'unhealthy',
                'error': str(e),
                'database': self.database_name
            }

    def create_indexes(self) -> None:
        """Create lookup indexes for the compliance collections."""
        logger.info("Creating MongoDB indexes...")

        for name in ("sectors", "providers", "exams", "equipment", "uniforms",
                     "functions", "employees", "document_templates", "occupational_documents"):
            self.get_collection(name).create_index("active")

        self.get_collection("exams").create_index([("trigger_events", ASCENDING), ("name", ASCENDING)])
        self.get_collection("functions").create_index([("sector_id", ASCENDING), ("active", ASCENDING)])
        self.get_collection("compliance_records").create_index(
            [("employee_id", ASCENDING), ("kind", ASCENDING), ("catalog_id", ASCENDING)]
        )

        logger.info("MongoDB indexes created successfully")

    def repository(self, collection_name: str, model: Type[T]) -> "MongoRepository[T]":
        """Repository for one entity type stored in a collection."""
        return MongoRepository(self.get_collection(collection_name), model)


class MongoRepository(Repository[T]):
    """Repository storing pydantic entities as JSON-mode documents."""

    def __init__(self, collection: Collection, model: Type[T]):
        self.collection = collection
        self.model = model

    def _to_document(self, entity: T) -> Dict[str, Any]:
        document = entity.model_dump(mode="json")
        document["_id"] = document.pop("id")
        return document

    def _from_document(self, document: Dict[str, Any]) -> T:
        data = dict(document)
        data["id"] = str(data.pop("_id"))
        return self.model.model_validate(data)

    def get(self, entity_id: str) -> Optional[T]:
        document = self.collection.find_one({"_id": entity_id})
        if document is None:
            logger.debug(f"Document {entity_id} not found in {self.collection.name}")
            return None
        return self._from_document(document)

    def list(self) -> List[T]:
        documents = list(self.collection.find({}))
        logger.debug(f"Found {len(documents)} documents in {self.collection.name}")
        return [self._from_document(document) for document in documents]

    def upsert(self, entity: T) -> T:
        document = self._to_document(entity)
        self.collection.replace_one({"_id": document["_id"]}, document, upsert=True)
        logger.info(f"Upserted document in {self.collection.name}: {entity.id}")
        return entity

    def soft_delete(self, entity_id: str) -> bool:
        result = self.collection.update_one(
            {"_id": entity_id},
            {"$set": {"active": False, "updated_at": utc_now().isoformat()}}
        )
        if result.matched_count == 0:
            logger.warning(f"No document soft deleted for {entity_id} in {self.collection.name}")
            return False
        logger.info(f"Soft deleted document {entity_id} in {self.collection.name}")
        return True

    def delete(self, entity_id: str) -> bool:
        result = self.collection.delete_one({"_id": entity_id})
        if result.deleted_count == 0:
            logger.warning(f"No document deleted for {entity_id} in {self.collection.name}")
            return False
        logger.warning(f"Hard deleted document {entity_id} in {self.collection.name}")
        return True


# Singleton instance for application use
_mongodb_service: Optional[MongoDBService] = None


def get_mongodb_service() -> MongoDBService:
    """Get singleton MongoDB service instance."""
    global _mongodb_service
    if _mongodb_service is None:
        _mongodb_service = MongoDBService()
    return _mongodb_service


def close_mongodb_connection() -> None:
    """Close MongoDB connection (for cleanup)."""
    global _mongodb_service
    if _mongodb_service:
        _mongodb_service.close_connection()
