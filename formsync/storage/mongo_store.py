# ==============================================
# MongoProfileStore
# ==============================================
#
# PURPOSE:
#   Profile store backed by MongoDB. One document per user:
#
#     {"user_id": "42", "meta": {"first_name": "Ada", "company": "Acme Co"}}
#
#   Writes are single-field upserts ($set on "meta.<key>"), so two
#   fields of the same submission never clobber each other and
#   MongoDB's per-document atomicity covers each write.
#
# CLASS: MongoProfileStore
# ------------------------
#   Stateful: holds connection to MongoDB.
#
#   Constructor:
#   ------------
#   - __init__(host, port, database, collection="user_profiles",
#              user=None, password=None)
#
#   Methods:
#   --------
#   - connect() -> None
#   - disconnect() -> None
#   - ensure_indexes() -> None
#       Unique index on user_id.
#   - read / write / read_all  (see ProfileStore)
#
#   Context Manager:
#   ----------------
#   - __enter__ / __exit__ for `with MongoProfileStore(...) as store:` usage.
#
# ==============================================

import logging
from typing import Any, Dict, Optional

from pymongo import MongoClient as PyMongoClient
from pymongo.errors import ConnectionFailure, OperationFailure, PyMongoError

from formsync.errors import StoreError
from .base import ProfileStore

logger = logging.getLogger(__name__)


class MongoProfileStore(ProfileStore):
    def __init__(self, host, port, database, collection="user_profiles", user=None, password=None):
        # Store connection params. Don't connect yet.
        self.host = host
        self.port = port
        self.database = database
        self.collection_name = collection
        self.user = user
        self.password = password
        self.client = None

    def connect(self) -> None:
        try:
            if self.user and self.password:
                uri = f"mongodb://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"
            else:
                uri = f"mongodb://{self.host}:{self.port}/{self.database}"
            self.client = PyMongoClient(uri)
            # Test connection
            self.client.admin.command("ping")
            logger.info("Connected to MongoDB at %s:%s", self.host, self.port)
        except ConnectionFailure as e:
            logger.error("Could not connect to MongoDB: %s", e)
            raise StoreError(f"Could not connect to MongoDB: {e}") from e
        except OperationFailure as e:
            logger.error("MongoDB authentication failed: %s", e)
            raise StoreError(f"MongoDB authentication failed: {e}") from e

    def disconnect(self) -> None:
        if self.client:
            self.client.close()
            logger.info("Disconnected from MongoDB.")
            self.client = None

    def _collection(self):
        if not self.client:
            raise StoreError("Not connected to MongoDB.")
        return self.client[self.database][self.collection_name]

    def ensure_indexes(self) -> None:
        try:
            self._collection().create_index("user_id", unique=True)
        except PyMongoError as e:
            raise StoreError(f"Could not create user_id index: {e}") from e
        logger.info("Ensured unique index on 'user_id' in '%s'.", self.collection_name)

    @staticmethod
    def _field_path(key: str) -> str:
        # "." would nest and "$" is an operator prefix
        if "." in key or key.startswith("$"):
            raise StoreError(f"Profile key {key!r} can't be stored in MongoDB")
        return f"meta.{key}"

    def _read(self, user_id: str, key: str) -> Optional[Any]:
        path = self._field_path(key)
        try:
            doc = self._collection().find_one({"user_id": user_id}, {path: 1})
        except PyMongoError as e:
            raise StoreError(f"MongoDB read failed: {e}") from e
        if not doc:
            return None
        return (doc.get("meta") or {}).get(key)

    def _write(self, user_id: str, key: str, value: str) -> None:
        path = self._field_path(key)
        try:
            self._collection().update_one(
                {"user_id": user_id},   # Filter by the user
                {"$set": {path: value}},  # Update just this attribute
                upsert=True,            # Create the profile if missing
            )
        except PyMongoError as e:
            raise StoreError(f"MongoDB write failed: {e}") from e

    def _read_all(self, user_id: str) -> Dict[str, Any]:
        try:
            doc = self._collection().find_one({"user_id": user_id})
        except PyMongoError as e:
            raise StoreError(f"MongoDB read failed: {e}") from e
        if not doc:
            return {}
        return dict(doc.get("meta") or {})

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
