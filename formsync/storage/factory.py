# ==============================================
# Store factory
# ==============================================
#
# PURPOSE:
#   Build the ProfileStore selected by SyncConfig.store_backend
#   ("memory" | "mongo" | "mysql"), connected and ready to use.
#
# ==============================================

import logging

from formsync.config import AppConfig
from formsync.errors import ConfigurationError
from .base import ProfileStore
from .memory_store import MemoryProfileStore
from .mongo_store import MongoProfileStore
from .mysql_store import MySQLProfileStore

logger = logging.getLogger(__name__)


def create_store(config: AppConfig, connect: bool = True) -> ProfileStore:
    """
    Create the configured profile store.

    Args:
        config: Application configuration
        connect: Open the connection and ensure the schema/indexes

    Returns:
        ProfileStore

    Raises:
        ConfigurationError: Unknown backend name
        StoreError: Connection or schema setup failed
    """
    backend = config.sync.store_backend
    logger.debug("Creating %s profile store", backend)

    if backend == "memory":
        return MemoryProfileStore()

    if backend == "mongo":
        store = MongoProfileStore(
            host=config.mongo.host,
            port=config.mongo.port,
            database=config.mongo.database,
            collection=config.mongo.collection,
            user=config.mongo.user,
            password=config.mongo.password,
        )
        if connect:
            store.connect()
            store.ensure_indexes()
        return store

    if backend == "mysql":
        store = MySQLProfileStore(
            host=config.mysql.host,
            port=config.mysql.port,
            user=config.mysql.user,
            password=config.mysql.password,
            database=config.mysql.database,
            table=config.mysql.table,
        )
        if connect:
            store.connect()
            store.ensure_table()
        return store

    raise ConfigurationError(f"Unknown profile store backend: {backend!r}")
