# ==============================================
# STORAGE (profile store backends)
# ==============================================
#
# This package holds every place a user's profile attributes
# can live, behind one ProfileStore contract.
#
# Modules:
# --------
# - base.py          → ProfileStore (abstract), ProfileHandle
# - memory_store.py  → in-process dict store
# - mongo_store.py   → MongoDB, one document per user
# - mysql_store.py   → MySQL usermeta table
# - factory.py       → create_store(config)
#
# ==============================================

from .base import ProfileHandle, ProfileStore
from .memory_store import MemoryProfileStore
from .mongo_store import MongoProfileStore
from .mysql_store import MySQLProfileStore
from .factory import create_store

__all__ = [
    "ProfileHandle",
    "ProfileStore",
    "MemoryProfileStore",
    "MongoProfileStore",
    "MySQLProfileStore",
    "create_store",
]
