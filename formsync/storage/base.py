# ==============================================
# ProfileStore / ProfileHandle
# ==============================================
#
# PURPOSE:
#   The contract every profile backend implements, plus the
#   per-user handle the mediator writes through.
#
# CLASS: ProfileStore (abstract)
# ------------------------------
#   Public methods validate arguments, then delegate to the
#   backend hooks (_read / _write / _read_all).
#
#   - read(user_id, key) -> str
#       Stored value, or "" if the key is absent.
#
#   - write(user_id, key, value) -> None
#       Upsert: overwrite any previous value unconditionally.
#
#   - read_all(user_id) -> dict[str, str]
#       Every attribute stored for the user.
#
#   - for_user(user_id) -> ProfileHandle
#
# CLASS: ProfileHandle
# --------------------
#   Bound to one user for ONE event. Never cached across events.
#
#   - get(key) -> str
#   - save(key, value) -> None
#
# ==============================================

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from formsync.errors import StoreError

EMPTY_VALUE = ""


def _check_user(user_id: Any) -> str:
    if user_id is None or str(user_id).strip() == "":
        raise StoreError("A user id is required")
    return str(user_id)


def _check_key(key: Any) -> str:
    if not isinstance(key, str) or not key.strip():
        raise StoreError(f"Invalid profile key: {key!r}")
    return key


def _as_scalar(value: Any) -> str:
    return EMPTY_VALUE if value is None else str(value)


class ProfileStore(ABC):
    """Per-user key-value attribute store."""

    def read(self, user_id: Any, key: str) -> str:
        value = self._read(_check_user(user_id), _check_key(key))
        return _as_scalar(value)

    def write(self, user_id: Any, key: str, value: Any) -> None:
        self._write(_check_user(user_id), _check_key(key), _as_scalar(value))

    def read_all(self, user_id: Any) -> Dict[str, str]:
        return {
            key: _as_scalar(value)
            for key, value in self._read_all(_check_user(user_id)).items()
        }

    def for_user(self, user_id: Any) -> "ProfileHandle":
        return ProfileHandle(self, _check_user(user_id))

    @abstractmethod
    def _read(self, user_id: str, key: str) -> Optional[Any]:
        """Return the stored value or None."""

    @abstractmethod
    def _write(self, user_id: str, key: str, value: str) -> None:
        """Upsert one attribute."""

    @abstractmethod
    def _read_all(self, user_id: str) -> Dict[str, Any]:
        """Return all attributes of one user."""


class ProfileHandle:
    """The acting user's profile record, scoped to a single event."""

    def __init__(self, store: ProfileStore, user_id: str):
        self.store = store
        self.user_id = user_id

    def get(self, key: str) -> str:
        return self.store.read(self.user_id, key)

    def save(self, key: str, value: Any) -> None:
        self.store.write(self.user_id, key, value)

    def __repr__(self) -> str:
        return f"ProfileHandle(user_id={self.user_id!r})"
