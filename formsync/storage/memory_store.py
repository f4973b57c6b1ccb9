# ==============================================
# MemoryProfileStore
# ==============================================
#
# PURPOSE:
#   In-process profile store: {user_id: {key: value}}.
#   Used by tests and by the CLI when PROFILE_STORE=memory.
#   Nothing survives the process.
#
# ==============================================

from typing import Any, Dict, Optional

from .base import ProfileStore


class MemoryProfileStore(ProfileStore):
    def __init__(self, initial: Optional[Dict[str, Dict[str, str]]] = None):
        self._profiles: Dict[str, Dict[str, str]] = {}
        for user_id, attributes in (initial or {}).items():
            self._profiles[str(user_id)] = dict(attributes)

    def _read(self, user_id: str, key: str) -> Optional[Any]:
        return self._profiles.get(user_id, {}).get(key)

    def _write(self, user_id: str, key: str, value: str) -> None:
        self._profiles.setdefault(user_id, {})[key] = value

    def _read_all(self, user_id: str) -> Dict[str, Any]:
        return dict(self._profiles.get(user_id, {}))
