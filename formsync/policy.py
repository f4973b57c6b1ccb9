# ==============================================
# NoOverridePolicy
# ==============================================
#
# PURPOSE:
#   Decides what populate_field() hands back to the host renderer
#   for a field that is NOT sync-enabled.
#
#   Some hosts treat a falsy return as "keep your own default";
#   others expect the default value to be passed back unchanged.
#
# ENUM: NoOverridePolicy
# ----------------------
#   - SENTINEL → return False
#   - DEFAULT  → return the default value the host passed in
#
# ==============================================

from enum import Enum
from typing import Any

NO_OVERRIDE = False


class NoOverridePolicy(Enum):
    """How a non-synced field answers the field-value filter."""
    SENTINEL = "sentinel"
    DEFAULT = "default"

    def resolve(self, default_value: Any) -> Any:
        """
        Produce the "no override" answer for one field.

        Args:
            default_value: The value the host would render on its own

        Returns:
            False for SENTINEL, default_value for DEFAULT
        """
        if self is NoOverridePolicy.DEFAULT:
            return default_value
        return NO_OVERRIDE
