# ==============================================
# FieldClassifier
# ==============================================
#
# PURPOSE:
#   Decides whether a form field takes part in profile sync.
#   A field is sync-enabled when its CSS class string contains
#   the sync marker token ("dynamic") as a whole token.
#
# RULES:
# ------
#   - Split the class string on whitespace
#   - Exact, case-sensitive token match
#       "medium dynamic" → True
#       "dynamicfield"   → False
#       "Dynamic"        → False
#   - Empty / missing class string → False
#
# CLASS: FieldClassifier
# ----------------------
#   Stateless.
#
#   - is_sync_enabled(field) -> bool
#
# ==============================================

from typing import Any

from .descriptor import FieldDescriptor

SYNC_MARKER = "dynamic"


class FieldClassifier:
    """Marks fields whose CSS classes carry the sync marker."""

    def __init__(self, marker: str = SYNC_MARKER):
        self.marker = marker

    def is_sync_enabled(self, field: Any) -> bool:
        """
        Check whether a field participates in profile sync.

        Args:
            field: FieldDescriptor, or a raw host field (dict/object)

        Returns:
            True if the marker is one of the field's class tokens
        """
        css_class = FieldDescriptor.coerce(field).css_class
        if not isinstance(css_class, str):
            return False
        return self.marker in css_class.split()


_default_classifier = FieldClassifier()


def is_sync_enabled(field: Any) -> bool:
    """Module-level shortcut using the default sync marker."""
    return _default_classifier.is_sync_enabled(field)
