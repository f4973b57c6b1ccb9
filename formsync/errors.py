# ==============================================
# Errors
# ==============================================
#
# PURPOSE:
#   Exception types raised by formsync components.
#
#   Components raise these; the SyncMediator catches them at its
#   boundary and turns them into logged, recorded failures so the
#   host's submission / render flow is never aborted.
#
# HIERARCHY:
# ----------
#   FormSyncError
#   ├── ConfigurationError   → bad settings in the environment / .env
#   ├── FieldMappingError    → sync-enabled field without a profile key
#   ├── StoreError           → profile store read/write failed
#   └── SourceError          → forms REST API request failed
#
# ==============================================


class FormSyncError(Exception):
    """Base class for all formsync errors."""


class ConfigurationError(FormSyncError):
    """Invalid configuration value."""


class FieldMappingError(FormSyncError):
    """A sync-enabled field (or sub-input) has no usable profile key."""

    def __init__(self, field_id, message: str = "no profile key configured"):
        self.field_id = field_id
        super().__init__(f"Field {field_id}: {message}")


class StoreError(FormSyncError):
    """The profile store could not complete a read or write."""


class SourceError(FormSyncError):
    """The forms API returned an error or unusable payload."""
