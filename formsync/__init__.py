# ==============================================
# formsync: form fields ↔ user profile sync
# ==============================================
#
# Package Structure:
#
# formsync/
# ├── fields/      # Field descriptors + sync-marker classifier
# ├── storage/     # Profile stores: memory, MongoDB, MySQL
# ├── sync/        # SyncMediator: submission writes, render reads
# ├── sources/     # REST backfill of past submissions
# ├── hooks.py     # Explicit action/filter registry
# ├── app.py       # Config → mediator wiring
# ├── config.py    # Configuration management
# ├── policy.py    # "No override" answer for unsynced fields
# ├── errors.py    # Exception types
# └── cli.py       # Command line entry point
#
# ==============================================

__version__ = "0.1.0"

from formsync.fields import SYNC_MARKER, FieldDescriptor, FormDefinition, SubInput, is_sync_enabled
from formsync.hooks import HookRegistry
from formsync.policy import NoOverridePolicy
from formsync.sync import SubmissionResult, SyncMediator

__all__ = [
    "SYNC_MARKER",
    "FieldDescriptor",
    "FormDefinition",
    "SubInput",
    "is_sync_enabled",
    "HookRegistry",
    "NoOverridePolicy",
    "SubmissionResult",
    "SyncMediator",
]
