# ==============================================
# SYNC (form ↔ profile mediation)
# ==============================================
#
# Modules:
# --------
# - mediator.py  → SyncMediator (write path + read path)
# - result.py    → SubmissionResult
#
# ==============================================

from .mediator import AFTER_SUBMISSION, FIELD_VALUE, SyncMediator, UserResolver
from .result import SubmissionResult

__all__ = [
    "AFTER_SUBMISSION",
    "FIELD_VALUE",
    "SyncMediator",
    "UserResolver",
    "SubmissionResult",
]
