# ==============================================
# FIELDS (form model + classification)
# ==============================================
#
# Modules:
# --------
# - descriptor.py  → FieldDescriptor, SubInput, FormDefinition
# - classifier.py  → FieldClassifier / is_sync_enabled
#
# ==============================================

from .descriptor import FieldDescriptor, FormDefinition, SubInput
from .classifier import SYNC_MARKER, FieldClassifier, is_sync_enabled

__all__ = [
    "FieldDescriptor",
    "FormDefinition",
    "SubInput",
    "SYNC_MARKER",
    "FieldClassifier",
    "is_sync_enabled",
]
