# ==============================================
# SOURCES (where past submissions come from)
# ==============================================
#
# Modules:
# --------
# - forms_api.py  → FormsApiSource (REST), backfill()
#
# ==============================================

from .forms_api import FormsApiSource, backfill

__all__ = ["FormsApiSource", "backfill"]
