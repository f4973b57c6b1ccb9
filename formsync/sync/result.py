# ==============================================
# SubmissionResult
# ==============================================
#
# PURPOSE:
#   What one on_submission() call did. The host ignores it;
#   the CLI and the REST backfill report from it.
#
# DATA CLASS: SubmissionResult
# ----------------------------
#   - user_id: str | None
#   - fields_synced: int       → sync-enabled fields visited
#   - writes: int              → successful profile writes
#   - skipped: list[str]       → (sub-)inputs with no profile key
#   - errors: list[str]        → failed writes
#
# ==============================================

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class SubmissionResult:
    user_id: Optional[str] = None
    fields_synced: int = 0
    writes: int = 0
    skipped: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def merge(self, other: "SubmissionResult") -> None:
        """Add another result's counts into this one (backfills)."""
        self.fields_synced += other.fields_synced
        self.writes += other.writes
        self.skipped.extend(other.skipped)
        self.errors.extend(other.errors)
