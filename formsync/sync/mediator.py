# ==============================================
# SyncMediator: form ↔ profile orchestrator
# ==============================================
#
# PURPOSE:
#   Ties the field classifier to the profile store in both
#   directions. The host form system calls it; it never runs
#   on its own.
#
#   ┌──────────────┐  after_submission(entry, form)   ┌──────────────┐
#   │  host forms  │ ───────────────────────────────▶ │              │
#   │              │                                  │ SyncMediator │ ──▶ ProfileStore
#   │              │ ◀─────────────────────────────── │              │ ◀──
#   └──────────────┘  field_value(value, field, name) └──────────────┘
#
# CLASS: SyncMediator
# -------------------
#   Holds only collaborators (store, classifier, user resolver,
#   policy). No per-user state: a ProfileHandle is acquired per
#   call and dropped when the call returns.
#
#   Public Methods:
#   ---------------
#   - on_submission(entry, form, user_id=None) -> SubmissionResult
#       For each field in form order that is sync-enabled:
#         - composite field → one write per sub-input, keyed by
#           the sub-input's name, value from entry[str(sub.id)]
#         - single field    → one write keyed by the field's
#           parameter name, value from entry[str(field.id)]
#       Missing entry values are written as "".
#
#   - populate_field(default_value, field, parameter_name, user_id=None)
#       Stored value for sync-enabled fields, else the
#       NoOverridePolicy answer.
#
#   - register(hooks, priority=10) -> None
#       Subscribe both callbacks on a HookRegistry.
#
# FAILURE POLICY:
# ---------------
#   Nothing raised here reaches the host.
#   - No acting user       → submission no-op, render returns ""
#   - No profile key       → skip that input, warn, record in result
#   - Store read/write err → log, record, continue with next input
#
# ==============================================

import logging
from typing import Any, Callable, Mapping, Optional

from formsync.errors import FieldMappingError
from formsync.fields.classifier import FieldClassifier
from formsync.fields.descriptor import FieldDescriptor, FormDefinition
from formsync.policy import NoOverridePolicy
from formsync.storage.base import EMPTY_VALUE, ProfileHandle, ProfileStore
from .result import SubmissionResult

logger = logging.getLogger(__name__)

UserResolver = Callable[[], Optional[Any]]

AFTER_SUBMISSION = "after_submission"
FIELD_VALUE = "field_value"


def no_user() -> None:
    return None


class SyncMediator:
    """
    Copies sync-enabled form fields into the acting user's profile
    on submission and reads them back when the form is rendered.
    """

    def __init__(
        self,
        store: ProfileStore,
        user_resolver: Optional[UserResolver] = None,
        classifier: Optional[FieldClassifier] = None,
        no_override: NoOverridePolicy = NoOverridePolicy.SENTINEL,
    ):
        """
        Args:
            store: Profile store to read from / write to
            user_resolver: Returns the acting user's id (or None).
                Consulted on every call that isn't given user_id.
            classifier: Decides which fields are synced
            no_override: Answer for fields that aren't synced
        """
        self._store = store
        self._user_resolver = user_resolver or no_user
        self._classifier = classifier or FieldClassifier()
        self._no_override = no_override

    # ------------------------------------------
    # Write path
    # ------------------------------------------

    def on_submission(
        self,
        entry: Optional[Mapping[str, Any]],
        form: Any,
        user_id: Optional[Any] = None,
    ) -> SubmissionResult:
        """
        Store every sync-enabled field of a submitted entry.

        Args:
            entry: Submitted values keyed by stringified field/input id
            form: Form definition (FormDefinition, dict, or object)
            user_id: Acting user; resolved via user_resolver if None

        Returns:
            SubmissionResult with counts, skips and errors
        """
        result = SubmissionResult()

        handle = self._acquire_handle(user_id)
        if handle is None:
            logger.info("No acting user; skipping profile sync for submission")
            return result
        result.user_id = handle.user_id

        try:
            definition = FormDefinition.coerce(form)
        except Exception as e:
            logger.error("Unreadable form definition; skipping profile sync: %s", e)
            return result
        entry = entry or {}

        for form_field in definition.fields:
            try:
                synced = self._classifier.is_sync_enabled(form_field)
            except Exception as e:
                logger.warning("Skipping unclassifiable field %s: %s", form_field.id, e)
                result.skipped.append(f"Field {form_field.id}: {e}")
                continue
            if not synced:
                continue
            result.fields_synced += 1
            self._store_field(handle, form_field, entry, result)

        logger.debug(
            "Synced %d field(s), %d write(s) for user %s",
            result.fields_synced, result.writes, handle.user_id,
        )
        return result

    def _store_field(
        self,
        handle: ProfileHandle,
        form_field: FieldDescriptor,
        entry: Mapping[str, Any],
        result: SubmissionResult,
    ) -> None:
        for entry_key, profile_key in form_field.profile_keys():
            if not profile_key:
                error = FieldMappingError(entry_key or form_field.id)
                logger.warning("Skipping sync-enabled input: %s", error)
                result.skipped.append(str(error))
                continue

            value = entry.get(entry_key)
            if value is None:
                value = EMPTY_VALUE

            try:
                handle.save(profile_key, value)
            except Exception as e:
                logger.error(
                    "Failed to store %r for user %s: %s", profile_key, handle.user_id, e
                )
                result.errors.append(f"{profile_key}: {e}")
                continue
            result.writes += 1

    # ------------------------------------------
    # Read path
    # ------------------------------------------

    def populate_field(
        self,
        default_value: Any,
        field: Any,
        parameter_name: Optional[str],
        user_id: Optional[Any] = None,
    ) -> Any:
        """
        Pre-populate a field from the acting user's profile.

        Args:
            default_value: Value the host would render by itself
            field: Field being rendered
            parameter_name: Profile key to read
            user_id: Acting user; resolved via user_resolver if None

        Returns:
            The stored value ("" if absent, no user, or the read
            failed) for sync-enabled fields; otherwise the
            NoOverridePolicy answer (False or default_value).
        """
        try:
            synced = self._classifier.is_sync_enabled(field)
        except Exception as e:
            logger.warning("Could not classify rendered field: %s", e)
            synced = False
        if not synced:
            return self._no_override.resolve(default_value)

        if not parameter_name:
            logger.warning(
                "Sync-enabled field %s rendered without a parameter name",
                FieldDescriptor.coerce(field).id,
            )
            return EMPTY_VALUE

        handle = self._acquire_handle(user_id)
        if handle is None:
            return EMPTY_VALUE

        try:
            return handle.get(parameter_name)
        except Exception as e:
            logger.error(
                "Failed to read %r for user %s: %s", parameter_name, handle.user_id, e
            )
            return EMPTY_VALUE

    # ------------------------------------------
    # Hook wiring
    # ------------------------------------------

    def register(self, hooks, priority: int = 10) -> None:
        """Subscribe on_submission and populate_field on a HookRegistry."""
        hooks.add_action(AFTER_SUBMISSION, self.on_submission, priority)
        hooks.add_filter(FIELD_VALUE, self.populate_field, priority)

    # ------------------------------------------
    # Internal
    # ------------------------------------------

    def _acquire_handle(self, user_id: Optional[Any]) -> Optional[ProfileHandle]:
        if user_id is None:
            try:
                user_id = self._user_resolver()
            except Exception as e:
                logger.error("Could not resolve the acting user: %s", e)
                return None

        if user_id is None or str(user_id).strip() in ("", "0"):
            return None

        return self._store.for_user(user_id)
