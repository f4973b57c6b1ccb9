# ==============================================
# Tests for SyncMediator
# ==============================================
#
# Write path (on_submission), read path (populate_field),
# failure handling and hook registration.
# ==============================================

import logging

import pytest

from formsync.errors import StoreError
from formsync.fields.descriptor import FieldDescriptor, FormDefinition, SubInput
from formsync.hooks import HookRegistry
from formsync.policy import NoOverridePolicy
from formsync.storage.memory_store import MemoryProfileStore
from formsync.sync.mediator import AFTER_SUBMISSION, FIELD_VALUE, SyncMediator


class FlakyStore(MemoryProfileStore):
    """Fails every write/read of the given keys."""

    def __init__(self, failing_keys):
        super().__init__()
        self.failing_keys = set(failing_keys)

    def _write(self, user_id, key, value):
        if key in self.failing_keys:
            raise StoreError("connection lost")
        super()._write(user_id, key, value)

    def _read(self, user_id, key):
        if key in self.failing_keys:
            raise StoreError("connection lost")
        return super()._read(user_id, key)


class RecordingStore(MemoryProfileStore):
    def __init__(self):
        super().__init__()
        self.calls = []

    def _write(self, user_id, key, value):
        self.calls.append((user_id, key, value))
        super()._write(user_id, key, value)


# ==============================================
# Write path
# ==============================================

class TestOnSubmission:
    def test_composite_field_writes_each_sub_input(self, mediator, store, name_field):
        form = FormDefinition(fields=(name_field,))
        mediator.on_submission({"1.3": "Ada", "1.6": "Lovelace"}, form)

        assert store.read("42", "first_name") == "Ada"
        assert store.read("42", "last_name") == "Lovelace"

    def test_single_field_writes_parameter_name(self, mediator, store, company_field):
        form = FormDefinition(fields=(company_field,))
        mediator.on_submission({"4": "Acme Co"}, form)

        assert store.read("42", "company") == "Acme Co"

    def test_unmarked_field_is_never_written(self, mediator, store, plain_field):
        form = FormDefinition(fields=(plain_field,))
        result = mediator.on_submission({"5": "private notes"}, form)

        assert store.read_all("42") == {}
        assert result.writes == 0
        assert result.fields_synced == 0

    def test_mixed_form(self, mediator, store, contact_form):
        entry = {"1.3": "Ada", "1.6": "Lovelace", "4": "Acme Co", "5": "ignored"}
        result = mediator.on_submission(entry, contact_form)

        assert store.read_all("42") == {
            "first_name": "Ada",
            "last_name": "Lovelace",
            "company": "Acme Co",
        }
        assert result.user_id == "42"
        assert result.fields_synced == 2
        assert result.writes == 3
        assert result.ok

    def test_missing_entry_value_writes_empty_string(self, mediator, store, contact_form):
        store.write("42", "last_name", "Byron")
        result = mediator.on_submission({"1.3": "Ada"}, contact_form)

        assert store.read_all("42") == {"first_name": "Ada", "last_name": "", "company": ""}
        assert result.writes == 3

    def test_none_entry_value_writes_empty_string(self, mediator, store, company_field):
        mediator.on_submission({"4": None}, FormDefinition(fields=(company_field,)))
        assert store.read_all("42") == {"company": ""}

    def test_non_string_values_stored_as_strings(self, mediator, store):
        field = FieldDescriptor(id="6", css_class="dynamic", input_name="age")
        mediator.on_submission({"6": 37}, FormDefinition(fields=(field,)))
        assert store.read("42", "age") == "37"

    def test_overwrites_previous_value(self, mediator, store, company_field):
        store.write("42", "company", "Old Corp")
        mediator.on_submission({"4": "Acme Co"}, FormDefinition(fields=(company_field,)))
        assert store.read("42", "company") == "Acme Co"

    def test_idempotent(self, mediator, store, contact_form):
        entry = {"1.3": "Ada", "1.6": "Lovelace", "4": "Acme Co"}
        mediator.on_submission(entry, contact_form)
        first = store.read_all("42")
        mediator.on_submission(entry, contact_form)
        assert store.read_all("42") == first

    def test_writes_follow_field_then_input_order(self, contact_form):
        store = RecordingStore()
        mediator = SyncMediator(store, user_resolver=lambda: "42")
        mediator.on_submission({"1.3": "Ada", "1.6": "Lovelace", "4": "Acme Co"}, contact_form)

        assert [key for _, key, _ in store.calls] == ["first_name", "last_name", "company"]

    def test_duplicate_key_last_write_wins(self, mediator, store):
        form = FormDefinition(fields=(
            FieldDescriptor(id="1", css_class="dynamic", input_name="company"),
            FieldDescriptor(id="2", css_class="dynamic", input_name="company"),
        ))
        mediator.on_submission({"1": "First", "2": "Second"}, form)
        assert store.read("42", "company") == "Second"

    def test_accepts_raw_gravity_forms_payload(self, mediator, store):
        form = {
            "id": 3,
            "fields": [
                {"id": 1, "cssClass": "dynamic", "inputs": [
                    {"id": "1.3", "name": "first_name"},
                    {"id": "1.6", "name": "last_name"},
                ]},
                {"id": 4, "cssClass": "medium dynamic", "inputName": "company", "inputs": None},
            ],
        }
        mediator.on_submission({"1.3": "Ada", "1.6": "Lovelace", "4": "Acme Co"}, form)
        assert store.read_all("42") == {
            "first_name": "Ada",
            "last_name": "Lovelace",
            "company": "Acme Co",
        }

    def test_explicit_user_overrides_resolver(self, mediator, store, company_field):
        mediator.on_submission({"4": "Acme Co"}, FormDefinition(fields=(company_field,)), user_id=7)
        assert store.read("7", "company") == "Acme Co"
        assert store.read_all("42") == {}

    def test_resolver_called_per_submission(self, store, company_field):
        users = iter(["1", "2"])
        mediator = SyncMediator(store, user_resolver=lambda: next(users))
        form = FormDefinition(fields=(company_field,))

        mediator.on_submission({"4": "Acme"}, form)
        mediator.on_submission({"4": "Globex"}, form)

        assert store.read("1", "company") == "Acme"
        assert store.read("2", "company") == "Globex"


class TestOnSubmissionFailures:
    @pytest.mark.parametrize("user", [None, "", "0", 0])
    def test_no_acting_user_is_noop(self, store, contact_form, user):
        mediator = SyncMediator(store, user_resolver=lambda: user)
        result = mediator.on_submission({"4": "Acme Co"}, contact_form)

        assert result.user_id is None
        assert result.writes == 0
        assert store._profiles == {}

    def test_resolver_error_is_noop(self, store, contact_form):
        def broken():
            raise RuntimeError("session expired")

        mediator = SyncMediator(store, user_resolver=broken)
        result = mediator.on_submission({"4": "Acme Co"}, contact_form)
        assert result.writes == 0

    def test_misconfigured_field_is_skipped(self, mediator, store, caplog):
        form = FormDefinition(fields=(
            FieldDescriptor(id="8", css_class="dynamic"),
            FieldDescriptor(id="4", css_class="dynamic", input_name="company"),
        ))
        with caplog.at_level(logging.WARNING, logger="formsync.sync.mediator"):
            result = mediator.on_submission({"8": "lost", "4": "Acme Co"}, form)

        assert store.read_all("42") == {"company": "Acme Co"}
        assert len(result.skipped) == 1
        assert "8" in result.skipped[0]
        assert "Skipping sync-enabled input" in caplog.text

    def test_unnamed_sub_input_is_skipped(self, mediator, store):
        field = FieldDescriptor(
            id="1",
            css_class="dynamic",
            inputs=(SubInput("1.3", "first_name"), SubInput("1.4", None)),
        )
        result = mediator.on_submission({"1.3": "Ada", "1.4": "M"}, FormDefinition(fields=(field,)))

        assert store.read_all("42") == {"first_name": "Ada"}
        assert result.writes == 1
        assert len(result.skipped) == 1

    def test_store_failure_does_not_stop_later_fields(self, contact_form):
        store = FlakyStore(["first_name"])
        mediator = SyncMediator(store, user_resolver=lambda: "42")
        result = mediator.on_submission(
            {"1.3": "Ada", "1.6": "Lovelace", "4": "Acme Co"}, contact_form
        )

        assert store.read_all("42") == {"last_name": "Lovelace", "company": "Acme Co"}
        assert result.writes == 2
        assert not result.ok
        assert result.errors[0].startswith("first_name:")

    def test_bad_class_value_does_not_stop_later_fields(self, mediator, store):
        form = {"fields": [
            {"id": 9, "cssClass": ["dynamic"], "inputName": "lost"},
            {"id": 4, "cssClass": "dynamic", "inputName": "company"},
        ]}
        result = mediator.on_submission({"9": "x", "4": "Acme Co"}, form)

        assert store.read_all("42") == {"company": "Acme Co"}
        assert result.writes == 1

    def test_classifier_error_is_skipped(self, store, company_field):
        class BrokenClassifier:
            def is_sync_enabled(self, field):
                if field.id == "9":
                    raise TypeError("unreadable classes")
                return True

        mediator = SyncMediator(store, user_resolver=lambda: "42", classifier=BrokenClassifier())
        form = FormDefinition(fields=(FieldDescriptor(id="9", input_name="x"), company_field))
        result = mediator.on_submission({"9": "x", "4": "Acme Co"}, form)

        assert store.read_all("42") == {"company": "Acme Co"}
        assert len(result.skipped) == 1
        assert "9" in result.skipped[0]

    def test_none_entry(self, mediator, store, company_field):
        result = mediator.on_submission(None, FormDefinition(fields=(company_field,)))
        assert store.read("42", "company") == ""
        assert result.writes == 1


# ==============================================
# Read path
# ==============================================

class TestPopulateField:
    def test_returns_stored_value(self, mediator, store, company_field):
        store.write("42", "company", "Acme Co")
        assert mediator.populate_field("", company_field, "company") == "Acme Co"

    def test_absent_attribute_is_empty(self, mediator, company_field):
        assert mediator.populate_field("fallback", company_field, "company") == ""

    def test_unmarked_field_returns_sentinel(self, mediator, store, plain_field):
        store.write("42", "notes", "stored")
        assert mediator.populate_field("default", plain_field, "notes") is False

    def test_default_policy_returns_host_default(self, store, plain_field):
        mediator = SyncMediator(
            store, user_resolver=lambda: "42", no_override=NoOverridePolicy.DEFAULT
        )
        store.write("42", "notes", "stored")
        assert mediator.populate_field("default", plain_field, "notes") == "default"

    def test_sub_input_parameter_name(self, mediator, store, name_field):
        store.write("42", "last_name", "Lovelace")
        assert mediator.populate_field("", name_field, "last_name") == "Lovelace"

    def test_raw_field(self, mediator, store):
        store.write("42", "company", "Acme Co")
        field = {"id": 4, "cssClass": "dynamic", "inputName": "company"}
        assert mediator.populate_field("", field, "company") == "Acme Co"

    def test_no_user_returns_empty(self, store, company_field):
        store.write("42", "company", "Acme Co")
        mediator = SyncMediator(store)
        assert mediator.populate_field("x", company_field, "company") == ""

    def test_read_failure_returns_empty(self, company_field):
        store = FlakyStore(["company"])
        mediator = SyncMediator(store, user_resolver=lambda: "42")
        assert mediator.populate_field("x", company_field, "company") == ""

    def test_bad_class_value_is_not_synced(self, mediator, store):
        store.write("42", "company", "Acme Co")
        assert mediator.populate_field("d", {"id": 9, "cssClass": 7}, "company") is False

    def test_missing_parameter_name_returns_empty(self, mediator, company_field):
        assert mediator.populate_field("x", company_field, "") == ""
        assert mediator.populate_field("x", company_field, None) == ""

    def test_does_not_write(self, company_field):
        store = RecordingStore()
        mediator = SyncMediator(store, user_resolver=lambda: "42")
        mediator.populate_field("", company_field, "company")
        assert store.calls == []


# ==============================================
# Hook wiring
# ==============================================

class TestRegister:
    def test_register_subscribes_both_hooks(self, mediator, store, contact_form):
        hooks = HookRegistry()
        mediator.register(hooks)

        hooks.do_action(AFTER_SUBMISSION, {"4": "Acme Co"}, contact_form)
        assert store.read("42", "company") == "Acme Co"

        company = contact_form.get_field(4)
        assert hooks.apply_filters(FIELD_VALUE, "", company, "company") == "Acme Co"
        assert hooks.apply_filters(FIELD_VALUE, "", contact_form.get_field(5), "notes") is False
