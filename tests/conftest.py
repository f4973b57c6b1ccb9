# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - store            → empty MemoryProfileStore
# - mediator         → SyncMediator over `store`, acting user "42"
# - name_field       → composite field (first/last name), sync-enabled
# - company_field    → single field "company", sync-enabled
# - plain_field      → field without the sync marker
# - contact_form     → FormDefinition of the three fields above
# - clean_config     → config singleton reset + env cleared
#
# ==============================================

import pytest

from formsync.config import reset_config
from formsync.fields.descriptor import FieldDescriptor, FormDefinition, SubInput
from formsync.storage.memory_store import MemoryProfileStore
from formsync.sync.mediator import SyncMediator

CONFIG_ENV_VARS = (
    "PROFILE_STORE",
    "NO_OVERRIDE_POLICY",
    "LOG_LEVEL",
    "MYSQL_HOST",
    "MYSQL_PORT",
    "MYSQL_USERMETA_TABLE",
    "MONGO_HOST",
    "MONGO_PORT",
    "MONGO_USER",
    "MONGO_PASSWORD",
    "MONGO_PROFILE_COLLECTION",
    "FORMS_API_URL",
    "FORMS_API_TIMEOUT",
    "FORMS_API_USER",
    "FORMS_API_PASSWORD",
)


@pytest.fixture
def store():
    return MemoryProfileStore()


@pytest.fixture
def mediator(store):
    return SyncMediator(store, user_resolver=lambda: "42")


@pytest.fixture
def name_field():
    return FieldDescriptor(
        id="1",
        css_class="medium dynamic",
        inputs=(
            SubInput(id="1.3", name="first_name"),
            SubInput(id="1.6", name="last_name"),
        ),
    )


@pytest.fixture
def company_field():
    return FieldDescriptor(id="4", css_class="dynamic", input_name="company")


@pytest.fixture
def plain_field():
    return FieldDescriptor(id="5", css_class="large", input_name="notes")


@pytest.fixture
def contact_form(name_field, company_field, plain_field):
    return FormDefinition(fields=(name_field, company_field, plain_field), id="3")


@pytest.fixture
def clean_config(monkeypatch):
    """Fresh config singleton with no formsync variables in the environment."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the tests
    monkeypatch.setattr("formsync.config.load_dotenv", lambda **kwargs: False)
    reset_config()
    yield
    reset_config()
