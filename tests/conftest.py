from datetime import date, datetime, timezone

import pytest

from libs.auth.models import AccountType, ConsumerSession, ModeratorSession, ProviderSession

# Fixed clock shared by the status and schedule tests.
NOW = datetime(2024, 5, 15, 6, 30, tzinfo=timezone.utc)
TODAY = date(2024, 5, 15)


def make_provider_session(**overrides) -> ProviderSession:
    defaults = {
        "provider_id": "prov-1",
        "name": "Sunrise Academy",
        "admin_name": "Asha Rao",
        "account_type": AccountType.ORGANIZATION,
        "phone": "9876543210",
    }
    defaults.update(overrides)
    return ProviderSession(**defaults)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def provider_session() -> ProviderSession:
    return make_provider_session()


@pytest.fixture
def individual_session() -> ProviderSession:
    return make_provider_session(
        provider_id="prov-2", name="Asha Tutoring", account_type=AccountType.INDIVIDUAL
    )


@pytest.fixture
def consumer_session() -> ConsumerSession:
    return ConsumerSession(consumer_id="cons-1", name="Ravi Kumar")


@pytest.fixture
def moderator_session() -> ModeratorSession:
    return ModeratorSession(moderator_id="mod-1")
