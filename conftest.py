import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Load .env.test for tests if present, then pin the settings tests rely on.
from dotenv import load_dotenv

env_test_path = os.path.join(os.path.dirname(__file__), ".env.test")
if os.path.exists(env_test_path):
    load_dotenv(env_test_path, override=True)

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["API_BASE_URL"] = "http://api.test"
os.environ.setdefault("AUTH_JWT_SECRET", "test-jwt-secret")

from libs.common.config import get_settings  # noqa: E402

# Clear cached settings to reload with new env vars
get_settings.cache_clear()
settings = get_settings()

from libs.common.api_client import ApiClient  # noqa: E402
from services.portal_service.app.main import app  # noqa: E402
from services.portal_service.dependencies import get_api_client  # noqa: E402
from tests.factories import identity_cookie  # noqa: E402
from tests.stubs import ApiStub  # noqa: E402


@pytest.fixture
def api_stub() -> ApiStub:
    """Fake REST API; register responses with ``api_stub.on(...)``."""
    return ApiStub()


@pytest.fixture
def api_client(api_stub: ApiStub) -> ApiClient:
    return ApiClient(settings.API_BASE_URL, transport=api_stub.transport)


@pytest_asyncio.fixture
async def client(api_client: ApiClient) -> AsyncGenerator[AsyncClient, None]:
    """
    Yield an AsyncClient for the portal app with the REST API stubbed out.
    """
    app.dependency_overrides[get_api_client] = lambda: api_client

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def provider_cookies() -> dict[str, str]:
    return identity_cookie(
        "provider",
        "prov-1",
        name="Sunrise Academy",
        adminName="Asha Rao",
        accountType="ORGANIZATION",
        phone="9876543210",
    )


@pytest.fixture
def individual_provider_cookies() -> dict[str, str]:
    return identity_cookie(
        "provider",
        "prov-2",
        name="Asha Tutoring",
        adminName="Asha Rao",
        accountType="INDIVIDUAL",
        phone="9876543210",
    )


@pytest.fixture
def consumer_cookies() -> dict[str, str]:
    return identity_cookie("consumer", "cons-1", name="Ravi Kumar")


@pytest.fixture
def moderator_cookies() -> dict[str, str]:
    return identity_cookie("moderator", "mod-1")
