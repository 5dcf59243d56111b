"""Pytest configuration and fixtures."""

import os

# Business timezone must be fixed before pinreport is imported
os.environ["APP_TIMEZONE"] = "Asia/Ho_Chi_Minh"
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.pop("SENTRY_DSN", None)

from datetime import datetime  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from pinreport.core.cache import clear_cache  # noqa: E402
from pinreport.main import create_app  # noqa: E402
from pinreport.utils.datetime import APP_TIMEZONE  # noqa: E402

# Fixed "now" for period resolution: Wednesday 20 March 2024, 10:00 local
NOW = datetime(2024, 3, 20, 10, 0, 0, tzinfo=APP_TIMEZONE)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture(autouse=True)
def reset_cache():
    """Each test starts with an empty report cache."""
    clear_cache()
    yield
    clear_cache()


@pytest_asyncio.fixture
async def client():
    """Async test client for the FastAPI app."""
    app = create_app()

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac
