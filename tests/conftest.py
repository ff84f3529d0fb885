from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from shukujitsu.main import create_application


@pytest.fixture()
async def api_client() -> AsyncIterator[AsyncClient]:
    app = create_application()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"
