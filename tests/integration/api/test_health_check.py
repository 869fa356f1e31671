import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_check_works(client: AsyncClient):
    response = await client.get("/health_check")

    assert response.status_code == 200
