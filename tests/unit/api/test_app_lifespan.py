from unittest.mock import AsyncMock, MagicMock

import pytest

import newsletter.depends as depends
from config import ApplicationConfig
from newsletter.api.app import create_app


@pytest.mark.asyncio
async def test_shutdown_releases_shared_resources(monkeypatch):
    email_client = MagicMock()
    email_client.aclose = AsyncMock()
    blocking_pool = MagicMock()
    engine = MagicMock()
    engine.dispose = AsyncMock()
    monkeypatch.setattr(depends, "email_client", email_client)
    monkeypatch.setattr(depends, "blocking_pool", blocking_pool)
    monkeypatch.setattr(depends, "engine", engine)

    app = create_app(ApplicationConfig)

    async with app.router.lifespan_context(app):
        email_client.aclose.assert_not_called()
        blocking_pool.shutdown.assert_not_called()

    email_client.aclose.assert_awaited_once()
    blocking_pool.shutdown.assert_called_once()
    engine.dispose.assert_awaited_once()
