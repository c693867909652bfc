import pytest
from httpx import ASGITransport, AsyncClient

from label_owners import main
from label_owners.webhooks.dispatcher import WebhookDispatcher


@pytest.mark.asyncio
async def test_health_check() -> None:
    async with AsyncClient(transport=ASGITransport(app=main.app), base_url="http://test") as client:
        response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_startup_builds_dispatcher(monkeypatch) -> None:
    monkeypatch.setattr(main.config, "validate", lambda: True)

    await main.startup_event()

    assert isinstance(main.app.state.dispatcher, WebhookDispatcher)
    assert main.app.state.dispatcher.event_names == ["issues.labeled"]
