"""Tests contra una instalación real de Chat2Desk.

Se saltan salvo que existan `CHAT2DESK_TEST_URL` y `CHAT2DESK_TEST_TOKEN`
(entorno o `.env`). Solo hacen lecturas y operaciones idempotentes.
"""

from __future__ import annotations

import pytest
from pydantic_settings import BaseSettings, SettingsConfigDict

from chat2desk import Chat2DeskClient, ClientSettings
from chat2desk.core.errors import InvalidIDError, InvalidTokenError


class LiveTestSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CHAT2DESK_TEST_", extra="ignore", env_file=".env")

    url: str = ""
    token: str = ""
    client_id: int = 0
    tag_id: int = 0

    @property
    def enabled(self) -> bool:
        return bool(self.url and self.token)


live = LiveTestSettings()

pytestmark = pytest.mark.skipif(not live.enabled, reason="CHAT2DESK_TEST_URL/CHAT2DESK_TEST_TOKEN not set")


@pytest.fixture
def live_client() -> Chat2DeskClient:
    return Chat2DeskClient(ClientSettings(base_url=live.url, token=live.token))


@pytest.mark.asyncio
async def test_company_info(live_client: Chat2DeskClient) -> None:
    info = await live_client.companies.api_info()
    assert info.company_id > 0


@pytest.mark.asyncio
async def test_wrong_token() -> None:
    client = Chat2DeskClient(ClientSettings(base_url=live.url, token="wrong-token"))
    with pytest.raises(InvalidTokenError):
        await client.companies.api_info()


@pytest.mark.asyncio
async def test_client_zero_is_invalid(live_client: Chat2DeskClient) -> None:
    with pytest.raises(InvalidIDError):
        await live_client.clients.get(0)


@pytest.mark.asyncio
async def test_channels_pages_are_disjoint(live_client: Chat2DeskClient) -> None:
    channels = await live_client.channels.list_all()
    ids = [channel.id for channel in channels]
    assert len(ids) == len(set(ids))


@pytest.mark.asyncio
async def test_assign_tag_twice(live_client: Chat2DeskClient) -> None:
    if not (live.client_id and live.tag_id):
        pytest.skip("CHAT2DESK_TEST_CLIENT_ID/CHAT2DESK_TEST_TAG_ID not set")
    await live_client.tags.assign_to_client([live.tag_id], live.client_id)
    await live_client.tags.assign_to_client([live.tag_id], live.client_id)
