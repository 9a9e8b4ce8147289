"""Canales de la compañía."""

from __future__ import annotations

from chat2desk.adapters.http_client import build_path
from chat2desk.adapters.pagination import DEFAULT_PAGE_SIZE, collect_all
from chat2desk.adapters.resources.base import Resource
from chat2desk.core.domain.models import Channel, ChannelsResponse
from chat2desk.core.errors import InvalidIDError, InvalidResponseError
from chat2desk.core.interfaces.pages import Page


class ChannelsResource(Resource):
    async def list_page(self, offset: int = 0, limit: int = DEFAULT_PAGE_SIZE) -> Page[Channel]:
        path = build_path("v1/channels", {"offset": offset, "limit": limit})
        result = await self._call("GET", path, ChannelsResponse, action="get channels")
        response = result.data
        if not self._succeeded(response, action="get channels"):
            self._logger.error("Failed to get channels: %s", response.errors)
            raise InvalidResponseError(body=result.body)
        return Page(items=response.data, total=response.meta.total)

    async def list_all(self, page_size: int = DEFAULT_PAGE_SIZE) -> list[Channel]:
        return await collect_all(self.list_page, page_size=page_size)

    async def get(self, channel_id: int) -> Channel:
        """Busca el canal en el listado completo (la API no tiene GET por ID)."""

        for channel in await self.list_all():
            if channel.id == channel_id:
                return channel
        raise InvalidIDError()
