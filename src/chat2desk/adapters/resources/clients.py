"""Clientes (contactos finales).

Nota:
- `create` distingue "ya existe" (con el cliente existente adjunto), canal
  inválido y transporte inválido a partir del texto de `errors`.
"""

from __future__ import annotations

from typing import Any, Mapping

from chat2desk.adapters.http_client import build_path
from chat2desk.adapters.pagination import DEFAULT_PAGE_SIZE, collect_all
from chat2desk.adapters.resources.base import Resource
from chat2desk.adapters.status import errors_text
from chat2desk.core.domain.models import SORT_ORDERS, Client, ClientResponse, ClientsResponse
from chat2desk.core.errors import (
    ClientAlreadyExistsError,
    InvalidChannelIDError,
    InvalidIDError,
    InvalidParametersError,
    InvalidResponseError,
    InvalidTransportError,
)
from chat2desk.core.interfaces.pages import Page


def normalize_order(order: str | None) -> str:
    value = (order or "").strip().lower()
    return value if value == SORT_ORDERS[1] else SORT_ORDERS[0]


class ClientsResource(Resource):
    async def fetch(self, client_id: int) -> ClientResponse:
        result = await self._call("GET", f"v1/clients/{client_id}", ClientResponse, action="get client")
        return result.data

    async def fetch_page(
        self,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
        order: str = "asc",
        params: Mapping[str, Any] | None = None,
    ) -> ClientsResponse:
        """Página cruda; `params` se añade tras offset/limit/order."""

        query: dict[str, Any] = {"offset": offset, "limit": limit, "order": normalize_order(order)}
        if params:
            query.update(params)
        result = await self._call("GET", build_path("v1/clients", query), ClientsResponse, action="get clients")
        return result.data

    async def get(self, client_id: int) -> Client:
        response = await self.fetch(client_id)
        if " not found" in errors_text(response.errors):
            raise InvalidIDError(errors=response.errors)
        if not self._succeeded(response, action="get client") or response.data is None:
            raise InvalidResponseError()
        return response.data

    async def list_page(self, offset: int = 0, limit: int = DEFAULT_PAGE_SIZE) -> Page[Client]:
        response = await self.fetch_page(offset, limit)
        if not self._succeeded(response, action="get clients"):
            raise InvalidResponseError()
        if not response.data:
            return Page(items=[], total=0)
        return Page(items=response.data, total=response.meta.total)

    async def list_all(self, page_size: int = DEFAULT_PAGE_SIZE) -> list[Client]:
        return await collect_all(self.list_page, page_size=page_size)

    async def create(
        self,
        phone: str,
        transport: str,
        channel_id: int,
        nickname: str = "",
        assigned_phone: str = "",
    ) -> Client:
        payload: dict[str, Any] = {"phone": phone, "transport": transport, "channel_id": channel_id}
        if nickname:
            payload["nickname"] = nickname
        if assigned_phone:
            payload["assigned_phone"] = assigned_phone

        result = await self._call("POST", "v1/clients", ClientResponse, payload, action="create client")
        response = result.data
        if self._succeeded(response, action="create client") and response.data is not None:
            return response.data

        self._logger.error("Failed to create client: %s", response.errors)
        text = errors_text(response.errors, response.message)
        if "already exists" in text:
            raise ClientAlreadyExistsError(errors=response.errors, client=response.data)
        if "channel" in text:
            raise InvalidChannelIDError(errors=response.errors)
        if "transport" in text:
            raise InvalidTransportError(errors=response.errors)
        raise InvalidParametersError(errors=response.errors)
