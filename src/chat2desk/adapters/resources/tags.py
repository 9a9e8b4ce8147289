"""Tags: listado, detalle, asignación y retirada (cliente o petición).

Qué hace:
- `list_page` ajusta offset/limit a lo que acepta la API (offset >= 0,
  limit por defecto 10, máximo 200).
- Asignar es idempotente del lado del proveedor: repetir la misma
  asignación vuelve a responder `success`.
- Los errores de relación ("does not belong", "not found") se leen del
  cuerpo crudo antes que del status.
"""

from __future__ import annotations

from typing import Sequence

from chat2desk.adapters.http_client import build_path
from chat2desk.adapters.pagination import collect_all
from chat2desk.adapters.resources.base import Resource
from chat2desk.adapters.status import errors_text
from chat2desk.core.domain.models import ApiEnvelope, Tag, TagResponse, TagsResponse
from chat2desk.core.errors import (
    InvalidClientIDError,
    InvalidIDError,
    InvalidParametersError,
    InvalidRequestIDError,
    InvalidResponseError,
    InvalidTagIDError,
    VendorError,
)
from chat2desk.core.interfaces.pages import Page

DEFAULT_TAGS_LIMIT = 10
MAX_TAGS_LIMIT = 200

ASSIGNEE_CLIENT = "client"
ASSIGNEE_REQUEST = "request"

RelationErrors = tuple[tuple[str, type[VendorError]], ...]

ASSIGN_ERRORS: RelationErrors = (
    ("request does not belong", InvalidRequestIDError),
    ("client does not belong", InvalidClientIDError),
)
REMOVE_ERRORS: RelationErrors = (
    ("tag does not exist", InvalidTagIDError),
    ("request not found", InvalidRequestIDError),
    ("client not found", InvalidClientIDError),
)


def clamp_page(offset: int, limit: int) -> tuple[int, int]:
    offset = max(offset, 0)
    if limit <= 0:
        limit = DEFAULT_TAGS_LIMIT
    return offset, min(limit, MAX_TAGS_LIMIT)


class TagsResource(Resource):
    async def list_page(self, offset: int = 0, limit: int = DEFAULT_TAGS_LIMIT) -> Page[Tag]:
        offset, limit = clamp_page(offset, limit)
        result = await self._call(
            "GET", build_path("v1/tags", {"offset": offset, "limit": limit}), TagsResponse, action="get tags"
        )
        response = result.data
        if not self._succeeded(response, action="get tags"):
            self._logger.error("Failed to get tags: %s", response.errors)
            raise InvalidResponseError(body=result.body)
        return Page(items=response.data, total=response.meta.total)

    async def list_all(self) -> list[Tag]:
        return await collect_all(self.list_page, page_size=MAX_TAGS_LIMIT)

    async def get(self, tag_id: int) -> Tag:
        result = await self._call("GET", f"v1/tags/{tag_id}", TagResponse, action="get tag")
        response = result.data
        if " not found" in errors_text(response.errors):
            raise InvalidIDError(errors=response.errors)
        if not self._succeeded(response, action="get tag") or response.data is None:
            raise InvalidResponseError(body=result.body)
        return response.data

    async def assign(self, tag_ids: Sequence[int], assignee_type: str, assignee_id: int) -> None:
        """Asigna `tag_ids` a un cliente o petición (`assignee_type` != client => request)."""

        if not tag_ids:
            raise InvalidParametersError("no tag IDs given")
        if assignee_type != ASSIGNEE_CLIENT:
            assignee_type = ASSIGNEE_REQUEST

        payload = {"tag_ids": list(tag_ids), "assignee_type": assignee_type, "assignee_id": assignee_id}
        result = await self._call("POST", "v1/tags/assign_to", ApiEnvelope, payload, action="assign tag")
        self._check_relation(result.data, result.body, ASSIGN_ERRORS, action="assign tag")

    async def assign_to_client(self, tag_ids: Sequence[int], client_id: int) -> None:
        await self.assign(tag_ids, ASSIGNEE_CLIENT, client_id)

    async def assign_to_request(self, tag_ids: Sequence[int], request_id: int) -> None:
        await self.assign(tag_ids, ASSIGNEE_REQUEST, request_id)

    async def remove(self, tag_id: int, assignee_type: str, assignee_id: int) -> None:
        key = "client_id" if assignee_type == ASSIGNEE_CLIENT else "request_id"
        result = await self._call(
            "DELETE", f"v1/tags/{tag_id}/delete_from", ApiEnvelope, {key: assignee_id}, action="remove tag"
        )
        self._check_relation(result.data, result.body, REMOVE_ERRORS, action="remove tag")

    async def remove_from_client(self, tag_id: int, client_id: int) -> None:
        await self.remove(tag_id, ASSIGNEE_CLIENT, client_id)

    async def remove_from_request(self, tag_id: int, request_id: int) -> None:
        await self.remove(tag_id, ASSIGNEE_REQUEST, request_id)

    def _check_relation(self, response: ApiEnvelope, body: bytes, table: RelationErrors, *, action: str) -> None:
        text = errors_text(body)
        for phrase, error_cls in table:
            if phrase in text:
                raise error_cls(errors=response.errors)
        if not self._succeeded(response, action=action):
            self._logger.error("Failed to %s: %s", action, response.errors)
            raise InvalidResponseError(body=body)
