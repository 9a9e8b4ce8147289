"""Diálogos: listado filtrado, detalle y cierre."""

from __future__ import annotations

from typing import Any

from chat2desk.adapters.http_client import build_path
from chat2desk.adapters.resources.base import Resource
from chat2desk.adapters.status import errors_text
from chat2desk.core.domain.models import ApiEnvelope, Dialog, DialogResponse, DialogsQuery, DialogsResponse
from chat2desk.core.errors import (
    DialogClosedError,
    InvalidIDError,
    InvalidOperatorIDError,
    InvalidParametersError,
    InvalidResponseError,
)
from chat2desk.core.interfaces.pages import Page

NOT_FOUND_MESSAGE = "not_found"


class DialogsResource(Resource):
    async def list_page(self, query: DialogsQuery | None = None) -> Page[Dialog]:
        query = query or DialogsQuery()
        path = build_path("v1/dialogs", query.to_params())
        result = await self._call("GET", path, DialogsResponse, action="get dialogs")
        response = result.data
        if not self._succeeded(response, action="get dialogs"):
            self._logger.error("Failed to get dialogs: %s", response.errors)
            raise InvalidParametersError(errors=response.errors)
        return Page(items=response.data, total=response.meta.total)

    async def get(self, dialog_id: int) -> Dialog:
        result = await self._call("GET", f"v1/dialogs/{dialog_id}", DialogResponse, action="get dialog")
        response = result.data
        if not self._succeeded(response, action="get dialog"):
            self._logger.error("Failed to get dialog by ID: %s", response.errors)
            if response.message == NOT_FOUND_MESSAGE:
                raise InvalidIDError(errors=response.errors)
            raise InvalidParametersError(errors=response.errors)
        if response.data is None:
            raise InvalidResponseError(body=result.body)
        return response.data

    async def close(self, dialog_id: int, operator_id: int = 0, initiator_id: int = 0) -> None:
        """Cierra el diálogo; `operator_id`/`initiator_id` solo se envían si son > 0."""

        payload: dict[str, Any] = {"state": "closed"}
        if operator_id > 0:
            payload["operator_id"] = operator_id
        if initiator_id > 0:
            payload["initiator_id"] = initiator_id

        result = await self._call("PUT", f"v1/dialogs/{dialog_id}", ApiEnvelope, payload, action="close dialog")
        response = result.data
        if self._succeeded(response, action="close dialog"):
            return

        self._logger.error("Failed to close dialog: %s", response.errors)
        text = errors_text(response.errors, response.message)
        if "closed" in text:
            raise DialogClosedError(errors=response.errors)
        if NOT_FOUND_MESSAGE in text or "not found" in text:
            if "operator" in text:
                raise InvalidOperatorIDError(errors=response.errors)
            raise InvalidIDError(errors=response.errors)
        raise InvalidParametersError(errors=response.errors)
