"""Mensajes: envío y transferencia a grupo u operador.

Nota:
- Los errores de transferencia se mapean con `classify_relation_error`
  sobre el texto de `errors`/`message` (grupo, operador, mensaje).
"""

from __future__ import annotations

from chat2desk.adapters.resources.base import Resource
from chat2desk.adapters.status import classify_relation_error, errors_text
from chat2desk.core.domain.models import ApiEnvelope, Message, MessagePayload, MessageResponse
from chat2desk.core.errors import InvalidParametersError, InvalidResponseError


class MessagesResource(Resource):
    async def send(self, message: MessagePayload) -> Message:
        result = await self._call("POST", "v1/messages", MessageResponse, message.to_request(), action="send message")
        response = result.data
        if not self._succeeded(response, action="send message"):
            self._logger.error("Failed to send message: %s", response.errors)
            raise InvalidParametersError(errors=response.errors)
        if response.data is None:
            raise InvalidResponseError(body=result.body)
        return response.data

    async def transfer_to_group(self, message_id: int, group_id: int, only_online: bool = False) -> None:
        payload = {"group_id": group_id, "only_online": only_online}
        await self._transfer(
            f"v1/messages/{message_id}/transfer_to_group",
            payload,
            keywords=("group", "message"),
            action="transfer message to group",
        )

    async def transfer_to_operator(self, message_id: int, operator_id: int) -> None:
        await self._transfer(
            f"v1/messages/{message_id}/transfer",
            {"operator_id": operator_id},
            keywords=("operator", "message"),
            action="transfer message to operator",
        )

    async def _transfer(self, path: str, payload: dict, *, keywords: tuple[str, ...], action: str) -> None:
        result = await self._call("POST", path, ApiEnvelope, payload, action=action)
        response = result.data
        if self._succeeded(response, action=action):
            return
        self._logger.error("Failed to %s: %s", action, response.errors)
        text = errors_text(response.errors, response.message)
        raise classify_relation_error(text, keywords=keywords, errors=response.errors)
