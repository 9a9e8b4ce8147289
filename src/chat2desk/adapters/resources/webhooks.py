"""Webhooks: listado, alta, modificación y baja."""

from __future__ import annotations

from chat2desk.adapters.resources.base import Resource
from chat2desk.core.domain.models import ApiEnvelope, Webhook, WebhookPayload, WebhookResponse, WebhooksResponse
from chat2desk.core.errors import InvalidIDError, InvalidResponseError, WebhookUrlAlreadyUsedError

URL_ALREADY_USED = "already used"


class WebhooksResource(Resource):
    async def list(self) -> list[Webhook]:
        result = await self._call("GET", "v1/webhooks", WebhooksResponse, action="get webhooks")
        response = result.data
        if not self._succeeded(response, action="get webhooks"):
            self._logger.error("Failed to get webhooks: %s", response.errors)
            raise InvalidResponseError(body=result.body)
        return response.data

    async def get(self, webhook_id: int) -> Webhook:
        for webhook in await self.list():
            if webhook.id == webhook_id:
                return webhook
        raise InvalidIDError()

    async def create(self, payload: WebhookPayload) -> Webhook:
        result = await self._call(
            "POST", "v1/webhooks", WebhookResponse, payload.to_request(), action="create webhook"
        )
        return self._saved(result.data, result.body, action="create webhook")

    async def update(self, webhook_id: int, payload: WebhookPayload) -> Webhook:
        result = await self._call(
            "PUT", f"v1/webhooks/{webhook_id}", WebhookResponse, payload.to_request(), action="update webhook"
        )
        return self._saved(result.data, result.body, action="update webhook")

    async def delete(self, webhook_id: int) -> None:
        result = await self._call("DELETE", f"v1/webhooks/{webhook_id}", ApiEnvelope, action="delete webhook")
        response = result.data
        if not self._succeeded(response, action="delete webhook"):
            self._logger.error("Failed to delete webhook: %s", response.errors)
            raise InvalidIDError(errors=response.errors)

    def _saved(self, response: WebhookResponse, body: bytes, *, action: str) -> Webhook:
        if self._succeeded(response, action=action) and response.data is not None:
            return response.data

        summary = response.error_summary()
        self._logger.error("Failed to %s: %s", action, summary)
        if any(URL_ALREADY_USED in message for message in response.errors.url):
            raise WebhookUrlAlreadyUsedError(summary or None, errors=response.errors.model_dump())
        raise InvalidResponseError(summary or "invalid response", body=body)
