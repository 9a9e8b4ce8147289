"""Base común de los recursos: llamada al transporte + log de fallos."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel

from chat2desk.adapters.http_client import ApiResult, ApiTransport
from chat2desk.adapters.status import is_success
from chat2desk.core.domain.models import ApiEnvelope
from chat2desk.core.interfaces.logger import LoggerLike

M = TypeVar("M", bound=BaseModel)


class Resource:
    """Un recurso de la API (clientes, tags, ...) sobre un `ApiTransport`."""

    def __init__(self, transport: ApiTransport) -> None:
        self._transport = transport

    @property
    def _logger(self) -> LoggerLike:
        return self._transport.logger

    async def _call(
        self,
        method: str,
        path: str,
        response_model: type[M],
        payload: Any = None,
        *,
        action: str,
    ) -> ApiResult[M]:
        try:
            return await self._transport.request(method, self._transport.url_for(path), payload, response_model)
        except Exception as exc:
            self._logger.error("Failed to %s: %s", action, exc)
            raise

    def _succeeded(self, envelope: ApiEnvelope, *, action: str) -> bool:
        return is_success(envelope, logger=self._logger, action=action)
