"""Transporte HTTP (httpx).

Qué hace:
- Construye y ejecuta una petición contra la API: cabeceras JSON, token
  (solo si está configurado), timeout por request.
- Codifica el payload: `bytes`/`str` tal cual, cualquier otra cosa a JSON.
- Lee siempre el cuerpo completo: el proveedor señala el token inválido con
  un texto en el cuerpo, no con un código HTTP.
- Decodifica a un modelo Pydantic opcional; si falla, `InvalidResponseError`
  conserva el cuerpo crudo.
- Reintenta una sola vez, sin espera, cuando vence el timeout local.

Nota:
- Cada llamada abre su propio `httpx.AsyncClient` salvo que se inyecte uno
  compartido (pool) en `ApiTransport(http_client=...)`.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Generic, Mapping, TypeVar
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel, ValidationError

from chat2desk.core.config import ClientSettings
from chat2desk.core.errors import InvalidResponseError, InvalidTokenError
from chat2desk.core.interfaces.logger import LoggerLike

_logger = logging.getLogger(__name__)

INVALID_TOKEN_MARKER = b"Token is not correct"

M = TypeVar("M", bound=BaseModel)


def build_headers(settings: ClientSettings) -> dict[str, str]:
    headers = {"Content-Type": "application/json"}
    if settings.token:
        headers["Authorization"] = settings.token
    return headers


def build_async_client(
    settings: ClientSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con las cabeceras y el timeout de `settings`."""

    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.timeout_seconds),
        headers=build_headers(settings),
        transport=transport,
    )


def encode_payload(payload: Any) -> bytes | None:
    """Cuerpo de la petición: None => sin cuerpo (GET/DELETE)."""

    if payload is None:
        return None
    if isinstance(payload, (bytes, bytearray)):
        return bytes(payload)
    if isinstance(payload, str):
        return payload.encode("utf-8")
    if isinstance(payload, BaseModel):
        return payload.model_dump_json(by_alias=True).encode("utf-8")
    return json.dumps(payload).encode("utf-8")


def build_path(path: str, params: Mapping[str, Any] | None = None) -> str:
    """Ruta relativa con query string; el orden de `params` se respeta."""

    if not params:
        return path
    return f"{path}?{urlencode(params, doseq=True)}"


def has_invalid_token(body: bytes) -> bool:
    return INVALID_TOKEN_MARKER in body


@dataclass(frozen=True)
class ApiResult(Generic[M]):
    """Cuerpo crudo + modelo decodificado (si se pidió uno)."""

    body: bytes
    data: M | None = None


class ApiTransport:
    """Núcleo de transporte compartido por todos los recursos."""

    def __init__(
        self,
        settings: ClientSettings,
        *,
        logger: LoggerLike | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._logger: LoggerLike = logger if logger is not None else _logger
        self._transport = transport
        self._http_client = http_client

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    @property
    def logger(self) -> LoggerLike:
        return self._logger

    def url_for(self, path: str) -> str:
        return self._settings.url_for(path)

    async def get(self, path: str, response_model: type[M] | None = None) -> ApiResult[M]:
        return await self.request("GET", self.url_for(path), response_model=response_model)

    async def post(self, path: str, payload: Any = None, response_model: type[M] | None = None) -> ApiResult[M]:
        return await self.request("POST", self.url_for(path), payload, response_model)

    async def put(self, path: str, payload: Any = None, response_model: type[M] | None = None) -> ApiResult[M]:
        return await self.request("PUT", self.url_for(path), payload, response_model)

    async def delete(self, path: str, payload: Any = None, response_model: type[M] | None = None) -> ApiResult[M]:
        return await self.request("DELETE", self.url_for(path), payload, response_model)

    async def request(
        self,
        method: str,
        url: str,
        payload: Any = None,
        response_model: type[M] | None = None,
    ) -> ApiResult[M]:
        """Una ida y vuelta HTTP (más un reintento si vence el timeout local).

        Raises:
            InvalidTokenError: el cuerpo contiene el marcador de token inválido.
            InvalidResponseError: el cuerpo no encaja en `response_model`.
            httpx.HTTPError: errores de red; `httpx.TimeoutException` solo
                tras el segundo intento.

        El reintento se decide por tipo (`httpx.TimeoutException`, vencimiento
        del timeout local del cliente), no por el texto del error; la
        cancelación de la tarea nunca se reintenta.
        """

        content = encode_payload(payload)
        try:
            return await self._do_request(method, url, content, response_model)
        except httpx.TimeoutException as exc:
            self._logger.warning("API %s %s timed out, retrying once: %s", method, url, exc)
            return await self._do_request(method, url, content, response_model)

    async def _do_request(
        self,
        method: str,
        url: str,
        content: bytes | None,
        response_model: type[M] | None,
    ) -> ApiResult[M]:
        start = time.perf_counter()
        try:
            body = await self._send(method, url, content)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            self._logger.debug("API %s (%.2f ms) %s", method, elapsed_ms, url)

        if has_invalid_token(body):
            raise InvalidTokenError()

        if response_model is None:
            return ApiResult(body=body)

        try:
            data = response_model.model_validate_json(body)
        except ValidationError as exc:
            self._logger.error("Failed to decode response (%s): %s", body[:500], exc)
            raise InvalidResponseError(body=body) from exc
        return ApiResult(body=body, data=data)

    async def _send(self, method: str, url: str, content: bytes | None) -> bytes:
        if self._http_client is not None:
            response = await self._http_client.request(
                method,
                url,
                content=content,
                headers=build_headers(self._settings),
                timeout=httpx.Timeout(self._settings.timeout_seconds),
            )
            return await response.aread()

        async with build_async_client(self._settings, transport=self._transport) as client:
            response = await client.request(method, url, content=content)
            return await response.aread()
