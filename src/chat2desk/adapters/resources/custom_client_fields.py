from __future__ import annotations

from chat2desk.adapters.resources.base import Resource
from chat2desk.core.domain.models import CustomClientField, CustomClientFieldsResponse
from chat2desk.core.errors import InvalidResponseError


class CustomClientFieldsResource(Resource):
    """Campos personalizados de cliente. El endpoint responde `status: "ok"`."""

    async def list(self) -> list[CustomClientField]:
        result = await self._call(
            "GET", "v1/custom_client_fields", CustomClientFieldsResponse, action="get custom client fields"
        )
        response = result.data
        if not self._succeeded(response, action="get custom client fields"):
            self._logger.error("Failed to get custom client fields: %s", response.errors)
            raise InvalidResponseError(body=result.body)
        return response.data
