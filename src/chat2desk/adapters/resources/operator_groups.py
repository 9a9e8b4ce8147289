from __future__ import annotations

from chat2desk.adapters.resources.base import Resource
from chat2desk.core.domain.models import OperatorGroup, OperatorGroupsResponse
from chat2desk.core.errors import InvalidParametersError


class OperatorGroupsResource(Resource):
    async def list(self) -> list[OperatorGroup]:
        result = await self._call("GET", "v1/operators_groups", OperatorGroupsResponse, action="get operator groups")
        response = result.data
        if not self._succeeded(response, action="get operator groups"):
            self._logger.error("Failed to get operator groups: %s", response.errors)
            raise InvalidParametersError(errors=response.errors)
        return response.data
