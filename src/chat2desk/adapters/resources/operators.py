from __future__ import annotations

from chat2desk.adapters.http_client import build_path
from chat2desk.adapters.pagination import DEFAULT_PAGE_SIZE, collect_all
from chat2desk.adapters.resources.base import Resource
from chat2desk.core.domain.models import Operator, OperatorsResponse
from chat2desk.core.errors import InvalidParametersError
from chat2desk.core.interfaces.pages import Page


class OperatorsResource(Resource):
    async def list_page(self, offset: int = 0, limit: int = DEFAULT_PAGE_SIZE) -> Page[Operator]:
        path = build_path("v1/operators", {"offset": offset, "limit": limit})
        result = await self._call("GET", path, OperatorsResponse, action="get operators")
        response = result.data
        if not self._succeeded(response, action="get operators"):
            self._logger.error("Failed to get operators: %s", response.errors)
            raise InvalidParametersError(errors=response.errors)
        return Page(items=response.data, total=response.meta.total)

    async def list_all(self, page_size: int = DEFAULT_PAGE_SIZE) -> list[Operator]:
        return await collect_all(self.list_page, page_size=page_size)
