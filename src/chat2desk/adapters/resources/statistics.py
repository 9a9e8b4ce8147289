"""Estadísticas: informe de valoraciones (`report=rating`) por día."""

from __future__ import annotations

from datetime import date as date_type

from chat2desk.adapters.http_client import build_path
from chat2desk.adapters.pagination import DEFAULT_PAGE_SIZE, collect_all
from chat2desk.adapters.resources.base import Resource
from chat2desk.core.domain.models import StatisticRating, StatisticRatingsResponse
from chat2desk.core.domain.timefmt import format_vendor_date
from chat2desk.core.errors import InvalidParametersError
from chat2desk.core.interfaces.pages import Page


class StatisticsResource(Resource):
    async def rating_page(
        self,
        day: date_type | None = None,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> Page[StatisticRating]:
        """Una página de valoraciones de `day` (hoy si no se indica)."""

        day = day or date_type.today()
        path = build_path(
            "v1/statistics",
            {"report": "rating", "date": format_vendor_date(day), "offset": offset, "limit": limit},
        )
        result = await self._call("GET", path, StatisticRatingsResponse, action="get statistics")
        response = result.data
        if not self._succeeded(response, action="get statistics"):
            self._logger.error("Failed to get statistics: %s", response.errors)
            raise InvalidParametersError(errors=response.errors)
        return Page(items=response.data, total=response.meta.total)

    async def rating_all(self, day: date_type | None = None, page_size: int = DEFAULT_PAGE_SIZE) -> list[StatisticRating]:
        day = day or date_type.today()

        async def fetch(offset: int, limit: int) -> Page[StatisticRating]:
            return await self.rating_page(day, offset, limit)

        return await collect_all(fetch, page_size=page_size)
