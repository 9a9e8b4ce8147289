"""Información de la compañía asociada al token."""

from __future__ import annotations

from chat2desk.adapters.resources.base import Resource
from chat2desk.core.domain.models import CompanyInfo, CompanyInfoResponse
from chat2desk.core.errors import InvalidResponseError


class CompaniesResource(Resource):
    async def api_info(self) -> CompanyInfo:
        result = await self._call("GET", "v1/companies/api_info", CompanyInfoResponse, action="get company info")
        response = result.data
        if not self._succeeded(response, action="get company info") or response.data is None:
            self._logger.error("Failed to get company info: %s", response.errors)
            raise InvalidResponseError(body=result.body)
        return response.data
