"""Tests del recurso de tags."""

from __future__ import annotations

import pytest

from chat2desk.core.errors import (
    InvalidClientIDError,
    InvalidIDError,
    InvalidParametersError,
    InvalidRequestIDError,
    InvalidResponseError,
    InvalidTagIDError,
)

SUCCESS = {"status": "success", "message": "Tags assigned"}


class TestListTags:
    @pytest.mark.asyncio
    async def test_clamps_offset_and_limit(self, client, vendor) -> None:
        vendor.reply("GET", "v1/tags", {"status": "success", "data": [{"id": 1, "label": "vip"}], "meta": {"total": 1}})

        page = await client.tags.list_page(offset=-5, limit=500)

        params = vendor.requests[0].url.params
        assert (params["offset"], params["limit"]) == ("0", "200")
        assert page.items[0].label == "vip"

    @pytest.mark.asyncio
    async def test_default_limit(self, client, vendor) -> None:
        vendor.reply("GET", "v1/tags", {"status": "success", "data": []})

        await client.tags.list_page(limit=0)

        assert vendor.requests[0].url.params["limit"] == "10"

    @pytest.mark.asyncio
    async def test_non_success_is_invalid_response(self, client, vendor) -> None:
        vendor.reply("GET", "v1/tags", {"status": "error", "errors": "limit is too big"})

        with pytest.raises(InvalidResponseError):
            await client.tags.list_page()

    @pytest.mark.asyncio
    async def test_get_unknown_tag(self, client, vendor) -> None:
        vendor.reply("GET", "v1/tags/0", {"status": "error", "errors": "Tag not found"})

        with pytest.raises(InvalidIDError):
            await client.tags.get(0)


class TestAssignTags:
    @pytest.mark.asyncio
    async def test_empty_tag_list_fails_before_request(self, client, vendor) -> None:
        with pytest.raises(InvalidParametersError):
            await client.tags.assign_to_client([], 10)
        assert vendor.requests == []

    @pytest.mark.asyncio
    async def test_assign_twice_is_not_an_error(self, client, vendor) -> None:
        vendor.reply("POST", "v1/tags/assign_to", SUCCESS)

        await client.tags.assign_to_client([1, 2], 10)
        await client.tags.assign_to_client([1, 2], 10)

        assert vendor.last_json() == {"tag_ids": [1, 2], "assignee_type": "client", "assignee_id": 10}
        assert len(vendor.requests) == 2

    @pytest.mark.asyncio
    async def test_unknown_assignee_type_means_request(self, client, vendor) -> None:
        vendor.reply("POST", "v1/tags/assign_to", SUCCESS)

        await client.tags.assign([3], "dialog", 44)

        assert vendor.last_json()["assignee_type"] == "request"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("message", "error_cls", "method"),
        [
            ("Request does not belong to company", InvalidRequestIDError, "assign_to_request"),
            ("Client does not belong to company", InvalidClientIDError, "assign_to_client"),
        ],
    )
    async def test_foreign_assignee(self, client, vendor, message, error_cls, method) -> None:
        vendor.reply("POST", "v1/tags/assign_to", {"status": "error", "errors": message})

        with pytest.raises(error_cls):
            await getattr(client.tags, method)([1], 999)


class TestRemoveTags:
    @pytest.mark.asyncio
    async def test_remove_from_client_payload(self, client, vendor) -> None:
        vendor.reply("DELETE", "v1/tags/5/delete_from", SUCCESS)

        await client.tags.remove_from_client(5, 10)

        assert vendor.last_json() == {"client_id": 10}

    @pytest.mark.asyncio
    async def test_remove_from_request_payload(self, client, vendor) -> None:
        vendor.reply("DELETE", "v1/tags/5/delete_from", SUCCESS)

        await client.tags.remove_from_request(5, 20)

        assert vendor.last_json() == {"request_id": 20}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("message", "error_cls"),
        [
            ("Tag does not exist", InvalidTagIDError),
            ("Request not found", InvalidRequestIDError),
            ("Client not found", InvalidClientIDError),
        ],
    )
    async def test_remove_errors(self, client, vendor, message, error_cls) -> None:
        vendor.reply("DELETE", "v1/tags/5/delete_from", {"status": "error", "errors": message})

        with pytest.raises(error_cls):
            await client.tags.remove_from_client(5, 10)
