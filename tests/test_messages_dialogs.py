"""Tests de mensajes y diálogos."""

from __future__ import annotations

import pytest

from chat2desk.core.domain.models import DialogsQuery, MessagePayload
from chat2desk.core.errors import (
    DialogClosedError,
    InvalidIDError,
    InvalidMessageIDError,
    InvalidOperatorGroupIDError,
    InvalidOperatorIDError,
    InvalidParametersError,
)


class TestMessages:
    @pytest.mark.asyncio
    async def test_send(self, client, vendor) -> None:
        vendor.reply("POST", "v1/messages", {"status": "success", "data": {"message_id": 500, "client_id": 7}})

        message = await client.messages.send(MessagePayload(text="hola", client_id=7, type="system"))

        assert message.message_id == 500
        assert vendor.last_json() == {"text": "hola", "client_id": 7, "type": "system"}

    @pytest.mark.asyncio
    async def test_send_rejected(self, client, vendor) -> None:
        vendor.reply("POST", "v1/messages", {"status": "error", "errors": {"client_id": ["is missing"]}})

        with pytest.raises(InvalidParametersError):
            await client.messages.send(MessagePayload(text="hola"))

    @pytest.mark.asyncio
    async def test_transfer_to_group_payload(self, client, vendor) -> None:
        vendor.reply("POST", "v1/messages/500/transfer_to_group", {"status": "success"})

        await client.messages.transfer_to_group(500, 12, only_online=True)

        assert vendor.last_json() == {"group_id": 12, "only_online": True}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("body", "error_cls"),
        [
            ({"status": "error", "message": "Operator group not found"}, InvalidOperatorGroupIDError),
            ({"status": "error", "errors": "Message not found"}, InvalidMessageIDError),
            ({"status": "error", "errors": "Something else"}, InvalidParametersError),
        ],
    )
    async def test_transfer_to_group_errors(self, client, vendor, body, error_cls) -> None:
        vendor.reply("POST", "v1/messages/500/transfer_to_group", body)

        with pytest.raises(error_cls):
            await client.messages.transfer_to_group(500, 999_999)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("body", "error_cls"),
        [
            ({"status": "error", "errors": "Operator not found"}, InvalidOperatorIDError),
            ({"status": "error", "errors": "Message not found"}, InvalidMessageIDError),
        ],
    )
    async def test_transfer_to_operator_errors(self, client, vendor, body, error_cls) -> None:
        vendor.reply("POST", "v1/messages/1/transfer", body)

        with pytest.raises(error_cls):
            await client.messages.transfer_to_operator(1, 2)


class TestDialogs:
    @pytest.mark.asyncio
    async def test_list_with_filters(self, client, vendor) -> None:
        vendor.reply("GET", "v1/dialogs", {"status": "success", "data": [{"id": 3, "state": "open"}], "meta": {"total": 1}})

        page = await client.dialogs.list_page(DialogsQuery(state="open", operator_id=4, limit=50))

        params = vendor.requests[0].url.params
        assert dict(params) == {"limit": "50", "state": "open", "operator_id": "4"}
        assert page.items[0].id == 3

    @pytest.mark.asyncio
    async def test_get_not_found(self, client, vendor) -> None:
        vendor.reply("GET", "v1/dialogs/0", {"status": "error", "message": "not_found", "data": []})

        with pytest.raises(InvalidIDError):
            await client.dialogs.get(0)

    @pytest.mark.asyncio
    async def test_get_other_failure(self, client, vendor) -> None:
        vendor.reply("GET", "v1/dialogs/1", {"status": "error", "message": "forbidden"})

        with pytest.raises(InvalidParametersError):
            await client.dialogs.get(1)

    @pytest.mark.asyncio
    async def test_close_payload(self, client, vendor) -> None:
        vendor.reply("PUT", "v1/dialogs/3", {"status": "success"})

        await client.dialogs.close(3, operator_id=9)

        assert vendor.last_json() == {"state": "closed", "operator_id": 9}

    @pytest.mark.asyncio
    async def test_close_already_closed(self, client, vendor) -> None:
        vendor.reply("PUT", "v1/dialogs/3", {"status": "error", "errors": "Dialog is already closed"})

        with pytest.raises(DialogClosedError):
            await client.dialogs.close(3)

    @pytest.mark.asyncio
    async def test_close_unknown_dialog(self, client, vendor) -> None:
        vendor.reply("PUT", "v1/dialogs/0", {"status": "error", "message": "not_found"})

        with pytest.raises(InvalidIDError):
            await client.dialogs.close(0)
