"""Unit tests for tool dispatch."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from app.core.errors import ClientError, EmailNotConfiguredError, UnknownToolError
from app.schemas import ExportDataParams
from app.services.tool_service import ToolName, ToolService


class TestToolService:
    def test_lists_every_tool(self):
        assert ToolService().list_tools() == [
            "generateReport",
            "generateEmail",
            "generateInvoice",
            "sendEmail",
            "exportData",
        ]

    @pytest.mark.asyncio
    async def test_unknown_tool_refused_without_provider_contact(self):
        with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as post:
            with pytest.raises(UnknownToolError) as exc:
                await ToolService().invoke("launchRockets", {})

        assert exc.value.status_code == 400
        assert exc.value.detail == "Unknown tool: launchRockets"
        post.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_params_are_a_client_error(self):
        handler = AsyncMock()
        service = ToolService({ToolName.EXPORT_DATA: (ExportDataParams, handler)})

        with pytest.raises(ClientError) as exc:
            await service.invoke("exportData", {"data": "not a list"})

        assert exc.value.status_code == 400
        handler.assert_not_called()

    @pytest.mark.asyncio
    async def test_handler_exception_becomes_failed_result(self):
        handler = AsyncMock(side_effect=RuntimeError("disk full"))
        service = ToolService({ToolName.EXPORT_DATA: (ExportDataParams, handler)})

        result = await service.invoke("exportData", {"data": [{"a": 1}]})

        assert not result.success
        assert result.type == "export"
        assert result.error == "disk full"

    @pytest.mark.asyncio
    async def test_send_email_without_provider_is_client_error(self):
        with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as post:
            with pytest.raises(EmailNotConfiguredError) as exc:
                await ToolService().invoke("sendEmail", {"to": "a@b.c", "subject": "s", "message": "m"})

        assert exc.value.to_body()["required"] == ["api_key", "domain", "from_address"]
        post.assert_not_called()

    @pytest.mark.asyncio
    async def test_send_email_with_per_call_config(self):
        outcome_json = {"id": "<msg-1@mg.example.com>", "message": "Queued. Thank you."}
        response = _response(200, outcome_json)
        with patch("httpx.AsyncClient.post", new_callable=AsyncMock, return_value=response) as post:
            result = await ToolService().invoke("sendEmail", {
                "to": ["a@example.com", "b@example.com"],
                "subject": "Hello",
                "message": "Body",
                "data": [{"x": 1}],
                "mailgun_config": {"api_key": "k", "domain": "mg.example.com", "from": "me@example.com"},
            })

        assert result.success
        assert result.payload["content"] == "Email sent successfully to a@example.com, b@example.com"
        url = post.await_args.args[0]
        assert url == "https://api.mailgun.net/v3/mg.example.com/messages"
        sent = post.await_args.kwargs["data"]
        assert sent["from"] == "me@example.com"
        assert "<table" in sent["html"]


def _response(status, body):
    return httpx.Response(status, json=body, request=httpx.Request("POST", "https://api.mailgun.net"))
