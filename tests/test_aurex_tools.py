"""
Aurex Tools Tests
-----------------
Tests for the eleven dashboard tools.

Tests cover:
- Schemas: descriptions, required fields, currency enum
- Endpoint binding: method, path, query and body per tool
- Envelope normalization for success, remote rejection and local failure
"""

import asyncio
import json
from pathlib import Path
import sys

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from aurex import create_aurex_tools, AurexAgentConfig, DEFAULT_BASE_URL
from aurex.tools.registry import PermissionLevel


BASE = "https://dashboard.test/api"

REQUIRED = {
    "aurex_create_user": ["firstName", "lastName"],
    "aurex_get_user": ["userId"],
    "aurex_get_wallet": ["userId"],
    "aurex_create_deposit": ["userId", "amount", "currency"],
    "aurex_list_deposits": ["userId"],
    "aurex_create_card": ["userId", "cardName", "initialBalance"],
    "aurex_list_cards": ["userId"],
    "aurex_get_card": ["userId", "cardId"],
    "aurex_topup_card": ["userId", "cardId", "amount"],
    "aurex_get_transactions": ["userId", "cardId"],
    "aurex_get_otp": ["userId", "cardId"],
}

# tool name -> (input, method, path, query, body)
CALLS = {
    "aurex_create_user": (
        {"firstName": "Ann", "lastName": "Lee"},
        "POST", "/api/users", {}, {"firstName": "Ann", "lastName": "Lee"},
    ),
    "aurex_get_user": ({"userId": "u1"}, "GET", "/api/users/u1", {}, None),
    "aurex_get_wallet": ({"userId": "u1"}, "GET", "/api/users/u1/wallet", {}, None),
    "aurex_create_deposit": (
        {"userId": "u1", "amount": 100, "currency": "USDC"},
        "POST", "/api/users/u1/deposits", {}, {"amount": 100, "currency": "USDC"},
    ),
    "aurex_list_deposits": (
        {"userId": "u1", "limit": 5, "offset": 10},
        "GET", "/api/users/u1/deposits", {"limit": "5", "offset": "10"}, None,
    ),
    "aurex_create_card": (
        {"userId": "u1", "cardName": "Marketing Card", "initialBalance": 50},
        "POST", "/api/users/u1/cards", {}, {"cardName": "Marketing Card", "initialBalance": 50},
    ),
    "aurex_list_cards": ({"userId": "u1"}, "GET", "/api/users/u1/cards", {}, None),
    "aurex_get_card": ({"userId": "u1", "cardId": "c1"}, "GET", "/api/users/u1/cards/c1", {}, None),
    "aurex_topup_card": (
        {"userId": "u1", "cardId": "c1", "amount": 20},
        "POST", "/api/users/u1/cards/c1/topup", {}, {"amount": 20},
    ),
    "aurex_get_transactions": (
        {"userId": "u1", "cardId": "c1"},
        "GET", "/api/users/u1/cards/c1/transactions", {}, None,
    ),
    "aurex_get_otp": (
        {"userId": "u1", "cardId": "c1"},
        "GET", "/api/users/u1/otp", {"cardId": "c1"}, None,
    ),
}


def _tools(transport):
    return create_aurex_tools(AurexAgentConfig(api_key="k", base_url=BASE), transport=transport)


class TestSchemas:
    """Tests for tool definitions."""

    def test_eleven_tools(self, transport):
        tools = _tools(transport)

        assert len(tools) == 11
        assert set(tools) == set(REQUIRED)

    @pytest.mark.parametrize("name", sorted(REQUIRED))
    def test_description_and_required(self, transport, name):
        """Every tool has a description and exactly its mandatory fields."""
        tool = _tools(transport)[name]

        assert tool.description.strip()
        assert tool.parameters["type"] == "object"
        assert tool.parameters["required"] == REQUIRED[name]
        assert set(REQUIRED[name]) <= set(tool.parameters["properties"])

    def test_deposit_currency_enum(self, transport):
        props = _tools(transport)["aurex_create_deposit"].parameters["properties"]

        assert props["currency"]["enum"] == ["SOL", "USDT", "USDC"]
        assert props["amount"]["type"] == "number"

    def test_list_deposits_optional_pagination(self, transport):
        props = _tools(transport)["aurex_list_deposits"].parameters["properties"]

        assert "limit" in props
        assert "offset" in props

    def test_permissions(self, transport):
        """POST tools are WRITE, GET tools are READ."""
        tools = _tools(transport)
        writes = {t.name for t in tools.list_by_permission(PermissionLevel.WRITE)}

        assert writes == {
            "aurex_create_user", "aurex_create_deposit",
            "aurex_create_card", "aurex_topup_card",
        }

    def test_categories(self, transport):
        tools = _tools(transport)

        assert len(tools.list_by_category("users")) == 3
        assert len(tools.list_by_category("deposits")) == 2
        assert len(tools.list_by_category("cards")) == 6


class TestEndpointBinding:
    """Each tool issues exactly one request to its endpoint."""

    @pytest.mark.parametrize("name", sorted(CALLS))
    def test_request_shape(self, transport, name):
        args, method, path, query, body = CALLS[name]

        asyncio.run(_tools(transport)[name].execute(args))

        assert len(transport.requests) == 1
        request = transport.last
        assert request.method == method
        assert request.url.path == path
        assert dict(request.url.params) == query
        assert request.headers["Authorization"] == "Bearer k"
        if body is None:
            assert request.content == b""
        else:
            assert json.loads(request.content) == body

    def test_get_otp_url(self, transport):
        """OTP request carries cardId as a query parameter."""
        asyncio.run(_tools(transport)["aurex_get_otp"].execute({"userId": "u1", "cardId": "c1"}))

        assert str(transport.last.url) == f"{BASE}/users/u1/otp?cardId=c1"

    def test_list_deposits_without_pagination(self, transport):
        asyncio.run(_tools(transport)["aurex_list_deposits"].execute({"userId": "123"}))

        assert transport.last.url.query == b""

    def test_list_deposits_zero_is_sent(self, transport):
        """Explicit 0 is a valid pagination value."""
        asyncio.run(_tools(transport)["aurex_list_deposits"].execute(
            {"userId": "123", "limit": 0, "offset": 0}
        ))

        assert dict(transport.last.url.params) == {"limit": "0", "offset": "0"}

    def test_path_segments_are_encoded(self, transport):
        asyncio.run(_tools(transport)["aurex_get_user"].execute({"userId": "../admin"}))

        assert transport.last.url.raw_path == b"/api/users/..%2Fadmin"

    def test_default_base_url(self, transport):
        """Without baseUrl the production endpoint is used."""
        tools = create_aurex_tools({"apiKey": "k"}, transport=transport)

        asyncio.run(tools["aurex_get_wallet"].execute({"userId": "u1"}))

        assert str(transport.last.url) == f"{DEFAULT_BASE_URL}/users/u1/wallet"


class TestEnvelope:
    """Result normalization shared by all tools."""

    @pytest.mark.parametrize("name", sorted(CALLS))
    def test_success_passthrough(self, make_transport, name):
        data = {"id": "x", "balance": 12.5}
        transport = make_transport(body={"success": True, "data": data})

        result = asyncio.run(_tools(transport)[name].execute(CALLS[name][0]))

        assert result == {"success": True, "data": data}
        assert "error" not in result

    @pytest.mark.parametrize("name", sorted(CALLS))
    def test_remote_rejection(self, make_transport, name):
        transport = make_transport(body={"success": False, "error": "E"})

        result = asyncio.run(_tools(transport)[name].execute(CALLS[name][0]))

        assert result == {"success": False, "error": "E"}
        assert "data" not in result

    @pytest.mark.parametrize("name", sorted(CALLS))
    def test_transport_failure_is_reported(self, make_transport, name):
        transport = make_transport(error=httpx.ConnectError("connection refused"))

        result = asyncio.run(_tools(transport)[name].execute(CALLS[name][0]))

        assert result == {"success": False, "error": "connection refused"}

    def test_remote_numeric_error(self, make_transport):
        """Non-string remote errors are reported, not raised."""
        transport = make_transport(body={"success": False, "error": 404})

        result = asyncio.run(_tools(transport)["aurex_get_user"].execute({"userId": "u1"}))

        assert result == {"success": False, "error": "404"}

    def test_remote_object_error(self, make_transport):
        transport = make_transport(
            body={"success": False, "error": {"code": "CARD_FROZEN", "message": "Card is frozen"}}
        )
        tools = _tools(transport)

        result = asyncio.run(tools.execute("aurex_get_card", {"userId": "u1", "cardId": "c1"}))

        assert result["success"] is False
        assert "data" not in result
        assert json.loads(result["error"]) == {"code": "CARD_FROZEN", "message": "Card is frozen"}

    def test_remote_rejection_without_message(self, make_transport):
        transport = make_transport(body={"success": False})

        result = asyncio.run(_tools(transport)["aurex_get_user"].execute({"userId": "u1"}))

        assert result == {"success": False, "error": "Request failed"}

    def test_missing_success_flag_is_failure(self, make_transport):
        transport = make_transport(body={"data": {"id": "u1"}})

        result = asyncio.run(_tools(transport)["aurex_get_user"].execute({"userId": "u1"}))

        assert result["success"] is False

    def test_invalid_json(self, make_transport):
        transport = make_transport(raw=b"not json")

        result = asyncio.run(_tools(transport)["aurex_get_user"].execute({"userId": "u1"}))

        assert result["success"] is False
        assert result["error"]

    def test_non_object_body(self, make_transport):
        transport = make_transport(body=[1, 2, 3])

        result = asyncio.run(_tools(transport)["aurex_get_user"].execute({"userId": "u1"}))

        assert result == {"success": False, "error": "Unexpected response shape: list"}

    def test_missing_argument(self, transport):
        """A missing path argument becomes a failed result, not an exception."""
        result = asyncio.run(_tools(transport)["aurex_get_card"].execute({"userId": "u1"}))

        assert result == {"success": False, "error": "Missing required parameter: cardId"}
        assert transport.requests == []

    def test_empty_exception_message(self, make_transport):
        transport = make_transport(error=httpx.ReadTimeout(""))

        result = asyncio.run(_tools(transport)["aurex_get_user"].execute({"userId": "u1"}))

        assert result == {"success": False, "error": "ReadTimeout"}

    def test_concurrent_calls(self, make_transport):
        """Tools share only immutable config and can run concurrently."""
        transport = make_transport(body={"success": True, "data": 1})
        tools = _tools(transport)

        async def run_all():
            return await asyncio.gather(*(
                tools[name].execute(CALLS[name][0]) for name in CALLS
            ))

        results = asyncio.run(run_all())

        assert all(r == {"success": True, "data": 1} for r in results)
        assert len(transport.requests) == len(CALLS)
