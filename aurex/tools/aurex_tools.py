"""
Aurex Tools
-----------
The eleven dashboard API endpoints as agent tools.

Usable with any framework that calls functions described by
name/description/JSON Schema (Anthropic, OpenAI, LangChain and others).
Each tool performs exactly one request; amounts, currencies and OTP
expiry are enforced by the remote service, not here.
"""

from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import quote

import httpx

from ..api.client import AurexClient
from ..config import AurexAgentConfig
from ..infra.logging import get_logger
from .registry import ParameterType, PermissionLevel, Tool, ToolParameter, ToolRegistry, ToolSchema
from .types import DEPOSIT_CURRENCIES

logger = get_logger("tools.aurex")


def _segment(args: Mapping[str, Any], key: str) -> str:
    """Percent-encode a path segment taken from the tool input."""
    return quote(str(args[key]), safe="")


def _user_id() -> ToolParameter:
    return ToolParameter(name="userId", type=ParameterType.STRING, description="The user's unique ID")


def _card_id() -> ToolParameter:
    return ToolParameter(name="cardId", type=ParameterType.STRING, description="The card's unique ID")


def create_aurex_tools(
    config: Union[AurexAgentConfig, Mapping[str, Any]],
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ToolRegistry:
    """
    Create all Aurex tools, sharing one client.

    Args:
        config: ``AurexAgentConfig`` or a ``{"apiKey", "baseUrl"}`` mapping
        transport: Optional httpx transport, e.g. ``httpx.MockTransport``

    Returns:
        Registry mapping tool name to Tool
    """
    config = AurexAgentConfig.coerce(config)
    client = AurexClient.from_config(config, transport=transport)
    registry = ToolRegistry()

    # Users

    async def create_user(args: Dict[str, Any]) -> Any:
        return await client.post("/users", {"firstName": args["firstName"], "lastName": args["lastName"]})

    registry.register(Tool(
        name="aurex_create_user",
        description=(
            "Create a new user in the Aurex system. Returns a userId needed for all "
            "subsequent operations like deposits and cards."
        ),
        schema=ToolSchema(parameters=[
            ToolParameter(name="firstName", type=ParameterType.STRING, description="User's first name"),
            ToolParameter(name="lastName", type=ParameterType.STRING, description="User's last name"),
        ]),
        permission=PermissionLevel.WRITE,
        request=create_user,
        category="users"
    ))

    async def get_user(args: Dict[str, Any]) -> Any:
        return await client.get(f"/users/{_segment(args, 'userId')}")

    registry.register(Tool(
        name="aurex_get_user",
        description="Get information about an existing Aurex user by their userId.",
        schema=ToolSchema(parameters=[_user_id()]),
        permission=PermissionLevel.READ,
        request=get_user,
        category="users"
    ))

    async def get_wallet(args: Dict[str, Any]) -> Any:
        return await client.get(f"/users/{_segment(args, 'userId')}/wallet")

    registry.register(Tool(
        name="aurex_get_wallet",
        description=(
            "Get the wallet balance for a user. Returns available balance, pending "
            "balance, and amount allocated to cards."
        ),
        schema=ToolSchema(parameters=[_user_id()]),
        permission=PermissionLevel.READ,
        request=get_wallet,
        category="users"
    ))

    # Deposits

    async def create_deposit(args: Dict[str, Any]) -> Any:
        return await client.post(
            f"/users/{_segment(args, 'userId')}/deposits",
            {"amount": args["amount"], "currency": args["currency"]},
        )

    registry.register(Tool(
        name="aurex_create_deposit",
        description=(
            "Create a crypto deposit request for a user. Returns a deposit address to "
            "send funds to. Supported currencies: SOL, USDT, USDC. Funds appear in "
            "wallet after blockchain confirmation."
        ),
        schema=ToolSchema(parameters=[
            _user_id(),
            ToolParameter(name="amount", type=ParameterType.NUMBER, description="Amount to deposit in USD"),
            ToolParameter(
                name="currency",
                type=ParameterType.STRING,
                description="Cryptocurrency to deposit",
                enum=DEPOSIT_CURRENCIES
            ),
        ]),
        permission=PermissionLevel.WRITE,
        request=create_deposit,
        category="deposits"
    ))

    async def list_deposits(args: Dict[str, Any]) -> Any:
        params = {}
        # 0 is a valid page position; only absent values are dropped
        if args.get("limit") is not None:
            params["limit"] = args["limit"]
        if args.get("offset") is not None:
            params["offset"] = args["offset"]
        return await client.get(f"/users/{_segment(args, 'userId')}/deposits", params)

    registry.register(Tool(
        name="aurex_list_deposits",
        description="List all deposits for a user with pagination support.",
        schema=ToolSchema(parameters=[
            _user_id(),
            ToolParameter(
                name="limit",
                type=ParameterType.NUMBER,
                description="Number of records to return (default 10)",
                required=False
            ),
            ToolParameter(
                name="offset",
                type=ParameterType.NUMBER,
                description="Pagination offset (default 0)",
                required=False
            ),
        ]),
        permission=PermissionLevel.READ,
        request=list_deposits,
        category="deposits"
    ))

    # Cards

    async def create_card(args: Dict[str, Any]) -> Any:
        return await client.post(
            f"/users/{_segment(args, 'userId')}/cards",
            {"cardName": args["cardName"], "initialBalance": args["initialBalance"]},
        )

    registry.register(Tool(
        name="aurex_create_card",
        description=(
            "Issue a new virtual card for a user. Minimum balance: $25, maximum: "
            "$100,000. Funds are deducted from the user's wallet including service "
            "and issuance fees."
        ),
        schema=ToolSchema(parameters=[
            _user_id(),
            ToolParameter(
                name="cardName",
                type=ParameterType.STRING,
                description="A name for the card (e.g. 'Marketing Card')"
            ),
            ToolParameter(
                name="initialBalance",
                type=ParameterType.NUMBER,
                description="Initial balance to load on the card in USD (min: 25, max: 100000)"
            ),
        ]),
        permission=PermissionLevel.WRITE,
        request=create_card,
        category="cards"
    ))

    async def list_cards(args: Dict[str, Any]) -> Any:
        return await client.get(f"/users/{_segment(args, 'userId')}/cards")

    registry.register(Tool(
        name="aurex_list_cards",
        description="List all virtual cards for a user.",
        schema=ToolSchema(parameters=[_user_id()]),
        permission=PermissionLevel.READ,
        request=list_cards,
        category="cards"
    ))

    async def get_card(args: Dict[str, Any]) -> Any:
        return await client.get(f"/users/{_segment(args, 'userId')}/cards/{_segment(args, 'cardId')}")

    registry.register(Tool(
        name="aurex_get_card",
        description=(
            "Get full card details including card number, expiry, and CVV. "
            "IMPORTANT: Only call this server-side. Never expose card details to "
            "client-side code."
        ),
        schema=ToolSchema(parameters=[_user_id(), _card_id()]),
        permission=PermissionLevel.READ,
        request=get_card,
        category="cards"
    ))

    async def topup_card(args: Dict[str, Any]) -> Any:
        return await client.post(
            f"/users/{_segment(args, 'userId')}/cards/{_segment(args, 'cardId')}/topup",
            {"amount": args["amount"]},
        )

    registry.register(Tool(
        name="aurex_topup_card",
        description=(
            "Top up a card with additional funds from the user's wallet. Minimum: $10, "
            "maximum: $10,000. A 3% service fee is applied."
        ),
        schema=ToolSchema(parameters=[
            _user_id(),
            _card_id(),
            ToolParameter(
                name="amount",
                type=ParameterType.NUMBER,
                description="Amount to add to the card in USD (min: 10, max: 10000)"
            ),
        ]),
        permission=PermissionLevel.WRITE,
        request=topup_card,
        category="cards"
    ))

    async def get_transactions(args: Dict[str, Any]) -> Any:
        return await client.get(
            f"/users/{_segment(args, 'userId')}/cards/{_segment(args, 'cardId')}/transactions"
        )

    registry.register(Tool(
        name="aurex_get_transactions",
        description="Get transaction history for a specific card.",
        schema=ToolSchema(parameters=[_user_id(), _card_id()]),
        permission=PermissionLevel.READ,
        request=get_transactions,
        category="cards"
    ))

    async def get_otp(args: Dict[str, Any]) -> Any:
        return await client.get(f"/users/{_segment(args, 'userId')}/otp", {"cardId": args["cardId"]})

    registry.register(Tool(
        name="aurex_get_otp",
        description=(
            "Get a one-time password (OTP) for card authentication. OTP expires in "
            "300 seconds, use immediately."
        ),
        schema=ToolSchema(parameters=[_user_id(), _card_id()]),
        permission=PermissionLevel.READ,
        request=get_otp,
        category="cards"
    ))

    logger.info(f"Created {len(registry)} Aurex tools for {client.base_url}")
    return registry
