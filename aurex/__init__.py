# Aurex agent tools - the Aurex dashboard API as AI agent tools
# Users, wallets, crypto deposits and virtual cards

from .config import AurexAgentConfig, DEFAULT_BASE_URL
from .api.client import AurexClient
from .core.envelope import ToolResult
from .tools.aurex_tools import create_aurex_tools
from .tools.registry import Tool, ToolRegistry
from .tools.types import (
    CreateUserInput,
    GetUserInput,
    GetWalletInput,
    CreateDepositInput,
    ListDepositsInput,
    CreateCardInput,
    ListCardsInput,
    GetCardInput,
    TopUpCardInput,
    GetTransactionsInput,
    GetOtpInput,
    DepositCurrency,
)

__version__ = "1.0.0"

__all__ = [
    "create_aurex_tools",
    "AurexAgentConfig",
    "AurexClient",
    "DEFAULT_BASE_URL",
    "Tool",
    "ToolRegistry",
    "ToolResult",
    "CreateUserInput",
    "GetUserInput",
    "GetWalletInput",
    "CreateDepositInput",
    "ListDepositsInput",
    "CreateCardInput",
    "ListCardsInput",
    "GetCardInput",
    "TopUpCardInput",
    "GetTransactionsInput",
    "GetOtpInput",
    "DepositCurrency",
]
