"""Input shapes for the Aurex tools. Keys are the wire (camelCase) names."""

from typing import Literal, TypedDict

DepositCurrency = Literal["SOL", "USDT", "USDC"]

DEPOSIT_CURRENCIES = ["SOL", "USDT", "USDC"]


# Users

class CreateUserInput(TypedDict):
    firstName: str
    lastName: str


class GetUserInput(TypedDict):
    userId: str


class GetWalletInput(TypedDict):
    userId: str


# Deposits

class CreateDepositInput(TypedDict):
    userId: str
    amount: float
    currency: DepositCurrency


class _ListDepositsRequired(TypedDict):
    userId: str


class ListDepositsInput(_ListDepositsRequired, total=False):
    limit: int
    offset: int


# Cards

class CreateCardInput(TypedDict):
    userId: str
    cardName: str
    initialBalance: float


class ListCardsInput(TypedDict):
    userId: str


class GetCardInput(TypedDict):
    userId: str
    cardId: str


class TopUpCardInput(TypedDict):
    userId: str
    cardId: str
    amount: float


class GetTransactionsInput(TypedDict):
    userId: str
    cardId: str


class GetOtpInput(TypedDict):
    userId: str
    cardId: str
