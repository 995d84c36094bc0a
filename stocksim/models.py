"""Data models for the stock trading simulator."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from .config import Side


@dataclass(frozen=True)
class Stock:
    """A listed stock and its current price."""

    symbol: str
    price: Decimal

    def __post_init__(self) -> None:
        if self.price <= 0:
            raise ValueError(f"Price for {self.symbol} must be positive, got {self.price}")

    def cost(self, quantity: int) -> Decimal:
        return self.price * Decimal(quantity)


@dataclass(frozen=True)
class Transaction:
    """One executed trade, frozen at the price it was filled at."""

    symbol: str
    quantity: int
    price: Decimal
    side: Side
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def amount(self) -> Decimal:
        return Decimal(self.quantity) * self.price

    def __str__(self) -> str:
        return (
            f"{self.side.value} {self.quantity} shares of {self.symbol} "
            f"@ {self.price} on {self.timestamp:%Y-%m-%d %H:%M:%S}"
        )


@dataclass(frozen=True)
class TradeResult:
    """Outcome of a buy or sell request."""

    success: bool
    message: str
    transaction: Optional[Transaction] = None

    def __bool__(self) -> bool:
        return self.success
