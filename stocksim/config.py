"""Configuration constants for the stock trading simulator."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class Side(Enum):
    """Direction of a trade."""

    BUY = "BUY"
    SELL = "SELL"


def _default_prices() -> dict[str, Decimal]:
    return {
        "AAPL": Decimal("150.0"),
        "GOOG": Decimal("2800.0"),
        "TSLA": Decimal("700.0"),
        "AMZN": Decimal("3300.0"),
    }


@dataclass(frozen=True)
class TradingConfig:
    """Defaults for a trading session."""

    STARTING_BALANCE: Decimal = Decimal("10000")
    PORTFOLIO_FILE: str = "portfolio.json"
    DEFAULT_PRICES: dict[str, Decimal] = field(default_factory=_default_prices)
