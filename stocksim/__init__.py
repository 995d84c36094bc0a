"""
Stock Trading Simulator - paper trading against a fixed price list.

Exports:
    Side: Enum of trade directions (BUY / SELL)
    TradingConfig: Frozen defaults (starting balance, state file, seed prices)
    Stock: Dataclass of a listed symbol and its price
    Transaction: Immutable record of one executed trade
    TradeResult: Outcome of a buy or sell request
    MarketCatalog: Read-only symbol to price table
    Portfolio: Cash, holdings and transaction history with save/load
"""

from .config import Side, TradingConfig
from .models import Stock, Transaction, TradeResult
from .market import MarketCatalog
from .portfolio import Portfolio, Position

__all__ = [
    "Side",
    "TradingConfig",
    "Stock",
    "Transaction",
    "TradeResult",
    "MarketCatalog",
    "Portfolio",
    "Position",
]
