"""Fixed in-memory market the simulator trades against."""

from decimal import Decimal
from typing import Iterator, Optional

from .config import TradingConfig
from .models import Stock


class MarketCatalog:
    """Read-only symbol to price table, populated once at construction."""

    def __init__(self, prices: Optional[dict[str, Decimal]] = None) -> None:
        if prices is None:
            prices = TradingConfig().DEFAULT_PRICES
        self._stocks: dict[str, Stock] = {
            symbol.upper(): Stock(symbol=symbol.upper(), price=Decimal(str(price)))
            for symbol, price in prices.items()
        }

    def lookup(self, symbol: str) -> Optional[Stock]:
        return self._stocks.get(symbol.strip().upper())

    def price_of(self, symbol: str) -> Optional[Decimal]:
        stock = self.lookup(symbol)
        return stock.price if stock else None

    def stocks(self) -> list[Stock]:
        return list(self._stocks.values())

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and self.lookup(symbol) is not None

    def __iter__(self) -> Iterator[Stock]:
        return iter(self._stocks.values())

    def __len__(self) -> int:
        return len(self._stocks)

    def __repr__(self) -> str:
        return f"MarketCatalog(symbols={list(self._stocks)})"
