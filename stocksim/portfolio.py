import logging
from decimal import Decimal
from pathlib import Path
from typing import Iterator, NamedTuple, Optional

from .config import Side
from .market import MarketCatalog
from .models import Stock, TradeResult, Transaction
from .storage import PortfolioState, read_state, write_state

logger = logging.getLogger(__name__)

INVALID_QUANTITY_MESSAGE = "❌ Quantity must be a positive whole number."


class Position(NamedTuple):
    """A holding valued at the current catalog price."""

    symbol: str
    quantity: int
    value: Optional[Decimal]


def _is_valid_quantity(quantity: object) -> bool:
    return isinstance(quantity, int) and not isinstance(quantity, bool) and quantity > 0


class Portfolio:
    """Cash, share holdings and the transaction history of a single trader."""

    def __init__(self, initial_balance: Decimal = Decimal("0")) -> None:
        self.cash_balance: Decimal = Decimal(str(initial_balance))
        self.holdings: dict[str, int] = {}
        self.transactions: list[Transaction] = []

    def buy(self, stock: Stock, quantity: int) -> TradeResult:
        if not _is_valid_quantity(quantity):
            return TradeResult(False, INVALID_QUANTITY_MESSAGE)

        cost = stock.cost(quantity)
        if cost > self.cash_balance:
            logger.info(
                "Rejected buy of %d %s: cost %s exceeds balance %s",
                quantity, stock.symbol, cost, self.cash_balance,
            )
            return TradeResult(False, f"❌ Not enough balance to buy {stock.symbol}")

        self.cash_balance -= cost
        self.holdings[stock.symbol] = self.holdings.get(stock.symbol, 0) + quantity
        txn = self._record(stock, quantity, Side.BUY)
        return TradeResult(True, f"✅ Bought {quantity} shares of {stock.symbol}", txn)

    def sell(self, stock: Stock, quantity: int) -> TradeResult:
        if not _is_valid_quantity(quantity):
            return TradeResult(False, INVALID_QUANTITY_MESSAGE)

        held = self.holdings.get(stock.symbol, 0)
        if held < quantity:
            logger.info(
                "Rejected sell of %d %s: only %d held", quantity, stock.symbol, held
            )
            return TradeResult(False, "❌ Not enough shares to sell.")

        self.cash_balance += stock.cost(quantity)
        remaining = held - quantity
        if remaining == 0:
            del self.holdings[stock.symbol]
        else:
            self.holdings[stock.symbol] = remaining
        txn = self._record(stock, quantity, Side.SELL)
        return TradeResult(True, f"✅ Sold {quantity} shares of {stock.symbol}", txn)

    def _record(self, stock: Stock, quantity: int, side: Side) -> Transaction:
        txn = Transaction(
            symbol=stock.symbol, quantity=quantity, price=stock.price, side=side
        )
        self.transactions.append(txn)
        logger.info("%s", txn)
        return txn

    def positions(self, catalog: MarketCatalog) -> Iterator[Position]:
        """Yield each holding marked to the catalog's current price.

        Symbols the catalog does not list have a value of None.
        """
        for symbol, quantity in self.holdings.items():
            price = catalog.price_of(symbol)
            value = Decimal(quantity) * price if price is not None else None
            yield Position(symbol, quantity, value)

    def holdings_value(self, catalog: MarketCatalog) -> Decimal:
        return sum(
            (p.value for p in self.positions(catalog) if p.value is not None),
            start=Decimal("0"),
        )

    def total_value(self, catalog: MarketCatalog) -> Decimal:
        return self.cash_balance + self.holdings_value(catalog)

    def state(self) -> PortfolioState:
        return PortfolioState(
            cash_balance=self.cash_balance,
            holdings=dict(self.holdings),
            transactions=list(self.transactions),
        )

    def restore(self, state: PortfolioState) -> None:
        self.cash_balance = state.cash_balance
        self.holdings = {sym: qty for sym, qty in state.holdings.items() if qty > 0}
        self.transactions = list(state.transactions)

    def save(self, path: str | Path) -> bool:
        """Write cash, holdings and transactions to path.

        Returns:
            True on success. On failure the error is logged and whatever was
            on disk before is left as it is.
        """
        try:
            write_state(path, self.state())
        except OSError as e:
            logger.error("Could not save portfolio to %s: %s", path, e)
            return False
        return True

    def load(self, path: str | Path) -> bool:
        """Replace the in-memory state with the one saved at path.

        Returns:
            True if state was loaded. If the file is missing, unreadable or
            malformed, the current state is kept and False is returned.
        """
        try:
            state = read_state(path)
        except FileNotFoundError:
            logger.debug("No portfolio file at %s", path)
            return False
        except (OSError, ValueError) as e:
            logger.warning("Ignoring portfolio file %s: %s", path, e)
            return False

        self.restore(state)
        return True

    def __repr__(self) -> str:
        return (
            f"Portfolio(cash_balance={self.cash_balance}, "
            f"holdings={self.holdings}, "
            f"transactions={len(self.transactions)})"
        )
