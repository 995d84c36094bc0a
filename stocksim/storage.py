"""JSON persistence for portfolio state.

The state file is a single JSON object::

    {
        "version": 1,
        "cash_balance": "8500.0",
        "holdings": {"AAPL": 10},
        "transactions": [
            {"symbol": "AAPL", "quantity": 10, "price": "150.0",
             "side": "BUY", "timestamp": "2026-10-19T12:00:00.123456"}
        ]
    }

Decimals are stored as strings so they round-trip exactly.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from .config import Side
from .models import Transaction

logger = logging.getLogger(__name__)

STATE_VERSION = 1


class StateFileError(ValueError):
    """Raised when a state file cannot be interpreted as portfolio state."""


@dataclass
class PortfolioState:
    """Snapshot of the mutable parts of a portfolio."""

    cash_balance: Decimal
    holdings: dict[str, int] = field(default_factory=dict)
    transactions: list[Transaction] = field(default_factory=list)


def encode_transaction(txn: Transaction) -> dict[str, Any]:
    return {
        "symbol": txn.symbol,
        "quantity": txn.quantity,
        "price": str(txn.price),
        "side": txn.side.value,
        "timestamp": txn.timestamp.isoformat(),
    }


def encode_state(state: PortfolioState) -> dict[str, Any]:
    return {
        "version": STATE_VERSION,
        "cash_balance": str(state.cash_balance),
        "holdings": dict(state.holdings),
        "transactions": [encode_transaction(t) for t in state.transactions],
    }


def _decimal(value: Any, what: str) -> Decimal:
    if not isinstance(value, (str, int)) or isinstance(value, bool):
        raise StateFileError(f"{what} must be a decimal string, got {value!r}")
    try:
        result = Decimal(value)
    except InvalidOperation as e:
        raise StateFileError(f"{what} is not a valid decimal: {value!r}") from e
    if not result.is_finite():
        raise StateFileError(f"{what} must be finite, got {value!r}")
    return result


def _quantity(value: Any, what: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        raise StateFileError(f"{what} must be a positive integer, got {value!r}")
    return value


def _symbol(value: Any, what: str) -> str:
    if not isinstance(value, str) or not value.isalnum() or value != value.upper():
        raise StateFileError(f"{what} must be an upper-case ticker symbol, got {value!r}")
    return value


def decode_transaction(raw: Any) -> Transaction:
    if not isinstance(raw, dict):
        raise StateFileError(f"Transaction entry must be an object, got {raw!r}")
    try:
        symbol = raw["symbol"]
        side = Side(raw["side"])
        timestamp = datetime.fromisoformat(raw["timestamp"])
    except KeyError as e:
        raise StateFileError(f"Transaction entry is missing {e}") from e
    except (TypeError, ValueError) as e:
        raise StateFileError(f"Invalid transaction entry {raw!r}: {e}") from e
    symbol = _symbol(symbol, "Transaction symbol")

    return Transaction(
        symbol=symbol,
        quantity=_quantity(raw.get("quantity"), f"Quantity of {symbol} transaction"),
        price=_decimal(raw.get("price"), f"Price of {symbol} transaction"),
        side=side,
        timestamp=timestamp,
    )


def decode_state(raw: Any) -> PortfolioState:
    """Build a PortfolioState from a decoded JSON document.

    Raises:
        StateFileError: If the document does not have the expected shape.
    """
    if not isinstance(raw, dict):
        raise StateFileError("State file must contain a JSON object")

    version = raw.get("version", STATE_VERSION)
    if version != STATE_VERSION:
        raise StateFileError(f"Unsupported state file version: {version!r}")

    for key in ("cash_balance", "holdings", "transactions"):
        if key not in raw:
            raise StateFileError(f"State file is missing '{key}'")

    holdings_raw = raw["holdings"]
    if not isinstance(holdings_raw, dict):
        raise StateFileError("'holdings' must be an object")
    transactions_raw = raw["transactions"]
    if not isinstance(transactions_raw, list):
        raise StateFileError("'transactions' must be a list")

    return PortfolioState(
        cash_balance=_decimal(raw["cash_balance"], "Cash balance"),
        holdings={
            _symbol(symbol, "Holding symbol"): _quantity(qty, f"Holding of {symbol}")
            for symbol, qty in holdings_raw.items()
        },
        transactions=[decode_transaction(t) for t in transactions_raw],
    )


def write_state(path: str | Path, state: PortfolioState) -> None:
    """Serialize state to path. I/O errors propagate as OSError."""
    payload = json.dumps(encode_state(state), indent=2)
    Path(path).write_text(payload + "\n", encoding="utf-8")
    logger.debug("Wrote portfolio state to %s", path)


def read_state(path: str | Path) -> PortfolioState:
    """Read state from path.

    Raises:
        OSError: If the file is missing or unreadable.
        StateFileError: If the content is not valid portfolio state.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise StateFileError(f"State file {path} is not valid JSON: {e}") from e
    except RecursionError as e:
        raise StateFileError(f"State file {path} is nested too deeply") from e
    return decode_state(raw)
