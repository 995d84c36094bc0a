#!/usr/bin/env python3
import logging
from decimal import Decimal
from typing import Callable, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from stocksim import MarketCatalog, Portfolio, Side, TradingConfig

logger = logging.getLogger(__name__)
console = Console()

MENU_OPTIONS: list[tuple[str, str]] = [
    ("1", "View Market Data"),
    ("2", "Buy Stock"),
    ("3", "Sell Stock"),
    ("4", "View Portfolio"),
    ("5", "View Transactions"),
    ("6", "Save & Exit"),
]


def _money(amount: Decimal) -> str:
    return f"${amount:,.2f}"


def market_table(catalog: MarketCatalog) -> Table:
    """Build a Rich table listing every symbol in the catalog."""
    t = Table(title="Market Data", box=box.ROUNDED, title_style="bold white")
    t.add_column("Symbol", style="cyan")
    t.add_column("Price", justify="right")
    for stock in catalog.stocks():
        t.add_row(stock.symbol, _money(stock.price))
    return t


def holdings_table(portfolio: Portfolio, catalog: MarketCatalog) -> Table:
    """Build a Rich table of cash and holdings marked to current catalog prices."""
    t = Table(title="Portfolio", box=box.ROUNDED, title_style="bold white")
    t.add_column("Symbol", style="cyan")
    t.add_column("Shares", justify="right")
    t.add_column("Value", justify="right")

    for position in portfolio.positions(catalog):
        value = (
            _money(position.value)
            if position.value is not None
            else Text("not listed", style="dim")
        )
        t.add_row(Text(position.symbol), str(position.quantity), value)

    t.add_section()
    t.add_row("Cash Balance", "", _money(portfolio.cash_balance))
    t.add_row(
        "", "Total", f"[bold]{_money(portfolio.total_value(catalog))}[/bold]"
    )
    return t


def transactions_table(portfolio: Portfolio) -> Table:
    """Build a Rich table with one row per transaction, oldest first."""
    t = Table(title="Transactions", box=box.ROUNDED, title_style="bold white")
    t.add_column("#", justify="right", style="dim")
    t.add_column("Transaction", no_wrap=True)
    t.add_column("Amount", justify="right")

    for i, txn in enumerate(portfolio.transactions, start=1):
        style = "green" if txn.side is Side.BUY else "red"
        t.add_row(str(i), Text(str(txn), style=style), _money(txn.amount))
    return t


def menu_panel() -> Panel:
    lines = "\n".join(f"{key}. {label}" for key, label in MENU_OPTIONS)
    return Panel(lines, title="Stock Trading Menu", box=box.ROUNDED, expand=False)


def _parse_quantity(raw: str) -> Optional[int]:
    """Return raw as a positive int, or None if it is not one."""
    text = raw.strip()
    if not text.isdigit():
        return None
    try:
        quantity = int(text)
    except ValueError:
        return None
    return quantity if quantity > 0 else None


def trade_stock(portfolio: Portfolio, catalog: MarketCatalog, side: Side) -> None:
    """Prompt for a symbol and quantity, then buy or sell."""
    symbol = Prompt.ask("Enter stock symbol", console=console).strip().upper()
    stock = catalog.lookup(symbol)
    if stock is None:
        console.print("❌ Stock not found!")
        return

    quantity = _parse_quantity(Prompt.ask("Enter quantity", console=console))
    if quantity is None:
        console.print("❌ Quantity must be a positive whole number.")
        return

    if side is Side.BUY:
        result = portfolio.buy(stock, quantity)
    else:
        result = portfolio.sell(stock, quantity)
    console.print(result.message, style=None if result else "red")


def save_portfolio(portfolio: Portfolio, path: str) -> bool:
    if portfolio.save(path):
        console.print("💾 Portfolio saved!")
        return True
    console.print(f"❌ Could not save portfolio to {path}.", style="red", markup=False)
    return False


def load_portfolio(portfolio: Portfolio, path: str) -> bool:
    if portfolio.load(path):
        console.print("📂 Portfolio loaded!")
        return True
    console.print("⚠ No saved portfolio found.")
    return False


def run_cli_loop(catalog: MarketCatalog, portfolio: Portfolio, path: str) -> None:
    """Show the menu and dispatch choices until Save & Exit."""
    actions: dict[str, Callable[[], None]] = {
        "1": lambda: console.print(market_table(catalog)),
        "2": lambda: trade_stock(portfolio, catalog, Side.BUY),
        "3": lambda: trade_stock(portfolio, catalog, Side.SELL),
        "4": lambda: console.print(holdings_table(portfolio, catalog)),
        "5": lambda: console.print(transactions_table(portfolio)),
    }

    while True:
        console.print()
        console.print(menu_panel())
        choice = Prompt.ask("Choose an option", console=console).strip()

        if choice == "6":
            save_portfolio(portfolio, path)
            return

        action = actions.get(choice)
        if action is None:
            console.print("Invalid choice!")
            continue
        action()


def main() -> None:
    """Entry point for the CLI application."""
    logging.basicConfig(
        level=logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    config = TradingConfig()

    catalog = MarketCatalog(config.DEFAULT_PRICES)
    portfolio = Portfolio(config.STARTING_BALANCE)

    console.print()
    console.print(Panel("[bold]Stock Trading Simulator[/bold] · paper trading", box=box.DOUBLE))
    load_portfolio(portfolio, config.PORTFOLIO_FILE)

    try:
        run_cli_loop(catalog, portfolio, config.PORTFOLIO_FILE)
    except (EOFError, KeyboardInterrupt):
        console.print()
        logger.warning("Input closed; exiting without saving.")


if __name__ == "__main__":
    main()
