"""Tests for the interactive menu, with prompts scripted via mock."""

from decimal import Decimal
from io import StringIO
from unittest.mock import patch

import pytest
from rich.console import Console

import cli
from stocksim import MarketCatalog, Portfolio, Side


@pytest.fixture
def output():
    buf = StringIO()
    with patch.object(cli, "console", Console(file=buf, width=200)):
        yield buf


@pytest.fixture
def portfolio():
    return Portfolio(Decimal("10000"))


@pytest.fixture
def catalog():
    return MarketCatalog()


def scripted(*answers):
    return patch.object(cli.Prompt, "ask", side_effect=list(answers))


class TestParseQuantity:
    @pytest.mark.parametrize("raw, expected", [
        ("10", 10),
        (" 3 ", 3),
        ("0", None),
        ("-2", None),
        ("1.5", None),
        ("ten", None),
        ("1_000", None),
        ("+5", None),
        ("", None),
    ])
    def test_parse_quantity(self, raw, expected):
        assert cli._parse_quantity(raw) == expected


class TestTradeStock:
    def test_buy(self, output, portfolio, catalog):
        with scripted("aapl", "10"):
            cli.trade_stock(portfolio, catalog, Side.BUY)

        assert portfolio.holdings == {"AAPL": 10}
        assert "✅ Bought 10 shares of AAPL" in output.getvalue()

    def test_sell(self, output, portfolio, catalog):
        portfolio.buy(catalog.lookup("TSLA"), 2)
        with scripted("TSLA", "2"):
            cli.trade_stock(portfolio, catalog, Side.SELL)

        assert portfolio.holdings == {}
        assert "✅ Sold 2 shares of TSLA" in output.getvalue()

    def test_unknown_symbol_aborts_before_quantity(self, output, portfolio, catalog):
        with scripted("MSFT") as ask:
            cli.trade_stock(portfolio, catalog, Side.BUY)

        assert ask.call_count == 1
        assert "❌ Stock not found!" in output.getvalue()
        assert portfolio.transactions == []

    def test_invalid_quantity(self, output, portfolio, catalog):
        with scripted("AAPL", "-3"):
            cli.trade_stock(portfolio, catalog, Side.BUY)

        assert "positive whole number" in output.getvalue()
        assert portfolio.cash_balance == Decimal("10000")

    def test_insufficient_funds(self, output, portfolio, catalog):
        with scripted("GOOG", "10"):
            cli.trade_stock(portfolio, catalog, Side.BUY)

        assert "❌ Not enough balance to buy GOOG" in output.getvalue()
        assert portfolio.transactions == []


class TestTables:
    def test_market_table_lists_catalog(self, output, catalog):
        cli.console.print(cli.market_table(catalog))
        text = output.getvalue()
        for symbol, price in [("AAPL", "$150.00"), ("GOOG", "$2,800.00"),
                              ("TSLA", "$700.00"), ("AMZN", "$3,300.00")]:
            assert symbol in text
            assert price in text

    def test_holdings_table(self, output, portfolio, catalog):
        portfolio.buy(catalog.lookup("AAPL"), 10)
        cli.console.print(cli.holdings_table(portfolio, catalog))
        text = output.getvalue()

        assert "Cash Balance" in text
        assert "$8,500.00" in text
        assert "$1,500.00" in text
        assert "$10,000.00" in text

    def test_holdings_table_prints_symbols_literally(self, output, portfolio, catalog):
        portfolio.holdings["[/x]"] = 1
        cli.console.print(cli.holdings_table(portfolio, catalog))

        assert "[/x]" in output.getvalue()
        assert "not listed" in output.getvalue()

    def test_transactions_table(self, output, portfolio, catalog):
        portfolio.buy(catalog.lookup("AAPL"), 10)
        portfolio.sell(catalog.lookup("AAPL"), 4)
        cli.console.print(cli.transactions_table(portfolio))
        text = output.getvalue()

        assert "BUY 10 shares of AAPL @ 150.0 on" in text
        assert "SELL 4 shares of AAPL @ 150.0 on" in text
        assert text.index("BUY 10") < text.index("SELL 4")


class TestRunCliLoop:
    def test_full_session_saves_on_exit(self, output, portfolio, catalog, tmp_path):
        path = tmp_path / "portfolio.json"
        with scripted("1", "2", "AAPL", "10", "4", "5", "6"):
            cli.run_cli_loop(catalog, portfolio, str(path))

        text = output.getvalue()
        assert "Market Data" in text
        assert "✅ Bought 10 shares of AAPL" in text
        assert "💾 Portfolio saved!" in text
        assert path.exists()

        restored = Portfolio(Decimal("0"))
        assert restored.load(path)
        assert restored.holdings == {"AAPL": 10}
        assert restored.cash_balance == Decimal("8500")

    def test_invalid_choice_redisplays_menu(self, output, portfolio, catalog, tmp_path):
        with scripted("9", "abc", "6"):
            cli.run_cli_loop(catalog, portfolio, str(tmp_path / "p.json"))

        text = output.getvalue()
        assert text.count("Invalid choice!") == 2
        assert text.count("Stock Trading Menu") == 3

    def test_save_failure_is_reported(self, output, portfolio, catalog, tmp_path):
        with scripted("6"):
            cli.run_cli_loop(catalog, portfolio, str(tmp_path / "missing" / "p.json"))

        assert "Could not save portfolio" in output.getvalue()

    def test_save_failure_prints_path_literally(self, output, portfolio, catalog, tmp_path):
        path = tmp_path / "[/missing]" / "p.json"
        with scripted("6"):
            cli.run_cli_loop(catalog, portfolio, str(path))

        assert f"Could not save portfolio to {path}." in output.getvalue()


class TestLoadPortfolio:
    def test_no_saved_portfolio(self, output, portfolio, tmp_path):
        assert not cli.load_portfolio(portfolio, str(tmp_path / "none.json"))
        assert "⚠ No saved portfolio found." in output.getvalue()
        assert portfolio.cash_balance == Decimal("10000")

    def test_loaded(self, output, portfolio, catalog, tmp_path):
        path = tmp_path / "p.json"
        portfolio.buy(catalog.lookup("AMZN"), 1)
        portfolio.save(path)

        fresh = Portfolio(Decimal("10000"))
        assert cli.load_portfolio(fresh, str(path))
        assert "📂 Portfolio loaded!" in output.getvalue()
        assert fresh.holdings == {"AMZN": 1}


def test_main_exits_cleanly_on_eof(output, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with patch.object(cli.Prompt, "ask", side_effect=EOFError):
        cli.main()

    assert "⚠ No saved portfolio found." in output.getvalue()
    assert not (tmp_path / "portfolio.json").exists()
