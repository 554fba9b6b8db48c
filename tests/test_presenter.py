import pytest

from token_dashboard.models import ChartSlice, QueryKind
from token_dashboard.presenter import (
    COLUMNS,
    balance_distribution,
    build_table,
    chart_title,
    distribution_frame,
)


def _balances(values):
    return [{"symbol": f"T{i}", "value_usd": v} for i, v in enumerate(values)]


def test_distribution_top_five_plus_other():
    slices = balance_distribution(_balances([50, 30, 10, 5, 3, 2]), top_n=5)
    assert [s.value for s in slices] == [50, 30, 10, 5, 3, 2]
    assert [s.label for s in slices] == ["T0", "T1", "T2", "T3", "T4", "Other"]


def test_distribution_sorts_descending_and_sums_rest():
    slices = balance_distribution(_balances([1, 40, 2, 30, 7, 20, 10]), top_n=3)
    assert slices == [
        ChartSlice("T1", 40),
        ChartSlice("T3", 30),
        ChartSlice("T5", 20),
        ChartSlice("Other", 20),
    ]


def test_distribution_without_remainder_has_no_other():
    slices = balance_distribution(_balances([5, 4]), top_n=5)
    assert [s.label for s in slices] == ["T0", "T1"]


def test_distribution_ties_keep_original_order():
    rows = [
        {"symbol": "A", "value_usd": 10},
        {"symbol": "B", "value_usd": 20},
        {"symbol": "C", "value_usd": 10},
        {"symbol": "D", "value_usd": 10},
    ]
    slices = balance_distribution(rows, top_n=3)
    assert [s.label for s in slices] == ["B", "A", "C", "Other"]


@pytest.mark.parametrize(
    "rows",
    [
        [],
        None,
        [{"symbol": "A", "value_usd": 0}, {"symbol": "B"}],
        [{"symbol": "A", "value_usd": None}, {"symbol": "B", "value_usd": -3}],
    ],
)
def test_distribution_empty_when_no_positive_values(rows):
    assert balance_distribution(rows) == []


@pytest.mark.parametrize("bad", [float("inf"), float("nan"), "inf", "-inf", "nan"])
def test_distribution_ignores_non_finite_values(bad):
    slices = balance_distribution([{"symbol": "A", "value_usd": bad}, {"symbol": "B", "value_usd": 4}])
    assert slices == [ChartSlice("B", 4)]


def test_distribution_labels_missing_symbols():
    slices = balance_distribution([{"value_usd": 3}, {"symbol": "ETH", "value_usd": 9}])
    assert [s.label for s in slices] == ["ETH", "Token 2"]


def test_chart_title_counts_valued_rows():
    assert chart_title(_balances([5, 0, 3])) == "Top 2 Token Value Distribution (USD)"
    assert chart_title(_balances(range(1, 10))) == "Top 5 Token Value Distribution (USD)"


def test_distribution_frame_percentages():
    df = distribution_frame([ChartSlice("A", 75.0), ChartSlice("Other", 25.0)])
    assert df["%"].tolist() == [75.0, 25.0]


@pytest.mark.parametrize("kind", list(QueryKind))
def test_empty_results_render_nothing(kind):
    assert build_table(kind, []) is None
    assert build_table(kind, None) is None


def test_balance_table():
    rows = [
        {
            "symbol": "GRT",
            "name": "Graph Token",
            "amount": "1000000000000000000",
            "amountFormatted": "1.0",
            "price_usd": 0.5,
            "value_usd": 0,
            "contract": "0xc944e90c64b2c07662a292be6244bdf05cda44a7",
        },
        {"symbol": "X"},
    ]
    df = build_table(QueryKind.BALANCES, rows)
    assert list(df.columns) == COLUMNS[QueryKind.BALANCES]
    assert df.iloc[0].tolist() == [
        "GRT",
        "Graph Token",
        "1.0",
        "$0.5000",
        "$0.00",
        "0xc944e90c64b2c07662a292be6244bdf05cda44a7",
    ]
    assert df.iloc[1]["Price (USD)"] == "N/A"
    assert df.iloc[1]["Amount"] == "N/A"


def test_transfer_table_shortens_tx_id():
    txid = "0xabcdef0123456789abcdef0123456789abcdef0123456789abcdef0123456789"
    rows = [{"datetime": "2025-01-01 00:00:00", "from": "0xa", "to": "0xb", "amount": "5", "value_usd": 12.5, "transaction_id": txid}]
    df = build_table(QueryKind.TRANSFERS, rows)
    assert list(df.columns) == COLUMNS[QueryKind.TRANSFERS]
    assert df.iloc[0]["Tx ID"] == "0xabcd...6789"
    assert df.iloc[0]["Value (USD)"] == "$12.50"


def test_holders_table_ranks_from_one():
    rows = [{"address": "0x1", "amount": "10"}, {"address": "0x2", "amountFormatted": "0.5"}]
    df = build_table(QueryKind.HOLDERS, rows)
    assert df["Rank"].tolist() == [1, 2]
    assert df["Amount"].tolist() == ["10", "0.5"]


def test_ohlc_table():
    rows = [{"datetime": "2025-01-01", "ticker": "GRTUSD", "open": 1, "high": 2.5, "low": 0.5, "close": "1.25", "volume": 1234.5}]
    df = build_table(QueryKind.OHLC, rows)
    assert list(df.columns) == COLUMNS[QueryKind.OHLC]
    assert df.iloc[0].tolist() == ["2025-01-01", "GRTUSD", "1.0000", "2.5000", "0.5000", "1.2500", "1,234.50"]


def test_token_info_uses_first_record_as_key_value_list():
    rows = [{"name": "The Graph", "symbol": "GRT", "decimals": 18, "holders": 170000, "market_cap": 1234567.8}]
    df = build_table(QueryKind.TOKEN_INFO, rows)
    values = dict(zip(df["Field"], df["Value"]))
    assert values["Name"] == "The Graph"
    assert values["Decimals"] == "18"
    assert values["Holders"] == "170,000"
    assert values["Market Cap (USD)"] == "$1,234,568"
    assert values["Circulating Supply"] == "N/A"
