"""
Turns per-tab result lists into tables and chart data.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from .formatting import fmt_amount, fmt_int, fmt_number, fmt_text, fmt_usd, short_hash
from .models import (
    RECORD_TYPES,
    BalanceRecord,
    ChartSlice,
    HolderRecord,
    OhlcRecord,
    QueryKind,
    TokenInfoRecord,
    TransferRecord,
)

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 5
OTHER_LABEL = "Other"

COLUMNS = {
    QueryKind.BALANCES: ["Symbol", "Name", "Amount", "Price (USD)", "Value (USD)", "Contract"],
    QueryKind.TRANSFERS: ["Date/Time", "From", "To", "Amount", "Value (USD)", "Tx ID"],
    QueryKind.HOLDERS: ["Rank", "Holder Address", "Amount"],
    QueryKind.OHLC: ["Date/Time", "Ticker", "Open", "High", "Low", "Close", "Volume"],
    QueryKind.TOKEN_INFO: ["Field", "Value"],
}


def records(kind: QueryKind, rows: Sequence[Dict[str, Any]]) -> list:
    record_type = RECORD_TYPES[kind]
    return [record_type.from_api(row) for row in rows if isinstance(row, dict)]


# ==========================
# Tables
# ==========================
def _balance_rows(items: List[BalanceRecord]) -> List[list]:
    return [
        [
            fmt_text(b.symbol),
            fmt_text(b.name),
            fmt_amount(b.amount_formatted, b.amount),
            fmt_usd(b.price_usd, 4),
            fmt_usd(b.value_usd, 2),
            b.contract or "",
        ]
        for b in items
    ]


def _transfer_rows(items: List[TransferRecord]) -> List[list]:
    return [
        [
            fmt_text(t.datetime),
            t.from_address or "",
            t.to_address or "",
            fmt_amount(t.amount_formatted, t.amount),
            fmt_usd(t.value_usd, 2),
            short_hash(t.transaction_id),
        ]
        for t in items
    ]


def _holder_rows(items: List[HolderRecord]) -> List[list]:
    return [
        [rank, h.address or "", fmt_amount(h.amount_formatted, h.amount)]
        for rank, h in enumerate(items, start=1)
    ]


def _ohlc_rows(items: List[OhlcRecord]) -> List[list]:
    return [
        [
            fmt_text(o.datetime),
            fmt_text(o.ticker),
            fmt_number(o.open),
            fmt_number(o.high),
            fmt_number(o.low),
            fmt_number(o.close),
            fmt_number(o.volume, 2),
        ]
        for o in items
    ]


def token_info_fields(info: TokenInfoRecord) -> List[list]:
    market_cap = fmt_usd(info.market_cap, 0)
    return [
        ["Name", fmt_text(info.name)],
        ["Symbol", fmt_text(info.symbol)],
        ["Decimals", fmt_int(info.decimals)],
        ["Contract Address", fmt_text(info.address)],
        ["Network", fmt_text(info.network_id)],
        ["Holders", fmt_int(info.holders)],
        ["Price (USD)", fmt_usd(info.price_usd, 4)],
        ["Market Cap (USD)", market_cap],
        ["Circulating Supply", fmt_text(info.circulating_supply)],
    ]


_ROW_BUILDERS = {
    QueryKind.BALANCES: _balance_rows,
    QueryKind.TRANSFERS: _transfer_rows,
    QueryKind.HOLDERS: _holder_rows,
    QueryKind.OHLC: _ohlc_rows,
}


def build_table(kind: QueryKind, rows: Optional[Sequence[Dict[str, Any]]]) -> Optional[pd.DataFrame]:
    """
    Fixed-column table for one tab.

    Returns None for an empty or missing result so the caller can show a
    "no results" message instead of an empty grid.
    """
    items = records(kind, rows or [])
    if not items:
        return None
    if kind is QueryKind.TOKEN_INFO:
        data = token_info_fields(items[0])
    else:
        data = _ROW_BUILDERS[kind](items)
    return pd.DataFrame(data, columns=COLUMNS[kind])


# ==========================
# Balance distribution
# ==========================
def balance_distribution(rows: Optional[Sequence[Dict[str, Any]]], top_n: int = DEFAULT_TOP_N) -> List[ChartSlice]:
    """
    Bucket balances into the ``top_n`` largest USD values plus one "Other" slice.

    Only positive USD values count. Ties keep their original order.
    """
    valued = [b for b in records(QueryKind.BALANCES, rows or []) if b.value_usd is not None and b.value_usd > 0]
    if not valued:
        logger.debug("No balances with positive USD value found for chart.")
        return []

    ranked = sorted(valued, key=lambda b: b.value_usd, reverse=True)
    slices = [
        ChartSlice(label=b.symbol or f"Token {i + 1}", value=b.value_usd)
        for i, b in enumerate(ranked[:top_n])
    ]
    rest = ranked[top_n:]
    if rest:
        slices.append(ChartSlice(label=OTHER_LABEL, value=sum(b.value_usd for b in rest)))
    return slices


def chart_title(rows: Optional[Sequence[Dict[str, Any]]], top_n: int = DEFAULT_TOP_N) -> str:
    valued = [b for b in records(QueryKind.BALANCES, rows or []) if b.value_usd is not None and b.value_usd > 0]
    return f"Top {min(top_n, len(valued))} Token Value Distribution (USD)"


def distribution_frame(slices: List[ChartSlice]) -> pd.DataFrame:
    df = pd.DataFrame([{"Token": s.label, "Value (USD)": s.value} for s in slices], columns=["Token", "Value (USD)"])
    total = float(df["Value (USD)"].sum()) if not df.empty else 0.0
    df["%"] = (df["Value (USD)"] / total * 100).round(2) if total > 0 else 0.0
    return df
