from typing import Any, Optional

NA = "N/A"


def fmt_usd(x: Optional[float], nd=2) -> str:
    if x is None:
        return NA
    try:
        return "$" + f"{float(x):,.{nd}f}"
    except (TypeError, ValueError):
        return NA


def fmt_number(x: Optional[float], nd=4) -> str:
    if x is None:
        return NA
    try:
        return f"{float(x):,.{nd}f}"
    except (TypeError, ValueError):
        return NA


def fmt_int(x: Any) -> str:
    if x is None:
        return NA
    try:
        return f"{int(x):,}"
    except (TypeError, ValueError):
        return NA


def fmt_amount(formatted: Optional[str], raw: Optional[str]) -> str:
    return formatted or raw or NA


def fmt_text(txt: Optional[str]) -> str:
    return txt if txt else NA


def short_hash(txid: Optional[str], head: int = 6, tail: int = 4) -> str:
    if not txid:
        return NA
    if len(txid) <= head + tail:
        return txid
    return f"{txid[:head]}...{txid[-tail:]}"
