# equity_signals/data/universe.py
from __future__ import annotations
from pathlib import Path
import json
import logging

logger = logging.getLogger(__name__)

# NSE large caps
DEFAULT_SYMBOLS: tuple[str, ...] = (
    "RELIANCE", "HDFCBANK", "ICICIBANK", "INFY", "TCS", "AXISBANK", "SBIN", "KOTAKBANK", "LT",
    "BHARTIARTL", "ITC", "HINDUNILVR", "HCLTECH", "WIPRO", "ASIANPAINT", "SUNPHARMA", "ULTRACEMCO",
    "NESTLEIND", "BAJFINANCE", "BAJAJFINSV", "POWERGRID", "JSWSTEEL", "TITAN", "MARUTI", "TATASTEEL",
    "ADANIENT", "ADANIPORTS", "TECHM", "CIPLA", "DRREDDY", "DIVISLAB", "ONGC", "COALINDIA", "BPCL", "IOC",
    "GRASIM", "HEROMOTOCO", "BRITANNIA", "SHREECEM", "EICHERMOT", "APOLLOHOSP", "HDFCLIFE", "SBILIFE",
    "ICICIPRULI", "INDUSINDBK", "BAJAJ-AUTO", "M&M", "TATAMOTORS", "UPL", "VEDL", "NTPC", "HINDALCO",
    "LTIM", "LTTS", "DABUR", "PIDILITIND", "PEL", "JINDALSTEL", "SRF", "SIEMENS", "TORNTPHARM",
    "AMBUJACEM", "BANDHANBNK", "GAIL", "BOSCHLTD", "COLPAL", "GLAND", "HAL", "MAXHEALTH", "MPHASIS",
    "PAGEIND", "PIIND", "RECLTD", "SAIL", "TATACOMM", "TRENT", "UBL", "VOLTAS", "ZEEL", "ATUL",
    "DLF", "INDIGO", "IRCTC", "LICI", "MUTHOOTFIN", "NAVINFLUOR", "POLYCAB", "RAMCOCEM", "TVSMOTOR",
    "VBL", "CONCOR", "IDFCFIRSTB", "BANKBARODA",
)

def load_symbols(path: str | Path | None = None) -> list[str]:
    """Symbols from a JSON list file; the default universe when the file is absent or unusable."""
    if path is None:
        return list(DEFAULT_SYMBOLS)
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("symbol list %s unusable (%s); using default universe", p, e)
        return list(DEFAULT_SYMBOLS)
    symbols = [str(s).strip().upper() for s in data if str(s).strip()] if isinstance(data, list) else []
    if not symbols:
        logger.warning("symbol list %s is empty; using default universe", p)
        return list(DEFAULT_SYMBOLS)
    # keep first occurrence order
    return list(dict.fromkeys(symbols))
