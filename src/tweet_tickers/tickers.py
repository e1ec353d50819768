from __future__ import annotations
import logging
import re
from enum import Enum
from typing import Dict, List, Optional, Tuple

import pandas as pd

from .data_prep import read_table

log = logging.getLogger(__name__)

# "$" + 1-6 letters, left-to-right, non-overlapping: "$aa$bb" -> aa, bb
TICKER_RX = re.compile(r"\$([A-Za-z]{1,6})")

MENTION_COLUMNS = ["tweet_id", "raw_ticker"]
RESOLVED_COLUMNS = ["tweet_id", "ticker", "company_name"]


class Resolution(str, Enum):
    RESOLVED = "resolved"
    UNRESOLVED = "unresolved"


def extract_tickers(text: Optional[str]) -> List[str]:
    if not text:
        return []
    return [m.upper() for m in TICKER_RX.findall(text)]


def extract_mentions(tweets: pd.DataFrame) -> pd.DataFrame:
    """
    One row per raw ticker occurrence: tweet_id, raw_ticker.
    Tweets without a `$TICKER` token produce no rows.
    """
    if tweets.empty:
        return pd.DataFrame(columns=MENTION_COLUMNS)
    found = tweets["normalized_text"].map(extract_tickers)
    out = (pd.DataFrame({"tweet_id": tweets["id"].to_numpy(), "raw_ticker": found.to_numpy()})
             .explode("raw_ticker")
             .dropna(subset=["raw_ticker"])
             .reset_index(drop=True))
    out["tweet_id"] = out["tweet_id"].astype("int64")
    out["raw_ticker"] = out["raw_ticker"].astype(str)
    return out[MENTION_COLUMNS]


def build_lookup(df: pd.DataFrame) -> Dict[str, str]:
    """
    ticker -> company_name. Tickers are stripped/uppercased; duplicate keys
    are reported and the last row wins.
    """
    lk = df[["ticker", "company_name"]].dropna(subset=["ticker", "company_name"]).copy()
    lk["ticker"] = lk["ticker"].astype(str).str.strip().str.upper()
    lk["company_name"] = lk["company_name"].astype(str).str.strip()
    lk = lk[(lk["ticker"] != "") & (lk["company_name"] != "")]

    n_bad = len(df) - len(lk)
    if n_bad:
        log.warning("Ticker lookup has %d rows with a blank ticker or company name; skipping them", n_bad)

    dupes = lk.loc[lk["ticker"].duplicated(keep=False), "ticker"].unique().tolist()
    if dupes:
        log.warning("Ticker lookup has duplicate keys %s; keeping the last entry for each", sorted(dupes))
    lk = lk.drop_duplicates(subset="ticker", keep="last")
    return dict(zip(lk["ticker"], lk["company_name"]))


def load_lookup(path: str) -> Dict[str, str]:
    df = read_table(path, ["ticker", "name"], rename={"name": "company_name"})
    lookup = build_lookup(df)
    log.info("Loaded %d tickers from %s", len(lookup), path)
    return lookup


def resolve_ticker(ticker: str, lookup: Dict[str, str]) -> Tuple[Resolution, Optional[str]]:
    name = lookup.get(str(ticker).upper())
    if name is None:
        return Resolution.UNRESOLVED, None
    return Resolution.RESOLVED, name


def resolve_mentions(mentions: pd.DataFrame, lookup: Dict[str, str]) -> pd.DataFrame:
    """
    Join raw mentions against the lookup; one row per distinct (tweet, ticker).
    Unknown tickers are dropped, that is the normal case for free text.
    """
    if mentions.empty:
        return pd.DataFrame(columns=RESOLVED_COLUMNS)

    uniq = mentions.drop_duplicates(subset=["tweet_id", "raw_ticker"])
    outcome = uniq["raw_ticker"].map(lambda t: resolve_ticker(t, lookup))
    hit = outcome.map(lambda r: r[0] is Resolution.RESOLVED)

    n_miss = int((~hit).sum())
    if n_miss:
        log.debug("Dropped %d unresolved ticker mentions", n_miss)

    out = uniq.loc[hit, ["tweet_id", "raw_ticker"]].rename(columns={"raw_ticker": "ticker"})
    out["company_name"] = outcome[hit].map(lambda r: r[1])
    return out[RESOLVED_COLUMNS].reset_index(drop=True)
