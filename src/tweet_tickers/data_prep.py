import logging
import re, unicodedata
from typing import Dict, List, Optional

import pandas as pd

log = logging.getLogger(__name__)

URL_RX = re.compile(r"https?://\S+")

TWEET_COLUMNS = ["text", "timestamp", "source"]


def _is_punct(ch: str) -> bool:
    # unicode P* categories only; "$" is Sc so it survives for the extractor
    return unicodedata.category(ch).startswith("P")


def normalize_text(s) -> Optional[str]:
    """
    lowercase -> drop URLs -> every punctuation char becomes one space.
    Returns None for null/empty input or when nothing is left.
    """
    if s is None or (isinstance(s, float) and pd.isna(s)):
        return None
    s = str(s).lower()
    s = URL_RX.sub("", s)
    s = "".join(" " if _is_punct(ch) else ch for ch in s)
    return s if s.strip() else None


def read_table(
    path: str,
    required: List[str],
    optional: Optional[List[str]] = None,
    rename: Optional[Dict[str, str]] = None,
) -> pd.DataFrame:
    """
    Read a comma-separated UTF-8 file and normalize column names
    (case-insensitive). Only the required + present optional columns are kept;
    `rename` maps a canonical name to its output name.
    """
    # only blank cells are missing; "NA", "null", "None" are real tickers/text
    df = pd.read_csv(path, encoding="utf-8", keep_default_na=False, na_values=[""])
    cols = {str(c).strip().lower(): c for c in df.columns}
    missing = [r for r in required if r not in cols]
    if missing:
        raise ValueError(f"{path} is missing required columns: {missing}. Found: {list(df.columns)}")
    rename = rename or {}
    keep = required + [c for c in (optional or []) if c in cols]
    df = df.rename(columns={cols[c]: rename.get(c, c) for c in keep})
    return df[[rename.get(c, c) for c in keep]]


def load_tweets(path: str) -> pd.DataFrame:
    """Load the tweet table: text, timestamp, source (+ id when the file has one)."""
    df = read_table(path, TWEET_COLUMNS, optional=["id"])
    log.info("Loaded %d tweets from %s", len(df), path)
    return df


def clean_tweets(df: pd.DataFrame) -> pd.DataFrame:
    """
    Assign ids, normalize text, drop rows whose text is missing or empty
    after normalization, parse timestamps.

    Adds: id (1..n in input order if absent), normalized_text, ts (UTC), date
    """
    out = df.copy()
    if "id" not in out.columns:
        out["id"] = range(1, len(out) + 1)
    ids = pd.to_numeric(out["id"], errors="coerce")
    bad_id = ids.isna()
    if bad_id.any():
        log.warning("Dropped %d tweets with a missing or non-numeric id", int(bad_id.sum()))
    out = out.loc[~bad_id].copy()
    out["id"] = ids[~bad_id].astype("int64")

    for c in TWEET_COLUMNS:
        if c not in out.columns:
            out[c] = None

    out["normalized_text"] = out["text"].map(normalize_text)
    keep = out["normalized_text"].notna()
    dropped = int((~keep).sum())
    if dropped:
        log.info("Dropped %d tweets with missing or empty text", dropped)
    out = out.loc[keep].copy()

    # strip zero-width/BOM before parsing, keep UTC
    ts_norm = (out["timestamp"].astype("string")
               .str.strip()
               .str.replace(r"[\u200b\u200e\ufeff]", "", regex=True))
    out["ts"] = pd.to_datetime(ts_norm, errors="coerce", utc=True)
    out["date"] = out["ts"].dt.date

    cols = ["id", "text", "normalized_text", "source", "timestamp", "ts", "date"]
    return out[cols].reset_index(drop=True)
