"""
Lexicon sentiment: +1 per positive word, -1 per negative word, summed per
tweet and then per company. Pure surface matching; negation, intensifiers
and sarcasm are not handled.
"""
from __future__ import annotations
import logging
import re
from enum import Enum
from typing import Dict, List, Optional

import numpy as np
import pandas as pd
from sklearn.feature_extraction.text import CountVectorizer

from .config import MIN_SENTIMENT_TWEETS
from .data_prep import read_table

log = logging.getLogger(__name__)

TOKEN_PATTERN = r"(?u)\b\w+\b"
_TOKEN_RX = re.compile(TOKEN_PATTERN)

SCORE_COLUMNS = ["tweet_id", "score", "hits"]
TWEET_SCORE_COLUMNS = ["tweet_id", "company_name", "score"]
COMPANY_COLUMNS = ["company_name", "net_sentiment", "tweet_count"]


class Polarity(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"

    @property
    def weight(self) -> int:
        return 1 if self is Polarity.POSITIVE else -1

    @classmethod
    def parse(cls, value) -> Optional["Polarity"]:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


def build_lexicon(df: pd.DataFrame) -> Dict[str, Polarity]:
    """
    word -> Polarity. Rows tagged with anything other than positive/negative
    are dropped. A word listed twice keeps its last polarity.
    """
    lx = df[["word", "polarity"]].dropna().copy()
    lx["word"] = lx["word"].astype(str).str.strip().str.lower()
    lx["polarity"] = lx["polarity"].map(Polarity.parse)
    lx = lx[lx["polarity"].notna() & (lx["word"] != "")]

    dupes = lx.loc[lx["word"].duplicated(keep=False), "word"].unique().tolist()
    if dupes:
        log.warning("Lexicon lists %d words more than once (e.g. %s); keeping the last entry",
                    len(dupes), sorted(dupes)[:5])
    lx = lx.drop_duplicates(subset="word", keep="last")
    return dict(zip(lx["word"], lx["polarity"]))


def load_lexicon(path: str) -> Dict[str, Polarity]:
    df = pd.read_csv(path, encoding="utf-8", nrows=0)
    cols = {str(c).strip().lower() for c in df.columns}
    # bing-style files call the column "sentiment"
    pol_col = "polarity" if "polarity" in cols else "sentiment"
    df = read_table(path, ["word", pol_col], rename={pol_col: "polarity"})
    lexicon = build_lexicon(df)
    log.info("Loaded %d lexicon words from %s", len(lexicon), path)
    return lexicon


def tokenize(text: Optional[str]) -> List[str]:
    return _TOKEN_RX.findall(text or "")


def score_text(text: Optional[str], lexicon: Dict[str, Polarity]) -> int:
    return sum(lexicon[t].weight for t in tokenize(text) if t in lexicon)


def score_tweets(tweets: pd.DataFrame, lexicon: Dict[str, Polarity]) -> pd.DataFrame:
    """
    Per tweet: score (positive hits - negative hits) and hits (lexicon words
    found). Repeated words count every time.
    """
    if tweets.empty:
        return pd.DataFrame(columns=SCORE_COLUMNS)
    out = pd.DataFrame({"tweet_id": tweets["id"].to_numpy()})
    if not lexicon:
        out["score"] = 0
        out["hits"] = 0
        return out

    words = sorted(lexicon)
    vec = CountVectorizer(vocabulary=words, token_pattern=TOKEN_PATTERN, lowercase=True)
    X = vec.transform(tweets["normalized_text"].fillna(""))
    weights = np.array([lexicon[w].weight for w in words], dtype="int64")

    out["score"] = np.asarray(X @ weights).ravel().astype("int64")
    out["hits"] = np.asarray(X.sum(axis=1)).ravel().astype("int64")
    return out


def tweet_company_scores(scores: pd.DataFrame, resolved: pd.DataFrame) -> pd.DataFrame:
    """
    Attach each scored tweet to the companies it resolved to. Only tweets
    with at least one lexicon hit qualify; a tweet counts once per company.
    """
    if scores.empty or resolved.empty:
        return pd.DataFrame(columns=TWEET_SCORE_COLUMNS)
    pairs = resolved[["tweet_id", "company_name"]].drop_duplicates()
    scored = scores.loc[scores["hits"] > 0, ["tweet_id", "score"]]
    out = pairs.merge(scored, on="tweet_id", how="inner")
    return out[TWEET_SCORE_COLUMNS].sort_values(["tweet_id", "company_name"]).reset_index(drop=True)


def company_sentiment(tweet_scores: pd.DataFrame, min_tweets: int = MIN_SENTIMENT_TWEETS) -> pd.DataFrame:
    """Net sentiment per company, only for companies with >= min_tweets qualifying tweets."""
    if tweet_scores.empty:
        return pd.DataFrame(columns=COMPANY_COLUMNS)
    agg = tweet_scores.groupby("company_name").agg(
        net_sentiment=("score", "sum"),
        tweet_count=("tweet_id", "nunique"),
    ).reset_index()
    agg = agg[agg["tweet_count"] >= min_tweets]
    hidden = tweet_scores["company_name"].nunique() - len(agg)
    if hidden:
        log.debug("Hid %d companies with fewer than %d scored tweets", hidden, min_tweets)
    agg = agg.astype({"net_sentiment": "int64", "tweet_count": "int64"})
    return (agg.sort_values(["net_sentiment", "company_name"], ascending=[False, True])
               .reset_index(drop=True)[COMPANY_COLUMNS])
