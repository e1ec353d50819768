from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict

import pandas as pd

from .config import AnalysisConfig, MIN_SENTIMENT_TWEETS, TOP_N
from .data_prep import clean_tweets, load_tweets
from .metrics import (count_cooccurrences, count_mentions, daily_mentions,
                      source_breakdown)
from .sentiment import (Polarity, company_sentiment, load_lexicon, score_tweets,
                        tweet_company_scores)
from .tickers import extract_mentions, load_lookup, resolve_mentions

log = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    tweets: pd.DataFrame
    mentions: pd.DataFrame
    resolved: pd.DataFrame
    mention_counts: pd.DataFrame
    pairs: pd.DataFrame
    tweet_scores: pd.DataFrame
    company_sentiment: pd.DataFrame
    daily: pd.DataFrame = field(default_factory=pd.DataFrame)
    sources: pd.DataFrame = field(default_factory=pd.DataFrame)

    def tables(self) -> Dict[str, pd.DataFrame]:
        return {
            "mention_counts": self.mention_counts,
            "cooccurrence_pairs": self.pairs,
            "tweet_sentiment": self.tweet_scores,
            "company_sentiment": self.company_sentiment,
            "daily_mentions": self.daily,
            "sources": self.sources,
        }


def run_pipeline(
    tweets: pd.DataFrame,
    lookup: Dict[str, str],
    lexicon: Dict[str, Polarity],
    *,
    min_sentiment_tweets: int = MIN_SENTIMENT_TWEETS,
    top_n: int = TOP_N,
) -> AnalysisResult:
    """
    normalize -> extract -> resolve -> {mention counts, co-mentions}
    and, off the same cleaned tweets, lexicon scores per tweet and company.
    """
    clean = clean_tweets(tweets)
    mentions = extract_mentions(clean)
    resolved = resolve_mentions(mentions, lookup)
    counts = count_mentions(resolved)
    pairs = count_cooccurrences(resolved)

    scores = score_tweets(clean, lexicon)
    per_company = tweet_company_scores(scores, resolved)
    sentiment = company_sentiment(per_company, min_tweets=min_sentiment_tweets)

    log.info(
        "tweets=%d mentions=%d resolved=%d companies=%d pairs=%d sentiment_companies=%d",
        len(clean), len(mentions), len(resolved), len(counts), len(pairs), len(sentiment),
    )
    if resolved.empty:
        log.info("No ticker mention resolved to a known company")

    return AnalysisResult(
        tweets=clean,
        mentions=mentions,
        resolved=resolved,
        mention_counts=counts,
        pairs=pairs,
        tweet_scores=per_company,
        company_sentiment=sentiment,
        daily=daily_mentions(resolved, clean, top_n=top_n),
        sources=source_breakdown(clean),
    )


def run_from_config(cfg: AnalysisConfig) -> AnalysisResult:
    tweets = load_tweets(str(cfg.tweets_path))
    lookup = load_lookup(str(cfg.lookup_path))
    lexicon = load_lexicon(str(cfg.lexicon_path))
    return run_pipeline(tweets, lookup, lexicon,
                        min_sentiment_tweets=cfg.min_sentiment_tweets, top_n=cfg.top_n)
