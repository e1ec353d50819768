import numpy as np
import pandas as pd
from scipy import sparse
from sklearn.feature_extraction.text import CountVectorizer

COUNT_COLUMNS = ["company_name", "count"]
PAIR_COLUMNS = ["ticker_a", "ticker_b", "count"]


def count_mentions(resolved: pd.DataFrame) -> pd.DataFrame:
    """Resolved mentions per company, most mentioned first (ties: name A-Z)."""
    if resolved.empty:
        return pd.DataFrame(columns=COUNT_COLUMNS)
    agg = resolved.groupby("company_name").size().rename("count").reset_index()
    agg["count"] = agg["count"].astype("int64")
    return (agg.sort_values(["count", "company_name"], ascending=[False, True], kind="mergesort")
               .reset_index(drop=True))


def top_mentions(counts: pd.DataFrame, n: int = 10) -> pd.DataFrame:
    return counts.head(n).copy()


def count_cooccurrences(resolved: pd.DataFrame) -> pd.DataFrame:
    """
    Count unordered pairs of distinct tickers mentioned in the same tweet.

    Builds a binary tweet x ticker incidence matrix X; X.T @ X holds the
    number of tweets mentioning both tickers, and its strict upper triangle
    is exactly the set of canonical (a < b) pairs. A tweet with m distinct
    tickers adds 1 to each of its C(m, 2) pairs.
    """
    if resolved.empty:
        return pd.DataFrame(columns=PAIR_COLUMNS)

    per_tweet = resolved.groupby("tweet_id")["ticker"].apply(lambda s: sorted(set(s)))
    per_tweet = per_tweet[per_tweet.map(len) >= 2]
    if per_tweet.empty:
        return pd.DataFrame(columns=PAIR_COLUMNS)

    # feature names come out sorted, so row index < col index <=> ticker_a < ticker_b
    vec = CountVectorizer(analyzer=lambda toks: toks, binary=True)
    X = vec.fit_transform(per_tweet.tolist())
    vocab = vec.get_feature_names_out()
    co = sparse.triu(X.T @ X, k=1).tocoo()

    out = pd.DataFrame({
        "ticker_a": vocab[co.row],
        "ticker_b": vocab[co.col],
        "count": np.asarray(co.data, dtype="int64"),
    })
    out = out[out["count"] > 0]
    return (out.sort_values(["count", "ticker_a", "ticker_b"], ascending=[False, True, True])
               .reset_index(drop=True))


def top_pairs(pairs: pd.DataFrame, n: int = 10) -> pd.DataFrame:
    return pairs.head(n).copy()


def daily_mentions(resolved: pd.DataFrame, tweets: pd.DataFrame, top_n: int = 10) -> pd.DataFrame:
    """
    company x day pivot of resolved mentions for the top-N companies.
    Tweets without a parseable timestamp are left out.
    """
    if resolved.empty or tweets.empty:
        return pd.DataFrame()
    top = top_mentions(count_mentions(resolved), top_n)["company_name"]
    df = (resolved[resolved["company_name"].isin(top)]
            .merge(tweets[["id", "date"]], left_on="tweet_id", right_on="id", how="inner")
            .dropna(subset=["date"]))
    if df.empty:
        return pd.DataFrame()
    return pd.pivot_table(df, index="company_name", columns="date", values="ticker",
                          aggfunc="size", fill_value=0)


def source_breakdown(tweets: pd.DataFrame) -> pd.DataFrame:
    if tweets.empty:
        return pd.DataFrame(columns=["source", "tweets"])
    src = tweets["source"].fillna("unknown").astype(str)
    agg = src.groupby(src).size().rename("tweets").rename_axis("source").reset_index()
    return agg.sort_values(["tweets", "source"], ascending=[False, True]).reset_index(drop=True)
