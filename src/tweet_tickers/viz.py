from __future__ import annotations
import os
from typing import Dict, List, Optional, Tuple
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from .metrics import top_mentions, top_pairs
from .pipeline import AnalysisResult


def _ensure_dir(p: Optional[str]) -> None:
    if p:
        d = os.path.dirname(p)
        if d and not os.path.exists(d):
            os.makedirs(d, exist_ok=True)


def _finish(fig: plt.Figure, out_path: Optional[str], show: bool) -> Optional[str]:
    fig.tight_layout()
    saved = None
    if out_path:
        _ensure_dir(out_path)
        fig.savefig(out_path, dpi=150, bbox_inches="tight")
        saved = out_path
    if show:
        plt.show()
    else:
        plt.close(fig)
    return saved


def _require(df: pd.DataFrame, required: set, name: str) -> None:
    missing = required - set(df.columns)
    if missing:
        raise ValueError(f"{name} is missing columns: {missing}")
    if df.empty:
        raise ValueError(f"{name} is empty; nothing to plot")


def plot_top_mentions(
    counts: pd.DataFrame,
    out_path: Optional[str] = None,
    show: bool = False,
    *,
    top_n: int = 10,
) -> Tuple[plt.Figure, plt.Axes, Optional[str]]:
    """Horizontal bars of the top-N most mentioned companies (largest on top)."""
    _require(counts, {"company_name", "count"}, "counts")
    top = top_mentions(counts, top_n).iloc[::-1]

    fig, ax = plt.subplots(figsize=(8, 0.4 * len(top) + 1.5))
    ax.barh(top["company_name"].astype(str), top["count"].to_numpy())
    ax.set_title(f"Top {len(top)} mentioned companies")
    ax.set_xlabel("Mentions")
    return fig, ax, _finish(fig, out_path, show)


def cooccurrence_matrix(pairs: pd.DataFrame, top_n: int = 10) -> pd.DataFrame:
    """Symmetric ticker x ticker matrix built from the top-N pairs."""
    top = top_pairs(pairs, top_n)
    tickers = sorted(set(top["ticker_a"]) | set(top["ticker_b"]))
    mat = pd.DataFrame(0, index=tickers, columns=tickers, dtype="int64")
    for a, b, n in top[["ticker_a", "ticker_b", "count"]].itertuples(index=False):
        mat.loc[a, b] = n
        mat.loc[b, a] = n
    return mat


def plot_cooccurrence_heatmap(
    pairs: pd.DataFrame,
    out_path: Optional[str] = None,
    show: bool = False,
    *,
    top_n: int = 10,
) -> Tuple[plt.Figure, plt.Axes, Optional[str]]:
    """Heatmap of co-mention counts among the tickers in the top-N pairs."""
    _require(pairs, {"ticker_a", "ticker_b", "count"}, "pairs")
    mat = cooccurrence_matrix(pairs, top_n=top_n)

    fig, ax = plt.subplots(figsize=(7, 6))
    im = ax.imshow(mat.values, aspect="auto")
    ax.set_xticks(np.arange(len(mat.columns)))
    ax.set_xticklabels(mat.columns, rotation=90)
    ax.set_yticks(np.arange(len(mat.index)))
    ax.set_yticklabels(mat.index)
    ax.set_title(f"Ticker co-mentions (top {min(top_n, len(pairs))} pairs)")
    fig.colorbar(im, ax=ax)
    return fig, ax, _finish(fig, out_path, show)


def plot_company_sentiment(
    sentiment: pd.DataFrame,
    out_path: Optional[str] = None,
    show: bool = False,
) -> Tuple[plt.Figure, plt.Axes, Optional[str]]:
    """Net lexicon sentiment per reported company."""
    _require(sentiment, {"company_name", "net_sentiment", "tweet_count"}, "sentiment")
    df = sentiment.sort_values("net_sentiment")

    fig, ax = plt.subplots(figsize=(8, 0.4 * len(df) + 1.5))
    vals = df["net_sentiment"].to_numpy()
    ax.barh(df["company_name"].astype(str), vals,
            color=["tab:green" if v >= 0 else "tab:red" for v in vals])
    ax.axvline(0, linewidth=0.8, color="black")
    ax.set_title("Net sentiment by company")
    ax.set_xlabel("Positive - negative word hits")
    return fig, ax, _finish(fig, out_path, show)


def export_tables(result: AnalysisResult, out_dir: str) -> Dict[str, str]:
    """Write every result table as <name>.csv under out_dir; returns name -> path."""
    os.makedirs(out_dir, exist_ok=True)
    written = {}
    for name, df in result.tables().items():
        path = os.path.join(out_dir, f"{name}.csv")
        # daily_mentions is a pivot: keep its company index
        df.to_csv(path, index=(name == "daily_mentions"))
        written[name] = path
    return written


def plot_all(result: AnalysisResult, out_dir: str, top_n: int = 10) -> List[str]:
    """Draw whichever charts have data; empty tables are skipped."""
    saved = []
    if not result.mention_counts.empty:
        saved.append(plot_top_mentions(result.mention_counts,
                                       os.path.join(out_dir, "top_mentions.png"), top_n=top_n)[2])
    if not result.pairs.empty:
        saved.append(plot_cooccurrence_heatmap(result.pairs,
                                               os.path.join(out_dir, "cooccurrence.png"), top_n=top_n)[2])
    if not result.company_sentiment.empty:
        saved.append(plot_company_sentiment(result.company_sentiment,
                                            os.path.join(out_dir, "company_sentiment.png"))[2])
    return saved
