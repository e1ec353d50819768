from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field

# a company needs this many scored tweets before its net sentiment is reported
MIN_SENTIMENT_TWEETS = 50
TOP_N = 10


class AnalysisConfig(BaseModel):
    tweets_path: Path
    lookup_path: Path
    lexicon_path: Path
    output_dir: Path = Path("output")
    min_sentiment_tweets: int = Field(default=MIN_SENTIMENT_TWEETS, ge=1)
    top_n: int = Field(default=TOP_N, ge=1)
    make_plots: bool = True
    log_level: str = "INFO"
    log_file: Optional[Path] = None


def load_config(path: str | Path) -> AnalysisConfig:
    """Read a YAML config; relative paths are taken relative to the YAML file."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        raw: dict[str, Any] = yaml.safe_load(f) or {}
    cfg = AnalysisConfig(**raw)

    base = path.resolve().parent
    for name in ("tweets_path", "lookup_path", "lexicon_path", "output_dir", "log_file"):
        p = getattr(cfg, name)
        if p is not None and not p.is_absolute():
            setattr(cfg, name, base / p)
    return cfg
