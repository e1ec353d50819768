import logging

import pytest
from pydantic import ValidationError

import run_analysis
from tweet_tickers.config import MIN_SENTIMENT_TWEETS, AnalysisConfig, load_config
from tweet_tickers.log import setup_logging


def test_defaults():
    cfg = AnalysisConfig(tweets_path="t.csv", lookup_path="l.csv", lexicon_path="x.csv")
    assert cfg.min_sentiment_tweets == MIN_SENTIMENT_TWEETS == 50
    assert cfg.top_n == 10
    assert cfg.make_plots is True


def test_threshold_must_be_positive():
    with pytest.raises(ValidationError):
        AnalysisConfig(tweets_path="t.csv", lookup_path="l.csv", lexicon_path="x.csv",
                       min_sentiment_tweets=0)


def test_load_config_resolves_relative_paths(tmp_path):
    p = tmp_path / "cfg" / "run.yaml"
    p.parent.mkdir()
    p.write_text("tweets_path: data/t.csv\nlookup_path: /abs/l.csv\nlexicon_path: x.csv\n", encoding="utf-8")
    cfg = load_config(p)
    assert cfg.tweets_path == p.parent.resolve() / "data" / "t.csv"
    assert str(cfg.lookup_path) == "/abs/l.csv"
    assert cfg.output_dir == p.parent.resolve() / "output"
    assert cfg.log_file is None


def test_load_config_missing_paths(tmp_path):
    p = tmp_path / "empty.yaml"
    p.write_text("", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(p)


def test_setup_logging_writes_file(tmp_path, restore_root_logging):
    log_file = tmp_path / "logs" / "run.log"
    setup_logging("debug", log_file)
    logging.getLogger("tweet_tickers.test").debug("hello")
    for h in logging.getLogger().handlers:
        h.flush()
    assert "hello" in log_file.read_text(encoding="utf-8")
    assert logging.getLogger().level == logging.DEBUG


def test_run_analysis_main(tmp_path, csv_inputs, restore_root_logging):
    tweets_path, lookup_path, lexicon_path = csv_inputs
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        f"tweets_path: {tweets_path}\n"
        f"lookup_path: {lookup_path}\n"
        f"lexicon_path: {lexicon_path}\n"
        "output_dir: out\n"
        "min_sentiment_tweets: 1\n",
        encoding="utf-8",
    )
    assert run_analysis.main([str(cfg)]) == 0
    out = tmp_path / "out"
    assert (out / "mention_counts.csv").exists()
    assert (out / "cooccurrence.png").exists()
