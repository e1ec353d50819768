import logging
import logging.handlers

import matplotlib
matplotlib.use("Agg")

import pandas as pd
import pytest

from tweet_tickers.sentiment import Polarity


@pytest.fixture
def lookup():
    return {
        "AAPL": "Apple",
        "MSFT": "Microsoft",
        "TSLA": "Tesla",
        "GOOG": "Alphabet",
        "GOOGL": "Alphabet",
    }


@pytest.fixture
def lexicon():
    return {
        "great": Polarity.POSITIVE,
        "love": Polarity.POSITIVE,
        "bad": Polarity.NEGATIVE,
        "crash": Polarity.NEGATIVE,
    }


@pytest.fixture
def tweets():
    return pd.DataFrame({
        "text": [
            "I love $AAPL and $MSFT today",
            "$AAPL $MSFT $TSLA all great, see https://t.co/xyz",
            "$TSLA crash incoming. bad bad",
            "nothing to see here",
            None,
            "$ZZZZZZ is great",
            "$GOOG or $GOOGL? love it",
        ],
        "timestamp": [
            "2021-01-04 09:30:00",
            "2021-01-04 11:00:00",
            "2021-01-05 10:15:00",
            "2021-01-05 12:00:00",
            "2021-01-06 08:00:00",
            "not a date",
            "2021-01-06 16:45:00",
        ],
        "source": ["web", "iphone", "web", "android", "web", "web", None],
    })


@pytest.fixture
def csv_inputs(tmp_path, tweets):
    tweets_path = tmp_path / "tweets.csv"
    tweets.rename(columns={"text": "Text", "source": "Source"}).to_csv(tweets_path, index=False)

    lookup_path = tmp_path / "companies.csv"
    lookup_path.write_text(
        "ticker,name\naapl,Apple\nMSFT,Microsoft\nTSLA,Tesla\nGOOG,Alphabet\nGOOGL,Alphabet\n",
        encoding="utf-8",
    )

    lexicon_path = tmp_path / "lexicon.csv"
    lexicon_path.write_text(
        "word,sentiment\ngreat,positive\nlove,positive\nbad,negative\ncrash,negative\nfear,anger\n",
        encoding="utf-8",
    )
    return tweets_path, lookup_path, lexicon_path


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    level = root.level
    yield
    # drop only what setup_logging installed; pytest manages its own capture handlers
    for h in list(root.handlers):
        if type(h) in (logging.StreamHandler, logging.handlers.RotatingFileHandler):
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
