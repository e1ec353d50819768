import pandas as pd

from tweet_tickers import load_config, run_from_config, run_pipeline


def _frame(texts):
    return pd.DataFrame({"text": texts, "timestamp": ["2021-03-01 10:00:00"] * len(texts),
                         "source": ["web"] * len(texts)})


def test_single_tweet_example(lookup, lexicon):
    res = run_pipeline(_frame(["I love $AAPL and $MSFT today"]), lookup, lexicon, min_sentiment_tweets=1)
    assert res.mentions["raw_ticker"].tolist() == ["AAPL", "MSFT"]
    assert res.resolved["company_name"].tolist() == ["Apple", "Microsoft"]
    assert res.pairs.values.tolist() == [["AAPL", "MSFT", 1]]
    assert res.company_sentiment.values.tolist() == [["Apple", 1, 1], ["Microsoft", 1, 1]]


def test_unknown_ticker_produces_nothing(lookup, lexicon):
    res = run_pipeline(_frame(["$ZZZZZZ is great"]), lookup, lexicon)
    assert res.resolved.empty
    assert res.mention_counts.empty
    assert res.pairs.empty
    assert res.company_sentiment.empty


def test_all_rows_filtered_gives_empty_tables(lookup, lexicon):
    res = run_pipeline(_frame([None, "", "https://t.co/x"]), lookup, lexicon)
    assert res.tweets.empty
    for name, table in res.tables().items():
        assert table.empty, name


def test_sentiment_threshold_end_to_end(lookup, lexicon):
    texts = ["$aapl looks great"] * 50 + ["$msft great"] * 49 + ["$tsla hello"] * 60
    res = run_pipeline(_frame(texts), lookup, lexicon)
    assert res.company_sentiment.values.tolist() == [["Apple", 50, 50]]
    counts = dict(zip(res.mention_counts["company_name"], res.mention_counts["count"]))
    assert counts == {"Tesla": 60, "Apple": 50, "Microsoft": 49}


def test_pipeline_is_idempotent(tweets, lookup, lexicon):
    a = run_pipeline(tweets, lookup, lexicon, min_sentiment_tweets=1)
    b = run_pipeline(tweets, lookup, lexicon, min_sentiment_tweets=1)
    for name in a.tables():
        pd.testing.assert_frame_equal(a.tables()[name], b.tables()[name])


def test_pipeline_tables(tweets, lookup, lexicon):
    res = run_pipeline(tweets, lookup, lexicon, min_sentiment_tweets=1)
    assert res.company_sentiment.values.tolist() == [
        ["Apple", 2, 2], ["Microsoft", 2, 2], ["Alphabet", 1, 1], ["Tesla", -2, 2],
    ]
    assert res.tweet_scores.loc[res.tweet_scores["company_name"] == "Tesla", "score"].tolist() == [1, -3]


def test_run_from_config(tmp_path, csv_inputs):
    tweets_path, lookup_path, lexicon_path = csv_inputs
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(
        f"tweets_path: {tweets_path.name}\n"
        f"lookup_path: {lookup_path.name}\n"
        f"lexicon_path: {lexicon_path.name}\n"
        "min_sentiment_tweets: 2\n",
        encoding="utf-8",
    )
    res = run_from_config(load_config(cfg_path))
    assert res.mention_counts["count"].sum() == 8
    assert res.company_sentiment["company_name"].tolist() == ["Apple", "Microsoft", "Tesla"]
