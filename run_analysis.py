import argparse
import logging

from tweet_tickers import load_config, run_from_config
from tweet_tickers.log import setup_logging
from tweet_tickers.viz import export_tables, plot_all

log = logging.getLogger("run_analysis")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Ticker mention, co-mention and sentiment tables for a tweet CSV.")
    parser.add_argument("config", help="YAML file with tweets_path, lookup_path, lexicon_path, ...")
    args = parser.parse_args(argv)

    cfg = load_config(args.config)
    setup_logging(cfg.log_level, cfg.log_file)

    result = run_from_config(cfg)
    written = export_tables(result, str(cfg.output_dir))
    log.info("Wrote %d tables to %s", len(written), cfg.output_dir)

    if cfg.make_plots:
        import matplotlib
        matplotlib.use("Agg")
        saved = plot_all(result, str(cfg.output_dir), top_n=cfg.top_n)
        log.info("Saved %d charts", len(saved))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
