"""feedwatch - print the new headlines of one RSS feed as they appear."""

import argparse
import logging
import sys
import time
from datetime import datetime
from pathlib import Path

from feedwatch import Feed, FeedConfig, HeadlineRecord, load_config
from feedwatch.core import format_timestamp


# ─────────────────────────────────────────────────────────────
# Logging setup
# ─────────────────────────────────────────────────────────────

def setup_logging(debug: bool = False, log_dir: Path = Path("logs")) -> Path:
    """Configure logging to file and console."""
    log_dir.mkdir(parents=True, exist_ok=True)

    today = datetime.now().strftime("%Y-%m-%d")
    log_file = log_dir / f"{today}.log"
    level = logging.DEBUG if debug else logging.INFO
    formatter = logging.Formatter(
        "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%H:%M:%S"
    )

    # File handler (detailed)
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    # Console handler (problems only unless debugging)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level if debug else logging.WARNING)
    console_handler.setFormatter(formatter)

    logging.basicConfig(
        level=level,
        handlers=[file_handler, console_handler],
        force=True,
    )

    return log_file


# ─────────────────────────────────────────────────────────────
# Output formatting
# ─────────────────────────────────────────────────────────────

def print_header(feed: Feed):
    """Print watcher header."""
    print()
    print("=" * 62)
    print(f"  feedwatch - {feed.name}")
    print(f"  {feed.url}")
    print(f"  refreshing every {feed.human_readable_delay}")
    print("=" * 62)
    print()


def print_headline(headline: HeadlineRecord):
    """Print one new headline, continuation lines indented."""
    lines = headline.multiline_headline
    print(f"  + {lines[0]}")
    for line in lines[1:]:
        print(f"    {line}")
    print(f"    {headline.url}  ({format_timestamp(headline.first_seen)})")


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="feedwatch - report new headlines of one RSS feed",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --name jbisbee --url http://www.jbisbee.com/rdf/
  python main.py --config config/feed.yaml --once
  python main.py --name perljobs --url http://jobs.perl.org/rss/standard.rss --delay 1800 --cache-dir /tmp
        """
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML feed config; command line options override its values"
    )

    parser.add_argument("--name", type=str, default=None, help="Feed key (log prefix and cache file name)")
    parser.add_argument("--url", type=str, default=None, help="Feed URL")

    parser.add_argument(
        "--delay",
        type=int,
        default=None,
        help="Seconds between refreshes (default: 600)"
    )

    parser.add_argument(
        "--cache-dir",
        type=str,
        default=None,
        help="Directory for the payload cache that survives restarts"
    )

    parser.add_argument(
        "--headline-as-id",
        action="store_true",
        help="Identify headlines by their text instead of their link"
    )

    parser.add_argument(
        "--once",
        action="store_true",
        help="Refresh once and exit"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Verbose logging on the console"
    )

    return parser.parse_args(argv)


def build_config(args) -> FeedConfig:
    """Merge the optional config file with command line overrides."""
    data = load_config(args.config).model_dump(exclude_unset=True) if args.config else {}

    overrides = {
        "name": args.name,
        "url": args.url,
        "delay": args.delay,
        "cache_dir": args.cache_dir,
    }
    data.update({k: v for k, v in overrides.items() if v is not None})
    if args.headline_as_id:
        data["headline_as_id"] = True
    if args.debug:
        data["debug"] = True

    return FeedConfig.model_validate(data)


def run(args=None, sleep=time.sleep):
    """Watch one feed until interrupted (or once with --once)."""
    if args is None:
        args = parse_args()

    config = build_config(args)
    if not config.url:
        raise SystemExit("A feed url is required (--url or 'url' in --config)")

    log_file = setup_logging(config.debug)
    logger = logging.getLogger(__name__)
    logger.info("=" * 60)
    logger.info(f"feedwatch started for {config.name} (log: {log_file})")

    feed = Feed(config)
    print_header(feed)

    with feed.watching():
        if feed.num_headlines:
            print(f"Restored {feed.num_headlines} cached headlines")
        try:
            while True:
                print(f"Fetching {feed.url}")
                for headline in feed.poll():
                    print_headline(headline)
                if args.once:
                    break
                sleep(feed.delay)
        except KeyboardInterrupt:
            print("\nStopped.")

    logger.info("feedwatch stopped")
    return feed


if __name__ == "__main__":
    run()
