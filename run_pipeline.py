"""News sentiment vs. price pipeline entry point.

Usage:
    python run_pipeline.py [--ticker AAPL] [--time-frame weekly] [--config config.yaml]

Loads config.yaml, initialises the providers, runs PipelineEngine, and
reports success/failure to stdout and the pipeline log.
"""

import argparse
import sys
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()  # must precede newspulse imports so env vars are available at module load

from newspulse.core.config import load_config  # noqa: E402
from newspulse.core.errors import NewsPulseError  # noqa: E402
from newspulse.core.logger import logger, set_log_dir  # noqa: E402
from newspulse.models.datatypes import TIME_FRAMES  # noqa: E402
from newspulse.pipeline.engine import PipelineEngine  # noqa: E402


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build cumulative news sentiment and price series for a ticker",
    )
    parser.add_argument("--ticker", "-t", default=None, help="Ticker symbol (default: config 'ticker')")
    parser.add_argument(
        "--time-frame", "-f",
        choices=TIME_FRAMES,
        default=None,
        help="Series granularity (default: config 'time_frame')",
    )
    parser.add_argument("--config", "-c", default="config.yaml", help="Path to YAML config file")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the pipeline. Returns 0 on success, 1 on failure."""
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as exc:
        logger.error(f"run_pipeline: failed to load config: {exc}")
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    output_dir = config.get("output_dir", "output")
    set_log_dir(output_dir)

    try:
        engine = PipelineEngine(config=config, output_dir=output_dir)
        result = engine.run(ticker=args.ticker, time_frame=args.time_frame)
    except (NewsPulseError, ValueError) as exc:
        logger.error(f"run_pipeline: PipelineEngine raised: {exc}", exc_info=True)
        print(f"ERROR: pipeline failed — {exc}", file=sys.stderr)
        return 1

    if result.articles:
        print(
            f"SUCCESS: {len(result.articles)} articles for {result.ticker} "
            f"covering {result.range_label} "
            f"({len(result.sentiment)} sentiment / {len(result.prices)} price points, {result.time_frame})"
        )
    else:
        print(f"SUCCESS: no articles found for {result.ticker} ({len(result.prices)} price points)")
    logger.info(f"run_pipeline: completed — tables written to {output_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
