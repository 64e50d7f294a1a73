"""
Main Entry Point - Rescale Pipeline

Command-line interface for rescaling table columns onto [0, 1]
and for summarising numeric columns.
"""

import sys
import os
import logging
from typing import List, Optional

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import polars as pl

from src.coreutils.env import PipelineSettings
from src.coreutils.logging import setup_logging
from src.orchestration.pipeline import RescalePipeline

logger = logging.getLogger(__name__)


def build_parser():
    """Build the argument parser"""
    import argparse

    parser = argparse.ArgumentParser(description="Rescale Pipeline")
    subparsers = parser.add_subparsers(dest="command", required=True)

    rescale = subparsers.add_parser(
        "rescale", help="Rescale numeric columns of a table onto [0, 1]"
    )
    rescale.add_argument("source", help="Input file path or http(s) URL")
    rescale.add_argument(
        "--columns", nargs="+", help="Columns to rescale (default: all numeric)"
    )
    rescale.add_argument(
        "--by", nargs="+", help="Grouping column(s) for per-group rescaling"
    )
    rescale.add_argument(
        "--output", help="Output file (.parquet, .csv or .json)"
    )
    rescale.add_argument(
        "--dry-run",
        action="store_true",
        help="Run in dry-run mode (no output files written)",
    )

    describe = subparsers.add_parser(
        "describe", help="Summarise the numeric columns of a table"
    )
    describe.add_argument("source", help="Input file path or http(s) URL")
    describe.add_argument(
        "--columns", nargs="+", help="Columns to describe (default: all numeric)"
    )

    for sub in (rescale, describe):
        sub.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose logging"
        )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)
    settings = PipelineSettings.from_env()

    log_level = logging.DEBUG if args.verbose else settings.log_level
    setup_logging(level=log_level, log_dir=settings.log_dir)

    try:
        if args.command == "rescale":
            pipeline = RescalePipeline(settings=settings, dry_run=args.dry_run)
            results = pipeline.run(
                args.source,
                columns=args.columns,
                by=args.by,
                output_path=args.output,
            )
            print(f"✅ Rescaled {results['rows']} rows: {results['rescaled_columns']}")
            if results["output_path"]:
                print(f"   Saved to {results['output_path']}")

        elif args.command == "describe":
            pipeline = RescalePipeline(settings=settings, dry_run=True)
            summary = pipeline.describe(args.source, columns=args.columns)
            with pl.Config(tbl_rows=-1, tbl_cols=-1):
                print(summary)

        return 0

    except Exception as e:
        logger.error(f"❌ Pipeline failed: {e}")
        return 1


if __name__ == "__main__":
    exit(main())
