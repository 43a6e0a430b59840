"""Command-line runner: load a dataset, build the seller report, print and export it."""

import argparse
import logging
import sys
from dataclasses import replace

from rich.console import Console
from rich.logging import RichHandler

from sales_pipeline.config import TOP_PRODUCT_MODES, load_report_config
from sales_pipeline.errors import SalesPipelineError, ValidationError
from sales_pipeline.performance import analyze_sales_data
from sales_pipeline.performance.report import build_report_frame, render_report
from sales_pipeline.performance.strategies import default_options
from sales_pipeline.utils.io import load_dataset, write_output

console = Console()

OUTPUT_FORMATS = ("csv", "json", "parquet", "excel")
LOG_LEVELS = ("debug", "info", "warning", "error")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rank sellers by profit and compute bonuses")
    parser.add_argument("dataset", help="JSON dataset file, or a directory of source files")
    parser.add_argument("--config", help="TOML file with a [tool.sales_report] table")
    parser.add_argument("--profile", help="Report preset: default or extended")
    parser.add_argument("--top-n", type=int, help="Number of top products per seller")
    parser.add_argument("--mode", choices=TOP_PRODUCT_MODES, help="Rank top products by profit or quantity")
    parser.add_argument("--output", help="Write the report table to this path")
    parser.add_argument("--format", choices=OUTPUT_FORMATS, default="csv", help="Output format")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="warning", help="Logging level")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.log_level)

    try:
        config = load_report_config(args.config, args.profile)
        overrides = {}
        if args.top_n is not None:
            overrides["top_n"] = args.top_n
        if args.mode is not None:
            overrides["top_products_mode"] = args.mode
        config = replace(config, **overrides)

        data = load_dataset(args.dataset)
        options = default_options(config.senior_title, config.senior_multiplier)
        reports = analyze_sales_data(data, options, config)
    except ValidationError as exc:
        console.print(f"[red]Invalid input: {exc}[/red]")
        return 1
    except (SalesPipelineError, FileNotFoundError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        return 1

    render_report(reports, console)

    if args.output:
        write_output(build_report_frame(reports), args.output, args.format)
    return 0


if __name__ == "__main__":
    sys.exit(main())
