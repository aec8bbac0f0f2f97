#!/usr/bin/env python3
"""Command-line interface for candles."""

from __future__ import annotations

import argparse
import logging
import sys

from candles.exceptions import CandlesError


def _load_table(path: str, delimiter: str) -> list[list[str]]:
    from candles.data import CSVTableSource

    return CSVTableSource({"file_path": path, "delimiter": delimiter}).load_table()


def _print_lines(lines: list[str]) -> None:
    for line in lines:
        print(line)


def cmd_info(args: argparse.Namespace) -> int:
    """Show the prefixes, date span and value range of a dataset."""
    from candles.data import (
        available_prefixes,
        country_name,
        date_span,
        value_range,
    )

    try:
        table = _load_table(args.file, args.delimiter)
    except CandlesError as e:
        print(f"Data source error: {e}")
        return 1

    if not table:
        print("Error: Failed to parse the CSV file or file is empty.")
        return 1

    print("=" * 60)
    print("DATASET")
    print("=" * 60)
    print(f"File:        {args.file}")
    print(f"Rows:        {len(table) - 1}")

    print("\n--- Available Country Prefixes and Names ---")
    for prefix in available_prefixes(table[0], args.metric):
        print(f"- {prefix} ({country_name(prefix)})")

    span = date_span(table)
    if span is None:
        print("\nNo date range available (data might be empty).")
    else:
        print("\n--- Available Date Range ---")
        print(f"Start: {span[0]}")
        print(f"End:   {span[1]}")

    values = value_range(table, args.metric)
    if values is None:
        print(f"\nNo valid {args.metric} data found.")
    else:
        print(f"\n--- Global {args.metric.capitalize()} Range ---")
        print(f"Minimum: {values[0]}")
        print(f"Maximum: {values[1]}")

    return 0


def cmd_bars(args: argparse.Namespace) -> int:
    """Compute and list the bars of one column."""
    from candles.analysis import aggregate, value_column

    column = value_column(args.country, args.metric)
    try:
        table = _load_table(args.file, args.delimiter)
        bars = aggregate(table, column, args.granularity)
    except CandlesError as e:
        print(f"Error: {e}")
        return 1

    if not bars:
        print("No candlestick data could be computed. Check input data.")
        return 1

    print(f"Computed {len(bars)} bars for {column} by {args.granularity}:")
    for bar in bars:
        print(
            f"Date: {bar.key}, Open: {bar.open}, High: {bar.high}, "
            f"Low: {bar.low}, Close: {bar.close}"
        )
    return 0


def cmd_plot(args: argparse.Namespace) -> int:
    """Plot yearly bars by decade, optionally filtered."""
    from candles.analysis import (
        aggregate,
        filter_by_key_range,
        filter_by_value_range,
        value_column,
    )
    from candles.charts import render_grouped_bars

    if (args.start is None) != (args.end is None):
        print("Error: --start and --end must be given together")
        return 1
    if (args.min is None) != (args.max is None):
        print("Error: --min and --max must be given together")
        return 1

    column = value_column(args.country, args.metric)
    try:
        table = _load_table(args.file, args.delimiter)
        bars = aggregate(table, column)
    except CandlesError as e:
        print(f"Error: {e}")
        return 1

    if args.start is not None:
        bars = filter_by_key_range(bars, args.start, args.end)
    if args.min is not None:
        bars = filter_by_value_range(bars, args.min, args.max)

    if not bars:
        print("No data available for the selected filter.")
        return 1

    print(f"Text-Based Plot of Candlesticks for {column} by Decade:")
    print("-" * 35)
    _print_lines(render_grouped_bars(bars, args.height))
    return 0


def cmd_predict(args: argparse.Namespace) -> int:
    """Forecast the next years from yearly midpoints."""
    from candles.analysis import aggregate, forecast, value_column
    from candles.charts import render_series

    if args.height < 1:
        print("Error: --height must be positive")
        return 1

    column = value_column(args.country, args.metric)
    try:
        table = _load_table(args.file, args.delimiter)
        bars = aggregate(table, column)
        result = forecast(
            bars,
            args.start_year,
            args.end_year,
            degree=args.degree,
            horizon=args.horizon,
        )
    except CandlesError as e:
        print(f"Error: {e}")
        return 1

    print("\n--- Historical Data ---")
    for year, value in result.historical:
        print(f"Year: {year}, Avg: {value:.2f}")

    print("\n--- Prediction Summary ---")
    print(f"Country:    {args.country}")
    print(f"Date Range: {args.start_year} to {args.end_year}")
    for year, value in result.predicted:
        print(f"Year: {year}, Predicted: {value:.2f}")

    print("\n--- Text-Based Visualization ---")
    _print_lines(render_series(result.historical, result.predicted, args.height))
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    """Run a full analysis from a configuration file."""
    from candles.commands import load_analysis_config, run_analysis
    from candles.exceptions import ConfigError

    try:
        config = load_analysis_config(args.config)
    except ConfigError as e:
        print(f"Configuration error: {e}")
        return 1

    logging.getLogger().setLevel(config.log_level)

    print("=" * 60)
    print("ANALYSIS")
    print("=" * 60)
    print(f"File:        {config.file_path}")
    print(f"Country:     {config.country}")
    print(f"Granularity: {config.granularity.value}")

    try:
        table = _load_table(config.file_path, config.delimiter)
        report = run_analysis(config, table)
    except CandlesError as e:
        print(f"Analysis failed: {e}")
        return 1

    print(f"\nBars:        {len(report.bars)} ({len(report.filtered_bars)} after filters)")
    if report.chart:
        print()
        _print_lines(report.chart)
    else:
        print("No data available for the selected filter.")

    if report.forecast is not None:
        print("\n--- Prediction Summary ---")
        for year, value in report.forecast.predicted:
            print(f"Year: {year}, Predicted: {value:.2f}")
        print()
        _print_lines(report.forecast_chart)

    return 0


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", help="Path to the CSV readings file")
    parser.add_argument(
        "-d", "--delimiter", default=",", help="CSV delimiter (default: ',')"
    )
    parser.add_argument(
        "-m", "--metric", default="temperature", help="Column metric suffix"
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        description="OHLC bars, charts and forecasts for time-series tables",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Info command
    info_parser = subparsers.add_parser("info", help="Summarize a dataset")
    _add_source_arguments(info_parser)

    # Bars command
    bars_parser = subparsers.add_parser("bars", help="List computed bars")
    _add_source_arguments(bars_parser)
    bars_parser.add_argument(
        "-c", "--country", required=True, help="Country prefix (e.g., AT)"
    )
    bars_parser.add_argument(
        "-g",
        "--granularity",
        default="year",
        choices=["year", "month", "day"],
        help="Bucket granularity (default: year)",
    )

    # Plot command
    plot_parser = subparsers.add_parser("plot", help="Plot yearly bars by decade")
    _add_source_arguments(plot_parser)
    plot_parser.add_argument(
        "-c", "--country", required=True, help="Country prefix (e.g., AT)"
    )
    plot_parser.add_argument("--start", help="First year to keep (YYYY)")
    plot_parser.add_argument("--end", help="Last year to keep (YYYY)")
    plot_parser.add_argument("--min", type=float, help="Lower value bound")
    plot_parser.add_argument("--max", type=float, help="Upper value bound")
    plot_parser.add_argument(
        "--height", type=int, default=20, help="Plot height (default: 20)"
    )

    # Predict command
    predict_parser = subparsers.add_parser("predict", help="Forecast next years")
    _add_source_arguments(predict_parser)
    predict_parser.add_argument(
        "-c", "--country", required=True, help="Country prefix (e.g., AT)"
    )
    predict_parser.add_argument(
        "--start-year", type=int, required=True, help="First sample year"
    )
    predict_parser.add_argument(
        "--end-year", type=int, required=True, help="Last sample year"
    )
    predict_parser.add_argument(
        "--degree", type=int, default=2, help="Polynomial degree (default: 2)"
    )
    predict_parser.add_argument(
        "--horizon", type=int, default=3, help="Years to predict (default: 3)"
    )
    predict_parser.add_argument(
        "--height", type=int, default=8, help="Plot height (default: 8)"
    )

    # Run command
    run_parser = subparsers.add_parser(
        "run", help="Run an analysis from configuration"
    )
    run_parser.add_argument("config", help="Path to YAML configuration file")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "info":
        return cmd_info(args)
    elif args.command == "bars":
        return cmd_bars(args)
    elif args.command == "plot":
        return cmd_plot(args)
    elif args.command == "predict":
        return cmd_predict(args)
    elif args.command == "run":
        return cmd_run(args)

    return 0


if __name__ == "__main__":
    sys.exit(main())
