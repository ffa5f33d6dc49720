"""
Command-line interface for PolarCharts package.

Provides argparse-based CLI with subcommands for plotting a table of records
viewed from the South Pole and for listing the available colour palettes.

Usage:
    polar-charts plot stations.csv --fill temperature --output temperature.png
    polar-charts plot grid.csv --colour water_mass --geom tile --lat-precision 2 --lon-precision 5
    polar-charts palettes --type div
"""

import argparse
import io
import sys
import warnings
from contextlib import contextmanager, redirect_stdout, redirect_stderr
from typing import List, Optional

import pandas as pd

from .api import create_polar_chart
from .config import Config
from .constants import BREWER_PALETTES, CONTINUOUS_PALETTE_TYPES, GEOMETRIES
from .logging_config import setup_logging
from .exceptions import PolarChartsError


def setup_logging_from_args(args: argparse.Namespace) -> None:
    """
    Configure logging based on command-line arguments.

    Args:
        args: Parsed command-line arguments with verbose, quiet, log_file
    """
    if hasattr(args, 'silent') and args.silent:
        verbosity = -2  # ERROR
    elif hasattr(args, 'quiet') and args.quiet:
        verbosity = -1  # WARNING
    elif hasattr(args, 'verbose') and args.verbose:
        verbosity = 1  # DEBUG
    else:
        verbosity = 0  # INFO

    log_file = getattr(args, 'log_file', None)
    setup_logging(verbosity=verbosity, log_file=log_file)


def positive_float(value: str) -> float:
    """
    Parse a strictly positive number.

    Raises:
        argparse.ArgumentTypeError: If value is not a number above zero
    """
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid number: {value}")
    if not number > 0:
        raise argparse.ArgumentTypeError(f"Precision must be positive, got {value}")
    return number


def load_config(config_path: Optional[str]) -> Optional[Config]:
    """
    Load configuration from file.

    Args:
        config_path: Path to config file (YAML or JSON)

    Returns:
        Config object or None if no path provided
    """
    if config_path is None:
        return None

    try:
        return Config.load_from_file(config_path)
    except Exception as e:
        print(f"Error loading config from {config_path}: {e}", file=sys.stderr)
        sys.exit(1)


def _cli_print(args: argparse.Namespace, *values: object, **kwargs) -> None:
    """Print unless --silent was provided."""
    if getattr(args, "silent", False):
        return
    print(*values, **kwargs)


@contextmanager
def _silence_third_party_output(args: argparse.Namespace):
    """Capture noisy stdout/stderr in --silent mode.

    On exceptions, captured output is forwarded to stderr.
    """
    if not getattr(args, "silent", False):
        yield
        return

    warnings.filterwarnings("ignore")
    buf_out = io.StringIO()
    buf_err = io.StringIO()
    with redirect_stdout(buf_out), redirect_stderr(buf_err):
        try:
            yield
        except Exception:
            sys.stderr.write(buf_err.getvalue())
            sys.stderr.write(buf_out.getvalue())
            raise


def build_mapping(args: argparse.Namespace) -> dict:
    """Aesthetic -> column from the --fill, --colour, --size and --alpha options."""
    mapping = {}
    for aesthetic in ("fill", "colour", "size", "alpha"):
        column = getattr(args, aesthetic, None)
        if column:
            mapping[aesthetic] = column
    return mapping


def cmd_plot(args: argparse.Namespace) -> int:
    """Handle 'plot' subcommand."""
    _cli_print(args, f"Plotting {args.input} ({args.geom})")

    try:
        config = load_config(args.config)
        if config is None:
            config = Config()

        # Override config values if specified
        if args.dpi:
            config.default_dpi = args.dpi
        if args.coast_expand is not None:
            config.coast_expand = args.coast_expand
        if args.symmetric_coast:
            config.symmetric_coast_clip = True
        config.validate()

        try:
            data = pd.read_csv(args.input)
        except (OSError, ValueError) as e:
            print(f"Error reading {args.input}: {e}", file=sys.stderr)
            return 1

        coastline_source = None
        if args.coastline:
            try:
                coastline_source = pd.read_csv(args.coastline)
            except (OSError, ValueError) as e:
                print(f"Error reading coastline {args.coastline}: {e}", file=sys.stderr)
                return 1

        with _silence_third_party_output(args):
            output_path = create_polar_chart(
                data,
                mapping=build_mapping(args),
                geom=args.geom,
                lat_precision=args.lat_precision,
                lon_precision=args.lon_precision,
                output_path=args.output,
                config=config,
                coastline_source=coastline_source,
            )

        if getattr(args, "silent", False):
            print(str(output_path))
        else:
            print(f"Success! Chart saved to: {output_path}")
        return 0

    except PolarChartsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        return 1


def cmd_palettes(args: argparse.Namespace) -> int:
    """Handle 'palettes' subcommand."""
    index = {}
    for name, info in BREWER_PALETTES.items():
        if args.type and info["category"] != args.type:
            continue
        # only diverging and sequential palettes can be picked by index
        position = ""
        if info["category"] in CONTINUOUS_PALETTE_TYPES:
            position = index.get(info["category"], 0)
            index[info["category"]] = position + 1
        print(f"{info['category']:<5} {position:>2}  {name:<10} {info['max_colors']:>2} colours")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        prog="polar-charts",
        description="Plot geospatial data viewed from the South Pole",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    def _add_common_globalish_args(p: argparse.ArgumentParser) -> None:
        """Add args that are accepted both before and after the subcommand."""
        p.add_argument(
            "-v", "--verbose",
            action="store_true",
            help="Enable DEBUG logging"
        )
        p.add_argument(
            "-q", "--quiet",
            action="store_true",
            help="Suppress INFO logging (WARNING+ only)"
        )
        p.add_argument(
            "--silent",
            action="store_true",
            help="Suppress most console output (prints only final output path)"
        )
        p.add_argument(
            "--log-file",
            type=str,
            help="Write logs to file"
        )

    # Global arguments (still supported before subcommands)
    _add_common_globalish_args(parser)

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # ========================================================================
    # plot subcommand
    # ========================================================================
    parser_plot = subparsers.add_parser(
        "plot",
        help="Plot a CSV file of records with lat and lon columns"
    )
    _add_common_globalish_args(parser_plot)
    parser_plot.add_argument(
        "input",
        type=str,
        help="CSV file with latitude and longitude columns"
    )
    parser_plot.add_argument(
        "--fill",
        type=str,
        help="Column mapped to the fill colour"
    )
    parser_plot.add_argument(
        "--colour", "--color",
        dest="colour",
        type=str,
        help="Column mapped to the colour"
    )
    parser_plot.add_argument(
        "--size",
        type=str,
        help="Column mapped to the point size (default: lat for points)"
    )
    parser_plot.add_argument(
        "--alpha",
        type=str,
        help="Column mapped to the opacity"
    )
    parser_plot.add_argument(
        "--geom",
        choices=list(GEOMETRIES),
        default="point",
        help="Geometry used to draw the records (default: point)"
    )
    parser_plot.add_argument(
        "--lat-precision",
        type=positive_float,
        help="Subsample latitudes to this precision (degrees)"
    )
    parser_plot.add_argument(
        "--lon-precision",
        type=positive_float,
        help="Subsample longitudes to this precision (degrees)"
    )
    parser_plot.add_argument(
        "--coastline",
        type=str,
        help="CSV file with lon and lat columns to use as world coastline (default: Natural Earth)"
    )
    parser_plot.add_argument(
        "--coast-expand",
        type=float,
        help="Degrees added around the data when cutting the coastline (default: 2)"
    )
    parser_plot.add_argument(
        "--symmetric-coast",
        action="store_true",
        help="Also cut the coastline below the southernmost data"
    )
    parser_plot.add_argument(
        "--output",
        type=str,
        default="polar_chart.png",
        help="Output file path (default: polar_chart.png)"
    )
    parser_plot.add_argument(
        "--dpi",
        type=int,
        help="Output resolution (default: from config)"
    )
    parser_plot.add_argument(
        "--config",
        type=str,
        help="Configuration file (YAML or JSON)"
    )
    parser_plot.set_defaults(func=cmd_plot)

    # ========================================================================
    # palettes subcommand
    # ========================================================================
    parser_palettes = subparsers.add_parser(
        "palettes",
        help="List the ColorBrewer palettes, with their index for diverging and sequential types"
    )
    _add_common_globalish_args(parser_palettes)
    parser_palettes.add_argument(
        "--type",
        choices=["div", "qual", "seq"],
        help="Only list palettes of this type"
    )
    parser_palettes.set_defaults(func=cmd_palettes)

    # Parse arguments
    args = parser.parse_args(argv)

    # Check if subcommand was provided
    if not hasattr(args, 'func'):
        parser.print_help()
        return 1

    # Setup logging
    setup_logging_from_args(args)

    # Execute subcommand
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
