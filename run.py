#!/usr/bin/env python3
"""
Sunburst Viz - Command-Line Entry Point
=======================================

Renders a sunburst chart from a CSV or Excel table and writes it as a
standalone plotly HTML page.

STAGE 1 -- Ingestion  (load_table / rows_from_dataframe)
    Reads the table with pandas and turns every record into a validated row:
    one value per dimension column, one numeric measure, optional drill links
    (a JSON list per cell in CSV input).

STAGE 2 -- Render pass  (SunburstChart.update)
    Builds the hierarchy, aggregates the measure, lays out the rings and
    assigns colours.

STAGE 3 -- Output  (build_sunburst_figure)
    Optionally simulates hovering one path (--hover) so the breadcrumb trail
    and percent label are baked into the page, then writes the HTML.

Usage:
    python run.py --file sales.csv --dimensions Region Country --measure Revenue
    python run.py -f sales.xlsx -d Region Country City -m Revenue -o chart.html
    python run.py -f sales.csv -d Region Country -m Revenue --hover "EMEA/France"
    python run.py --health-check
"""

import logging
import os
import re
import sys
import time
import argparse
from pathlib import Path

from sunburst_viz import (
    InteractionController,
    SunburstChart,
    SunburstConfig,
    build_sunburst_figure,
    load_table,
    rows_from_dataframe,
)
from sunburst_viz.core.config import COLOR_BY_NODE, COLOR_BY_ROOT

# Module-level logger for this file
logger = logging.getLogger(__name__)


# ==========================================
# PATH VALIDATION & SECURITY
# ==========================================

def validate_file_path(path: str, must_exist: bool = False) -> Path:
    """
    Resolve a user-supplied path and check it stays in allowed directories.

    Allowed directories are the project root and the user's home directory.

    Args:
        path: Raw file path string from a CLI argument.
        must_exist: When True, raise ValueError if the file is missing.

    Returns:
        The fully-resolved Path.

    Raises:
        ValueError: If the path is outside allowed directories, or does not
                    exist when must_exist is True.
    """
    resolved = Path(path).resolve()

    if must_exist and not resolved.exists():
        raise ValueError(f"File not found: {path}")

    project_root = Path(__file__).parent.resolve()
    home_dir = Path.home().resolve()
    allowed = (
        resolved.is_relative_to(project_root) or
        resolved.is_relative_to(home_dir) or
        resolved.is_relative_to(Path.cwd().resolve())
    )
    if not allowed:
        raise ValueError(f"Path outside allowed directories: {path}")

    return resolved


def sanitize_filename(filename: str) -> str:
    """
    Strip path components and unsafe characters from a filename.

    Keeps only word characters, spaces, hyphens and dots, truncated to 255
    characters.
    """
    filename = os.path.basename(filename)
    filename = re.sub(r'[^\w\s\-\.]', '', filename)
    return filename[:255]


# ==========================================
# LOGGING
# ==========================================
# Dual-output logging: a DEBUG-level log file per run plus a quieter console
# handler (WARNING by default, INFO with --verbose).

def setup_logging(verbose: bool = False, log_dir: Path = None):
    """
    Configure the root logger with file and console handlers.

    Args:
        verbose: Lower the console handler to INFO.
        log_dir: Where to write the log file (default: ./logs next to run.py).

    Returns:
        Path: The newly created log file.
    """
    log_dir = Path(log_dir) if log_dir else Path(__file__).parent / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = time.strftime('%Y%m%d_%H%M%S')
    log_file = log_dir / f"sunburst_viz_{timestamp}.log"

    file_formatter = logging.Formatter(
        '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_formatter = logging.Formatter(
        '%(asctime)s | %(levelname)s | %(message)s',
        datefmt='%H:%M:%S'
    )

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(file_formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO if verbose else logging.WARNING)
    console_handler.setFormatter(console_formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Drop handlers from a previous call to avoid duplicate lines
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    return log_file


# ==========================================
# HEALTH CHECK
# ==========================================

def check_required_packages():
    """
    Verify that the core packages are importable.

    Returns:
        Tuple of (all_installed: bool, missing_packages: list[str]) with pip
        install names.
    """
    required = {
        'pandas': 'pandas',
        'numpy': 'numpy',
        'plotly': 'plotly',
        'openpyxl': 'openpyxl',
    }

    missing = []
    for import_name, package_name in required.items():
        try:
            __import__(import_name)
        except ImportError:
            missing.append(package_name)

    return len(missing) == 0, missing


def health_check():
    """Print a short diagnostic report.  Returns True when all checks pass."""
    print()
    print("=" * 60)
    print("  SUNBURST VIZ - HEALTH CHECK")
    print("=" * 60)

    python_version = sys.version_info
    python_ok = python_version >= (3, 9)
    status = "✅" if python_ok else "❌"
    print(f"{status} Python Version: {python_version.major}.{python_version.minor}.{python_version.micro}")

    packages_ok, missing = check_required_packages()
    status = "✅" if packages_ok else "❌"
    print(f"{status} Required Packages: {'All installed' if packages_ok else f'{len(missing)} missing'}")
    if missing:
        print(f"   Install with: pip install {' '.join(missing)}")

    print("=" * 60)
    print()
    return python_ok and packages_ok


# ==========================================
# CLI
# ==========================================

def parse_args(argv=None):
    """
    Parse and return command-line arguments.

    Returns:
        argparse.Namespace with the parsed flags.
    """
    parser = argparse.ArgumentParser(
        description='Sunburst Viz - radial hierarchy chart from a table',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run.py -f sales.csv -d Region Country -m Revenue
  python run.py -f sales.xlsx -d Region Country -m Revenue -o sales.html
  python run.py -f sales.csv -d Region Country -m Revenue --color-by node
  python run.py -f sales.csv -d Region Country -m Revenue --hover "EMEA/France"
        """
    )

    parser.add_argument('--file', '-f', type=str, help='Input CSV/Excel file')
    parser.add_argument(
        '--dimensions', '-d',
        nargs='+',
        help='Dimension columns, outermost ring first'
    )
    parser.add_argument('--measure', '-m', type=str, help='Numeric measure column')
    parser.add_argument(
        '--links-column',
        type=str,
        help='Column holding drill links (JSON list per cell)'
    )
    parser.add_argument(
        '--output', '-o',
        type=str,
        default='sunburst.html',
        help='Output HTML file (default: sunburst.html)'
    )

    # Chart options
    parser.add_argument(
        '--color-by',
        choices=[COLOR_BY_ROOT, COLOR_BY_NODE],
        default=COLOR_BY_ROOT,
        help='Colour wedges by top-level branch or by their own name'
    )
    parser.add_argument(
        '--colors',
        nargs='+',
        help='Palette, e.g. --colors "#4285F4" "#EA4335"'
    )
    parser.add_argument(
        '--hide-nulls',
        action='store_true',
        help='Drop rows with null dimension values'
    )
    parser.add_argument(
        '--value-format',
        type=str,
        default='',
        help='Excel-style number format override, e.g. "$#,##0.00"'
    )
    parser.add_argument('--no-percent', action='store_true', help='Hide the percent-of-total label')
    parser.add_argument('--width', type=int, default=600, help='Chart width in px')
    parser.add_argument('--height', type=int, default=600, help='Chart height in px')
    parser.add_argument('--title', type=str, help='Chart title')
    parser.add_argument(
        '--hover',
        type=str,
        help='Slash-separated path of labels to highlight, e.g. "EMEA/France" or "2024/null"'
    )

    # Diagnostics
    parser.add_argument('--verbose', '-v', action='store_true', help='Show detailed logging output')
    parser.add_argument('--health-check', action='store_true', help='Run health check and exit')

    return parser.parse_args(argv)


def config_from_args(args) -> SunburstConfig:
    return SunburstConfig.from_dict({
        'color_range': args.colors,
        'color_by': args.color_by,
        'show_null_points': not args.hide_nulls,
        'value_format_override': args.value_format,
        'show_percent': not args.no_percent,
    })


def render_chart(args) -> Path:
    """
    Run ingestion, the render pass and the HTML export for parsed args.

    Returns:
        Path of the written HTML file.

    Raises:
        ValueError: On invalid paths, columns, measures or --hover paths.
    """
    input_path = validate_file_path(args.file, must_exist=True)
    output_path = validate_file_path(args.output)
    output_path = output_path.with_name(sanitize_filename(output_path.name))

    df = load_table(input_path)
    rows = rows_from_dataframe(df, args.dimensions, args.measure, args.links_column)

    chart = SunburstChart(config_from_args(args))
    context = chart.update(rows, width=args.width, height=args.height)

    if args.hover:
        node = context.tree.find_by_label(*args.hover.split('/'))
        if node is None:
            raise ValueError(f"--hover path not found in the hierarchy: {args.hover}")
        InteractionController(context).pointer_enter(node)

    fig = build_sunburst_figure(context, title=args.title)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(str(output_path), include_plotlyjs='cdn')
    logger.info(f"Chart written to {output_path}")
    return output_path


def main(argv=None):
    """
    Top-level entry point.

    Returns:
        Process exit code: 0 on success, 1 on errors.
    """
    args = parse_args(argv)
    log_file = setup_logging(verbose=args.verbose)
    logger.debug(f"Logging to {log_file}")

    if args.health_check:
        return 0 if health_check() else 1

    if not (args.file and args.dimensions and args.measure):
        print("❌ --file, --dimensions and --measure are required")
        return 1

    try:
        output_path = render_chart(args)
    except ValueError as e:
        logger.error(f"Render failed: {e}")
        print(f"❌ {e}")
        return 1

    print(f"✅ Chart written to {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
