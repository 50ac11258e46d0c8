"""
SQL-to-Graph Main Processing Script

Turns an annotated SQL script into a PDF of charts:
1. Parses the script into (title, statement) pairs using '--' comments
2. Executes each statement against the database (columns X and Y)
3. Optionally fills missing days in time series results
4. Renders one chart per query with a linear trend line
5. Writes SqlToGraph-YYYY-MM-DD.pdf

Usage:
    sql-graph <connection> <sql_file> [--fill-missing-days]
    sql-graph "mysql+pymysql://user:pw@localhost:3306/testdb" ./queries.sql
    sql-graph warehouse ./queries.sql --fill-missing-days   # named connection from config
"""
import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional, Union

from sqlalchemy.engine import Engine
from sqlalchemy.exc import ArgumentError

from common.config import ConfigError, get_engine, get_log_level, get_report_settings, load_config
from sqlGraph.database import execute_queries
from sqlGraph.diagnostics import DiagnosticLog, ensure_log
from sqlGraph.errors import ConnectionFault
from sqlGraph.query_parser import parse_queries_from_file
from sqlGraph.report_generation import build_report_entries, generate_pdf_report

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(levelname)s:%(name)s:%(message)s'


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Log to stderr so stdout stays free for other output."""
    logging.basicConfig(level=level, stream=sys.stderr, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)


def run_report(engine: Engine, sql_file: Union[str, Path], fill_missing_days: bool = False,
               output_dir: Union[str, Path] = ".", report_date: Optional[date] = None,
               diagnostics: Optional[DiagnosticLog] = None) -> Optional[Path]:
    """
    Run the whole pipeline for one SQL script.

    Args:
        engine: SQLAlchemy engine for the target database.
        sql_file: Path to the annotated SQL script.
        fill_missing_days: Add zero-valued points for missing days in time series.
        output_dir: Directory for the PDF.
        report_date: Date used in the PDF file name (defaults to today).
        diagnostics: Optional diagnostic log collecting the run's events.

    Returns:
        Path to the PDF, or None when there was nothing to report.

    Raises:
        FileNotFoundError: If the script does not exist.
        ConnectionFault: If the database fails.
    """
    diagnostics = ensure_log(diagnostics)

    directives = parse_queries_from_file(sql_file, diagnostics)
    if not directives:
        logger.warning("No valid SQL queries found in the file.")
        return None

    logger.info(f"Found {len(directives)} queries in {sql_file}")
    results = execute_queries(engine, directives, fill_missing_days, diagnostics)

    if not results:
        logger.warning("No data available to generate charts.")
        return None

    entries = build_report_entries(results, diagnostics)
    return generate_pdf_report(entries, output_dir, report_date, diagnostics)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sql-graph",
        description="Generate a PDF of charts from an annotated SQL script",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Each query must return columns named X and Y. A '--' comment line\n"
            "before a query becomes its chart title.\n\n"
            "Example:\n"
            '  sql-graph "mysql+pymysql://user:pw@localhost:3306/testdb" ./queries.sql --fill-missing-days'
        ),
    )
    parser.add_argument(
        "connection",
        help="SQLAlchemy database URL, or the name of a connection in the config file",
    )
    parser.add_argument("sql_file", help="Path to the SQL script")
    parser.add_argument(
        "--fill-missing-days",
        action="store_true",
        default=None,
        help="Add missing dates with 0 values for time series data",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Output directory for the PDF (default: report.output_dir from config, else current directory)",
    )
    parser.add_argument("--config", type=str, default=None, help="Path to a YAML config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for report generation.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = load_config(args.config)
        log_level = get_log_level(config)
    except (FileNotFoundError, ConfigError) as e:
        logger.error(str(e))
        return 1

    if not args.verbose:
        logging.getLogger().setLevel(log_level)

    settings = get_report_settings(config)
    fill_missing_days = settings['fill_missing_days'] if args.fill_missing_days is None else args.fill_missing_days
    output_dir = args.output_dir or settings['output_dir']

    if fill_missing_days:
        logger.info("Fill missing days option enabled - will add missing dates with 0 values for time series data.")

    sql_path = Path(args.sql_file)
    if not sql_path.exists():
        logger.error(f"SQL file not found at '{sql_path}'")
        return 1

    try:
        engine = get_engine(args.connection, config)
    except (ConfigError, ArgumentError) as e:
        logger.error(f"Invalid connection '{args.connection}': {e}")
        return 1

    try:
        pdf_path = run_report(engine, sql_path, fill_missing_days, output_dir)
    except ConnectionFault as e:
        logger.error(f"Database error: {e}")
        return 1
    except Exception as e:
        logger.error(f"An unexpected error occurred: {type(e).__name__}: {e}", exc_info=True)
        return 1
    finally:
        engine.dispose()

    if pdf_path is not None:
        logger.info("PDF report generated successfully.")
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
