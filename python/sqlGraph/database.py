"""
Query execution for SQL-to-Graph.

Runs each directive in script order on a single connection and coerces the
returned rows into data points. Bad rows and queries without X/Y columns
are skipped with a diagnostic; any database error aborts the run.
"""
import logging
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import Connection
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from common.db_utils import describe_columns, execute_query, result_columns
from sqlGraph.coercion import coerce_row, has_required_columns
from sqlGraph.diagnostics import DiagnosticKind, DiagnosticLog, ensure_log
from sqlGraph.errors import ConnectionFault, RowCoercionError
from sqlGraph.gap_filling import fill_missing_days
from sqlGraph.models import DataPoint, QueryDirective, QueryResult

logger = logging.getLogger(__name__)


def execute_directive(conn: Connection, directive: QueryDirective,
                      diagnostics: Optional[DiagnosticLog] = None) -> Tuple[DataPoint, ...]:
    """
    Execute one directive and coerce its rows.

    Args:
        conn: Open SQLAlchemy connection.
        directive: Title and SQL statement.
        diagnostics: Optional diagnostic log.

    Returns:
        Points for every row that coerced cleanly. Empty when the result
        lacks an X or Y column.
    """
    diagnostics = ensure_log(diagnostics)
    statement = directive.statement

    result = execute_query(conn, statement)
    columns = result_columns(result)
    diagnostics.debug(
        DiagnosticKind.QUERY_COLUMNS,
        f"Query '{statement}' returned {len(columns)} columns: {', '.join(describe_columns(result)) or 'none'}",
        title=directive.title,
        columns=columns,
    )

    if not has_required_columns(columns):
        result.close()
        diagnostics.warning(
            DiagnosticKind.SCHEMA_MISMATCH,
            f"Query '{statement}' did not return both 'X' and 'Y' columns. "
            "Skipping chart generation for this query.",
            title=directive.title,
            columns=columns,
        )
        return ()

    points: List[DataPoint] = []
    for row_number, row in enumerate(result.mappings(), start=1):
        try:
            points.append(coerce_row(row))
        except RowCoercionError as e:
            diagnostics.warning(
                e.kind,
                f"{e} for query '{statement}'. Skipping row {row_number}.",
                title=directive.title,
                row=row_number,
                **e.context,
            )

    return tuple(points)


def execute_queries(engine: Engine, directives: Sequence[QueryDirective],
                    fill_missing: bool = False,
                    diagnostics: Optional[DiagnosticLog] = None) -> List[QueryResult]:
    """
    Execute all directives and collect their results.

    Args:
        engine: SQLAlchemy engine for the target database.
        directives: Directives in script order.
        fill_missing: Fill missing days in time series results with 0.
        diagnostics: Optional diagnostic log.

    Returns:
        One QueryResult per directive that produced data, in script order.

    Raises:
        ConnectionFault: On any database error. Nothing is retried.
    """
    diagnostics = ensure_log(diagnostics)
    results: List[QueryResult] = []

    try:
        with engine.connect() as conn:
            logger.info(f"Connected to database: {engine.url.render_as_string(hide_password=True)}")

            for directive in directives:
                diagnostics.info(
                    DiagnosticKind.QUERY_STARTED,
                    f"Executing query: {directive.title}",
                    title=directive.title,
                )
                points = execute_directive(conn, directive, diagnostics)

                if not points:
                    diagnostics.info(
                        DiagnosticKind.QUERY_EMPTY,
                        "No data returned for this query.",
                        title=directive.title,
                    )
                    continue

                if fill_missing:
                    points = fill_missing_days(points, diagnostics)

                results.append(QueryResult(title=directive.title, points=points))
                diagnostics.info(
                    DiagnosticKind.QUERY_COMPLETED,
                    f"Found {len(points)} data points.",
                    title=directive.title,
                    points=len(points),
                )
    except SQLAlchemyError as e:
        diagnostics.error(
            DiagnosticKind.CONNECTION_FAULT,
            f"Database error: {e}",
            error_type=type(e).__name__,
        )
        raise ConnectionFault(str(e), context={"error_type": type(e).__name__}) from e

    return results
