"""
Database utility functions for SQL-to-Graph.
Provides helpers for running ad-hoc SQL statements on an open connection.
"""
import logging
from sqlalchemy import Connection, text
from sqlalchemy.engine import CursorResult
from typing import List, Optional

logger = logging.getLogger(__name__)


def execute_query(conn: Connection, query: str, params: Optional[dict] = None) -> CursorResult:
    """
    Execute a SQL statement and return the live result.

    Statements without parameters are sent to the driver verbatim, so
    colons and percent signs inside the SQL are left alone.

    Args:
        conn: Open SQLAlchemy connection.
        query: SQL statement string.
        params: Optional parameters for parameterized queries.

    Returns:
        CursorResult; rows are fetched lazily from the cursor.
    """
    logger.debug(f"Executing query: {query}")
    if params:
        return conn.execute(text(query), params)
    return conn.exec_driver_sql(query)


def result_columns(result: CursorResult) -> List[str]:
    """
    Get the column names of a result.

    Returns:
        Column names in select order, or an empty list for statements
        that return no rows (INSERT, UPDATE, DDL).
    """
    if not result.returns_rows:
        return []
    return [str(k) for k in result.keys()]


def describe_columns(result: CursorResult) -> List[str]:
    """Column names with driver type codes, for debug output."""
    if not result.returns_rows or result.cursor is None or result.cursor.description is None:
        return []
    return [f"{col[0]} (type code: {col[1]})" for col in result.cursor.description]
