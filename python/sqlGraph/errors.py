"""Exceptions raised by the SQL-to-Graph pipeline."""
from typing import Any, Dict, Optional

from sqlGraph.diagnostics import DiagnosticKind


class SqlGraphError(Exception):
    """Base class for pipeline errors."""

    def __init__(self, message: str, *, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}


class RowCoercionError(SqlGraphError):
    """Raised when a single result row cannot become a data point."""

    def __init__(self, kind: DiagnosticKind, message: str, *,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context=context)
        self.kind = kind


class ConnectionFault(SqlGraphError):
    """Raised when the database fails. Aborts the whole run."""


class RenderFault(SqlGraphError):
    """Raised when a chart cannot be rendered."""
