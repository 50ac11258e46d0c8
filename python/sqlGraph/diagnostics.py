"""
Diagnostic event stream for SQL-to-Graph.

Pipeline stages never write to the console. Each noteworthy condition
(a skipped row, a dropped query, a degenerate trend) is recorded as a
Diagnostic with a severity, a kind and a context dict. A DiagnosticLog
keeps the events for callers and tests, and forwards every event to the
standard logging module so the CLI can show them.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class Severity(Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class DiagnosticKind(Enum):
    """Every condition the pipeline reports."""

    PARSE_LENIENCY = "parse_leniency"
    QUERY_STARTED = "query_started"
    QUERY_COLUMNS = "query_columns"
    QUERY_EMPTY = "query_empty"
    QUERY_COMPLETED = "query_completed"
    SCHEMA_MISMATCH = "schema_mismatch"
    NULL_NUMERIC = "null_numeric"
    TYPE_MISMATCH = "type_mismatch"
    NON_NUMERIC = "non_numeric"
    COERCION_FAULT = "coercion_fault"
    GAP_FILL_SKIPPED = "gap_fill_skipped"
    GAP_FILL_APPLIED = "gap_fill_applied"
    DEGENERATE_TREND = "degenerate_trend"
    RENDER_FAULT = "render_fault"
    CONNECTION_FAULT = "connection_fault"
    REPORT_WRITTEN = "report_written"


_LOG_LEVELS = {
    Severity.DEBUG: logging.DEBUG,
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


@dataclass(frozen=True)
class Diagnostic:
    severity: Severity
    kind: DiagnosticKind
    message: str
    context: Dict[str, Any] = field(default_factory=dict)


class DiagnosticLog:
    """
    Collects diagnostics emitted during a run.

    Events are kept in emission order and mirrored to the
    ``sqlGraph.diagnostics`` logger.
    """

    def __init__(self, forward_to_logging: bool = True):
        self.forward_to_logging = forward_to_logging
        self._events: List[Diagnostic] = []

    def emit(self, severity: Severity, kind: DiagnosticKind, message: str,
             **context: Any) -> Diagnostic:
        """
        Record a diagnostic event.

        Args:
            severity: How serious the condition is.
            kind: What happened.
            message: Human-readable description.
            **context: Extra fields (query title, raw values, counts).

        Returns:
            The recorded Diagnostic.
        """
        event = Diagnostic(severity=severity, kind=kind, message=message, context=dict(context))
        self._events.append(event)
        if self.forward_to_logging:
            logger.log(_LOG_LEVELS[severity], "[%s] %s", kind.value, message)
        return event

    def debug(self, kind: DiagnosticKind, message: str, **context: Any) -> Diagnostic:
        return self.emit(Severity.DEBUG, kind, message, **context)

    def info(self, kind: DiagnosticKind, message: str, **context: Any) -> Diagnostic:
        return self.emit(Severity.INFO, kind, message, **context)

    def warning(self, kind: DiagnosticKind, message: str, **context: Any) -> Diagnostic:
        return self.emit(Severity.WARNING, kind, message, **context)

    def error(self, kind: DiagnosticKind, message: str, **context: Any) -> Diagnostic:
        return self.emit(Severity.ERROR, kind, message, **context)

    @property
    def events(self) -> List[Diagnostic]:
        return list(self._events)

    def of_kind(self, kind: DiagnosticKind) -> List[Diagnostic]:
        return [e for e in self._events if e.kind is kind]

    def count(self, kind: Optional[DiagnosticKind] = None) -> int:
        if kind is None:
            return len(self._events)
        return len(self.of_kind(kind))

    def __len__(self) -> int:
        return len(self._events)


def ensure_log(diagnostics: Optional[DiagnosticLog]) -> DiagnosticLog:
    """Return the given log, or a fresh one when the caller passed none."""
    return diagnostics if diagnostics is not None else DiagnosticLog()
