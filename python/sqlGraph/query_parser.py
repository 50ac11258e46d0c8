"""
SQL script parsing for SQL-to-Graph.
Extracts chart titles from '--' comments and the statements that follow them.
"""
from pathlib import Path
from typing import Iterable, List, Optional, Union

from common.io_utils import safe_path
from sqlGraph.diagnostics import DiagnosticKind, DiagnosticLog, ensure_log
from sqlGraph.models import DEFAULT_TITLE, QueryDirective

COMMENT_MARKER = "--"
STATEMENT_TERMINATOR = ";"


def _clean_statement(statement: str) -> str:
    """Trim whitespace and drop one trailing terminator."""
    statement = statement.strip()
    if statement.endswith(STATEMENT_TERMINATOR):
        statement = statement[:-len(STATEMENT_TERMINATOR)]
    return statement.strip()


def parse_lines(lines: Iterable[str],
                diagnostics: Optional[DiagnosticLog] = None) -> List[QueryDirective]:
    """
    Parse script lines into titled statements.

    A comment line sets the title for the next statement and discards any
    partially collected statement. Content lines are joined with single
    spaces until one ends with ';'. A statement left open at end of input
    is still returned.

    Args:
        lines: Script lines (with or without newline characters).
        diagnostics: Optional log receiving a parse leniency event.

    Returns:
        Directives in script order.
    """
    diagnostics = ensure_log(diagnostics)
    directives: List[QueryDirective] = []
    title = DEFAULT_TITLE
    buffer: List[str] = []

    for line in lines:
        trimmed = line.strip()

        if trimmed.startswith(COMMENT_MARKER):
            title = trimmed[len(COMMENT_MARKER):].strip()
            buffer.clear()
        elif trimmed:
            buffer.append(trimmed)
            if trimmed.endswith(STATEMENT_TERMINATOR):
                directives.append(QueryDirective(title=title, statement=_clean_statement(" ".join(buffer))))
                title = DEFAULT_TITLE
                buffer.clear()

    if buffer:
        statement = _clean_statement(" ".join(buffer))
        diagnostics.warning(
            DiagnosticKind.PARSE_LENIENCY,
            f"Script ended without ';' after '{statement}'. Using it anyway.",
            title=title,
            statement=statement,
        )
        directives.append(QueryDirective(title=title, statement=statement))

    return directives


def parse_queries(script: str, diagnostics: Optional[DiagnosticLog] = None) -> List[QueryDirective]:
    """Parse script text into directives."""
    return parse_lines(script.splitlines(), diagnostics)


def parse_queries_from_file(file_path: Union[str, Path],
                            diagnostics: Optional[DiagnosticLog] = None) -> List[QueryDirective]:
    """
    Parse a UTF-8 SQL file into directives.

    Args:
        file_path: Path to the .sql script.
        diagnostics: Optional diagnostic log.

    Returns:
        Directives in script order.
    """
    path = safe_path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"SQL file not found: {path}")

    with open(path, 'r', encoding='utf-8-sig') as f:
        return parse_lines(f, diagnostics)
