import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from sqlGraph.diagnostics import DiagnosticLog
from sqlGraph.models import DataPoint


@pytest.fixture
def diagnostics():
    return DiagnosticLog()


@pytest.fixture
def sqlite_engine():
    """In-memory SQLite database shared across connections."""
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    with engine.begin() as conn:
        conn.exec_driver_sql("CREATE TABLE signups (day TEXT, n INTEGER)")
        conn.exec_driver_sql(
            "INSERT INTO signups VALUES "
            "('2025-01-03', 9), ('2025-01-01', 5), ('2025-01-05', 2)"
        )
        conn.exec_driver_sql("CREATE TABLE orders (country TEXT, total REAL)")
        conn.exec_driver_sql(
            "INSERT INTO orders VALUES "
            "('Germany', 12.5), ('Brazil', 3.0), ('Canada', NULL), ('Denmark', 'n/a')"
        )
    try:
        yield engine
    finally:
        engine.dispose()


def points(*pairs):
    return tuple(DataPoint(x=x, y=float(y)) for x, y in pairs)
