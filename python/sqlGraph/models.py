"""
Data models for SQL-to-Graph.
Immutable value objects passed between the pipeline stages.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


DEFAULT_TITLE = "Untitled Chart"


class SeriesKind(Enum):
    """Shape of a point collection, which fixes its display order."""

    TIME_SERIES = "time_series"
    CATEGORICAL = "categorical"


@dataclass(frozen=True)
class QueryDirective:
    """A SQL statement and the chart title taken from the comment above it."""
    title: str
    statement: str


@dataclass(frozen=True)
class DataPoint:
    """Single chart point: string X label (date or category), numeric Y."""
    x: str
    y: float

    def __str__(self) -> str:
        return f"({self.x}, {self.y:.2f})"


@dataclass(frozen=True)
class ClassifiedSeries:
    """
    Points in canonical display order together with their kind.

    Invariants:
      - TIME_SERIES points are ordered most recent first
      - CATEGORICAL points are ordered ascending by label
    """
    kind: SeriesKind
    points: Tuple[DataPoint, ...]

    @property
    def is_time_series(self) -> bool:
        return self.kind is SeriesKind.TIME_SERIES

    def __len__(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class QueryResult:
    """Points produced by one directive, ready for the report."""
    title: str
    points: Tuple[DataPoint, ...]

    @property
    def has_data(self) -> bool:
        return len(self.points) > 0

    @property
    def is_time_series(self) -> bool:
        # Avoid a circular import with sqlGraph.series
        from sqlGraph.series import classify
        return classify(self.points) is SeriesKind.TIME_SERIES


@dataclass(frozen=True)
class TrendLine:
    """Least-squares line fitted over a chart's numeric coordinates."""
    slope: float
    intercept: float
    domain_min: float
    domain_max: float

    def value_at(self, x: float) -> float:
        return self.slope * x + self.intercept

    def endpoints(self) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        """
        Get the two points that draw the line across the data domain.

        Returns:
            ((min_x, y_at_min_x), (max_x, y_at_max_x))
        """
        return (
            (self.domain_min, self.value_at(self.domain_min)),
            (self.domain_max, self.value_at(self.domain_max)),
        )


@dataclass(frozen=True)
class ChartData:
    """Plot-ready coordinates derived from a classified series."""
    kind: SeriesKind
    x_values: Tuple[float, ...]
    y_values: Tuple[float, ...]
    labels: Tuple[str, ...]
    tick_positions: Tuple[float, ...] = ()
    tick_labels: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return len(self.x_values) == 0


@dataclass(frozen=True)
class ReportEntry:
    """One report page: a title plus rendered chart bytes when available."""
    title: str
    points: Tuple[DataPoint, ...]
    image: Optional[bytes] = None
    error: Optional[str] = None
