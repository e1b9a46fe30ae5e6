"""Domain models for batch weight imports."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

from fitness_metrics.domain.errors import ImportErrorReason


@dataclass(frozen=True)
class ImportRow:
    """Raw fields of one parsed CSV data row."""

    row_number: int
    week: str
    date: str
    weight: str
    notes: str


@dataclass(frozen=True)
class WeightRecord:
    """A validated weight reading ready to be written to the store."""

    user_id: UUID
    date: date
    weight: float
    week: int
    notes: str = ""
    unit: str = "kg"


@dataclass(frozen=True)
class ImportRowError:
    """A rejected or failed row and why."""

    row_number: int
    reason: ImportErrorReason


@dataclass(frozen=True)
class ImportResult:
    """Outcome of one upload."""

    imported_count: int
    skipped_count: int
    errors: list[ImportRowError] = field(default_factory=list)
