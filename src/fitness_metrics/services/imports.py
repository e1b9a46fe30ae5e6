"""Batch CSV import of weight readings."""

import asyncio
import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from fitness_metrics.domain.errors import (
    ImportErrorReason,
    MalformedHeader,
    TooManyRows,
)
from fitness_metrics.domain.imports import (
    ImportResult,
    ImportRow,
    ImportRowError,
    WeightRecord,
)
from fitness_metrics.domain.plans import PlanContext
from fitness_metrics.services.periods import week_index_for

EXPECTED_HEADER = ("week", "date", "weight", "notes")
MIN_WEIGHT = 20.0
MAX_WEIGHT = 500.0

_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_DECIMAL_PATTERN = re.compile(r"[0-9]+(?:\.[0-9]+)?")
_WEEK_PATTERN = re.compile(r"[0-9]+")

_logger = logging.getLogger(__name__)


class WeightWriter(Protocol):
    """Persistence interface for single weight writes."""

    def create_weight(self, record: WeightRecord) -> UUID:
        """Persist one weight reading and return its id."""


@dataclass
class WeightImportService:
    """Validates uploaded weight CSVs and writes each good row."""

    repository: WeightWriter
    max_rows: int = 5000
    max_workers: int = 4
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def import_weights(
        self, user_id: UUID, raw_text: str, plan: PlanContext | None
    ) -> ImportResult:
        """Import every valid row; rejected and failed rows are reported, not raised.

        Raises ``MalformedHeader`` or ``TooManyRows`` before any write when the
        upload as a whole is unusable.
        """
        parsed = parse_rows(raw_text)
        if len(parsed) > self.max_rows:
            raise TooManyRows(len(parsed), self.max_rows)

        errors: list[ImportRowError] = []
        pending: list[tuple[int, WeightRecord]] = []
        for row in parsed:
            if isinstance(row, ImportRowError):
                errors.append(row)
                continue
            outcome = validate_row(row, user_id, plan)
            if isinstance(outcome, ImportRowError):
                errors.append(outcome)
            else:
                pending.append((row.row_number, outcome))
        skipped_count = len(errors)

        semaphore = asyncio.Semaphore(self.max_workers)
        written = await asyncio.gather(
            *(
                self._write(semaphore, row_number, record)
                for row_number, record in pending
            )
        )
        storage_errors = [error for error in written if error is not None]
        errors.extend(storage_errors)
        errors.sort(key=lambda error: error.row_number)

        imported_count = len(pending) - len(storage_errors)
        _logger.info(
            "Weight import: user_id=%s rows=%s imported=%s skipped=%s failed=%s",
            user_id,
            len(parsed),
            imported_count,
            skipped_count,
            len(storage_errors),
        )
        return ImportResult(
            imported_count=imported_count,
            skipped_count=skipped_count,
            errors=errors,
        )

    async def _write(
        self, semaphore: asyncio.Semaphore, row_number: int, record: WeightRecord
    ) -> ImportRowError | None:
        """Write one record with a short retry; return an error if it never lands."""
        async with semaphore:
            attempt = 0
            while True:
                try:
                    await asyncio.to_thread(self.repository.create_weight, record)
                except Exception as exc:
                    attempt += 1
                    if attempt > self.retry_attempts:
                        _logger.warning(
                            "Weight import row %s failed after %s attempts: %s",
                            row_number,
                            attempt,
                            exc,
                        )
                        return ImportRowError(
                            row_number=row_number,
                            reason=ImportErrorReason.STORAGE_ERROR,
                        )
                    await asyncio.sleep(self.retry_delay_seconds)
                else:
                    return None


def parse_rows(raw_text: str) -> list[ImportRow | ImportRowError]:
    """Split CSV text into raw rows, numbering data rows from 1.

    Blank lines are skipped. Rows without exactly four fields are returned as
    ``MalformedRow`` errors.
    """
    text = raw_text.lstrip("\ufeff")
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        raise MalformedHeader("")
    header = tuple(name.strip().lower() for name in lines[0].split(","))
    if header != EXPECTED_HEADER:
        raise MalformedHeader(lines[0])

    rows: list[ImportRow | ImportRowError] = []
    for row_number, line in enumerate(lines[1:], start=1):
        fields = line.split(",")
        if len(fields) != len(EXPECTED_HEADER):
            rows.append(
                ImportRowError(
                    row_number=row_number, reason=ImportErrorReason.MALFORMED_ROW
                )
            )
            continue
        week, day, weight, notes = (field.strip() for field in fields)
        rows.append(
            ImportRow(
                row_number=row_number, week=week, date=day, weight=weight, notes=notes
            )
        )
    return rows


def validate_row(
    row: ImportRow, user_id: UUID, plan: PlanContext | None
) -> WeightRecord | ImportRowError:
    """Validate date, weight and week in order, stopping at the first failure."""
    day = _parse_date(row.date)
    if day is None:
        return ImportRowError(row.row_number, ImportErrorReason.INVALID_DATE)
    weight = _parse_weight(row.weight)
    if weight is None:
        return ImportRowError(row.row_number, ImportErrorReason.INVALID_WEIGHT)
    week = _resolve_week(row.week, day, plan)
    if week is None:
        return ImportRowError(row.row_number, ImportErrorReason.INVALID_WEEK)
    return WeightRecord(
        user_id=user_id, date=day, weight=weight, week=week, notes=row.notes
    )


def _parse_date(value: str) -> date | None:
    if not _DATE_PATTERN.fullmatch(value):
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return None


def _parse_weight(value: str) -> float | None:
    if not _DECIMAL_PATTERN.fullmatch(value):
        return None
    weight = float(value)
    if not MIN_WEIGHT <= weight <= MAX_WEIGHT:
        return None
    return weight


def _resolve_week(value: str, day: date, plan: PlanContext | None) -> int | None:
    if value:
        if not _WEEK_PATTERN.fullmatch(value):
            return None
        week = int(value)
        return week if week > 0 else None
    if plan is None or day < plan.start_date:
        return None
    return week_index_for(day, plan.start_date)
