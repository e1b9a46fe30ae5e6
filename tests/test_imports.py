"""Tests for the weight CSV importer."""

import asyncio
from datetime import date
from uuid import uuid4

import pytest

from fitness_metrics.domain.errors import (
    ImportErrorReason,
    MalformedHeader,
    TooManyRows,
)
from fitness_metrics.domain.imports import ImportRow, ImportRowError
from fitness_metrics.domain.plans import PlanContext
from fitness_metrics.services.imports import (
    WeightImportService,
    parse_rows,
    validate_row,
)
from tests.conftest import FlakyWeightWriter, InMemoryEntryRepository

PLAN = PlanContext(start_date=date(2025, 1, 1), number_of_weeks=12)

SAMPLE_CSV = (
    "Week,Date,Weight,Notes\n"
    "1,2025-01-01,75.5,Start\n"
    "1,bad-date,74,X\n"
    "2,2025-01-08,74.8,"
)


def _service(repository, **kwargs) -> WeightImportService:
    return WeightImportService(repository=repository, retry_delay_seconds=0, **kwargs)


def _row(week: str = "", day: str = "2025-01-10", weight: str = "80") -> ImportRow:
    return ImportRow(row_number=1, week=week, date=day, weight=weight, notes="")


def test_import_reports_partial_success() -> None:
    repository = InMemoryEntryRepository()
    service = _service(repository)

    result = asyncio.run(service.import_weights(uuid4(), SAMPLE_CSV, PLAN))

    assert result.imported_count == 2
    assert result.skipped_count == 1
    assert result.errors == [ImportRowError(2, ImportErrorReason.INVALID_DATE)]
    assert sorted(record.weight for record in repository.created) == [74.8, 75.5]
    notes = {record.weight: record.notes for record in repository.created}
    assert notes == {75.5: "Start", 74.8: ""}


def test_import_derives_missing_week_from_plan() -> None:
    repository = InMemoryEntryRepository()
    service = _service(repository)
    text = "week,date,weight,notes\n,2025-01-15,80.2,\n"

    result = asyncio.run(service.import_weights(uuid4(), text, PLAN))

    assert result.imported_count == 1
    assert repository.created[0].week == 3


def test_import_rejects_malformed_rows_by_field_count() -> None:
    repository = InMemoryEntryRepository()
    service = _service(repository)
    text = (
        "Week,Date,Weight,Notes\n"
        "1,2025-01-01,75.5,Start,extra\n"
        "1,2025-01-02,75.1\n"
        "1,2025-01-03,75.0,ok\n"
    )

    result = asyncio.run(service.import_weights(uuid4(), text, PLAN))

    assert result.imported_count == 1
    assert result.skipped_count == 2
    assert [(error.row_number, error.reason) for error in result.errors] == [
        (1, ImportErrorReason.MALFORMED_ROW),
        (2, ImportErrorReason.MALFORMED_ROW),
    ]


def test_import_validation_order_short_circuits() -> None:
    repository = InMemoryEntryRepository()
    service = _service(repository)
    text = (
        "Week,Date,Weight,Notes\n"
        "x,2025-02-30,abc,\n"
        "x,2025-01-05,19.9,\n"
        "x,2025-01-05,80,\n"
        "0,2025-01-05,80,\n"
    )

    result = asyncio.run(service.import_weights(uuid4(), text, PLAN))

    assert result.imported_count == 0
    assert [error.reason for error in result.errors] == [
        ImportErrorReason.INVALID_DATE,
        ImportErrorReason.INVALID_WEIGHT,
        ImportErrorReason.INVALID_WEEK,
        ImportErrorReason.INVALID_WEEK,
    ]


def test_import_records_storage_errors_in_row_order() -> None:
    writer = FlakyWeightWriter(failing_weights={74.0, 72.0})
    service = _service(writer, max_workers=3, retry_attempts=1)
    text = (
        "Week,Date,Weight,Notes\n"
        "1,2025-01-01,75.0,\n"
        "1,2025-01-02,74.0,\n"
        "1,2025-01-03,bad,\n"
        "1,2025-01-04,73.0,\n"
        "1,2025-01-05,72.0,\n"
    )

    result = asyncio.run(service.import_weights(uuid4(), text, PLAN))

    assert result.imported_count == 2
    assert result.skipped_count == 1
    assert [(error.row_number, error.reason) for error in result.errors] == [
        (2, ImportErrorReason.STORAGE_ERROR),
        (3, ImportErrorReason.INVALID_WEIGHT),
        (5, ImportErrorReason.STORAGE_ERROR),
    ]
    assert writer.attempts.count(74.0) == 2
    assert sorted(record.weight for record in writer.written) == [73.0, 75.0]


def test_import_rejects_oversized_upload_before_writing() -> None:
    repository = InMemoryEntryRepository()
    service = _service(repository, max_rows=2)
    text = "Week,Date,Weight,Notes\n" + "1,2025-01-01,75,\n" * 3

    with pytest.raises(TooManyRows):
        asyncio.run(service.import_weights(uuid4(), text, PLAN))

    assert repository.created == []


def test_import_rejects_unexpected_header() -> None:
    service = _service(InMemoryEntryRepository())

    with pytest.raises(MalformedHeader):
        asyncio.run(
            service.import_weights(uuid4(), "Date,Week,Weight,Notes\n", PLAN)
        )
    with pytest.raises(MalformedHeader):
        asyncio.run(service.import_weights(uuid4(), "", PLAN))


def test_importing_twice_writes_twice() -> None:
    repository = InMemoryEntryRepository()
    service = _service(repository)
    user_id = uuid4()
    text = "Week,Date,Weight,Notes\n1,2025-01-01,75.5,\n"

    first = asyncio.run(service.import_weights(user_id, text, PLAN))
    second = asyncio.run(service.import_weights(user_id, text, PLAN))

    assert first.imported_count == second.imported_count == 1
    assert len(repository.created) == 2


def test_parse_rows_skips_blank_lines_and_handles_crlf() -> None:
    text = "\ufeff Week , DATE ,Weight,Notes\r\n\r\n1,2025-01-01,75,a\r\n2,x\r\n"

    rows = parse_rows(text)

    assert rows == [
        ImportRow(row_number=1, week="1", date="2025-01-01", weight="75", notes="a"),
        ImportRowError(row_number=2, reason=ImportErrorReason.MALFORMED_ROW),
    ]


def test_validate_row_requires_plan_for_blank_week() -> None:
    assert validate_row(_row(), uuid4(), None) == ImportRowError(
        1, ImportErrorReason.INVALID_WEEK
    )
    early = _row(day="2024-12-25")
    assert validate_row(early, uuid4(), PLAN) == ImportRowError(
        1, ImportErrorReason.INVALID_WEEK
    )


@pytest.mark.parametrize("weight", ["20", "500", "64.25"])
def test_validate_row_accepts_weight_bounds(weight: str) -> None:
    record = validate_row(_row(week="2", weight=weight), uuid4(), None)

    assert not isinstance(record, ImportRowError)
    assert record.weight == float(weight)
    assert record.week == 2


@pytest.mark.parametrize("weight", ["19.99", "500.1", "-75", "nan", "inf", ""])
def test_validate_row_rejects_out_of_range_weight(weight: str) -> None:
    assert validate_row(_row(week="2", weight=weight), uuid4(), None) == (
        ImportRowError(1, ImportErrorReason.INVALID_WEIGHT)
    )


@pytest.mark.parametrize("weight", ["1e2", "+80", "8_0", "80.", ".5e3"])
def test_validate_row_requires_plain_decimal_weight(weight: str) -> None:
    assert validate_row(_row(week="2", weight=weight), uuid4(), None) == (
        ImportRowError(1, ImportErrorReason.INVALID_WEIGHT)
    )


@pytest.mark.parametrize("week", ["1_0", "+2", "2.0", "-1"])
def test_validate_row_requires_plain_integer_week(week: str) -> None:
    assert validate_row(_row(week=week), uuid4(), PLAN) == (
        ImportRowError(1, ImportErrorReason.INVALID_WEEK)
    )


@pytest.mark.parametrize("day", ["2025-1-05", "20250105", "2025-01-05T00:00"])
def test_validate_row_requires_iso_date(day: str) -> None:
    assert validate_row(_row(week="2", day=day), uuid4(), None) == (
        ImportRowError(1, ImportErrorReason.INVALID_DATE)
    )
