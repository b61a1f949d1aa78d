"""
Import pipeline: header detection once, then row-independent processing.

A row that fails is reported and skipped; it never aborts the import.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from pydantic import ValidationError

from .columns import ColumnMap, detect_columns
from .errors import EmptySpreadsheetError
from .models import ExpenseRecord, ImportReport, ImportResponse, ReportItem
from .report import ImportReportBuilder
from .rows import RowOutcome, RowProcessor
from .rules import ImportConfig
from .spreadsheet import Table, is_blank_row, read_table

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    columns: ColumnMap
    records: List[ExpenseRecord]
    report: ImportReport
    message: str

    def to_response(self) -> ImportResponse:
        return ImportResponse(message=self.message, records=self.records, report=self.report)


def import_table(
    headers: Sequence[object],
    rows: Sequence[Sequence[object]],
    config: Optional[ImportConfig] = None,
    header_line: int = 1,
    feedback_limit: Optional[int] = None,
) -> ImportResult:
    if not headers or is_blank_row(headers):
        raise EmptySpreadsheetError("spreadsheet has no header row")
    data_rows = [(i, r) for i, r in enumerate(rows) if not is_blank_row(r)]
    if not data_rows:
        raise EmptySpreadsheetError("spreadsheet needs a header row and at least one data row")

    config = config or ImportConfig.default()
    columns = detect_columns(headers)
    logger.info("importing %d rows, columns detected: %s", len(data_rows), columns.describe())

    builder = ImportReportBuilder(columns=columns, feedback_limit=feedback_limit)
    missing = columns.missing_required()
    if missing:
        names = ", ".join(f.value for f in missing)
        builder.add_header_issue(ReportItem(
            row=header_line,
            issue="missing_columns",
            value=names,
            action="rows_will_fail",
            message=f"Colunas obrigatórias ausentes: {names}",
        ))

    processor = RowProcessor(config)
    for offset, row in data_rows:
        line = header_line + offset + 1
        try:
            outcome = processor.process(row, line, columns)
        except ValidationError as exc:
            outcome = RowOutcome(line=line)
            outcome.error(None, "invalid_record", None, f"erro ao processar - {exc.errors()[0]['msg']}")
        builder.add(outcome)

    report = builder.build()
    logger.info(
        "import finished: %d imported, %d skipped, %d enhanced",
        report.summary.imported, report.summary.skipped, report.summary.enhanced,
    )
    return ImportResult(columns=columns, records=builder.records, report=report, message=builder.message())


def import_file(
    raw: bytes,
    filename: str,
    config: Optional[ImportConfig] = None,
    feedback_limit: Optional[int] = None,
) -> ImportResult:
    table: Table = read_table(raw, filename)
    return import_table(
        table.headers,
        table.rows,
        config=config,
        header_line=table.header_line,
        feedback_limit=feedback_limit,
    )
