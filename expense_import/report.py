"""
Aggregation of per-row outcomes into the import report.

Counts:
- errors: rows with at least one rejected field or a structural failure
- enhanced: rows where at least one value was resolved through an alias table
- skipped: rows that produced no record
"""

from __future__ import annotations

from typing import List, Optional

from .columns import ColumnMap
from .models import ExpenseRecord, ImportReport, ReportItem, ReportSummary
from .rows import RowOutcome


def data_quality(error_rows: int) -> str:
    if error_rows == 0:
        return "Excelente"
    if error_rows < 3:
        return "Boa"
    if error_rows < 10:
        return "Regular"
    return "Necessita revisão"


class ImportReportBuilder:
    def __init__(self, columns: Optional[ColumnMap] = None, feedback_limit: Optional[int] = None):
        self.columns = columns
        self.feedback_limit = feedback_limit
        self.records: List[ExpenseRecord] = []
        self.total = 0
        self.error_rows = 0
        self.enhanced_rows = 0
        self.errors: List[ReportItem] = []
        self.rejections: List[ReportItem] = []
        self.warnings: List[ReportItem] = []
        self.enhancements: List[ReportItem] = []
        self.insights: List[ReportItem] = []

    def add_header_issue(self, item: ReportItem) -> None:
        self.warnings.append(item)

    def add(self, outcome: RowOutcome) -> None:
        self.total += 1
        if outcome.failed:
            self.error_rows += 1
        if outcome.enhanced:
            self.enhanced_rows += 1
        if outcome.record is not None:
            self.records.append(outcome.record)

        self.errors.extend(outcome.errors)
        self.rejections.extend(outcome.rejections)
        self.warnings.extend(outcome.warnings)
        self.enhancements.extend(outcome.enhancements)
        self.insights.extend(outcome.insights)

    @property
    def imported(self) -> int:
        return len(self.records)

    def _limit(self, items: List[ReportItem]) -> List[ReportItem]:
        if self.feedback_limit is None:
            return list(items)
        return items[: self.feedback_limit]

    def recommendations(self) -> List[str]:
        recs: List[str] = []
        if self.errors:
            recs.append("Revise as linhas com erro e corrija os dados antes de uma nova importação")
        if self.rejections:
            recs.append(
                "Alguns dados não seguem os padrões - verifique se as categorias, contratos "
                "e formas de pagamento estão corretos"
            )
        if self.warnings:
            recs.append("Existem avisos sobre os dados - revise para melhorar a qualidade")
        if self.enhanced_rows:
            recs.append(
                f"{self.enhanced_rows} linhas foram normalizadas automaticamente para o padrão do sistema"
            )
        if not recs:
            recs.append("Importação perfeita! Todos os dados estão dentro dos padrões")
        return recs

    def message(self) -> str:
        if self.imported:
            return f"Importação concluída com sucesso! {self.imported} despesas foram importadas."
        return "Importação não pôde ser concluída devido a erros nos dados."

    def build(self) -> ImportReport:
        success_rate = round(self.imported * 100 / self.total) if self.total else 0
        summary = ReportSummary(
            total=self.total,
            imported=self.imported,
            skipped=self.total - self.imported,
            errors=self.error_rows,
            enhanced=self.enhanced_rows,
            warnings=len(self.warnings),
            success_rate=f"{success_rate}%",
            data_quality=data_quality(self.error_rows),
        )
        return ImportReport(
            summary=summary,
            columns=self.columns.describe() if self.columns else {},
            errors=self._limit(self.errors),
            rejections=self._limit(self.rejections),
            warnings=self._limit(self.warnings),
            enhancements=self._limit(self.enhancements),
            insights=self._limit(self.insights),
            recommendations=self.recommendations(),
        )
