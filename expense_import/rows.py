"""
Per-row processing: extract cells by detected column, parse value and date,
match the categorized fields and build the expense record.

Bad cell data never raises; every problem ends up on the RowOutcome.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Dict, List, Optional, Sequence

from .columns import ColumnMap, ImportField
from .matching import FieldMatcher, Rejected
from .models import ExpenseRecord, ReportItem
from .rules import ImportConfig

logger = logging.getLogger(__name__)

EXCEL_EPOCH = date(1899, 12, 30)
CENTS = Decimal("0.01")

# Rejected values here make the row unusable; other matched fields are advisory.
REQUIRED_MATCHES = (ImportField.CATEGORY, ImportField.CONTRACT)

REJECTION_LABELS: Dict[ImportField, str] = {
    ImportField.CATEGORY: "Categoria \"{value}\" não reconhecida",
    ImportField.CONTRACT: "Contrato \"{value}\" não reconhecido",
    ImportField.PAYMENT_METHOD: "Pagamento \"{value}\" não reconhecido",
    ImportField.BANK: "Banco \"{value}\" não reconhecido",
}

ENHANCEMENT_LABELS: Dict[ImportField, str] = {
    ImportField.CATEGORY: "categoria",
    ImportField.CONTRACT: "contrato",
    ImportField.PAYMENT_METHOD: "pagamento",
    ImportField.BANK: "banco",
}


def cell_text(raw: object) -> str:
    if raw is None:
        return ""
    return str(raw).strip()


def parse_value(raw: object) -> Optional[Decimal]:
    """
    Monetary value from a cell.

    Numbers are taken as-is. Text keeps digits and separators only; when both
    "," and "." appear the last one is the decimal separator (so "R$ 1.234,56"
    and "1,234.56" both give 1234.56), a lone "," is a decimal comma. Dots
    alone are thousands separators when there are several of them or one
    followed by exactly three digits ("1.234", "1.234.567"), otherwise a
    decimal point ("7.50").
    """
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, (int, float, Decimal)):
        try:
            value = Decimal(str(raw))
        except InvalidOperation:
            return None
    else:
        text = re.sub(r"[^\d,.-]", "", str(raw))
        if "," in text and "." in text:
            if text.rfind(",") > text.rfind("."):
                text = text.replace(".", "").replace(",", ".")
            else:
                text = text.replace(",", "")
        elif "," in text:
            text = text.replace(",", ".", 1)
        elif text.count(".") > 1 or re.search(r"\.\d{3}$", text):
            text = text.replace(".", "")
        try:
            value = Decimal(text)
        except InvalidOperation:
            return None
    if not value.is_finite():
        return None
    try:
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return None


def parse_date(raw: object) -> Optional[date]:
    """
    Payment date from a cell: date/datetime objects, Excel serial numbers,
    "DD/MM/YYYY" (two-digit years are 20xx), "YYYY/MM/DD" or ISO text.
    """
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if raw is None or isinstance(raw, bool):
        return None
    try:
        if isinstance(raw, (int, float)):
            return EXCEL_EPOCH + timedelta(days=int(raw))

        text = str(raw).strip()
        if not text:
            return None
        # drop a trailing time ("01/07/2025 10:30")
        text = text.split()[0]
        if "/" in text:
            parts = [p.strip() for p in text.split("/")]
            if len(parts) != 3:
                return None
            first, second, third = (int(p) for p in parts)
            if len(parts[0]) == 4:
                return date(first, second, third)
            if third < 100:
                third += 2000
            return date(third, second, first)
        return date.fromisoformat(text[:10])
    except (ValueError, OverflowError):
        return None


@dataclass
class RowOutcome:
    line: int
    record: Optional[ExpenseRecord] = None
    errors: List[ReportItem] = field(default_factory=list)
    rejections: List[ReportItem] = field(default_factory=list)
    warnings: List[ReportItem] = field(default_factory=list)
    enhancements: List[ReportItem] = field(default_factory=list)
    insights: List[ReportItem] = field(default_factory=list)

    @property
    def skipped(self) -> bool:
        return self.record is None

    @property
    def failed(self) -> bool:
        return bool(self.errors or self.rejections)

    @property
    def enhanced(self) -> bool:
        return bool(self.enhancements)

    def error(self, column: Optional[ImportField], issue: str, value: Optional[str], text: str) -> None:
        self.errors.append(ReportItem(
            row=self.line,
            column=column.value if column else None,
            issue=issue,
            value=value,
            action="row_skipped",
            message=f"Linha {self.line}: {text}",
        ))

    def warn(self, column: Optional[ImportField], issue: str, value: Optional[str], action: str, text: str) -> None:
        self.warnings.append(ReportItem(
            row=self.line,
            column=column.value if column else None,
            issue=issue,
            value=value,
            action=action,
            message=f"Linha {self.line}: {text}",
        ))


class RowProcessor:
    def __init__(self, config: ImportConfig):
        self.config = config
        self.matchers: Dict[ImportField, FieldMatcher] = {
            ImportField.CATEGORY: FieldMatcher(config.categories),
            ImportField.CONTRACT: FieldMatcher(config.contracts, config.contract_aliases),
            ImportField.PAYMENT_METHOD: FieldMatcher(config.payment_methods, config.payment_method_aliases),
            ImportField.BANK: FieldMatcher(config.banks, config.bank_aliases),
        }

    def process(self, row: Sequence[object], line: int, columns: ColumnMap) -> RowOutcome:
        outcome = RowOutcome(line=line)

        item = cell_text(columns.cell(row, ImportField.ITEM))
        if not item:
            outcome.error(ImportField.ITEM, "missing_item", None, "DESCRIÇÃO está vazia - obrigatório preencher")
            return outcome
        if len(item) < 3:
            outcome.warn(ImportField.ITEM, "short_item", item, "kept_as_is",
                         f"descrição muito curta \"{item}\" - recomendado mais detalhes")

        raw_value = columns.cell(row, ImportField.VALUE)
        if not cell_text(raw_value):
            outcome.error(ImportField.VALUE, "missing_value", None, "VALOR está vazio - obrigatório informar")
            return outcome
        value = parse_value(raw_value)
        if value is None:
            outcome.error(ImportField.VALUE, "invalid_value", cell_text(raw_value),
                          f"valor inválido \"{cell_text(raw_value)}\" - deve ser um número válido (ex: 100,50 ou 100.50)")
            return outcome
        if value <= 0:
            outcome.warn(ImportField.VALUE, "suspicious_value", str(value), "kept_as_is",
                         f"valor suspeito R$ {value} (valor zero ou negativo)")
        elif value > self.config.high_value_threshold:
            outcome.warn(ImportField.VALUE, "high_value", str(value), "kept_as_is",
                         f"valor alto R$ {value} - confirme se está correto")

        payment_date = self._payment_date(outcome, columns.cell(row, ImportField.PAYMENT_DATE))

        category = self._resolve(outcome, ImportField.CATEGORY, columns.cell(row, ImportField.CATEGORY))
        if category is None:
            if self.config.default_category:
                category = self.config.default_category
                outcome.warn(ImportField.CATEGORY, "empty_category", None, f"defaulted_to_{category}",
                             f"categoria vazia - será categorizada como \"{category}\"")
            else:
                outcome.error(ImportField.CATEGORY, "empty_category", None, "categoria vazia")

        contract = self._resolve(outcome, ImportField.CONTRACT, columns.cell(row, ImportField.CONTRACT))
        if contract is None:
            outcome.warn(ImportField.CONTRACT, "empty_contract", None, "kept_empty", "contrato vazio")

        payment_method = self._resolve(outcome, ImportField.PAYMENT_METHOD,
                                       columns.cell(row, ImportField.PAYMENT_METHOD))
        if payment_method is None:
            outcome.warn(ImportField.PAYMENT_METHOD, "empty_payment_method", None, "kept_empty",
                         "forma de pagamento vazia")

        bank = self._resolve(outcome, ImportField.BANK, columns.cell(row, ImportField.BANK))

        if outcome.errors or any(r.column in {f.value for f in REQUIRED_MATCHES} for r in outcome.rejections):
            logger.debug("line %d skipped: %d errors, %d rejections",
                         line, len(outcome.errors), len(outcome.rejections))
            return outcome

        outcome.record = ExpenseRecord(
            item=item,
            value=value,
            payment_method=payment_method,
            category=category,
            contract_number=contract,
            bank_issuer=bank,
            payment_date=payment_date,
        )
        return outcome

    def _payment_date(self, outcome: RowOutcome, raw: object) -> date:
        if not cell_text(raw):
            outcome.insights.append(ReportItem(
                row=outcome.line, column=ImportField.PAYMENT_DATE.value, issue="missing_date",
                action="used_today", message=f"Linha {outcome.line}: sem data, usando data atual",
            ))
            return date.today()
        parsed = parse_date(raw)
        if parsed is None:
            outcome.insights.append(ReportItem(
                row=outcome.line, column=ImportField.PAYMENT_DATE.value, issue="invalid_date",
                value=cell_text(raw), action="used_today",
                message=f"Linha {outcome.line}: data inválida, usando data atual",
            ))
            return date.today()
        return parsed

    def _resolve(self, outcome: RowOutcome, import_field: ImportField, raw: object) -> Optional[str]:
        text = cell_text(raw)
        result = self.matchers[import_field].match(text)
        if result is None:
            return None

        if isinstance(result, Rejected):
            required = import_field in REQUIRED_MATCHES
            outcome.rejections.append(ReportItem(
                row=outcome.line,
                column=import_field.value,
                issue="not_recognized",
                value=result.value,
                action="row_skipped" if required else "kept_as_is",
                message=f"Linha {outcome.line}: " + REJECTION_LABELS[import_field].format(value=result.value),
            ))
            return result.value

        if result.via_alias:
            label = ENHANCEMENT_LABELS[import_field]
            outcome.enhancements.append(ReportItem(
                row=outcome.line,
                column=import_field.value,
                issue="alias_resolved",
                value=text,
                action=f"mapped_to_{result.value}",
                message=f"Linha {outcome.line}: {label} \"{text}\" → \"{result.value}\"",
            ))
        return result.value
