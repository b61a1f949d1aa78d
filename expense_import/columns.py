"""
Header detection: which spreadsheet column holds which expense attribute.

Resolved once per import from the header row.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from .text import normalize_text


class ImportField(str, Enum):
    ITEM = "item"
    VALUE = "value"
    PAYMENT_DATE = "paymentDate"
    PAYMENT_METHOD = "paymentMethod"
    CATEGORY = "category"
    CONTRACT = "contractNumber"
    BANK = "bankIssuer"


# A header is claimed by the first field in this order whose keyword it contains,
# so "Valor do pagamento" is a value column and "Data do contrato" a date column.
# "data de pagamento" must reach PAYMENT_DATE before PAYMENT_METHOD sees "pagamento".
HEADER_KEYWORDS: Tuple[Tuple[ImportField, Tuple[str, ...]], ...] = (
    (ImportField.ITEM, ("item", "descri", "produto", "nome")),
    (ImportField.VALUE, ("valor", "preco", "price", "amount")),
    (ImportField.PAYMENT_DATE, ("data", "date", "quando")),
    (ImportField.PAYMENT_METHOD, ("pagamento", "forma", "payment", "metodo")),
    (ImportField.CATEGORY, ("categoria", "category")),
    (ImportField.CONTRACT, ("contrato", "contract")),
    (ImportField.BANK, ("banco", "emissor", "bank", "issuer")),
)

REQUIRED_COLUMNS: Tuple[ImportField, ...] = (ImportField.ITEM, ImportField.VALUE)


def classify_header(header: object) -> Optional[ImportField]:
    norm = normalize_text(header)
    if not norm:
        return None
    for import_field, keywords in HEADER_KEYWORDS:
        if any(k in norm for k in keywords):
            return import_field
    return None


@dataclass
class ColumnMap:
    headers: List[str]
    indexes: Dict[ImportField, int] = field(default_factory=dict)

    def cell(self, row: Sequence[object], import_field: ImportField) -> object:
        idx = self.indexes.get(import_field)
        if idx is None or idx >= len(row):
            return None
        return row[idx]

    def missing_required(self) -> List[ImportField]:
        return [f for f in REQUIRED_COLUMNS if f not in self.indexes]

    def describe(self) -> Dict[str, str]:
        return {f.value: self.headers[i] for f, i in self.indexes.items()}


def detect_columns(headers: Sequence[object]) -> ColumnMap:
    """Map fields to column indexes. A later header claiming the same field replaces an earlier one."""
    text_headers = ["" if h is None else str(h).strip() for h in headers]
    columns = ColumnMap(headers=text_headers)
    for idx, header in enumerate(text_headers):
        import_field = classify_header(header)
        if import_field is not None:
            columns.indexes[import_field] = idx
    return columns
