from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ExpenseRecord(BaseModel):
    """Expense ready for insertion into the expense store."""

    model_config = ConfigDict(populate_by_name=True)

    item: str
    value: Decimal
    payment_method: Optional[str] = Field(default=None, alias="paymentMethod")
    category: str
    contract_number: Optional[str] = Field(default=None, alias="contractNumber")
    bank_issuer: Optional[str] = Field(default=None, alias="bankIssuer")
    payment_date: date = Field(alias="paymentDate")


class ReportItem(BaseModel):
    row: Optional[int] = None
    column: Optional[str] = None
    issue: str
    value: Optional[str] = None
    action: str
    message: str


class ReportSummary(BaseModel):
    total: int = 0
    imported: int = 0
    skipped: int = 0
    errors: int = 0
    enhanced: int = 0
    warnings: int = 0
    success_rate: str = Field(default="0%", alias="successRate")
    data_quality: str = Field(default="Excelente", alias="dataQuality")

    model_config = ConfigDict(populate_by_name=True)


class ImportReport(BaseModel):
    summary: ReportSummary
    columns: Dict[str, str] = Field(default_factory=dict)
    errors: List[ReportItem] = Field(default_factory=list)
    rejections: List[ReportItem] = Field(default_factory=list)
    warnings: List[ReportItem] = Field(default_factory=list)
    enhancements: List[ReportItem] = Field(default_factory=list)
    insights: List[ReportItem] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class ImportResponse(BaseModel):
    message: str
    records: List[ExpenseRecord] = Field(default_factory=list)
    report: ImportReport


class MatchRequest(BaseModel):
    field: str = Field(examples=["contract"])
    value: Optional[str] = Field(default=None, examples=["secretaria de economia"])


class MatchResponse(BaseModel):
    field: str
    value: Optional[str] = None
    status: str
    canonical: Optional[str] = None
    via_alias: bool = Field(default=False, alias="viaAlias")

    model_config = ConfigDict(populate_by_name=True)


class CanonicalResponse(BaseModel):
    categories: List[str]
    contracts: List[str]
    payment_methods: List[str] = Field(alias="paymentMethods")
    banks: List[str]

    model_config = ConfigDict(populate_by_name=True)


class HealthResponse(BaseModel):
    ok: bool = True
