"""Summary and response models."""
from datetime import date
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel
from ledger.models.transaction import Transaction


class CamelModel(BaseModel):
    """Response model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TransactionPage(CamelModel):
    """One page of transactions plus the unfiltered total."""

    total: int = Field(..., ge=0, description="Count of all stored transactions")
    page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    transactions: List[Transaction] = Field(default_factory=list)


class TransactionSummary(CamelModel):
    """Income/expense totals over an optional date range."""

    total_income: Decimal = Field(default=Decimal("0"))
    total_expenses: Decimal = Field(default=Decimal("0"))
    net_balance: Decimal = Field(default=Decimal("0"))
    start_date: Optional[date] = Field(None, description="Inclusive lower bound, if any")
    end_date: Optional[date] = Field(None, description="Inclusive upper bound, if any")

    @field_serializer("total_income", "total_expenses", "net_balance", when_used="json")
    def serialize_total(self, value: Decimal) -> float:
        return float(value)


class HealthResponse(BaseModel):
    """Liveness report."""

    status: str
    database: str
