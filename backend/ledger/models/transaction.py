"""Transaction data models."""
from datetime import date as Date
from decimal import Decimal
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class TransactionType(str, Enum):
    """Allowed transaction types."""

    INCOME = "Income"
    EXPENSE = "Expense"


class TransactionBase(BaseModel):
    """Fields shared by every transaction representation."""

    type: TransactionType = Field(..., description="'Income' or 'Expense'")
    amount: Decimal = Field(
        ...,
        max_digits=10,
        decimal_places=2,
        description="Amount with at most two fractional digits; sign is not enforced",
    )
    category: str = Field(..., min_length=1, description="Free-form category label")
    date: Date = Field(..., description="Calendar date of the transaction")
    description: Optional[str] = Field(None, description="Optional free text")

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, amount: Decimal) -> float:
        return float(amount)


class TransactionCreate(TransactionBase):
    """Transaction creation payload. Unknown fields are rejected."""

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "type": "Expense",
                "amount": 45.99,
                "category": "Food",
                "date": "2024-01-15",
                "description": "Groceries",
            }
        },
    )


class TransactionUpdate(BaseModel):
    """Partial update payload: only fields explicitly sent are applied."""

    model_config = ConfigDict(extra="forbid")

    type: Optional[TransactionType] = None
    amount: Optional[Decimal] = Field(None, max_digits=10, decimal_places=2)
    category: Optional[str] = Field(None, min_length=1)
    date: Optional[Date] = None
    description: Optional[str] = None

    @field_validator("type", "amount", "category", "date")
    @classmethod
    def reject_null(cls, value):
        # Only runs for values the client actually sent.
        if value is None:
            raise ValueError("field is required and may not be null")
        return value

    def changes(self) -> dict:
        """Return the fields the client set, keyed by column name."""
        return self.model_dump(exclude_unset=True)


class Transaction(TransactionBase):
    """Persisted transaction."""

    id: int = Field(..., description="Store-assigned identifier")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "type": "Income",
                "amount": 2500.0,
                "category": "Salary",
                "date": "2024-01-31",
                "description": "January salary",
            }
        },
    )
