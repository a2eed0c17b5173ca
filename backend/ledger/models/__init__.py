from .transaction import Transaction, TransactionBase, TransactionCreate, TransactionType, TransactionUpdate
from .summary import HealthResponse, TransactionPage, TransactionSummary

__all__ = [
    "Transaction",
    "TransactionBase",
    "TransactionCreate",
    "TransactionType",
    "TransactionUpdate",
    "HealthResponse",
    "TransactionPage",
    "TransactionSummary",
]
