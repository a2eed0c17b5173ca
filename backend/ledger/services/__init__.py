from .transactions import TransactionQueryService

__all__ = [
    "TransactionQueryService",
]
