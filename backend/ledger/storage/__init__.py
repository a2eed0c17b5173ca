from .database import TransactionStore

__all__ = ["TransactionStore"]
