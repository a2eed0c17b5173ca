from .transactions import router as transactions_router

__all__ = ["transactions_router"]
