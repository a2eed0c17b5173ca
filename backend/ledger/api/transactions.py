"""HTTP handlers for /transactions."""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request, Response, status
from ledger.errors import InvalidParameterError
from ledger.models.summary import TransactionPage, TransactionSummary
from ledger.models.transaction import Transaction, TransactionCreate, TransactionUpdate
from ledger.services.transactions import TransactionQueryService

router = APIRouter()


def get_query_service(request: Request) -> TransactionQueryService:
    """Query layer built once at startup and stored on the application."""
    return request.app.state.query_service


# Literal paths are registered before "/{tx_id}" so they are not shadowed.


@router.post("", response_model=Transaction, status_code=status.HTTP_201_CREATED)
def create_transaction(
    payload: TransactionCreate,
    service: TransactionQueryService = Depends(get_query_service),
):
    """Create a transaction."""
    return service.create(payload)


@router.get("", response_model=TransactionPage)
def list_transactions(
    page: Optional[str] = Query(None, description="1-based page number"),
    page_size: Optional[str] = Query(None, alias="pageSize", description="Rows per page"),
    service: TransactionQueryService = Depends(get_query_service),
):
    """List transactions in insertion order, one page at a time."""
    return service.list(page, page_size)


@router.get("/categories", response_model=List[str])
def list_categories(service: TransactionQueryService = Depends(get_query_service)):
    """Distinct categories, sorted ascending."""
    return service.categories()


@router.get("/summary", response_model=TransactionSummary)
def get_summary(
    start_date: Optional[str] = Query(None, alias="startDate", description="Inclusive lower bound"),
    end_date: Optional[str] = Query(None, alias="endDate", description="Inclusive upper bound"),
    service: TransactionQueryService = Depends(get_query_service),
):
    """Total income, total expenses and net balance."""
    return service.summary(start_date, end_date)


@router.get("/by-category", response_model=List[Transaction])
def get_by_category(
    categories: Optional[str] = Query(None, description="Comma-separated category names"),
    service: TransactionQueryService = Depends(get_query_service),
):
    """Transactions in any of the given categories."""
    if categories is None:
        raise InvalidParameterError("categories query parameter is required")
    return service.by_category(categories)


@router.get("/by-date", response_model=List[Transaction])
def get_by_date(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    service: TransactionQueryService = Depends(get_query_service),
):
    """Transactions dated inclusively between startDate and endDate."""
    return service.by_date(start_date, end_date)


@router.get("/{tx_id}", response_model=Transaction)
def get_transaction(
    tx_id: int,
    service: TransactionQueryService = Depends(get_query_service),
):
    return service.get(tx_id)


@router.put("/{tx_id}", response_model=Transaction)
def update_transaction(
    tx_id: int,
    payload: TransactionUpdate,
    service: TransactionQueryService = Depends(get_query_service),
):
    """Apply the fields present in the body; omitted fields are unchanged."""
    return service.update(tx_id, payload)


@router.delete("/{tx_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_transaction(
    tx_id: int,
    service: TransactionQueryService = Depends(get_query_service),
):
    service.delete(tx_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
