"""Transaction query layer: parameter validation, filtering and aggregation."""
import logging
from typing import Any, Dict, List, Optional
from pydantic import ValidationError as PydanticValidationError
from ledger.errors import InvalidParameterError, NotFoundError, ValidationError, describe_validation_errors
from ledger.models.summary import TransactionPage, TransactionSummary
from ledger.models.transaction import (
    Transaction,
    TransactionCreate,
    TransactionType,
    TransactionUpdate,
)
from ledger.storage.database import TransactionStore
from ledger.utils.dates import parse_date, require_date
from ledger.utils.params import SQLITE_MAX_INTEGER, parse_categories, parse_positive_int

logger = logging.getLogger(__name__)


class TransactionQueryService:
    """Translates request parameters into store queries."""

    def __init__(self, store: TransactionStore, default_page_size: int = 10):
        """
        Initialize the query layer.

        Args:
            store: Transaction store shared for the lifetime of the process
            default_page_size: pageSize used when the client omits it
        """
        self.store = store
        self.default_page_size = default_page_size

    def create(self, fields: Any) -> Transaction:
        """
        Insert a new transaction.

        Args:
            fields: A TransactionCreate, or a raw mapping to validate into one

        Returns:
            The stored transaction including its id

        Raises:
            ValidationError: If a required field is missing or a value is invalid
        """
        if not isinstance(fields, TransactionCreate):
            try:
                fields = TransactionCreate.model_validate(fields)
            except PydanticValidationError as e:
                raise ValidationError(describe_validation_errors(e.errors())) from e

        tx = self.store.add_transaction(fields)
        logger.info("Transaction created", extra={"transaction_id": tx.id, "type": tx.type.value})
        return tx

    def list(self, page: Optional[str] = None, page_size: Optional[str] = None) -> TransactionPage:
        """
        Paginated retrieval in insertion order.

        Args:
            page: 1-based page number (raw query value)
            page_size: Rows per page (raw query value)

        Returns:
            TransactionPage whose total is the unfiltered count

        Raises:
            InvalidParameterError: If page or page_size is not an integer in range,
                or together they overflow the row offset
        """
        page_num = parse_positive_int(page, "page", 1)
        size = parse_positive_int(page_size, "pageSize", self.default_page_size)
        offset = (page_num - 1) * size
        if offset > SQLITE_MAX_INTEGER:
            raise InvalidParameterError("page and pageSize select an offset beyond the largest row position")

        return TransactionPage(
            total=self.store.count_transactions(),
            page=page_num,
            page_size=size,
            transactions=self.store.list_transactions(offset, size),
        )

    def get(self, tx_id: int) -> Transaction:
        """Return one transaction or raise NotFoundError."""
        tx = self.store.get_transaction(tx_id)
        if tx is None:
            raise NotFoundError()
        return tx

    def update(self, tx_id: int, fields: Any) -> Transaction:
        """
        Partially update a transaction.

        Fields present in the payload overwrite the stored values; omitted
        fields are left unchanged.

        Raises:
            NotFoundError: If the id does not exist
            ValidationError: If the merged record violates a field constraint
        """
        try:
            if not isinstance(fields, TransactionUpdate):
                fields = TransactionUpdate.model_validate(fields)
            existing = self.get(tx_id)
            changes: Dict[str, Any] = fields.changes()
            if not changes:
                return existing
            merged = Transaction.model_validate({**existing.model_dump(), **changes})
        except PydanticValidationError as e:
            raise ValidationError(describe_validation_errors(e.errors())) from e

        updated = self.store.update_transaction(merged)
        if updated is None:
            raise NotFoundError()
        logger.info("Transaction updated", extra={"transaction_id": tx_id, "fields": sorted(changes)})
        return updated

    def delete(self, tx_id: int) -> None:
        """Delete a transaction or raise NotFoundError."""
        if not self.store.delete_transaction(tx_id):
            raise NotFoundError()
        logger.info("Transaction deleted", extra={"transaction_id": tx_id})

    def summary(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> TransactionSummary:
        """
        Income and expense totals, optionally restricted to a date range.

        Either bound may be omitted; both bounds are inclusive. A range with
        no matching rows yields zero totals.
        """
        start = parse_date(start_date, "startDate")
        end = parse_date(end_date, "endDate")

        totals = self.store.sum_by_type(start, end)
        income = totals[TransactionType.INCOME]
        expenses = totals[TransactionType.EXPENSE]
        return TransactionSummary(
            total_income=income,
            total_expenses=expenses,
            net_balance=income - expenses,
            start_date=start,
            end_date=end,
        )

    def by_category(self, categories: Optional[str]) -> List[Transaction]:
        """Transactions whose category is in a comma-separated list. An empty list matches nothing."""
        return self.store.get_by_categories(parse_categories(categories))

    def by_date(self, start_date: Optional[str], end_date: Optional[str]) -> List[Transaction]:
        """Transactions dated inclusively between two mandatory dates."""
        start = require_date(start_date, "startDate")
        end = require_date(end_date, "endDate")
        return self.store.get_by_date_range(start, end)

    def categories(self) -> List[str]:
        """Distinct categories, sorted ascending."""
        return self.store.get_categories()
