"""Database storage layer using SQLite."""
import logging
import sqlite3
from contextlib import contextmanager
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional
from ledger.errors import StoreError, ValidationError
from ledger.models.transaction import Transaction, TransactionCreate, TransactionType
from ledger.utils.params import fits_sqlite_integer

logger = logging.getLogger(__name__)

_COLUMNS = "id, type, amount_cents, category, date, description"


def to_cents(amount: Decimal) -> int:
    """Convert a two-decimal amount to integer cents."""
    return int((Decimal(amount) * 100).to_integral_value())


def from_cents(cents: Optional[int]) -> Decimal:
    """Convert integer cents back to a two-decimal amount."""
    return Decimal(cents or 0).scaleb(-2)


class TransactionStore:
    """Storage for transactions."""

    def __init__(self, db_path: str = "ledger.db"):
        self.db_path = db_path
        self._init_db()

    def _init_db(self):
        """Initialize database tables."""
        with self._get_conn() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS transactions (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    type TEXT NOT NULL CHECK (type IN ('Income', 'Expense')),
                    amount_cents INTEGER NOT NULL,
                    category TEXT NOT NULL,
                    date TEXT NOT NULL,
                    description TEXT
                )
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_transactions_date
                ON transactions(date)
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_transactions_category
                ON transactions(category)
            """)
            conn.commit()
        logger.info("Transaction store ready", extra={"db_path": self.db_path})

    @contextmanager
    def _get_conn(self):
        """Get database connection, translating driver errors."""
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StoreError(f"Unable to open database: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        except sqlite3.IntegrityError as e:
            conn.rollback()
            raise ValidationError(str(e)) from e
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreError(str(e)) from e
        finally:
            conn.close()

    @staticmethod
    def _row_to_transaction(row: sqlite3.Row) -> Transaction:
        return Transaction(
            id=row["id"],
            type=row["type"],
            amount=from_cents(row["amount_cents"]),
            category=row["category"],
            date=date.fromisoformat(row["date"]),
            description=row["description"],
        )

    def _fetch(self, query: str, params: Iterable = ()) -> List[Transaction]:
        with self._get_conn() as conn:
            rows = conn.execute(query, tuple(params)).fetchall()
            return [self._row_to_transaction(row) for row in rows]

    def add_transaction(self, tx: TransactionCreate) -> Transaction:
        """Insert a transaction and return it with its assigned id."""
        with self._get_conn() as conn:
            cursor = conn.execute("""
                INSERT INTO transactions (type, amount_cents, category, date, description)
                VALUES (?, ?, ?, ?, ?)
            """, (
                tx.type.value,
                to_cents(tx.amount),
                tx.category,
                tx.date.isoformat(),
                tx.description,
            ))
            conn.commit()
            new_id = cursor.lastrowid
        return Transaction(id=new_id, **tx.model_dump())

    def count_transactions(self) -> int:
        """Count every stored transaction."""
        with self._get_conn() as conn:
            return conn.execute("SELECT COUNT(*) FROM transactions").fetchone()[0]

    def list_transactions(self, offset: int, limit: int) -> List[Transaction]:
        """Return a slice of transactions in insertion order."""
        return self._fetch(
            f"SELECT {_COLUMNS} FROM transactions ORDER BY id ASC LIMIT ? OFFSET ?",
            (limit, offset),
        )

    def get_transaction(self, tx_id: int) -> Optional[Transaction]:
        """Get one transaction by id."""
        if not fits_sqlite_integer(tx_id):
            return None
        rows = self._fetch(f"SELECT {_COLUMNS} FROM transactions WHERE id = ?", (tx_id,))
        return rows[0] if rows else None

    def update_transaction(self, tx: Transaction) -> Optional[Transaction]:
        """Overwrite every column of an existing row. Returns None if the id is gone."""
        if not fits_sqlite_integer(tx.id):
            return None
        with self._get_conn() as conn:
            cursor = conn.execute("""
                UPDATE transactions
                SET type = ?, amount_cents = ?, category = ?, date = ?, description = ?
                WHERE id = ?
            """, (
                tx.type.value,
                to_cents(tx.amount),
                tx.category,
                tx.date.isoformat(),
                tx.description,
                tx.id,
            ))
            conn.commit()
            if cursor.rowcount == 0:
                return None
        return tx

    def delete_transaction(self, tx_id: int) -> bool:
        """Delete a transaction. Returns False if it did not exist."""
        if not fits_sqlite_integer(tx_id):
            return False
        with self._get_conn() as conn:
            cursor = conn.execute("DELETE FROM transactions WHERE id = ?", (tx_id,))
            conn.commit()
            return cursor.rowcount > 0

    def sum_by_type(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Dict[TransactionType, Decimal]:
        """Sum amounts per transaction type within an inclusive date range."""
        query = "SELECT type, SUM(amount_cents) AS total FROM transactions WHERE 1 = 1"
        params = []

        if start_date:
            query += " AND date >= ?"
            params.append(start_date.isoformat())

        if end_date:
            query += " AND date <= ?"
            params.append(end_date.isoformat())

        query += " GROUP BY type"

        totals = {tx_type: Decimal("0.00") for tx_type in TransactionType}
        with self._get_conn() as conn:
            for row in conn.execute(query, params).fetchall():
                totals[TransactionType(row["type"])] = from_cents(row["total"])
        return totals

    def get_by_categories(self, categories: Iterable[str]) -> List[Transaction]:
        """Get transactions whose category is one of the given values."""
        categories = sorted(set(categories))
        if not categories:
            return []
        placeholders = ", ".join("?" for _ in categories)
        return self._fetch(
            f"SELECT {_COLUMNS} FROM transactions "
            f"WHERE category IN ({placeholders}) ORDER BY id ASC",
            categories,
        )

    def get_by_date_range(self, start_date: date, end_date: date) -> List[Transaction]:
        """Get transactions dated inclusively between start_date and end_date."""
        return self._fetch(
            f"SELECT {_COLUMNS} FROM transactions "
            "WHERE date >= ? AND date <= ? ORDER BY date ASC, id ASC",
            (start_date.isoformat(), end_date.isoformat()),
        )

    def get_categories(self) -> List[str]:
        """Distinct categories, sorted ascending."""
        with self._get_conn() as conn:
            rows = conn.execute(
                "SELECT DISTINCT category FROM transactions ORDER BY category ASC"
            ).fetchall()
            return [row["category"] for row in rows]

    def ping(self) -> bool:
        """Check that the transactions table can be read."""
        with self._get_conn() as conn:
            conn.execute("SELECT 1 FROM transactions LIMIT 1").fetchall()
            return True
