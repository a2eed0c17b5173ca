"""Tests for the SQLite transaction store."""
import sqlite3
from datetime import date
from decimal import Decimal
import pytest
from ledger.errors import StoreError, ValidationError
from ledger.models.transaction import TransactionCreate, TransactionType
from ledger.storage.database import TransactionStore, from_cents, to_cents


def make_tx(**overrides):
    fields = {
        "type": TransactionType.EXPENSE,
        "amount": Decimal("10.00"),
        "category": "Food",
        "date": date(2024, 1, 1),
        "description": None,
    }
    fields.update(overrides)
    return TransactionCreate(**fields)


def test_cents_conversion():
    assert to_cents(Decimal("45.99")) == 4599
    assert to_cents(Decimal("-0.01")) == -1
    assert from_cents(4599) == Decimal("45.99")
    assert from_cents(None) == Decimal("0")


def test_table_created_on_init(tmp_path):
    db_path = str(tmp_path / "fresh.db")
    TransactionStore(db_path)

    conn = sqlite3.connect(db_path)
    tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
    conn.close()
    assert "transactions" in tables


def test_init_is_idempotent(tmp_path):
    db_path = str(tmp_path / "twice.db")
    first = TransactionStore(db_path)
    first.add_transaction(make_tx())

    second = TransactionStore(db_path)
    assert second.count_transactions() == 1


def test_sum_by_type_exact(store):
    for amount in ("0.10", "0.20", "0.30"):
        store.add_transaction(make_tx(amount=Decimal(amount)))
    store.add_transaction(make_tx(type=TransactionType.INCOME, amount=Decimal("100.00")))

    totals = store.sum_by_type()
    assert totals[TransactionType.EXPENSE] == Decimal("0.60")
    assert totals[TransactionType.INCOME] == Decimal("100.00")


def test_sum_by_type_defaults_to_zero(store):
    store.add_transaction(make_tx(type=TransactionType.INCOME, amount=Decimal("5.00")))
    totals = store.sum_by_type()
    assert totals[TransactionType.EXPENSE] == Decimal("0")


def test_list_transactions_offset_and_limit(store):
    created = [store.add_transaction(make_tx(category=f"C{i}")) for i in range(5)]

    rows = store.list_transactions(offset=1, limit=3)
    assert [tx.id for tx in rows] == [tx.id for tx in created[1:4]]


def test_update_missing_returns_none(store):
    tx = store.add_transaction(make_tx())
    store.delete_transaction(tx.id)
    assert store.update_transaction(tx) is None


def test_delete_missing_returns_false(store):
    assert store.delete_transaction(42) is False


def test_ids_not_reused_after_delete(store):
    first = store.add_transaction(make_tx())
    store.delete_transaction(first.id)
    second = store.add_transaction(make_tx())
    assert second.id > first.id


def test_check_constraint_surfaces_as_validation_error(store):
    with pytest.raises(ValidationError):
        with store._get_conn() as conn:
            conn.execute(
                "INSERT INTO transactions (type, amount_cents, category, date) VALUES (?, ?, ?, ?)",
                ("Savings", 100, "Misc", "2024-01-01"),
            )


def test_driver_error_surfaces_as_store_error(store):
    with pytest.raises(StoreError):
        with store._get_conn() as conn:
            conn.execute("SELECT * FROM missing_table")


def test_get_categories_distinct(store):
    for category in ["Food", "Rent", "Food"]:
        store.add_transaction(make_tx(category=category))
    assert store.get_categories() == ["Food", "Rent"]


def test_ping(store):
    assert store.ping() is True


def test_ids_beyond_integer_range_are_missing(store):
    store.add_transaction(make_tx())
    assert store.get_transaction(2 ** 63) is None
    assert store.get_transaction(-(2 ** 63) - 1) is None
    assert store.delete_transaction(2 ** 64) is False
    assert store.count_transactions() == 1


def test_update_beyond_integer_range_returns_none(store):
    tx = store.add_transaction(make_tx())
    assert store.update_transaction(tx.model_copy(update={"id": 2 ** 63})) is None


def test_ping_fails_when_table_missing(tmp_path):
    store = TransactionStore(str(tmp_path / "dropped.db"))
    conn = sqlite3.connect(store.db_path)
    conn.execute("DROP TABLE transactions")
    conn.commit()
    conn.close()

    with pytest.raises(StoreError):
        store.ping()
