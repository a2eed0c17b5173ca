"""Shared fixtures: every test gets its own SQLite file."""
import pytest
from fastapi.testclient import TestClient
from ledger.config import Settings
from ledger.main import create_app
from ledger.services.transactions import TransactionQueryService
from ledger.storage.database import TransactionStore


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing at a throwaway database."""
    return Settings(database_path=str(tmp_path / "ledger_test.db"), default_page_size=10)


@pytest.fixture
def client(test_settings):
    """Test client with the application lifespan running."""
    with TestClient(create_app(test_settings)) as test_client:
        yield test_client


@pytest.fixture
def store(test_settings):
    return TransactionStore(test_settings.database_path)


@pytest.fixture
def service(store):
    return TransactionQueryService(store, default_page_size=10)


@pytest.fixture
def sample_transaction_data():
    """Mixed income and expenses across 2024 and early 2025."""
    return [
        {"type": "Income", "amount": 2500.00, "category": "Salary", "date": "2024-01-31", "description": "January salary"},
        {"type": "Expense", "amount": 45.99, "category": "Food", "date": "2024-02-03", "description": "Groceries"},
        {"type": "Expense", "amount": 12.50, "category": "Food", "date": "2024-06-15"},
        {"type": "Expense", "amount": 60.00, "category": "Entertainment", "date": "2024-12-31", "description": "Concert"},
        {"type": "Income", "amount": 300.00, "category": "Freelance", "date": "2025-01-01", "description": "Invoice 42"},
    ]
