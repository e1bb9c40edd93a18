"""Pytest fixtures for testing"""

import pytest
from typing import Any, Dict, Generator, List, Tuple
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from fincore.api.main import create_app
from fincore.api.dependencies import get_data_source_client, get_settlement_client
from fincore.domain.models import Account, Granularity, TransferRecord
from fincore.infrastructure.clients.settlement import transfer_event
from fincore.infrastructure.database.models import Base
from fincore.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeDataSource:
    """In-memory stand-in for DataSourceClient"""

    def __init__(self):
        self.opening_balance = 20000.0
        self.entries: List[Dict[str, Any]] = [
            {"id": "1", "date": "2025-01-17", "account": "Consulting Revenue",
             "description": "Consulting services rendered", "debit": 3500, "credit": 0, "reference": "INV-002"},
            {"id": "2", "date": "2025-01-18", "account": "Software Licenses",
             "description": "Annual software subscription", "debit": 0, "credit": 1200, "reference": "SUB-001"},
            {"id": "3", "date": "2025-01-19", "account": "Office Rent",
             "description": "Monthly office rent", "debit": 0, "credit": 2500, "reference": "EXP-001"},
            {"id": "4", "date": "2025-01-20", "account": "Cash",
             "description": "Client payment received", "debit": 5000, "credit": 0, "reference": "INV-001"},
        ]
        self.periods: List[Dict[str, Any]] = [
            {"label": "Jan 2025", "inflow": 45000, "outflow": 32000},
            {"label": "Feb 2025", "inflow": 52000, "outflow": 38000},
            {"label": "Mar 2025", "inflow": 48000, "outflow": 35000},
        ]
        self.accounts: List[Account] = [
            Account(account_id="main", name="Main Checking", balance=25000.0),
            Account(account_id="savings", name="Savings Account", balance=45000.0),
            Account(account_id="business", name="Business Account", balance=18000.0),
        ]
        self.requested_granularity: Granularity | None = None

    async def get_ledger_entries(self) -> Tuple[float, List[Dict[str, Any]]]:
        return self.opening_balance, self.entries

    async def get_cash_flow_periods(self, granularity: Granularity) -> List[Dict[str, Any]]:
        self.requested_granularity = granularity
        return self.periods

    async def get_accounts(self) -> List[Account]:
        return self.accounts


class FakeSettlementClient:
    """Collects webhook payloads instead of sending them"""

    def __init__(self):
        self.events: List[Dict[str, Any]] = []

    async def send_transfer_initiated(self, record: TransferRecord, request_id: str = "unknown") -> None:
        self.events.append(transfer_event(record, request_id))


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def data_source() -> FakeDataSource:
    return FakeDataSource()


@pytest.fixture
def settlement_client() -> FakeSettlementClient:
    return FakeSettlementClient()


def _test_app(db: Session):
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database (real upstream clients)"""
    return TestClient(_test_app(db))


@pytest.fixture
def stub_client(
    db: Session,
    data_source: FakeDataSource,
    settlement_client: FakeSettlementClient,
) -> TestClient:
    """Test client with upstream data source and settlement webhook faked"""
    app = _test_app(db)
    app.dependency_overrides[get_data_source_client] = lambda: data_source
    app.dependency_overrides[get_settlement_client] = lambda: settlement_client
    return TestClient(app)
