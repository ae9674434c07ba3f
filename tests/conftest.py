"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from brokerage_admin.identity import DirectoryService, InMemoryIdentityDirectory, Principal, RoleClaimPolicy
from brokerage_admin.models.brokerage import (
    CDS,
    DirectoryUser,
    StockAccount,
    StockAccountStatus,
    StockAccountType,
    StockTransaction,
    StockTransactionType,
    UserProfile,
)
from brokerage_admin.repositories import (
    CDSRepository,
    StockAccountRepository,
    StockTransactionRepository,
    UserProfileRepository,
)
from brokerage_admin.store import InMemoryDocumentStore

BASE_TIME = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


class StepClock:
    """Deterministic store clock: every call is one second after the previous."""

    def __init__(self, start: datetime = BASE_TIME, step: timedelta = timedelta(seconds=1)) -> None:
        self.current = start - step
        self.step = step

    def __call__(self) -> datetime:
        self.current += self.step
        return self.current


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def store(clock: StepClock) -> InMemoryDocumentStore:
    """Create a fresh store for each test."""
    return InMemoryDocumentStore(clock=clock)


@pytest.fixture
def cds_repo(store: InMemoryDocumentStore) -> CDSRepository:
    return CDSRepository(store)


@pytest.fixture
def account_repo(store: InMemoryDocumentStore) -> StockAccountRepository:
    return StockAccountRepository(store)


@pytest.fixture
def transaction_repo(store: InMemoryDocumentStore) -> StockTransactionRepository:
    return StockTransactionRepository(store)


@pytest.fixture
def profile_repo(store: InMemoryDocumentStore) -> UserProfileRepository:
    return UserProfileRepository(store)


@pytest.fixture
def policy() -> RoleClaimPolicy:
    return RoleClaimPolicy()


@pytest.fixture
def admin() -> Principal:
    return Principal(uid="admin-001", email="admin@broker.test", claims={"role": "admin"})


@pytest.fixture
def member() -> Principal:
    return Principal(uid="user-001", email="alice@broker.test", claims={})


@pytest.fixture
def directory_users() -> list[DirectoryUser]:
    return [
        DirectoryUser(uid="user-001", email="alice@broker.test"),
        DirectoryUser(uid="user-002", email="bob@broker.test"),
        DirectoryUser(uid="user-003", email="carol@broker.test", disabled=True),
        DirectoryUser(uid="user-004", email=None),
    ]


@pytest.fixture
def directory(directory_users: list[DirectoryUser]) -> DirectoryService:
    return DirectoryService(InMemoryIdentityDirectory(directory_users))


@pytest.fixture
def sample_cds() -> CDS:
    return CDS(
        name="Bursa Depository",
        addres="Exchange Square, Kuala Lumpur",
        website="https://www.bursamalaysia.test",
        sst_reg="W10-1808-31000001",
    )


@pytest.fixture
def sample_account() -> StockAccount:
    return StockAccount(
        client_code="AB12CD3",
        remister_code="R2D2",
        cds_no="123-456-123456789",
        cds_id="cds-001",
        user_id="user-001",
        type=StockAccountType.PREMIUM,
        status=StockAccountStatus.ACTIVE,
        capital=10000.0,
        profit=500.0,
        estimated_total=10500.0,
    )


@pytest.fixture
def sample_transaction() -> StockTransaction:
    return StockTransaction(
        stock_account_id="acct-001",
        date=datetime(2024, 2, 15, 10, 30, tzinfo=timezone.utc),
        type=StockTransactionType.INCREASE,
        description="Cash deposit",
        amount=2500.0,
    )


@pytest.fixture
def sample_profile() -> UserProfile:
    return UserProfile(
        user_id="user-001",
        name="Alice Tan",
        ic="900101-14-5678",
        bank_account="123456789012",
        bank_name="Maybank",
        email="alice@broker.test",
        phone="+60123456789",
    )
