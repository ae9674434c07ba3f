"""Tests for the admin and dashboard services."""

import asyncio
import re

import pytest

from brokerage_admin.config import ValuationConfig
from brokerage_admin.exceptions import ErrorKind
from brokerage_admin.identity import DirectoryService, Principal, RoleClaimPolicy
from brokerage_admin.models.brokerage import (
    CDS,
    StockAccountStatus,
    StockAccountType,
    StockTransactionType,
    UserProfile,
)
from brokerage_admin.resolver import UNKNOWN
from brokerage_admin.services import BrokerageAdmin, DashboardService
from brokerage_admin.store import InMemoryDocumentStore
from brokerage_admin.valuation import ValuationState


@pytest.fixture
def admin_service(
    store: InMemoryDocumentStore, directory: DirectoryService, policy: RoleClaimPolicy, admin: Principal
) -> BrokerageAdmin:
    return BrokerageAdmin.from_store(store, directory, policy, admin)


@pytest.fixture
def member_service(
    store: InMemoryDocumentStore, directory: DirectoryService, policy: RoleClaimPolicy, member: Principal
) -> BrokerageAdmin:
    return BrokerageAdmin.from_store(store, directory, policy, member)


@pytest.fixture
def dashboard(admin_service: BrokerageAdmin, policy: RoleClaimPolicy) -> DashboardService:
    return DashboardService(
        accounts=admin_service.accounts,
        cds=admin_service.cds,
        transactions=admin_service.transactions,
        profiles=admin_service.profiles,
        policy=policy,
        valuation=ValuationConfig(tick_seconds=0.001),
    )


class TestAuthorization:
    """Tests for admin-only operations."""

    def test_member_rejected(self, member_service: BrokerageAdmin, store: InMemoryDocumentStore) -> None:
        result = member_service.create_cds(CDS(name="Bursa"))

        assert result.success is False
        assert result.error_kind == ErrorKind.UNAUTHORIZED
        assert store.count("CDS") == 0

    def test_anonymous_rejected(
        self, store: InMemoryDocumentStore, directory: DirectoryService, policy: RoleClaimPolicy
    ) -> None:
        service = BrokerageAdmin.from_store(store, directory, policy, None)

        assert service.delete_user("user-001").error_kind == ErrorKind.UNAUTHORIZED

    def test_member_cannot_delete(self, admin_service: BrokerageAdmin, member_service: BrokerageAdmin) -> None:
        cds_id = admin_service.create_cds(CDS(name="Bursa")).entity_id

        assert member_service.delete_cds(cds_id).error_kind == ErrorKind.UNAUTHORIZED
        assert admin_service.cds.get(cds_id).success is True


class TestCDSAdmin:
    def test_create_requires_name(self, admin_service: BrokerageAdmin) -> None:
        result = admin_service.create_cds(CDS(name=""))

        assert result.error_kind == ErrorKind.VALIDATION_FAILED
        assert result.error == "Please fill in all required fields"

    def test_crud(self, admin_service: BrokerageAdmin) -> None:
        cds_id = admin_service.create_cds(CDS(name="Bursa")).entity_id

        assert admin_service.update_cds(cds_id, {"website": "https://bursa.test"}).success
        assert admin_service.cds.get(cds_id).entity.website == "https://bursa.test"
        assert admin_service.delete_cds(cds_id).success


class TestStockAccountAdmin:
    """Tests for stock account creation."""

    def test_create_stamps_codes(self, admin_service: BrokerageAdmin) -> None:
        result = admin_service.create_stock_account(
            "cds-001", "user-001", StockAccountType.INVESTOR, StockAccountStatus.ACTIVE, capital=5000
        )
        account = admin_service.accounts.get(result.entity_id).entity

        assert re.fullmatch(r"[A-Z0-9]{7}", account.client_code)
        assert re.fullmatch(r"[A-Z0-9]{4}", account.remister_code)
        assert re.fullmatch(r"\d{3}-\d{3}-\d{9}", account.cds_no)
        assert account.capital == 5000.0
        assert account.profit == 0.0
        assert account.estimated_total == 0.0
        assert account.estimated_total_time == 0
        assert account.last_transaction_date is not None

    @pytest.mark.parametrize(
        "cds_id, user_id, type_, status",
        [
            ("", "user-001", StockAccountType.BASIC, StockAccountStatus.ACTIVE),
            ("cds-001", "", StockAccountType.BASIC, StockAccountStatus.ACTIVE),
            ("cds-001", "user-001", None, StockAccountStatus.ACTIVE),
            ("cds-001", "user-001", StockAccountType.BASIC, None),
        ],
    )
    def test_create_requires_fields(
        self, admin_service: BrokerageAdmin, store: InMemoryDocumentStore, cds_id: str, user_id: str, type_, status
    ) -> None:
        result = admin_service.create_stock_account(cds_id, user_id, type_, status)

        assert result.error_kind == ErrorKind.VALIDATION_FAILED
        assert store.count("StockAccounts") == 0

    def test_update_and_delete(self, admin_service: BrokerageAdmin) -> None:
        account_id = admin_service.create_stock_account(
            "cds-001", "user-001", StockAccountType.BASIC, StockAccountStatus.PENDING
        ).entity_id

        admin_service.update_stock_account(account_id, {"status": StockAccountStatus.ACTIVE})

        assert admin_service.accounts.get(account_id).entity.status == StockAccountStatus.ACTIVE
        assert admin_service.delete_stock_account(account_id).success
        assert admin_service.delete_stock_account(account_id).error_kind == ErrorKind.NOT_FOUND

    def test_active_stock_accounts(self, admin_service: BrokerageAdmin) -> None:
        admin_service.create_stock_account("cds-001", "user-001", StockAccountType.BASIC, StockAccountStatus.ACTIVE)
        admin_service.create_stock_account("cds-001", "user-002", StockAccountType.BASIC, StockAccountStatus.CLOSED)

        result = admin_service.active_stock_accounts()

        assert [a.user_id for a in result.items] == ["user-001"]


class TestStockTransactionAdmin:
    """Tests for transaction creation."""

    def test_create_defaults(self, admin_service: BrokerageAdmin) -> None:
        result = admin_service.create_stock_transaction("acct-001", "Cash deposit", 250.0)
        tx = admin_service.transactions.get(result.entity_id).entity

        assert tx.type == StockTransactionType.INCREASE
        assert tx.amount == 250.0
        assert tx.date is not None

    def test_does_not_touch_account(self, admin_service: BrokerageAdmin) -> None:
        account_id = admin_service.create_stock_account(
            "cds-001", "user-001", StockAccountType.BASIC, StockAccountStatus.ACTIVE, capital=1000
        ).entity_id

        admin_service.create_stock_transaction(account_id, "Withdrawal", 400.0, StockTransactionType.DECREASE)

        assert admin_service.accounts.get(account_id).entity.capital == 1000.0

    @pytest.mark.parametrize(
        "account_id, description, amount",
        [("", "x", 1.0), ("acct-001", "", 1.0), ("acct-001", "x", None), ("acct-001", "x", 0), ("acct-001", "x", -5.0)],
    )
    def test_validation(self, admin_service: BrokerageAdmin, account_id: str, description: str, amount) -> None:
        result = admin_service.create_stock_transaction(account_id, description, amount)

        assert result.error_kind == ErrorKind.VALIDATION_FAILED

    def test_update_and_delete(self, admin_service: BrokerageAdmin) -> None:
        tx_id = admin_service.create_stock_transaction("acct-001", "Cash deposit", 250.0).entity_id

        assert admin_service.update_stock_transaction(tx_id, {"amount": 300.0}).success
        assert admin_service.transactions.get(tx_id).entity.amount == 300.0
        assert admin_service.delete_stock_transaction(tx_id).success

    def test_update_rejects_negative_amount(self, admin_service: BrokerageAdmin) -> None:
        tx_id = admin_service.create_stock_transaction("acct-001", "Cash deposit", 250.0).entity_id

        result = admin_service.update_stock_transaction(tx_id, {"amount": -5})

        assert result.error_kind == ErrorKind.VALIDATION_FAILED
        assert admin_service.transactions.get(tx_id).entity.amount == 250.0


class TestDirectoryAdmin:
    def test_user_lifecycle(self, admin_service: BrokerageAdmin) -> None:
        uid = admin_service.create_user("dave@broker.test", "secret1").entity_id

        assert admin_service.update_user(uid, disabled=True).success
        assert admin_service.directory.get_user(uid).entity.disabled is True
        assert admin_service.delete_user(uid).success

    def test_short_password(self, admin_service: BrokerageAdmin) -> None:
        assert admin_service.create_user("dave@broker.test", "12345").error_kind == ErrorKind.VALIDATION_FAILED


class TestReferenceData:
    """Tests for loading reference data for display."""

    def test_resolver_from_reference_data(self, admin_service: BrokerageAdmin) -> None:
        cds_id = admin_service.create_cds(CDS(name="Bursa")).entity_id
        admin_service.create_stock_account(cds_id, "user-001", StockAccountType.BASIC, StockAccountStatus.ACTIVE)
        admin_service.create_stock_account("gone", "user-003", StockAccountType.BASIC, StockAccountStatus.ACTIVE)

        data = admin_service.load_reference_data()
        rows = data.resolver().resolve(data.accounts)

        assert data.errors == []
        assert [(r.cds_name, r.user_email) for r in rows] == [
            (UNKNOWN, UNKNOWN),
            ("Bursa", "alice@broker.test"),
        ]


class TestDashboardService:
    """Tests for the account holder's dashboard."""

    def test_load_without_account(self, dashboard: DashboardService) -> None:
        view = dashboard.load("user-001")

        assert view.account is None
        assert view.error is None
        assert dashboard.valuation_ticker(view) is None

    def test_load(self, admin_service: BrokerageAdmin, dashboard: DashboardService) -> None:
        cds_id = admin_service.create_cds(CDS(name="Bursa")).entity_id
        account_id = admin_service.create_stock_account(
            cds_id, "user-001", StockAccountType.BASIC, StockAccountStatus.ACTIVE
        ).entity_id
        admin_service.create_stock_transaction(account_id, "Cash deposit", 100.0)
        admin_service.create_stock_transaction("other", "Cash deposit", 100.0)

        view = dashboard.load("user-001")

        assert view.account.id == account_id
        assert view.cds.name == "Bursa"
        assert len(view.transactions) == 1

    def test_load_with_dangling_cds(self, admin_service: BrokerageAdmin, dashboard: DashboardService) -> None:
        admin_service.create_stock_account("gone", "user-001", StockAccountType.BASIC, StockAccountStatus.ACTIVE)

        view = dashboard.load("user-001")

        assert view.account is not None
        assert view.cds is None
        assert view.error is None

    def test_valuation_ticker(self, admin_service: BrokerageAdmin, dashboard: DashboardService) -> None:
        account_id = admin_service.create_stock_account(
            "cds-001", "user-001", StockAccountType.BASIC, StockAccountStatus.ACTIVE
        ).entity_id
        admin_service.update_stock_account(account_id, {"estimated_total": 1000.0, "estimated_total_time": 0})
        view = dashboard.load("user-001")
        updates = []

        async def scenario() -> None:
            async with dashboard.valuation_ticker(view, on_update=updates.append):
                await asyncio.sleep(0.005)

        asyncio.run(scenario())

        assert updates[0].state == ValuationState.LOCKED
        assert updates[0].estimated_total == 1000.0


class TestSaveProfile:
    """Tests for profile save-or-create."""

    def test_owner_creates_then_updates(self, dashboard: DashboardService, member: Principal) -> None:
        created = dashboard.save_profile(member, "user-001", {"name": "Alice", "bank_name": "Maybank"})
        updated = dashboard.save_profile(member, "user-001", {"name": "Alice Tan", "bank_name": "CIMB Bank"})
        profile = dashboard.get_profile("user-001").entity

        assert created.success and updated.success
        assert created.entity_id == updated.entity_id
        assert profile.name == "Alice Tan"
        assert profile.bank_name == "CIMB Bank"

    def test_other_user_rejected(self, dashboard: DashboardService, member: Principal) -> None:
        result = dashboard.save_profile(member, "user-002", {"name": "Bob"})

        assert result.error_kind == ErrorKind.UNAUTHORIZED

    def test_admin_may_edit_any(self, dashboard: DashboardService, admin: Principal) -> None:
        assert dashboard.save_profile(admin, "user-002", {"name": "Bob"}).success is True
        assert isinstance(dashboard.get_profile("user-002").entity, UserProfile)
