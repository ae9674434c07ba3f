"""Admin actions: validation, code stamping and authorization in front of the repositories.

Required-field checks live here, in the caller, not in the store layer.
"""

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from brokerage_admin.exceptions import BrokerageError, ValidationFailedError
from brokerage_admin.generators.codes import (
    generate_cds_no,
    generate_client_code,
    generate_remister_code,
)
from brokerage_admin.identity import AuthorizationPolicy, DirectoryService, Principal, require_admin
from brokerage_admin.models.base import as_float
from brokerage_admin.models.brokerage import (
    CDS,
    DirectoryUser,
    StockAccount,
    StockAccountStatus,
    StockAccountType,
    StockTransaction,
    StockTransactionType,
)
from brokerage_admin.query import DEFAULT_LIMIT
from brokerage_admin.repositories import (
    CDSRepository,
    StockAccountRepository,
    StockTransactionRepository,
    UserProfileRepository,
)
from brokerage_admin.resolver import AccountResolver
from brokerage_admin.results import ListResult, MutationResult
from brokerage_admin.sinks.publisher import ChangePublisher
from brokerage_admin.store.base import DocumentStore

logger = logging.getLogger(__name__)

REFERENCE_LIMIT = 100


@dataclass
class ReferenceData:
    """Lookup sets for admin tables and dropdowns."""

    accounts: list[StockAccount] | None = None
    cds: list[CDS] | None = None
    users: list[DirectoryUser] | None = None
    errors: list[str] = field(default_factory=list)

    def resolver(self) -> AccountResolver:
        return AccountResolver(cds_records=self.cds, users=self.users, accounts=self.accounts)


class BrokerageAdmin:
    """Operations available to the signed-in admin ``principal``."""

    def __init__(
        self,
        cds: CDSRepository,
        accounts: StockAccountRepository,
        transactions: StockTransactionRepository,
        profiles: UserProfileRepository,
        directory: DirectoryService,
        policy: AuthorizationPolicy,
        principal: Principal | None,
        rng: Any = None,
    ) -> None:
        self.cds = cds
        self.accounts = accounts
        self.transactions = transactions
        self.profiles = profiles
        self.directory = directory
        self.policy = policy
        self.principal = principal
        self.rng = rng or random

    @classmethod
    def from_store(
        cls,
        store: DocumentStore,
        directory: DirectoryService,
        policy: AuthorizationPolicy,
        principal: Principal | None,
        publisher: ChangePublisher | None = None,
        default_limit: int = DEFAULT_LIMIT,
    ) -> "BrokerageAdmin":
        return cls(
            cds=CDSRepository(store, publisher, default_limit),
            accounts=StockAccountRepository(store, publisher, default_limit),
            transactions=StockTransactionRepository(store, publisher, default_limit),
            profiles=UserProfileRepository(store, publisher, default_limit),
            directory=directory,
            policy=policy,
            principal=principal,
        )

    def _authorize(self) -> None:
        require_admin(self.policy, self.principal)

    def _guard(self) -> MutationResult | None:
        try:
            self._authorize()
        except BrokerageError as exc:
            logger.warning("Rejected admin operation: %s", exc)
            return MutationResult.failure(exc)
        return None

    # CDS

    def create_cds(self, cds: CDS) -> MutationResult:
        try:
            self._authorize()
            if not cds.name:
                raise ValidationFailedError("Please fill in all required fields")
        except BrokerageError as exc:
            return MutationResult.failure(exc)
        return self.cds.create(cds)

    def update_cds(self, cds_id: str, changes: dict[str, Any]) -> MutationResult:
        return self._guard() or self.cds.update(cds_id, changes)

    def delete_cds(self, cds_id: str) -> MutationResult:
        """Accounts still pointing at the CDS keep their ``cds_id``."""
        return self._guard() or self.cds.delete(cds_id)

    # Stock accounts

    def create_stock_account(
        self,
        cds_id: str,
        user_id: str,
        type: StockAccountType | None,
        status: StockAccountStatus | None,
        capital: float | None = None,
        estimated_total: float | None = None,
        estimated_total_time: int | None = None,
    ) -> MutationResult:
        """Create an account with freshly generated codes and zero profit."""
        try:
            self._authorize()
            if not cds_id or not user_id or type is None or status is None:
                raise ValidationFailedError("Please fill in all required fields")
        except BrokerageError as exc:
            return MutationResult.failure(exc)

        account = StockAccount(
            client_code=generate_client_code(self.rng),
            remister_code=generate_remister_code(self.rng),
            cds_no=generate_cds_no(self.rng),
            cds_id=cds_id,
            user_id=user_id,
            type=type,
            status=status,
            capital=as_float(capital),
            profit=0.0,
            estimated_total=as_float(estimated_total),
            estimated_total_time=estimated_total_time or 0,
            last_transaction_date=datetime.now(timezone.utc),
        )
        return self.accounts.create(account)

    def update_stock_account(self, account_id: str, changes: dict[str, Any]) -> MutationResult:
        return self._guard() or self.accounts.update(account_id, changes)

    def delete_stock_account(self, account_id: str) -> MutationResult:
        return self._guard() or self.accounts.delete(account_id)

    # Stock transactions

    def create_stock_transaction(
        self,
        stock_account_id: str,
        description: str,
        amount: float | None,
        type: StockTransactionType | None = None,
        date: datetime | None = None,
    ) -> MutationResult:
        """Record a ledger entry; the account's stored figures are not touched."""
        try:
            self._authorize()
            if not stock_account_id or not description or not amount:
                raise ValidationFailedError("Please fill in all required fields")
            if as_float(amount) < 0:
                raise ValidationFailedError("Amount must be a non-negative magnitude")
        except BrokerageError as exc:
            return MutationResult.failure(exc)

        transaction = StockTransaction(
            stock_account_id=stock_account_id,
            date=date or datetime.now(timezone.utc),
            type=type or StockTransactionType.INCREASE,
            description=description,
            amount=as_float(amount),
        )
        return self.transactions.create(transaction)

    def update_stock_transaction(self, transaction_id: str, changes: dict[str, Any]) -> MutationResult:
        return self._guard() or self.transactions.update(transaction_id, changes)

    def delete_stock_transaction(self, transaction_id: str) -> MutationResult:
        return self._guard() or self.transactions.delete(transaction_id)

    # User profiles

    def delete_user_profile(self, profile_id: str) -> MutationResult:
        return self._guard() or self.profiles.delete(profile_id)

    # Directory users

    def create_user(self, email: str, password: str) -> MutationResult:
        return self._guard() or self.directory.create_user(email, password)

    def update_user(
        self,
        uid: str,
        email: str | None = None,
        password: str | None = None,
        disabled: bool | None = None,
    ) -> MutationResult:
        return self._guard() or self.directory.update_user(
            uid, email=email, password=password, disabled=disabled
        )

    def delete_user(self, uid: str) -> MutationResult:
        return self._guard() or self.directory.delete_user(uid)

    # Reference data

    def active_stock_accounts(self) -> ListResult[StockAccount]:
        """ACTIVE accounts among the newest 100, for the transaction form."""
        result = self.accounts.list(REFERENCE_LIMIT)
        if not result.success:
            return result
        return ListResult(
            items=[a for a in result.items if a.status == StockAccountStatus.ACTIVE]
        )

    def load_reference_data(self) -> ReferenceData:
        """Load accounts, CDS records and directory users; a failed set stays ``None``."""
        data = ReferenceData()

        accounts = self.accounts.list(REFERENCE_LIMIT)
        if accounts.success:
            data.accounts = accounts.items
        else:
            data.errors.append(accounts.error)

        cds = self.cds.list(REFERENCE_LIMIT)
        if cds.success:
            data.cds = cds.items
        else:
            data.errors.append(cds.error)

        users = self.directory.list_users(REFERENCE_LIMIT)
        if users.success:
            data.users = users.items
        else:
            data.errors.append(users.error)

        if data.errors:
            logger.warning("Reference data partially loaded: %s", "; ".join(data.errors))
        return data
