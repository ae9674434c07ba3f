"""The signed-in user's own view: account, CDS, transactions and profile."""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from brokerage_admin.config import ValuationConfig
from brokerage_admin.exceptions import AuthorizationError, ErrorKind
from brokerage_admin.identity import AuthorizationPolicy, Principal
from brokerage_admin.models.brokerage import CDS, StockAccount, StockTransaction, UserProfile
from brokerage_admin.repositories import (
    CDSRepository,
    StockAccountRepository,
    StockTransactionRepository,
    UserProfileRepository,
)
from brokerage_admin.results import EntityResult, MutationResult
from brokerage_admin.valuation import ValuationSnapshot, ValuationTicker

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "ic", "bank_account", "bank_name", "email", "phone")


@dataclass
class DashboardView:
    account: StockAccount | None = None
    cds: CDS | None = None
    transactions: list[StockTransaction] = field(default_factory=list)
    error: str | None = None


class DashboardService:
    def __init__(
        self,
        accounts: StockAccountRepository,
        cds: CDSRepository,
        transactions: StockTransactionRepository,
        profiles: UserProfileRepository,
        policy: AuthorizationPolicy,
        valuation: ValuationConfig | None = None,
    ) -> None:
        self.accounts = accounts
        self.cds = cds
        self.transactions = transactions
        self.profiles = profiles
        self.policy = policy
        self.valuation = valuation or ValuationConfig()

    def load(self, user_id: str) -> DashboardView:
        """The user's newest account with its CDS and transactions.

        A missing CDS or failed transaction lookup leaves that part empty;
        only a failed account lookup is reported as the view's error.
        """
        accounts = self.accounts.list_by_user_id(user_id, limit=1)
        if not accounts.success:
            return DashboardView(error=accounts.error)
        if not accounts.items:
            return DashboardView()

        account = accounts.items[0]
        view = DashboardView(account=account)

        cds = self.cds.get(account.cds_id) if account.cds_id else None
        if cds is not None and cds.success:
            view.cds = cds.entity

        transactions = self.transactions.list_by_account_id(account.id)
        if transactions.success:
            view.transactions = transactions.items
        return view

    def valuation_ticker(
        self,
        view: DashboardView,
        on_update: Callable[[ValuationSnapshot], None] | None = None,
    ) -> ValuationTicker | None:
        """A ticker for the view's account; start it inside a running event loop."""
        if view.account is None:
            return None
        return ValuationTicker.from_config(view.account, self.valuation, on_update=on_update)

    def get_profile(self, user_id: str) -> EntityResult[UserProfile]:
        return self.profiles.get_by_user_id(user_id)

    def save_profile(self, principal: Principal, user_id: str, data: dict[str, Any]) -> MutationResult:
        """Create the profile on first save, update it afterwards. Owner or admin only."""
        if principal.uid != user_id and not self.policy.is_admin(principal):
            return MutationResult.failure(
                AuthorizationError(f"{principal.uid} cannot edit the profile of {user_id}")
            )

        fields = {key: data.get(key, "") for key in PROFILE_FIELDS}
        existing = self.profiles.get_by_user_id(user_id)
        if existing.success:
            return self.profiles.update(existing.entity.id, {"user_id": user_id, **fields})
        if existing.error_kind != ErrorKind.NOT_FOUND:
            return MutationResult(success=False, error=existing.error, error_kind=existing.error_kind)
        return self.profiles.create(UserProfile(user_id=user_id, **fields))
