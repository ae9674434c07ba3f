"""Join accounts to their CDS and directory user for display.

Foreign keys are resolved from reference sets already in hand; nothing is
persisted and a dangling key never raises or drops a row.
"""

from dataclasses import dataclass
from typing import Iterable

from brokerage_admin.models.brokerage import CDS, DirectoryUser, StockAccount, StockTransaction

UNKNOWN = "Unknown"
LOADING = "Loading..."


def active_directory_users(users: Iterable[DirectoryUser]) -> list[DirectoryUser]:
    """Enabled users that have an email, ordered by email."""
    active = [user for user in users if not user.disabled and user.email]
    return sorted(active, key=lambda user: (user.email.casefold(), user.email))


@dataclass(frozen=True)
class AccountRow:
    account: StockAccount
    cds_name: str
    user_email: str


@dataclass(frozen=True)
class TransactionRow:
    transaction: StockTransaction
    client_code: str


class AccountResolver:
    """Lookup tables built once from the reference sets.

    Pass ``None`` for a reference set that has not been loaded yet; lookups
    against it render ``LOADING`` instead of ``UNKNOWN``.
    """

    def __init__(
        self,
        cds_records: Iterable[CDS] | None = None,
        users: Iterable[DirectoryUser] | None = None,
        accounts: Iterable[StockAccount] | None = None,
    ) -> None:
        self._cds = None if cds_records is None else {c.id: c for c in cds_records if c.id}
        self.users = None if users is None else active_directory_users(users)
        self._users = None if self.users is None else {u.uid: u for u in self.users}
        self._accounts = None if accounts is None else {a.id: a for a in accounts if a.id}

    def cds_name(self, cds_id: str | None) -> str:
        if self._cds is None:
            return LOADING
        cds = self._cds.get(cds_id) if cds_id else None
        return cds.name if cds else UNKNOWN

    def user_email(self, user_id: str | None) -> str:
        if self._users is None:
            return LOADING
        user = self._users.get(user_id) if user_id else None
        return user.email if user and user.email else UNKNOWN

    def client_code(self, stock_account_id: str | None) -> str:
        if self._accounts is None:
            return LOADING
        account = self._accounts.get(stock_account_id) if stock_account_id else None
        return account.client_code if account else UNKNOWN

    def resolve(self, accounts: Iterable[StockAccount]) -> list[AccountRow]:
        return [
            AccountRow(
                account=account,
                cds_name=self.cds_name(account.cds_id),
                user_email=self.user_email(account.user_id),
            )
            for account in accounts
        ]

    def resolve_transactions(self, transactions: Iterable[StockTransaction]) -> list[TransactionRow]:
        return [
            TransactionRow(transaction=tx, client_code=self.client_code(tx.stock_account_id))
            for tx in transactions
        ]
