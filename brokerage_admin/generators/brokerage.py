"""Sample-data generators for the brokerage collections."""

from datetime import datetime, timedelta, timezone

from brokerage_admin.generators.base import BaseGenerator
from brokerage_admin.generators.codes import (
    generate_cds_no,
    generate_client_code,
    generate_remister_code,
)
from brokerage_admin.models.brokerage import (
    CDS,
    StockAccount,
    StockAccountStatus,
    StockAccountType,
    StockTransaction,
    StockTransactionType,
    UserProfile,
)
from brokerage_admin.valuation import datetime_to_minutes


class CDSGenerator(BaseGenerator):
    """Generate custodian depository records."""

    SUFFIXES = ["Depository", "Nominees", "Custodian Services", "Securities"]

    def generate(self) -> CDS:
        company = self.fake.company()
        return CDS(
            name=f"{company} {self.rng.choice(self.SUFFIXES)}",
            addres=self.fake.address().replace("\n", ", "),
            website=f"https://www.{self.fake.domain_name()}",
            sst_reg=f"W10-{self.rng.randint(1000, 9999)}-{self.rng.randint(10000000, 99999999)}",
        )


class UserProfileGenerator(BaseGenerator):
    """Generate user profiles with Malaysian-style IC and bank details."""

    BANK_NAMES = [
        "Maybank",
        "CIMB Bank",
        "Public Bank",
        "RHB Bank",
        "Hong Leong Bank",
        "AmBank",
        "Bank Islam",
    ]

    def _ic(self) -> str:
        born = self.fake.date_of_birth(minimum_age=18, maximum_age=80)
        return f"{born:%y%m%d}-{self.rng.randint(1, 16):02d}-{self.rng.randint(0, 9999):04d}"

    def generate(self, user_id: str, email: str | None = None) -> UserProfile:
        return UserProfile(
            user_id=user_id,
            name=self.fake.name(),
            ic=self._ic(),
            bank_account="".join(str(self.rng.randint(0, 9)) for _ in range(12)),
            bank_name=self.rng.choice(self.BANK_NAMES),
            email=email or self.fake.email(),
            phone=self.fake.phone_number(),
        )


class StockAccountGenerator(BaseGenerator):
    """Generate stock accounts.

    Type mix: BASIC ~50%, PREMIUM ~25%, BUSINESS ~15%, INVESTOR ~10%.
    """

    TYPES = list(StockAccountType)
    TYPE_WEIGHTS = [0.50, 0.25, 0.15, 0.10]

    def generate(
        self,
        cds_id: str,
        user_id: str,
        status: StockAccountStatus = StockAccountStatus.ACTIVE,
        settle_in: timedelta | None = None,
        now: datetime | None = None,
    ) -> StockAccount:
        """Generate one account.

        ``settle_in`` sets ``estimated_total_time`` that far after ``now``;
        left as ``None`` the account has no pending settlement.
        """
        now = now or datetime.now(timezone.utc)
        capital = round(self.rng.uniform(1000, 250000), 2)
        profit = round(capital * self.rng.uniform(-0.15, 0.35), 2)
        return StockAccount(
            client_code=generate_client_code(self.rng),
            remister_code=generate_remister_code(self.rng),
            cds_no=generate_cds_no(self.rng),
            cds_id=cds_id,
            user_id=user_id,
            type=self.rng.choices(self.TYPES, weights=self.TYPE_WEIGHTS, k=1)[0],
            status=status,
            capital=capital,
            profit=profit,
            estimated_total=round(capital + profit, 2),
            estimated_total_time=datetime_to_minutes(now + settle_in) if settle_in else 0,
            last_transaction_date=now,
        )


class StockTransactionGenerator(BaseGenerator):
    """Generate deposits and withdrawals against an account."""

    DESCRIPTIONS = {
        StockTransactionType.INCREASE: ["Cash deposit", "Dividend credit", "Fund transfer in", "Share sale proceeds"],
        StockTransactionType.DECREASE: ["Cash withdrawal", "Brokerage fee", "Fund transfer out", "Share purchase"],
    }

    def generate(
        self,
        stock_account_id: str,
        start_date: datetime,
        end_date: datetime,
    ) -> StockTransaction:
        tx_type = self.rng.choices(
            [StockTransactionType.INCREASE, StockTransactionType.DECREASE], weights=[0.6, 0.4], k=1
        )[0]
        span = max(int((end_date - start_date).total_seconds()), 1)
        return StockTransaction(
            stock_account_id=stock_account_id,
            date=start_date + timedelta(seconds=self.rng.randint(0, span)),
            type=tx_type,
            description=f"{self.rng.choice(self.DESCRIPTIONS[tx_type])} {self.fake.bothify('REF-########')}",
            amount=round(self.rng.uniform(50, 20000), 2),
        )
