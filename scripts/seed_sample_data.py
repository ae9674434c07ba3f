#!/usr/bin/env python3
"""Seed a document store with sample brokerage data.

Generates CDS records, directory users with profiles, stock accounts and
their transactions, and writes them through the repositories so that every
record carries store-stamped ``created_at``/``updated_at`` fields and, with
``--events``, emits change events.

Examples:
    python scripts/seed_sample_data.py --users 20
    python scripts/seed_sample_data.py --backend postgres --events console
"""

import argparse
import logging
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from brokerage_admin.config import BrokerageConfig, StoreConfig
from brokerage_admin.generators import (
    CDSGenerator,
    StockAccountGenerator,
    StockTransactionGenerator,
    UserProfileGenerator,
)
from brokerage_admin.identity import InMemoryIdentityDirectory
from brokerage_admin.logging import setup_logging
from brokerage_admin.models.brokerage import StockAccountStatus
from brokerage_admin.repositories import (
    CDSRepository,
    StockAccountRepository,
    StockTransactionRepository,
    UserProfileRepository,
)
from brokerage_admin.sinks import ChangePublisher, ConsoleSink, KafkaSink
from brokerage_admin.store import build_store

logger = logging.getLogger(__name__)

STATUS_WEIGHTS = {
    StockAccountStatus.ACTIVE: 0.70,
    StockAccountStatus.PENDING: 0.15,
    StockAccountStatus.INACTIVE: 0.10,
    StockAccountStatus.CLOSED: 0.05,
}


def build_publisher(kind: str, config: BrokerageConfig) -> ChangePublisher | None:
    """Create a change publisher for ``--events`` (``none``, ``console`` or ``kafka``)."""
    if kind == "console":
        return ChangePublisher(ConsoleSink(pretty=False), topic_prefix=config.topic_prefix)
    if kind == "kafka":
        return ChangePublisher(KafkaSink(config.kafka), topic_prefix=config.topic_prefix)
    return None


def seed(
    config: BrokerageConfig,
    num_cds: int,
    num_users: int,
    transactions_per_account: int,
    publisher: ChangePublisher | None = None,
) -> dict[str, int]:
    """Generate and store sample data.

    Parameters
    ----------
    config : BrokerageConfig
        Store selection and seed.
    num_cds : int
        Number of CDS records.
    num_users : int
        Number of users; each gets a profile and one stock account.
    transactions_per_account : int
        Transactions generated per account.
    publisher : ChangePublisher | None
        Optional change event publisher.

    Returns
    -------
    dict[str, int]
        Count of records written per collection.
    """
    seed_value = config.seed
    store = build_store(config)
    directory = InMemoryIdentityDirectory()
    counts = {"cds": 0, "users": 0, "profiles": 0, "accounts": 0, "transactions": 0}

    cds_repo = CDSRepository(store, publisher, config.default_limit)
    profile_repo = UserProfileRepository(store, publisher, config.default_limit)
    account_repo = StockAccountRepository(store, publisher, config.default_limit)
    tx_repo = StockTransactionRepository(store, publisher, config.default_limit)

    cds_gen = CDSGenerator(seed=seed_value)
    profile_gen = UserProfileGenerator(seed=seed_value)
    account_gen = StockAccountGenerator(seed=seed_value)
    tx_gen = StockTransactionGenerator(seed=seed_value)

    now = datetime.now(timezone.utc)
    statuses = list(STATUS_WEIGHTS)
    weights = list(STATUS_WEIGHTS.values())

    try:
        logger.info("Generating %d CDS records...", num_cds)
        cds_ids = []
        for _ in range(num_cds):
            result = cds_repo.create(cds_gen.generate())
            if result.success:
                cds_ids.append(result.entity_id)
        counts["cds"] = len(cds_ids)
        if not cds_ids:
            logger.error("No CDS records stored, aborting")
            return counts

        logger.info("Generating %d users with profiles and accounts...", num_users)
        for _ in range(num_users):
            user = directory.create_user(profile_gen.fake.unique.email(), "changeme")
            counts["users"] += 1

            if profile_repo.create(profile_gen.generate(user.uid, user.email)).success:
                counts["profiles"] += 1

            settle_in = None
            if account_gen.rng.random() < 0.3:
                settle_in = timedelta(minutes=account_gen.rng.randint(5, 180))
            account = account_gen.generate(
                cds_id=account_gen.rng.choice(cds_ids),
                user_id=user.uid,
                status=account_gen.rng.choices(statuses, weights=weights, k=1)[0],
                settle_in=settle_in,
                now=now,
            )
            created = account_repo.create(account)
            if not created.success:
                continue
            counts["accounts"] += 1

            for _ in range(transactions_per_account):
                tx = tx_gen.generate(created.entity_id, now - timedelta(days=365), now)
                if tx_repo.create(tx).success:
                    counts["transactions"] += 1
    finally:
        store.close()

    logger.info(
        "Seeded %d CDS, %d users, %d profiles, %d accounts, %d transactions",
        counts["cds"],
        counts["users"],
        counts["profiles"],
        counts["accounts"],
        counts["transactions"],
    )
    return counts


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Seed the document store with sample brokerage data")
    parser.add_argument(
        "--cds",
        type=int,
        default=5,
        help="Number of CDS records to generate (default: 5)",
    )
    parser.add_argument(
        "--users",
        type=int,
        default=20,
        help="Number of users to generate (default: 20)",
    )
    parser.add_argument(
        "--transactions",
        type=int,
        default=10,
        help="Transactions per stock account (default: 10)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility (default: SEED env or unseeded)",
    )
    parser.add_argument(
        "--backend",
        type=str,
        choices=["memory", "postgres"],
        default=None,
        help="Document store backend (default: STORE_BACKEND env or memory)",
    )
    parser.add_argument(
        "--events",
        type=str,
        choices=["none", "console", "kafka"],
        default="none",
        help="Publish change events while seeding (default: none)",
    )
    args = parser.parse_args()

    config = BrokerageConfig.from_env()
    setup_logging(config.log_level, config.log_format)
    if args.seed is not None:
        config.seed = args.seed
    if args.backend is not None:
        config.store = StoreConfig(backend=args.backend, table=config.store.table)

    publisher = build_publisher(args.events, config)
    try:
        seed(config, args.cds, args.users, args.transactions, publisher)
    finally:
        if publisher is not None:
            publisher.sink.close()


if __name__ == "__main__":
    main()
