"""Account code generation and sample-data generators."""

from brokerage_admin.generators.brokerage import (
    CDSGenerator,
    StockAccountGenerator,
    StockTransactionGenerator,
    UserProfileGenerator,
)
from brokerage_admin.generators.codes import (
    CODE_ALPHABET,
    generate_cds_no,
    generate_client_code,
    generate_code,
    generate_remister_code,
)

__all__ = [
    "CDSGenerator",
    "CODE_ALPHABET",
    "StockAccountGenerator",
    "StockTransactionGenerator",
    "UserProfileGenerator",
    "generate_cds_no",
    "generate_client_code",
    "generate_code",
    "generate_remister_code",
]
