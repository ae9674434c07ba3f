"""Identifier codes stamped on new stock accounts.

Each character and each block is drawn independently and uniformly; the
system does not check codes for collisions.
"""

import random
import string
from typing import Any

CODE_ALPHABET = string.ascii_uppercase + string.digits
CLIENT_CODE_LENGTH = 7
REMISTER_CODE_LENGTH = 4


def generate_code(length: int, rng: Any = None) -> str:
    """Random string of ``length`` characters from ``[A-Z0-9]``."""
    rng = rng or random
    return "".join(rng.choice(CODE_ALPHABET) for _ in range(length))


def generate_client_code(rng: Any = None) -> str:
    return generate_code(CLIENT_CODE_LENGTH, rng)


def generate_remister_code(rng: Any = None) -> str:
    return generate_code(REMISTER_CODE_LENGTH, rng)


def generate_cds_no(rng: Any = None) -> str:
    """CDS number formatted ``DDD-DDD-DDDDDDDDD``."""
    rng = rng or random
    part1 = rng.randint(100, 999)
    part2 = rng.randint(100, 999)
    part3 = rng.randint(100000000, 999999999)
    return f"{part1}-{part2}-{part3}"
