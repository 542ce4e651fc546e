from __future__ import annotations

import random
import re
import secrets
from typing import Optional

_WHITESPACE = re.compile(r"\s+")


def generate_payslip_id(month_year: str, prefix: str = "PSL", rng: Optional[random.Random] = None) -> str:
    """Build ``PSL-MARCH2025-123`` style identifiers.

    The three digit suffix is random and may collide; callers must be ready
    to retry the insert with a fresh identifier.
    """
    period = _WHITESPACE.sub("", month_year).upper()
    suffix = rng.randint(100, 999) if rng is not None else 100 + secrets.randbelow(900)
    return f"{prefix}-{period}-{suffix}"
