"""
Backoff policy between failed attempts.

delay(n) = 2**n * base + uniform(0, jitter), where n is the number of the
attempt that just failed. With the defaults the delay before attempt n+1
lies in [2**n s, 2**n s + 0.5 s].
"""

import random
from typing import Optional

BASE_DELAY_S: float = 1.0
MAX_JITTER_S: float = 0.5


def backoff_delay(
    attempt: int,
    rng: Optional[random.Random] = None,
    base_s: float = BASE_DELAY_S,
    jitter_s: float = MAX_JITTER_S,
) -> float:
    """
    Seconds to wait after `attempt` failed.

    Args:
        attempt: 1-based number of the failed attempt.
        rng: Random source for the jitter (module random if None).
        base_s: Base unit of the exponential term.
        jitter_s: Upper bound of the additive jitter.
    """
    if attempt < 1:
        raise ValueError(f"attempt must be >= 1, got {attempt}")
    uniform = rng.uniform if rng is not None else random.uniform
    return (2 ** attempt) * base_s + uniform(0.0, jitter_s)
