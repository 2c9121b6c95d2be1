"""
Backoff policy for transient model failures.
"""

from typing import Optional


def backoff_delay(
    attempt: int,
    retry_after_seconds: Optional[float] = None,
    base_seconds: float = 2.0,
    cap_seconds: float = 20.0,
) -> float:
    """
    Seconds to wait before retrying after a failed attempt.

    A provider hint wins when present; otherwise the delay doubles with each
    attempt starting from base_seconds. The result is never negative and never
    above cap_seconds.

    Args:
        attempt (int): Zero-based index of the attempt that just failed.
        retry_after_seconds (Optional[float]): Hint carried by the gateway error.
        base_seconds (float): Delay after the first failed attempt.
        cap_seconds (float): Upper bound for any delay.

    Returns:
        float: Delay in seconds.

    Example:
        >>> backoff_delay(0), backoff_delay(1), backoff_delay(0, retry_after_seconds=45)
        (2.0, 4.0, 20.0)
    """
    if retry_after_seconds is not None:
        delay = float(retry_after_seconds)
    else:
        delay = base_seconds * (2 ** attempt)
    return max(0.0, min(cap_seconds, delay))
