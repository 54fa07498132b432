# Filename: rate_limit.py

import logging
import math
import time
from datetime import datetime
from typing import Callable, Mapping, Optional, TypeVar

from models import RateLimitInfo

logger = logging.getLogger("RateLimit")

T = TypeVar("T")

# Used when the upstream omits its reset header
FALLBACK_WAIT_SECONDS = 60.0


class Throttled(Exception):
    """Upstream signalled rate-limit exhaustion; carries the reset time."""

    def __init__(self, rate_limit: RateLimitInfo):
        self.rate_limit = rate_limit
        super().__init__(f"Rate limit exhausted, resets at {format_reset(rate_limit.reset_epoch_seconds)}")

    @property
    def reset_at(self) -> Optional[float]:
        return self.rate_limit.reset_epoch_seconds


def _header_number(headers: Mapping[str, str], name: str, cast):
    value = headers.get(name)
    if value is None:
        return None
    try:
        return cast(value)
    except (TypeError, ValueError):
        return None


def parse_rate_limit_headers(headers: Optional[Mapping[str, str]]) -> RateLimitInfo:
    headers = headers or {}
    return RateLimitInfo(
        remaining=_header_number(headers, "x-rate-limit-remaining", int),
        limit=_header_number(headers, "x-rate-limit-limit", int),
        reset_epoch_seconds=_header_number(headers, "x-rate-limit-reset", float),
    )


def format_reset(reset_epoch_seconds: Optional[float]) -> str:
    if reset_epoch_seconds is None:
        return "unknown"
    return datetime.fromtimestamp(reset_epoch_seconds).strftime("%Y-%m-%d %H:%M:%S")


def log_rate_limit(label: str, rate_limit: Optional[RateLimitInfo]) -> None:
    if rate_limit is None:
        return
    logger.info(
        f"[RATE LIMIT] {label}: {rate_limit.remaining}/{rate_limit.limit}, "
        f"reset at {format_reset(rate_limit.reset_epoch_seconds)}"
    )


def call_with_rate_limit_retry(request: Callable[[], T],
                               label: str,
                               clock: Callable[[], float] = time.time,
                               sleep: Callable[[float], None] = time.sleep,
                               max_retries: Optional[int] = None) -> T:
    """
    Runs `request` until it completes without being throttled.

    Each Throttled is followed by exactly one wait lasting until the reported
    reset time, then the same request is issued again. Other exceptions
    propagate unchanged. With max_retries set, the Throttled raised after the
    last allowed retry is re-raised.
    """
    retries = 0
    while True:
        try:
            return request()
        except Throttled as throttled:
            if max_retries is not None and retries >= max_retries:
                logger.error(f"[RATE LIMIT] {label}: giving up after {retries} retries.")
                raise
            reset_at = throttled.reset_at
            wait_seconds = max(0.0, reset_at - clock()) if reset_at is not None else FALLBACK_WAIT_SECONDS
            logger.warning(
                f"[RATE LIMIT] {label}: throttled. Waiting {math.ceil(wait_seconds / 60)} minutes "
                f"until {format_reset(reset_at)}"
            )
            sleep(wait_seconds)
            retries += 1
