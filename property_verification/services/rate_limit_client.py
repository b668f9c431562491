"""Rate limit client - fail-open checks against the rate-limit collaborator.

If the limiter itself errors, the request is allowed through. Availability is
preferred over strictness here; every fail-open decision is logged.
"""

import logging
import math
import time

import httpx
from limits import RateLimitItem, parse
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter

from property_verification.core.settings import RateLimitSettings
from property_verification.enums import RateLimitAction
from property_verification.models import RateLimitResult

logger = logging.getLogger(__name__)

RATE_LIMIT_EXCEEDED = "Rate limit exceeded"
DEFAULT_RETRY_AFTER = 60

RATE_LIMITS: dict[RateLimitAction, RateLimitItem] = {
    RateLimitAction.AUTH: parse("5/minute"),
    RateLimitAction.PROPERTY: parse("10/minute"),
    RateLimitAction.DEFAULT: parse("100/minute"),
}


def _parse_retry_after(value: object) -> int:
    """
    Read the retry delay sent by the collaborator.

    Args:
        value (object): The raw ``retryAfter`` value.

    Returns:
        int: Seconds to wait, DEFAULT_RETRY_AFTER when missing or not a number.
    """
    try:
        retry_after = math.ceil(float(value))  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_RETRY_AFTER
    return retry_after if retry_after > 0 else DEFAULT_RETRY_AFTER


class LocalRateLimiter:
    """In-process fixed window limiter with the same policy as the collaborator."""

    def __init__(
        self,
        rules: dict[RateLimitAction, RateLimitItem] | None = None,
        storage: MemoryStorage | None = None,
    ) -> None:
        """
        Initialize the local limiter.

        Args:
            rules (dict[RateLimitAction, RateLimitItem] | None): Limit per action.
            storage (MemoryStorage | None): Counter storage, expired windows are evicted.
        """
        self.rules = rules or RATE_LIMITS
        self.storage = storage or MemoryStorage()
        self._strategy = FixedWindowRateLimiter(self.storage)

    def hit(self, action: RateLimitAction, identifier: str) -> RateLimitResult:
        """
        Count one request against the action's window.

        Args:
            action (RateLimitAction): Bucket to count against.
            identifier (str): Caller identifier.

        Returns:
            RateLimitResult: Whether the request is allowed.
        """
        item = self.rules.get(action, self.rules[RateLimitAction.DEFAULT])
        allowed = self._strategy.hit(item, str(action), identifier)
        reset_time, remaining = self._strategy.get_window_stats(item, str(action), identifier)

        if not allowed:
            return RateLimitResult(
                allowed=False,
                retry_after=max(1, math.ceil(reset_time - time.time())),
                error=RATE_LIMIT_EXCEEDED,
            )
        return RateLimitResult(allowed=True, remaining=remaining)


class RateLimitClient:
    """Checks the rate-limit collaborator, allowing the request when it fails."""

    def __init__(
        self,
        settings: RateLimitSettings,
        limiter: LocalRateLimiter | None = None,
    ) -> None:
        """
        Initialize the rate limit client.

        Args:
            settings (RateLimitSettings): Collaborator URL and timeout.
            limiter (LocalRateLimiter | None): Local limiter used when no URL is set.
        """
        self.settings = settings
        self.limiter = limiter or LocalRateLimiter()

    async def check(self, action: RateLimitAction, identifier: str) -> RateLimitResult:
        """
        Ask whether a request may proceed.

        Args:
            action (RateLimitAction): Bucket to count against.
            identifier (str): Caller identifier.

        Returns:
            RateLimitResult: allowed=False only on an explicit limit response.
        """
        if self.settings.function_url is None:
            return self.limiter.hit(action, identifier)

        headers = {}
        if self.settings.auth_token:
            headers["Authorization"] = f"Bearer {self.settings.auth_token}"

        try:
            async with httpx.AsyncClient(timeout=self.settings.timeout) as client:
                response = await client.post(
                    self.settings.function_url,
                    json={"action": str(action), "identifier": identifier},
                    headers=headers,
                )
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Rate limit check error, allowing request: {e}")
            return RateLimitResult(allowed=True)

        if not isinstance(data, dict):
            logger.warning("Rate limit check returned an unexpected body, allowing request")
            return RateLimitResult(allowed=True)

        if data.get("error") == RATE_LIMIT_EXCEEDED:
            retry_after = _parse_retry_after(data.get("retryAfter"))
            logger.info(f"Rate limit exceeded for {action}:{identifier}, retry in {retry_after}s")
            return RateLimitResult(
                allowed=False,
                retry_after=retry_after,
                error=RATE_LIMIT_EXCEEDED,
            )

        if not response.is_success:
            logger.warning(
                f"Rate limit check failed with status {response.status_code}, allowing request"
            )
            return RateLimitResult(allowed=True)

        remaining = data.get("remaining")
        return RateLimitResult(
            allowed=True,
            remaining=int(remaining) if isinstance(remaining, int) else None,
        )
