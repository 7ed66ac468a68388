"""GSTIN verification service.

A call passes through these gates in order, and the first one that
decides the outcome returns:

1. Normalize (trim, upper-case)
2. Demo sentinel: always verifies with a fixed record, before any format check
3. Format check
4. Demo mode: without an API key nothing else can verify
5. Rate limit per identifier (sliding window)
6. Result cache, which replays failures as well as successes
7. Upstream lookup

Non-2xx replies, transport errors and parse failures become
``SYSTEM_ERROR`` and are not cached, so a transient outage does not pin
a bad answer for a day.
"""

import re
from functools import lru_cache
from typing import Any

import httpx
import structlog

from expohub.config import settings
from expohub.core.cache import MemoryCache, RedisCache, ResultCache
from expohub.core.constants import DEMO_GSTIN, GSTIN_LENGTH
from expohub.core.rate_limit import MemoryRateLimiter, RateLimiter, SlidingWindowRateLimiter
from expohub.modules.gstin.schemas import GstinDetails, GstinErrorCode, GstinVerification
from expohub.modules.gstin.states import state_info


logger = structlog.get_logger()

GSTIN_PATTERN = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]$")

ADDRESS_PARTS = ("bno", "bnm", "st", "loc", "dst", "pncd")

DEMO_DETAILS = GstinDetails(
    gstin=DEMO_GSTIN,
    legal_name="Demo Company Pvt Ltd",
    trade_name="Demo Company",
    status="Active",
    state="Telangana",
    district="Hyderabad",
    registration_date="2020-01-01",
    pan_number="AAACH7409R",
    state_code="36",
    business_type="Private Limited Company",
    address="Demo Address, Hyderabad, Telangana - 500001",
)


# ============================================================
# Pure helpers
# ============================================================


def normalize_gstin(gstin: str) -> str:
    return gstin.strip().upper()


def is_valid_gstin_format(gstin: str) -> bool:
    """Check the 15-character GSTIN layout.

    2 digits (state) + 5 letters + 4 digits + 1 letter (PAN) + 1 entity
    code (1-9 or A-Z) + literal ``Z`` + 1 check character. Lower-case
    input does not match; normalize first.
    """
    return len(gstin) == GSTIN_LENGTH and GSTIN_PATTERN.match(gstin) is not None


def extract_state_code(gstin: str) -> str:
    return gstin[:2]


def extract_pan(gstin: str) -> str:
    """Characters 3-12 of a GSTIN are the holder's PAN."""
    return gstin[2:12]


def _format_address(addr: dict[str, Any] | None) -> str:
    if not addr:
        return ""
    return " ".join(str(addr.get(part) or "") for part in ADDRESS_PARTS).strip()


def parse_upstream(gstin: str, payload: dict[str, Any]) -> GstinVerification:
    """Map the upstream JSON document onto a verification result."""
    data = payload.get("data")

    if payload.get("flag") is False or payload.get("error"):
        return GstinVerification.fail(
            GstinErrorCode.GSTIN_NOT_FOUND,
            payload.get("message") or "GSTIN not found or verification failed.",
        )

    if isinstance(data, dict) and data.get("sts") == "Inactive":
        return GstinVerification.fail(
            GstinErrorCode.GSTIN_INACTIVE,
            "This GSTIN is inactive or cancelled. Please verify your GSTIN.",
        )

    if isinstance(data, dict):
        state_code = extract_state_code(gstin)
        info = state_info(state_code)
        addr = (data.get("pradr") or {}).get("addr") or {}
        return GstinVerification.ok(
            GstinDetails(
                gstin=gstin,
                legal_name=data.get("lgnm") or data.get("tradeNam") or "",
                trade_name=data.get("tradeNam") or data.get("lgnm") or "",
                status=data.get("sts") or "Active",
                state=info.state or addr.get("stcd") or "",
                district=info.district,
                registration_date=data.get("rgdt") or "",
                pan_number=extract_pan(gstin),
                state_code=state_code,
                business_type=data.get("ctb") or "",
                address=_format_address(addr),
            )
        )

    return GstinVerification.fail(
        GstinErrorCode.API_ERROR,
        "Unable to verify GSTIN. Please try again later.",
    )


# ============================================================
# Service
# ============================================================


class GstinService:
    """Verify GSTINs against the upstream lookup API.

    The cache and rate limiter are injected so the process-wide state has
    an explicit owner and bounded size, and so tests can drive the gates
    with a fake clock.
    """

    def __init__(
        self,
        cache: ResultCache,
        limiter: RateLimiter,
        *,
        api_key: str | None,
        base_url: str = settings.gst_api_base_url,
        timeout: float = settings.gst_api_timeout,
        rate_limit: int = settings.gst_rate_limit_requests,
        rate_window: int = settings.gst_rate_limit_window,
        cache_ttl: int = settings.gst_cache_ttl,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.cache = cache
        self.limiter = limiter
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.rate_limit = rate_limit
        self.rate_window = rate_window
        self.cache_ttl = cache_ttl
        self.transport = transport

    @property
    def demo_mode(self) -> bool:
        return not self.api_key

    async def verify(self, gstin: str, identifier: str = "global") -> GstinVerification:
        """Verify a GSTIN.

        Args:
            gstin: Raw user input
            identifier: Rate limit bucket, usually the client IP

        Returns:
            Tagged GstinVerification; never raises for upstream problems
        """
        normalized = normalize_gstin(gstin)

        if normalized == DEMO_GSTIN:
            logger.info("gstin_demo_sentinel")
            return GstinVerification.ok(DEMO_DETAILS)

        if not is_valid_gstin_format(normalized):
            return GstinVerification.fail(
                GstinErrorCode.INVALID_FORMAT,
                "Invalid GSTIN format. Please enter a valid 15-digit GSTIN.",
            )

        if self.demo_mode:
            return GstinVerification.fail(
                GstinErrorCode.DEMO_MODE,
                "GST verification is currently in demo mode. "
                f"Please use the demo GST number: {DEMO_GSTIN}",
            )

        rate = await self.limiter.is_allowed(identifier, self.rate_limit, self.rate_window)
        if not rate.allowed:
            logger.warning("gstin_rate_limited", identifier=identifier, retry_after=rate.retry_after)
            return GstinVerification.fail(
                GstinErrorCode.RATE_LIMIT_EXCEEDED,
                "Too many requests. Please try again later.",
            )

        cached = await self.cache.get(normalized)
        if cached is not None:
            logger.info("gstin_cache_hit", gstin=normalized)
            return GstinVerification.model_validate(cached)

        try:
            payload = await self._fetch(normalized)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("gstin_lookup_failed", gstin=normalized, error=str(exc))
            return GstinVerification.fail(
                GstinErrorCode.SYSTEM_ERROR,
                "Unable to verify GSTIN. Please try again later.",
                details=str(exc),
            )

        result = parse_upstream(normalized, payload)
        await self.cache.set(normalized, result.model_dump(mode="json"), ttl_seconds=self.cache_ttl)
        logger.info(
            "gstin_verified",
            gstin=normalized,
            success=result.success,
            error_code=result.error_code,
        )
        return result

    async def _fetch(self, gstin: str) -> dict[str, Any]:
        # The API key is part of the path; keep the URL out of logs and errors.
        url = f"{self.base_url}/check/{self.api_key}/{gstin}"
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.get(url)
        if not response.is_success:
            raise ValueError(f"GST API returned HTTP {response.status_code}")
        payload = response.json()
        if not isinstance(payload, dict):
            raise ValueError("Invalid JSON response from GST API")
        return payload


@lru_cache
def get_gstin_service() -> GstinService:
    """Process-wide GSTIN service (FastAPI dependency).

    The cache and limiter live as long as the process. With the Redis
    backends they are shared by every worker.
    """
    cache: ResultCache
    limiter: RateLimiter
    if settings.cache_backend == "redis":
        cache = RedisCache(prefix="gstin:")
    else:
        cache = MemoryCache(max_entries=settings.gst_cache_max_entries, default_ttl=settings.gst_cache_ttl)
    if settings.rate_limit_backend == "redis":
        limiter = SlidingWindowRateLimiter(prefix="ratelimit:gstin")
    else:
        limiter = MemoryRateLimiter()
    return GstinService(cache, limiter, api_key=settings.gst_api_key)
