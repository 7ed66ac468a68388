"""Tests for GSTIN verification."""

import httpx
import pytest

from expohub.core.cache import MemoryCache
from expohub.core.constants import DEMO_GSTIN
from expohub.core.rate_limit import MemoryRateLimiter
from expohub.modules.gstin.schemas import GstinErrorCode
from expohub.modules.gstin.service import (
    GstinService,
    extract_pan,
    is_valid_gstin_format,
    normalize_gstin,
    parse_upstream,
)
from expohub.modules.gstin.states import state_info


VALID_GSTIN = "27AAPFU0939F1ZV"

ACTIVE_PAYLOAD = {
    "flag": True,
    "data": {
        "lgnm": "Urban Foods Private Limited",
        "tradeNam": "Urban Foods",
        "sts": "Active",
        "rgdt": "01/07/2017",
        "ctb": "Private Limited Company",
        "pradr": {
            "addr": {
                "bno": "12",
                "bnm": "Sun Towers",
                "st": "MG Road",
                "loc": "Andheri",
                "dst": "Mumbai",
                "pncd": "400053",
                "stcd": "Maharashtra",
            }
        },
    },
}


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CountingUpstream:
    """httpx transport answering every lookup with a fixed document."""

    def __init__(self, payload=None, status_code: int = 200, content: bytes | None = None) -> None:
        self.payload = payload
        self.status_code = status_code
        self.content = content
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.payload)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def make_service(clock, upstream=None, api_key: str | None = "secret-key") -> GstinService:
    transport = httpx.MockTransport(upstream or CountingUpstream(ACTIVE_PAYLOAD))
    return GstinService(
        MemoryCache(max_entries=100, clock=clock),
        MemoryRateLimiter(clock=clock),
        api_key=api_key,
        base_url="https://gst.test",
        rate_limit=10,
        rate_window=60,
        cache_ttl=24 * 60 * 60,
        transport=transport,
    )


class TestFormat:
    """Tests for the pure GSTIN helpers."""

    def test_valid_format(self):
        assert is_valid_gstin_format(VALID_GSTIN)
        assert is_valid_gstin_format(DEMO_GSTIN) is False  # literal Z is missing

    @pytest.mark.parametrize(
        "gstin",
        [
            "27AAPFU0939F1Z",  # too short
            "27AAPFU0939F1ZVX",  # too long
            "27aapfu0939f1zv",  # lower case
            "2XAAPFU0939F1ZV",  # state code not numeric
            "27AAPFU0939F0ZV",  # entity code 0
            "27AAPFU0939F1YV",  # missing literal Z
        ],
    )
    def test_invalid_format(self, gstin):
        assert is_valid_gstin_format(gstin) is False

    def test_normalize_trims_and_uppercases(self):
        assert normalize_gstin("  27aapfu0939f1zv ") == VALID_GSTIN

    def test_pan_is_characters_three_to_twelve(self):
        assert extract_pan(VALID_GSTIN) == "AAPFU0939F"

    def test_state_lookup(self):
        assert state_info("36").state == "Telangana"
        assert state_info("36").district == "Hyderabad"
        assert state_info("99").state == ""


class TestParseUpstream:
    def test_active_registration(self):
        result = parse_upstream(VALID_GSTIN, ACTIVE_PAYLOAD)

        assert result.success is True
        assert result.data.legal_name == "Urban Foods Private Limited"
        assert result.data.trade_name == "Urban Foods"
        assert result.data.state == "Maharashtra"
        assert result.data.district == "Mumbai"
        assert result.data.state_code == "27"
        assert result.data.pan_number == "AAPFU0939F"
        assert result.data.address == "12 Sun Towers MG Road Andheri Mumbai 400053"

    def test_names_fall_back_to_each_other(self):
        payload = {"flag": True, "data": {"tradeNam": "Only Trade"}}
        result = parse_upstream(VALID_GSTIN, payload)

        assert result.data.legal_name == "Only Trade"
        assert result.data.trade_name == "Only Trade"

    def test_flag_false_is_not_found(self):
        result = parse_upstream(VALID_GSTIN, {"flag": False, "message": "No records"})

        assert result.error_code == GstinErrorCode.GSTIN_NOT_FOUND
        assert result.error == "No records"

    def test_inactive_registration(self):
        result = parse_upstream(VALID_GSTIN, {"flag": True, "data": {"sts": "Inactive"}})

        assert result.error_code == GstinErrorCode.GSTIN_INACTIVE

    def test_unexpected_document_is_api_error(self):
        result = parse_upstream(VALID_GSTIN, {"flag": True})

        assert result.error_code == GstinErrorCode.API_ERROR

    def test_empty_data_is_a_bare_success(self):
        result = parse_upstream(VALID_GSTIN, {"flag": True, "data": {}})

        assert result.success is True
        assert result.data.legal_name == ""
        assert result.data.status == "Active"
        assert result.data.state == "Maharashtra"
        assert result.data.address == ""


class TestGates:
    """Tests for the order of the verification gates."""

    async def test_demo_sentinel_verifies_without_api_key(self, clock):
        service = make_service(clock, api_key=None)

        result = await service.verify(f" {DEMO_GSTIN.lower()} ")

        assert result.success is True
        assert result.data.legal_name == "Demo Company Pvt Ltd"
        assert result.data.state_code == "36"

    async def test_invalid_format_is_rejected_before_demo_mode(self, clock):
        service = make_service(clock, api_key=None)

        result = await service.verify("NOT-A-GSTIN")

        assert result.error_code == GstinErrorCode.INVALID_FORMAT

    async def test_demo_mode_without_api_key(self, clock):
        upstream = CountingUpstream(ACTIVE_PAYLOAD)
        service = make_service(clock, upstream, api_key=None)

        result = await service.verify(VALID_GSTIN)

        assert result.error_code == GstinErrorCode.DEMO_MODE
        assert DEMO_GSTIN in result.error
        assert upstream.requests == []

    async def test_upstream_lookup_uses_key_in_path(self, clock):
        upstream = CountingUpstream(ACTIVE_PAYLOAD)
        service = make_service(clock, upstream)

        result = await service.verify(VALID_GSTIN)

        assert result.success is True
        assert str(upstream.requests[0].url) == f"https://gst.test/check/secret-key/{VALID_GSTIN}"

    async def test_results_are_cached(self, clock):
        upstream = CountingUpstream(ACTIVE_PAYLOAD)
        service = make_service(clock, upstream)

        first = await service.verify(VALID_GSTIN)
        second = await service.verify(VALID_GSTIN.lower())

        assert first == second
        assert len(upstream.requests) == 1

    async def test_failures_are_cached_too(self, clock):
        upstream = CountingUpstream({"flag": False, "message": "No records"})
        service = make_service(clock, upstream)

        await service.verify(VALID_GSTIN)
        result = await service.verify(VALID_GSTIN)

        assert result.error_code == GstinErrorCode.GSTIN_NOT_FOUND
        assert len(upstream.requests) == 1

    async def test_cache_expires_after_a_day(self, clock):
        upstream = CountingUpstream(ACTIVE_PAYLOAD)
        service = make_service(clock, upstream)

        await service.verify(VALID_GSTIN)
        clock.advance(24 * 60 * 60)
        await service.verify(VALID_GSTIN)

        assert len(upstream.requests) == 2

    async def test_eleventh_call_in_window_is_rate_limited(self, clock):
        upstream = CountingUpstream(ACTIVE_PAYLOAD)
        service = make_service(clock, upstream)

        for _ in range(10):
            assert (await service.verify(VALID_GSTIN, identifier="10.0.0.1")).success

        result = await service.verify(VALID_GSTIN, identifier="10.0.0.1")

        assert result.error_code == GstinErrorCode.RATE_LIMIT_EXCEEDED

    async def test_rate_limit_applies_before_cache(self, clock):
        service = make_service(clock)
        for _ in range(10):
            await service.verify(VALID_GSTIN, identifier="10.0.0.1")

        result = await service.verify(VALID_GSTIN, identifier="10.0.0.1")

        assert result.success is False

    async def test_rate_limit_is_per_identifier_and_window(self, clock):
        service = make_service(clock)
        for _ in range(10):
            await service.verify(VALID_GSTIN, identifier="10.0.0.1")

        assert (await service.verify(VALID_GSTIN, identifier="10.0.0.2")).success

        clock.advance(60)
        assert (await service.verify(VALID_GSTIN, identifier="10.0.0.1")).success

    async def test_sentinel_and_format_failures_do_not_consume_budget(self, clock):
        service = make_service(clock)
        for _ in range(20):
            await service.verify(DEMO_GSTIN, identifier="10.0.0.1")
            await service.verify("bad", identifier="10.0.0.1")

        assert (await service.verify(VALID_GSTIN, identifier="10.0.0.1")).success

    async def test_malformed_response_is_system_error_and_not_cached(self, clock):
        upstream = CountingUpstream(content=b"<html>gateway timeout</html>", status_code=504)
        service = make_service(clock, upstream)

        first = await service.verify(VALID_GSTIN)
        upstream.content = None
        upstream.status_code = 200
        upstream.payload = ACTIVE_PAYLOAD
        second = await service.verify(VALID_GSTIN)

        assert first.error_code == GstinErrorCode.SYSTEM_ERROR
        assert first.details
        assert second.success is True

    async def test_transport_error_is_system_error(self, clock):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        service = make_service(clock, refuse)

        result = await service.verify(VALID_GSTIN)

        assert result.error_code == GstinErrorCode.SYSTEM_ERROR

    async def test_error_status_with_json_body_is_system_error_and_not_cached(self, clock):
        upstream = CountingUpstream({"error": True, "message": "Service Unavailable"}, status_code=503)
        service = make_service(clock, upstream)

        first = await service.verify(VALID_GSTIN)
        upstream.status_code = 200
        upstream.payload = ACTIVE_PAYLOAD
        second = await service.verify(VALID_GSTIN)

        assert first.error_code == GstinErrorCode.SYSTEM_ERROR
        assert first.details == "GST API returned HTTP 503"
        assert "secret-key" not in first.details
        assert second.success is True
        assert len(upstream.requests) == 2
