"""Pydantic schemas for GSTIN verification."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GstinErrorCode(StrEnum):
    """Machine-readable failure codes returned to the sign-up form."""

    INVALID_FORMAT = "INVALID_FORMAT"
    DEMO_MODE = "DEMO_MODE"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    GSTIN_NOT_FOUND = "GSTIN_NOT_FOUND"
    GSTIN_INACTIVE = "GSTIN_INACTIVE"
    API_ERROR = "API_ERROR"
    SYSTEM_ERROR = "SYSTEM_ERROR"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GstinVerifyRequest(BaseModel):
    """Request body for ``POST /gstin/verify``."""

    gstin: str = Field(..., min_length=1, max_length=64)


class GstinDetails(_CamelModel):
    """Normalized registration details for a verified GSTIN."""

    gstin: str
    legal_name: str = ""
    trade_name: str = ""
    status: str = "Active"
    state: str = ""
    district: str = ""
    registration_date: str = ""
    pan_number: str = ""
    state_code: str = ""
    business_type: str = ""
    address: str = ""


class GstinVerification(_CamelModel):
    """Tagged verification result.

    ``success`` is True with ``data`` set, or False with ``error`` and
    ``error_code`` set. ``details`` only accompanies ``SYSTEM_ERROR``.
    """

    success: bool
    data: GstinDetails | None = None
    error: str | None = None
    error_code: GstinErrorCode | None = None
    details: Any | None = None

    @classmethod
    def ok(cls, data: GstinDetails) -> "GstinVerification":
        return cls(success=True, data=data)

    @classmethod
    def fail(
        cls,
        error_code: GstinErrorCode,
        error: str,
        details: Any | None = None,
    ) -> "GstinVerification":
        return cls(success=False, error=error, error_code=error_code, details=details)
