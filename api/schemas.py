"""Pydantic schemas for API request/response models.

Encode and decode return WAV bodies directly, so only the health,
descriptor and error payloads are modelled here.

Example:
    >>> from api.schemas import DescriptorResponse
    >>> DescriptorResponse(scheme="split", parts=3, interval=0.5, reversed=True, code="sb3b0.5t")
"""

from typing import Any

from pydantic import BaseModel, Field

from segcodec import EncodingParameters


# =============================================================================
# Health Endpoint
# =============================================================================


class HealthResponse(BaseModel):
    """Response schema for /health endpoint."""

    status: str = Field(
        default="ok",
        description="Service status",
        examples=["ok"],
    )
    app_name: str = Field(
        description="Service name",
        examples=["Segment Codec Service"],
    )
    version: str = Field(
        description="Service version",
        examples=["0.1.0"],
    )
    schemes: list[str] = Field(
        description="Permutation schemes accepted by /encode",
        examples=[["split", "oddEven"]],
    )


# =============================================================================
# Descriptor Endpoints
# =============================================================================


class DescriptorResponse(BaseModel):
    """Parameters recovered from an encoding code."""

    scheme: str = Field(
        description="Permutation scheme",
        examples=["split", "oddEven"],
    )
    parts: int | None = Field(
        default=None,
        ge=2,
        le=10,
        description="Number of blocks (split only)",
        examples=[3],
    )
    interval: float = Field(
        gt=0.0,
        description="Segment duration in seconds",
        examples=[0.5],
    )
    reversed: bool = Field(
        description="Whether the encoded buffer was time-reversed",
        examples=[True],
    )
    code: str = Field(
        description="Canonical encoding code",
        examples=["sb3b0.5t"],
    )

    @classmethod
    def from_params(cls, params: EncodingParameters, code: str) -> "DescriptorResponse":
        return cls(code=code, **params.to_dict())


class CodeResponse(BaseModel):
    """Encoding code produced for a parameter set."""

    code: str = Field(
        description="Encoding code to pass to /decode",
        examples=["oebb1f"],
    )


# =============================================================================
# Error Response
# =============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(
        description="Error code for programmatic handling",
        examples=["INVALID_AUDIO", "INVALID_CODE"],
    )
    message: str = Field(
        description="Human-readable error message",
        examples=["Failed to decode audio file"],
    )
    details: dict[str, Any] | None = Field(
        default=None,
        description="Additional error context",
    )


class ApiErrorResponse(BaseModel):
    """Standard error response wrapper."""

    error: ErrorDetail = Field(
        description="Error details",
    )
