"""Custom exceptions for segment codec operations."""

from typing import Any


class SegCodecError(Exception):
    """Base exception for all segment codec errors.

    Attributes:
        message: Human-readable error description.
        code: Short error code string (e.g., "INVALID_PARAMETER").
        details: Optional dictionary with additional context.
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize SegCodecError.

        Args:
            message: Human-readable error description.
            code: Short error code string.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Return ``{"error", "code", "details"}`` for JSON output."""
        return {"error": self.message, "code": self.code, "details": self.details}

    def __str__(self) -> str:
        """Return formatted error string."""
        if self.details:
            return f"[{self.code}] {self.message} (details: {self.details})"
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        """Return repr string."""
        return f"{self.__class__.__name__}(message={self.message!r}, code={self.code!r}, details={self.details!r})"


class InvalidParameterError(SegCodecError):
    """Raised when encoding parameters are out of range.

    Raised at construction time, before any segmentation or
    permutation work starts.
    """

    def __init__(
        self,
        message: str,
        code: str = "INVALID_PARAMETER",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class SegmentationError(SegCodecError):
    """Raised when a buffer cannot be cut into or assembled from segments.

    Common codes:
        - INVALID_SHAPE: Waveform is not a 2D [channels, samples] tensor.
        - LENGTH_MISMATCH: Spans do not cover the buffer exactly.
        - CHANNEL_MISMATCH: A segment has a different channel count.
    """
    pass


class DescriptorParseError(SegCodecError):
    """Base class for encoding code parse failures.

    Each subclass names the grammar rule that rejected the code, so
    callers can report a specific diagnostic and ask for a corrected code.
    """

    default_code = "INVALID_CODE"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code or self.default_code, details)


class MalformedCodeError(DescriptorParseError):
    """Wrong number of 'b'-separated fields, or a required field is empty."""

    default_code = "MALFORMED_CODE"


class InvalidReverseFlagError(DescriptorParseError):
    """Reverse flag is not exactly 't' or 'f'."""

    default_code = "INVALID_REVERSE_FLAG"


class IntervalOutOfRangeError(DescriptorParseError):
    """Interval does not parse as a decimal in [0.001, 10]."""

    default_code = "INTERVAL_OUT_OF_RANGE"


class PartsOutOfRangeError(DescriptorParseError):
    """Split parts do not parse as an integer in [2, 10]."""

    default_code = "PARTS_OUT_OF_RANGE"


class UnknownTypeError(DescriptorParseError):
    """Type prefix is neither 's' nor 'oe'."""

    default_code = "UNKNOWN_TYPE"
