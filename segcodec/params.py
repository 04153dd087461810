"""Encoding parameters: permutation scheme, segment interval and reversal.

One ``EncodingParameters`` instance fully determines both the forward
transform and its inverse. Instances are immutable and validated on
construction.

Example:
    >>> from segcodec.params import EncodingParameters
    >>> params = EncodingParameters.split(parts=3, interval=0.5, reversed=True)
    >>> params.scheme, params.parts, params.interval, params.reversed
    (<Scheme.SPLIT: 'split'>, 3, 0.5, True)
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import InvalidParameterError


MIN_INTERVAL_SEC = 0.001
MAX_INTERVAL_SEC = 10.0
MIN_PARTS = 2
MAX_PARTS = 10


class Scheme(str, Enum):
    """Named permutation applied to a segment sequence."""

    NONE = "none"
    SPLIT = "split"
    ODD_EVEN = "oddEven"

    @classmethod
    def from_name(cls, name: str) -> "Scheme":
        """Look up a scheme by value, case-insensitively.

        Accepts "odd_even" and "oddeven" as spellings of ``ODD_EVEN``.

        Raises:
            InvalidParameterError: If the name is not a known scheme.
        """
        normalized = name.strip().lower().replace("_", "").replace("-", "")
        for scheme in cls:
            if scheme.value.lower() == normalized:
                return scheme
        raise InvalidParameterError(
            message=f"Unknown scheme: {name!r}. Must be one of {[s.value for s in cls]}",
            details={"parameter": "scheme", "value": name},
        )


@dataclass(frozen=True)
class EncodingParameters:
    """Parameters of one encode/decode transform.

    Attributes:
        scheme: Permutation scheme.
        interval: Target segment duration in seconds, in [0.001, 10].
        reversed: Whether the assembled buffer is time-reversed.
        parts: Number of blocks for ``Scheme.SPLIT`` (2-10). Must be
            None for every other scheme.
    """

    scheme: Scheme
    interval: float = 1.0
    reversed: bool = False
    parts: int | None = None

    def __post_init__(self) -> None:
        """Validate parameters on initialization."""
        self.validate()

    def validate(self) -> None:
        """Validate parameter ranges.

        Raises:
            InvalidParameterError: If any parameter is invalid.
        """
        if not isinstance(self.scheme, Scheme):
            raise InvalidParameterError(
                message=f"scheme must be a Scheme, got {type(self.scheme).__name__}",
                details={"parameter": "scheme", "value": repr(self.scheme)},
            )

        if isinstance(self.interval, bool) or not isinstance(self.interval, (int, float)):
            raise InvalidParameterError(
                message=f"interval must be a number, got {type(self.interval).__name__}",
                details={"parameter": "interval", "value": repr(self.interval)},
            )

        if not math.isfinite(self.interval) or self.interval <= 0:
            raise InvalidParameterError(
                message=f"interval must be positive, got {self.interval}",
                details={"parameter": "interval", "value": self.interval},
            )

        if self.interval < MIN_INTERVAL_SEC or self.interval > MAX_INTERVAL_SEC:
            raise InvalidParameterError(
                message=(
                    f"interval ({self.interval}) must be between "
                    f"{MIN_INTERVAL_SEC} and {MAX_INTERVAL_SEC} seconds"
                ),
                details={
                    "parameter": "interval",
                    "value": self.interval,
                    "min_interval_sec": MIN_INTERVAL_SEC,
                    "max_interval_sec": MAX_INTERVAL_SEC,
                },
            )

        if self.scheme is Scheme.SPLIT:
            validate_parts(self.parts)
        elif self.parts is not None:
            raise InvalidParameterError(
                message=f"parts is only valid for the split scheme, got parts={self.parts} for {self.scheme.value}",
                details={"parameter": "parts", "value": self.parts, "scheme": self.scheme.value},
            )

    @classmethod
    def split(cls, parts: int, interval: float = 1.0, reversed: bool = False) -> "EncodingParameters":
        """Build parameters for the N-way interleave scheme."""
        return cls(scheme=Scheme.SPLIT, interval=interval, reversed=reversed, parts=parts)

    @classmethod
    def odd_even(cls, interval: float = 1.0, reversed: bool = False) -> "EncodingParameters":
        """Build parameters for the half-split interleave scheme."""
        return cls(scheme=Scheme.ODD_EVEN, interval=interval, reversed=reversed)

    @classmethod
    def none(cls, interval: float = 1.0, reversed: bool = False) -> "EncodingParameters":
        """Build identity parameters (no permutation, no descriptor)."""
        return cls(scheme=Scheme.NONE, interval=interval, reversed=reversed)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "scheme": self.scheme.value,
            "parts": self.parts,
            "interval": self.interval,
            "reversed": self.reversed,
        }


def validate_parts(parts: Any) -> int:
    """Check a split part count.

    Args:
        parts: Candidate number of blocks.

    Returns:
        The validated part count.

    Raises:
        InvalidParameterError: If parts is not an integer in [2, 10].
    """
    if isinstance(parts, bool) or not isinstance(parts, int):
        raise InvalidParameterError(
            message=f"parts must be an integer, got {parts!r}",
            details={"parameter": "parts", "value": repr(parts)},
        )

    if parts < MIN_PARTS or parts > MAX_PARTS:
        raise InvalidParameterError(
            message=f"parts ({parts}) must be between {MIN_PARTS} and {MAX_PARTS}",
            details={
                "parameter": "parts",
                "value": parts,
                "min_parts": MIN_PARTS,
                "max_parts": MAX_PARTS,
            },
        )

    return parts
