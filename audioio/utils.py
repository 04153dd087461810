"""Audio I/O configuration and sample helpers."""

from dataclasses import dataclass
from typing import Any

import torch


SUPPORTED_SUBTYPES = ("PCM_16", "PCM_24", "PCM_32", "FLOAT")


@dataclass
class AudioConfig:
    """Limits applied to decoded audio and the format used to write it.

    Attributes:
        max_duration_sec: Longest accepted input, in seconds.
        max_channels: Most channels accepted.
        min_sample_rate: Lowest accepted sample rate in Hz.
        max_sample_rate: Highest accepted sample rate in Hz.
        output_subtype: soundfile subtype for WAV output.
    """

    max_duration_sec: float = 600.0
    max_channels: int = 8
    min_sample_rate: int = 8000
    max_sample_rate: int = 192000
    output_subtype: str = "PCM_16"

    def __post_init__(self) -> None:
        if self.output_subtype not in SUPPORTED_SUBTYPES:
            raise ValueError(
                f"output_subtype must be one of {SUPPORTED_SUBTYPES}, got {self.output_subtype!r}"
            )

    def limits(self) -> dict[str, Any]:
        """Keyword arguments for ``validate_wav``."""
        return {
            "max_duration_sec": self.max_duration_sec,
            "max_channels": self.max_channels,
            "min_sample_rate": self.min_sample_rate,
            "max_sample_rate": self.max_sample_rate,
        }


def clamp_finite(waveform: torch.Tensor, limit: float = 1.0) -> torch.Tensor:
    """Return a copy with NaN/Inf set to 0 and samples clamped to [-limit, limit].

    Examples:
        >>> clamp_finite(torch.tensor([float("nan"), 2.0, -0.5])).tolist()
        [0.0, 1.0, -0.5]
    """
    silenced = torch.nan_to_num(waveform, nan=0.0, posinf=0.0, neginf=0.0)
    return silenced.clamp(-limit, limit)
