"""Data structures shared by the segment codec stages.

Example:
    >>> import torch
    >>> from segcodec.schema import Span, Segment
    >>> span = Span(start_sec=0.0, end_sec=0.5)
    >>> span.to_samples(16000)
    (0, 8000)
    >>> segment = Segment(index=0, span=span, waveform=torch.zeros(1, 8000))
    >>> segment.num_samples
    8000
"""

from dataclasses import dataclass
from typing import Any

import torch

from .params import EncodingParameters
from .utils import seconds_to_samples


@dataclass(frozen=True)
class Span:
    """A contiguous time range of the source buffer.

    Attributes:
        start_sec: Start time in seconds.
        end_sec: End time in seconds.
    """

    start_sec: float
    end_sec: float

    @property
    def duration_sec(self) -> float:
        """Return span duration in seconds."""
        return self.end_sec - self.start_sec

    def to_samples(self, sample_rate: int) -> tuple[int, int]:
        """Convert to [start, end) sample indices.

        Both ends are rounded the same way, so adjacent spans share a
        boundary sample index and never leave a gap.
        """
        return seconds_to_samples(self.start_sec, sample_rate), seconds_to_samples(self.end_sec, sample_rate)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "start_sec": round(self.start_sec, 6),
            "end_sec": round(self.end_sec, 6),
        }


@dataclass
class Segment:
    """A slice of a multi-channel buffer.

    Attributes:
        index: Position of this segment in the original, unpermuted order.
        span: Time range of the segment in the original timeline.
        waveform: Tensor of shape [channels, samples], usually a view into
            the source buffer. Set to None once the assembler has consumed it.
    """

    index: int
    span: Span
    waveform: torch.Tensor | None

    @property
    def num_samples(self) -> int:
        """Return samples per channel, or 0 once released."""
        if self.waveform is None:
            return 0
        return int(self.waveform.shape[1])

    @property
    def is_released(self) -> bool:
        """Whether the sample data has been handed off to the assembler."""
        return self.waveform is None

    def release(self) -> None:
        """Drop the reference to the sample data."""
        self.waveform = None


@dataclass
class CodecResult:
    """Result of an encode or decode run.

    Attributes:
        waveform: Output tensor of shape [channels, samples].
        sample_rate: Sample rate in Hz (unchanged from the input).
        params: Parameters the transform ran with.
        code: Encoding code for the parameters, or None for ``Scheme.NONE``.
        segment_count: Number of segments the buffer was cut into.
    """

    waveform: torch.Tensor
    sample_rate: int
    params: EncodingParameters
    code: str | None
    segment_count: int

    @property
    def duration_sec(self) -> float:
        """Return output duration in seconds."""
        return self.waveform.shape[1] / self.sample_rate

    @property
    def num_channels(self) -> int:
        """Return the channel count."""
        return int(self.waveform.shape[0])

    def to_dict(self) -> dict[str, Any]:
        """Convert metadata to a dictionary (the waveform is omitted)."""
        return {
            "code": self.code,
            "params": self.params.to_dict(),
            "sample_rate": self.sample_rate,
            "num_channels": self.num_channels,
            "num_samples": int(self.waveform.shape[1]),
            "duration_sec": round(self.duration_sec, 6),
            "segment_count": self.segment_count,
        }
