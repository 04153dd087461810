"""Utility functions for segment codec operations."""

import torch

from .errors import SegmentationError


def seconds_to_samples(sec: float, sample_rate: int) -> int:
    """Convert seconds to sample count.

    Args:
        sec: Duration in seconds.
        sample_rate: Audio sample rate in Hz.

    Returns:
        Number of samples (rounded to nearest integer).

    Examples:
        >>> seconds_to_samples(2.0, 16000)
        32000
        >>> seconds_to_samples(0.001, 44100)
        44
    """
    return round(sec * sample_rate)


def samples_to_seconds(samples: int, sample_rate: int) -> float:
    """Convert sample count to seconds.

    Examples:
        >>> samples_to_seconds(8000, 16000)
        0.5
    """
    return samples / sample_rate


def validate_waveform_shape(waveform: torch.Tensor) -> tuple[int, int]:
    """Validate that waveform has shape [channels, T] and return dimensions.

    Args:
        waveform: Input audio tensor.

    Returns:
        Tuple of (channels, num_samples).

    Raises:
        SegmentationError: If waveform is not a 2D tensor with at least
            one channel.

    Examples:
        >>> import torch
        >>> validate_waveform_shape(torch.zeros(2, 16000))
        (2, 16000)
    """
    if not isinstance(waveform, torch.Tensor):
        raise SegmentationError(
            message=f"Waveform must be a torch.Tensor, got {type(waveform).__name__}",
            code="INVALID_SHAPE",
            details={"actual_type": type(waveform).__name__},
        )

    if waveform.ndim != 2:
        raise SegmentationError(
            message=f"Waveform must have exactly 2 dimensions [channels, T], got {waveform.ndim} dimensions",
            code="INVALID_SHAPE",
            details={"shape": list(waveform.shape)},
        )

    channels, num_samples = waveform.shape

    if channels < 1:
        raise SegmentationError(
            message="Waveform must have at least 1 channel, got 0",
            code="INVALID_SHAPE",
            details={"shape": list(waveform.shape)},
        )

    return int(channels), int(num_samples)
