"""Checks that decoded audio can be fed to the codec.

The codec is content agnostic, so silence and clips of a single sample
pass. Checks run from structure to limits and stop at the first failure.
"""

import torch

from .errors import AudioValidationError


MIN_SAMPLE_RATE = 8000
MAX_SAMPLE_RATE = 192000


def validate_wav(
    waveform: torch.Tensor,
    sample_rate: int,
    max_duration_sec: float = 600.0,
    max_channels: int = 8,
    min_sample_rate: int = MIN_SAMPLE_RATE,
    max_sample_rate: int = MAX_SAMPLE_RATE,
) -> None:
    """Validate a decoded waveform.

    Args:
        waveform: Float tensor of shape [channels, samples].
        sample_rate: Sample rate in Hz.
        max_duration_sec: Longest accepted duration.
        max_channels: Most channels accepted.
        min_sample_rate: Lowest accepted sample rate.
        max_sample_rate: Highest accepted sample rate.

    Raises:
        AudioValidationError: With code INVALID_DTYPE, EMPTY_AUDIO,
            NON_FINITE, INVALID_SAMPLE_RATE, TOO_MANY_CHANNELS or TOO_LONG.

    Examples:
        >>> import torch
        >>> validate_wav(torch.zeros(2, 8000), 8000)
    """
    _check_layout(waveform)
    _check_samples(waveform)
    _check_sample_rate(sample_rate, min_sample_rate, max_sample_rate)

    num_channels, num_samples = waveform.shape
    if num_channels > max_channels:
        raise AudioValidationError(
            f"Audio has {num_channels} channels, at most {max_channels} allowed",
            "TOO_MANY_CHANNELS",
            {"num_channels": num_channels, "max_channels": max_channels},
        )

    duration_sec = num_samples / sample_rate
    if duration_sec > max_duration_sec:
        raise AudioValidationError(
            f"Audio duration {duration_sec:.3f}s exceeds maximum {max_duration_sec}s",
            "TOO_LONG",
            {"duration_sec": round(duration_sec, 4), "max_duration_sec": max_duration_sec},
        )


def _check_layout(waveform: torch.Tensor) -> None:
    if not isinstance(waveform, torch.Tensor):
        problem = {"actual_type": type(waveform).__name__}
    elif not waveform.is_floating_point():
        problem = {"actual_dtype": str(waveform.dtype)}
    elif waveform.ndim != 2:
        problem = {"shape": list(waveform.shape)}
    else:
        return
    raise AudioValidationError(
        "Waveform must be a float tensor of shape [channels, samples]",
        "INVALID_DTYPE",
        problem,
    )


def _check_samples(waveform: torch.Tensor) -> None:
    if waveform.numel() == 0:
        raise AudioValidationError(
            "Waveform is empty (no samples)",
            "EMPTY_AUDIO",
            {"shape": list(waveform.shape)},
        )

    finite = torch.isfinite(waveform)
    if not finite.all():
        nan_count = int(torch.isnan(waveform).sum())
        raise AudioValidationError(
            "Waveform contains non-finite values",
            "NON_FINITE",
            {"nan_count": nan_count, "inf_count": int((~finite).sum()) - nan_count},
        )


def _check_sample_rate(sample_rate: int, low: int, high: int) -> None:
    valid_type = isinstance(sample_rate, int) and not isinstance(sample_rate, bool)
    if not valid_type or not low <= sample_rate <= high:
        raise AudioValidationError(
            f"Sample rate {sample_rate} outside valid range [{low}, {high}]",
            "INVALID_SAMPLE_RATE",
            {"sample_rate": sample_rate, "min": low, "max": high},
        )
