"""Reversal stage.

Both operations are involutions: applying them twice restores the input.
``reverse_waveform`` reverses the whole buffer in time, which equals
reversing the segment order and the samples inside every segment.
"""

from typing import Sequence, TypeVar

import torch


T = TypeVar("T")


def reverse_segments(sequence: Sequence[T]) -> list[T]:
    """Return a new list with the element order reversed."""
    return list(reversed(sequence))


def reverse_waveform(waveform: torch.Tensor) -> torch.Tensor:
    """Reverse a [channels, samples] tensor along the sample axis.

    Returns a new tensor; the input is left untouched.
    """
    return torch.flip(waveform, dims=[-1])
