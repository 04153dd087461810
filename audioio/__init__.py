"""WAV input and output for the segment codec.

Decoded audio is a float32 tensor of shape [channels, samples] plus its
sample rate. Channels and sample rate pass through untouched; nothing is
resampled or mixed down.

Example:
    >>> from audioio import AudioConfig, load_validated, wav_bytes
    >>> waveform, sr = load_validated("speech.wav", AudioConfig(max_channels=2))
    >>> waveform.shape
    torch.Size([2, 44100])
    >>> data = wav_bytes(waveform, sr)
"""

from pathlib import Path
from typing import Union

import torch

from .errors import AudioDecodeError, AudioEncodeError, AudioIOError, AudioValidationError
from .loader import load_wav, load_wav_bytes
from .utils import SUPPORTED_SUBTYPES, AudioConfig, clamp_finite
from .validate import validate_wav
from .writer import save_wav, wav_bytes


__all__ = [
    "load_validated",
    "AudioConfig",
    "SUPPORTED_SUBTYPES",
    "AudioIOError",
    "AudioDecodeError",
    "AudioValidationError",
    "AudioEncodeError",
    "load_wav",
    "load_wav_bytes",
    "validate_wav",
    "wav_bytes",
    "save_wav",
    "clamp_finite",
]


def load_validated(
    source: Union[str, Path, bytes, bytearray],
    config: AudioConfig | None = None,
) -> tuple[torch.Tensor, int]:
    """Decode a WAV path or WAV bytes and validate it against ``config``.

    Raises:
        AudioDecodeError: If the input cannot be decoded.
        AudioValidationError: If the decoded audio breaks a limit.
    """
    config = config or AudioConfig()

    if isinstance(source, (bytes, bytearray)):
        waveform, sample_rate = load_wav_bytes(bytes(source))
    else:
        waveform, sample_rate = load_wav(source)

    validate_wav(waveform, sample_rate, **config.limits())
    return waveform, sample_rate
