"""WAV decoding into [channels, samples] float32 tensors.

Audio comes back exactly as stored: every channel, the file's own sample
rate, integer PCM scaled to [-1, 1] by soundfile.
"""

import io
from pathlib import Path
from typing import Any, BinaryIO, Union

import numpy as np
import soundfile as sf
import torch

from .errors import AudioDecodeError


def load_wav(path: str | Path) -> tuple[torch.Tensor, int]:
    """Load a WAV file from disk.

    Args:
        path: Path to the WAV file.

    Returns:
        Tuple of (waveform, sample_rate), waveform of shape [channels, samples].

    Raises:
        AudioDecodeError: FILE_NOT_FOUND, EMPTY_FILE, INVALID_WAV or EMPTY_AUDIO.
    """
    path = Path(path)
    context = {"path": str(path)}

    if not path.is_file():
        raise AudioDecodeError(f"Audio file not found: {path}", "FILE_NOT_FOUND", context)
    if path.stat().st_size == 0:
        raise AudioDecodeError(f"Audio file is empty: {path}", "EMPTY_FILE", context)

    return _decode(str(path), context)


def load_wav_bytes(data: bytes) -> tuple[torch.Tensor, int]:
    """Load a WAV file held in memory, e.g. an HTTP upload.

    Raises:
        AudioDecodeError: EMPTY_FILE, INVALID_WAV or EMPTY_AUDIO.
    """
    context = {"bytes_length": len(data)}
    if not data:
        raise AudioDecodeError("Audio data is empty", "EMPTY_FILE", context)

    return _decode(io.BytesIO(data), context)


def _decode(source: Union[str, BinaryIO], context: dict[str, Any]) -> tuple[torch.Tensor, int]:
    try:
        frames, sample_rate = sf.read(source, dtype="float32", always_2d=True)
    except Exception as e:
        raise AudioDecodeError(
            f"Failed to decode WAV: {e}",
            "INVALID_WAV",
            {**context, "error": str(e)},
        ) from e

    if frames.size == 0:
        raise AudioDecodeError("Audio contains no samples", "EMPTY_AUDIO", context)

    # (frames, channels) -> [channels, frames], dense along time
    return torch.from_numpy(np.ascontiguousarray(frames.T)), int(sample_rate)
