"""WAV writing functions.

Output is always a standard RIFF/WAVE container. Samples are clamped to
[-1, 1] before quantization and non-finite values become silence.
"""

import io
from pathlib import Path

import numpy as np
import soundfile as sf
import torch

from .errors import AudioEncodeError
from .utils import SUPPORTED_SUBTYPES, clamp_finite


def _to_frames(waveform: torch.Tensor) -> np.ndarray:
    if not isinstance(waveform, torch.Tensor) or waveform.ndim != 2:
        raise AudioEncodeError(
            message="Waveform must be a tensor of shape [channels, samples]",
            code="INVALID_SHAPE",
            details={"shape": list(getattr(waveform, "shape", []))},
        )
    waveform = clamp_finite(waveform.detach().to("cpu", torch.float32))
    # soundfile expects (frames, channels)
    return waveform.T.contiguous().numpy()


def _check_subtype(subtype: str) -> None:
    if subtype not in SUPPORTED_SUBTYPES:
        raise AudioEncodeError(
            message=f"Unsupported WAV subtype: {subtype}",
            code="INVALID_SUBTYPE",
            details={"subtype": subtype, "supported": list(SUPPORTED_SUBTYPES)},
        )


def wav_bytes(
    waveform: torch.Tensor,
    sample_rate: int,
    subtype: str = "PCM_16",
) -> bytes:
    """Encode a waveform as WAV bytes.

    Args:
        waveform: Float tensor of shape [channels, samples].
        sample_rate: Sample rate in Hz.
        subtype: soundfile subtype, "PCM_16" by default.

    Returns:
        The complete WAV file as bytes.

    Raises:
        AudioEncodeError: If the subtype is unsupported or writing fails.
    """
    _check_subtype(subtype)
    frames = _to_frames(waveform)

    buffer = io.BytesIO()
    try:
        sf.write(buffer, frames, sample_rate, format="WAV", subtype=subtype)
    except Exception as e:
        raise AudioEncodeError(
            message=f"Failed to encode WAV: {e}",
            code="ENCODE_FAILED",
            details={"sample_rate": sample_rate, "subtype": subtype, "error": str(e)},
        ) from e
    return buffer.getvalue()


def save_wav(
    path: str | Path,
    waveform: torch.Tensor,
    sample_rate: int,
    subtype: str = "PCM_16",
) -> Path:
    """Write a waveform to a WAV file, creating parent directories.

    Returns:
        The path written.

    Raises:
        AudioEncodeError: If the subtype is unsupported or writing fails.
    """
    _check_subtype(subtype)
    frames = _to_frames(waveform)

    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        sf.write(str(path), frames, sample_rate, format="WAV", subtype=subtype)
    except Exception as e:
        raise AudioEncodeError(
            message=f"Failed to write WAV file: {e}",
            code="ENCODE_FAILED",
            details={"path": str(path), "subtype": subtype, "error": str(e)},
        ) from e
    return path
