"""Test fixtures for audio tests.

WAV files are generated in memory; no binary fixtures are committed.
"""

import io

import numpy as np
import soundfile as sf


def _to_wav_bytes(signal: np.ndarray, sample_rate: int, subtype: str) -> bytes:
    buffer = io.BytesIO()
    sf.write(buffer, signal, sample_rate, format="WAV", subtype=subtype)
    return buffer.getvalue()


def generate_sine_wav_bytes(
    frequency: float = 440.0,
    duration_sec: float = 1.0,
    sample_rate: int = 16000,
    amplitude: float = 0.5,
    channels: int = 1,
    subtype: str = "FLOAT",
) -> bytes:
    """Generate a sine wave WAV file as bytes.

    Args:
        frequency: Sine wave frequency in Hz.
        duration_sec: Duration in seconds.
        sample_rate: Sample rate in Hz.
        amplitude: Amplitude (0.0 to 1.0).
        channels: Number of channels. Channel ``c`` is phase shifted by
            ``c`` radians so channels differ.
        subtype: soundfile subtype of the file.

    Returns:
        WAV file as bytes.
    """
    num_samples = int(round(sample_rate * duration_sec))
    t = np.arange(num_samples, dtype=np.float64) / sample_rate
    signal = np.column_stack([
        amplitude * np.sin(2 * np.pi * frequency * t + c)
        for c in range(channels)
    ]).astype(np.float32)
    return _to_wav_bytes(signal, sample_rate, subtype)


def generate_noise_wav_bytes(
    duration_sec: float = 1.0,
    sample_rate: int = 16000,
    amplitude: float = 0.3,
    channels: int = 1,
    seed: int = 42,
    subtype: str = "FLOAT",
) -> bytes:
    """Generate white noise WAV file as bytes, independent per channel."""
    rng = np.random.default_rng(seed)
    num_samples = int(round(sample_rate * duration_sec))
    signal = (amplitude * rng.uniform(-1, 1, (num_samples, channels))).astype(np.float32)
    return _to_wav_bytes(signal, sample_rate, subtype)


def generate_silence_wav_bytes(
    duration_sec: float = 1.0,
    sample_rate: int = 16000,
    channels: int = 1,
) -> bytes:
    """Generate a silent (all zeros) WAV file as bytes."""
    num_samples = int(round(sample_rate * duration_sec))
    signal = np.zeros((num_samples, channels), dtype=np.float32)
    return _to_wav_bytes(signal, sample_rate, "FLOAT")


def read_wav_bytes(data: bytes) -> tuple[np.ndarray, int]:
    """Decode WAV bytes to a float32 (samples, channels) array."""
    signal, sample_rate = sf.read(io.BytesIO(data), dtype="float32", always_2d=True)
    return signal, sample_rate
