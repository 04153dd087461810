"""Pytest configuration and fixtures for the test suite."""

import sys
from pathlib import Path

import pytest
import torch

# Ensure project root is in path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture
def sample_waveform() -> tuple[torch.Tensor, int]:
    """Mono tone mixture, [1, 16000] at 8kHz (2 seconds)."""
    sample_rate = 8000
    duration = 2.0
    t = torch.linspace(0, duration, int(sample_rate * duration))
    waveform = torch.zeros_like(t)
    for freq in [110, 220, 330, 440]:
        waveform += torch.sin(2 * torch.pi * freq * t) / 4
    return waveform.unsqueeze(0).float(), sample_rate


@pytest.fixture
def stereo_waveform() -> tuple[torch.Tensor, int]:
    """Stereo noise with independent channels, 2.35 seconds at 8kHz.

    The duration is deliberately not a multiple of common intervals so
    the last segment is a short tail.
    """
    generator = torch.Generator().manual_seed(7)
    sample_rate = 8000
    waveform = torch.rand(2, 18800, generator=generator) * 2 - 1
    return waveform, sample_rate


@pytest.fixture
def ramp_waveform() -> tuple[torch.Tensor, int]:
    """Mono ramp where every sample holds its own index, 10 samples at 10 Hz.

    Useful for asserting exact sample order: with a 0.2s interval the
    segments are [0, 1], [2, 3], ... [8, 9].
    """
    return torch.arange(10, dtype=torch.float32).unsqueeze(0), 10


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests that exercise the full service stack"
    )
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow"
    )
