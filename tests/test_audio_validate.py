"""Tests for audioio.validate module."""

import pytest
import torch

from audioio import validate_wav
from audioio.errors import AudioValidationError


class TestValidateWavBasic:
    """Inputs the codec accepts."""

    def test_valid_mono_audio(self):
        """Mono float audio passes."""
        validate_wav(torch.randn(1, 16000) * 0.5, 16000)

    def test_valid_multichannel_audio(self):
        """Up to max_channels channels pass."""
        validate_wav(torch.randn(6, 4800) * 0.5, 48000, max_channels=6)

    def test_silence_is_accepted(self):
        """Silent audio is a valid codec input."""
        validate_wav(torch.zeros(2, 8000), 8000)

    def test_single_sample_is_accepted(self):
        """Any positive duration can be segmented."""
        validate_wav(torch.tensor([[0.1]]), 8000)

    def test_float64_passes(self):
        """float64 waveforms are floats too."""
        validate_wav(torch.randn(1, 16000, dtype=torch.float64), 16000)


class TestValidateDtype:
    """Tests for tensor type and shape."""

    def test_non_tensor_raises_error(self):
        """Lists are rejected."""
        with pytest.raises(AudioValidationError) as exc_info:
            validate_wav([[0.0, 0.1]], 16000)

        assert exc_info.value.code == "INVALID_DTYPE"

    def test_int_tensor_raises_error(self):
        """Integer PCM must be converted first."""
        with pytest.raises(AudioValidationError) as exc_info:
            validate_wav(torch.zeros(1, 100, dtype=torch.int16), 16000)

        assert exc_info.value.code == "INVALID_DTYPE"

    def test_1d_tensor_raises_error(self):
        """Waveforms must be [channels, samples]."""
        with pytest.raises(AudioValidationError) as exc_info:
            validate_wav(torch.zeros(100), 16000)

        assert exc_info.value.code == "INVALID_DTYPE"


class TestValidateEmpty:
    """Tests for empty audio."""

    def test_zero_samples_raises_error(self):
        """No samples."""
        with pytest.raises(AudioValidationError) as exc_info:
            validate_wav(torch.zeros(1, 0), 16000)

        assert exc_info.value.code == "EMPTY_AUDIO"

    def test_zero_channels_raises_error(self):
        """No channels."""
        with pytest.raises(AudioValidationError) as exc_info:
            validate_wav(torch.zeros(0, 100), 16000)

        assert exc_info.value.code == "EMPTY_AUDIO"


class TestValidateNonFinite:
    """Tests for NaN/Inf detection."""

    def test_nan_values_raise_error(self):
        """NaN samples are counted."""
        waveform = torch.zeros(1, 100)
        waveform[0, 3] = float("nan")

        with pytest.raises(AudioValidationError) as exc_info:
            validate_wav(waveform, 16000)

        assert exc_info.value.code == "NON_FINITE"
        assert exc_info.value.details["nan_count"] == 1

    def test_inf_values_raise_error(self):
        """Both infinities are counted."""
        waveform = torch.zeros(2, 100)
        waveform[0, 0] = float("inf")
        waveform[1, 5] = float("-inf")

        with pytest.raises(AudioValidationError) as exc_info:
            validate_wav(waveform, 16000)

        assert exc_info.value.details["inf_count"] == 2


class TestValidateSampleRate:
    """Tests for the sample rate range."""

    @pytest.mark.parametrize("sample_rate", [0, 4000, 7999, 192001])
    def test_out_of_range(self, sample_rate):
        """Rates outside [8000, 192000] are rejected."""
        with pytest.raises(AudioValidationError) as exc_info:
            validate_wav(torch.zeros(1, 100), sample_rate)

        assert exc_info.value.code == "INVALID_SAMPLE_RATE"

    @pytest.mark.parametrize("sample_rate", [8000, 44100, 192000])
    def test_boundary_sample_rates_pass(self, sample_rate):
        """Bounds are inclusive."""
        validate_wav(torch.zeros(1, 100), sample_rate)

    def test_custom_range(self):
        """The range is configurable."""
        validate_wav(torch.zeros(1, 10), 10, min_sample_rate=1)


class TestValidateLimits:
    """Tests for duration and channel limits."""

    def test_too_long_raises_error(self):
        """Duration above the maximum is rejected."""
        with pytest.raises(AudioValidationError) as exc_info:
            validate_wav(torch.zeros(1, 8001), 8000, max_duration_sec=1.0)

        assert exc_info.value.code == "TOO_LONG"
        assert exc_info.value.details["max_duration_sec"] == 1.0

    def test_duration_at_limit_passes(self):
        """Exactly the maximum duration passes."""
        validate_wav(torch.zeros(1, 8000), 8000, max_duration_sec=1.0)

    def test_too_many_channels(self):
        """Channel count above the maximum is rejected."""
        with pytest.raises(AudioValidationError) as exc_info:
            validate_wav(torch.zeros(3, 100), 8000, max_channels=2)

        assert exc_info.value.code == "TOO_MANY_CHANNELS"
        assert exc_info.value.details == {"num_channels": 3, "max_channels": 2}
