"""Tests for segcodec.codec (the encode/decode pipeline)."""

from pathlib import Path

import pytest
import torch

from audioio import AudioConfig
from audioio.errors import AudioDecodeError, AudioValidationError
from segcodec import (
    EncodingParameters,
    decode_audio,
    decode_waveform,
    encode_audio,
    encode_waveform,
)
from segcodec.errors import DescriptorParseError, PartsOutOfRangeError, SegmentationError

from tests.fixtures import generate_noise_wav_bytes


def labeled_waveform(num_segments: int, samples_per_segment: int = 4) -> torch.Tensor:
    """Mono buffer whose samples all equal their segment's index."""
    labels = torch.arange(num_segments, dtype=torch.float32)
    return labels.repeat_interleave(samples_per_segment).unsqueeze(0)


def segment_labels(waveform: torch.Tensor, samples_per_segment: int = 4) -> list[int]:
    """Read back the segment order from a labeled buffer."""
    return [int(v) for v in waveform[0, ::samples_per_segment].tolist()]


class TestEncodeOrder:
    """Segment order after encoding, using one-second labeled segments."""

    def test_split_three_parts(self):
        """Six segments with Split(3) come out as [0,2,4,1,3,5]."""
        waveform = labeled_waveform(6)
        result = encode_waveform(waveform, 4, EncodingParameters.split(parts=3, interval=1.0))

        assert segment_labels(result.waveform) == [0, 2, 4, 1, 3, 5]
        assert result.code == "sb3b1f"
        assert result.segment_count == 6

    def test_odd_even(self):
        """Six segments with OddEven come out as [0,2,4,1,3,5]."""
        waveform = labeled_waveform(6)
        result = encode_waveform(waveform, 4, EncodingParameters.odd_even(interval=1.0))

        assert segment_labels(result.waveform) == [0, 2, 4, 1, 3, 5]
        assert result.code == "oebb1f"

    def test_reversed_flips_whole_buffer(self, ramp_waveform):
        """Reversal is applied to the assembled buffer."""
        waveform, sample_rate = ramp_waveform
        params = EncodingParameters.odd_even(interval=0.5, reversed=True)

        result = encode_waveform(waveform, sample_rate, params)

        # halves [0..4], [5..9] -> odd/even keeps order for n=2, then flip
        assert result.waveform.tolist() == [[9.0, 8.0, 7.0, 6.0, 5.0, 4.0, 3.0, 2.0, 1.0, 0.0]]
        assert result.code == "oebb0.5t"

    def test_none_scheme_has_no_code(self, ramp_waveform):
        """Scheme.NONE passes audio through with no encoding code."""
        waveform, sample_rate = ramp_waveform

        result = encode_waveform(waveform, sample_rate, EncodingParameters.none(interval=0.2))

        assert torch.equal(result.waveform, waveform)
        assert result.code is None

    def test_input_is_not_modified(self, stereo_waveform):
        """Encoding leaves the source buffer untouched."""
        waveform, sample_rate = stereo_waveform
        original = waveform.clone()

        encode_waveform(waveform, sample_rate, EncodingParameters.split(4, 0.25, True))

        assert torch.equal(waveform, original)

    def test_preserves_shape_and_rate(self, stereo_waveform):
        """Channel count, length and sample rate are unchanged."""
        waveform, sample_rate = stereo_waveform

        result = encode_waveform(waveform, sample_rate, EncodingParameters.split(3, 0.5))

        assert result.waveform.shape == waveform.shape
        assert result.sample_rate == sample_rate
        assert result.waveform.dtype == waveform.dtype

    def test_result_metadata(self, stereo_waveform):
        """to_dict reports the code, layout and segment count without samples."""
        waveform, sample_rate = stereo_waveform

        result = encode_waveform(waveform, sample_rate, EncodingParameters.split(3, 0.5))
        summary = result.to_dict()

        assert summary["code"] == "sb3b0.5f"
        assert summary["sample_rate"] == 8000
        assert summary["num_channels"] == 2
        assert summary["num_samples"] == 18800
        assert summary["duration_sec"] == pytest.approx(2.35)
        assert summary["segment_count"] == 5
        assert "waveform" not in summary


class TestRoundTrip:
    """decode(encode(x)) == x sample for sample."""

    @pytest.mark.parametrize("params", [
        EncodingParameters.split(2, 0.5),
        EncodingParameters.split(3, 0.5, True),
        EncodingParameters.split(7, 0.1),
        EncodingParameters.split(10, 0.013, True),
        EncodingParameters.odd_even(0.5),
        EncodingParameters.odd_even(0.3, True),
        EncodingParameters.odd_even(0.001),
        EncodingParameters.split(4, 10.0, True),
    ])
    def test_stereo_with_short_tail(self, stereo_waveform, params):
        """2.35s stereo buffers, so the permuted tail segment moves."""
        waveform, sample_rate = stereo_waveform

        encoded = encode_waveform(waveform, sample_rate, params)
        decoded = decode_waveform(encoded.waveform, sample_rate, encoded.code)

        assert torch.equal(decoded.waveform, waveform)
        assert decoded.params == params

    def test_encoding_changes_audio(self, stereo_waveform):
        """A non-trivial encode actually reorders samples."""
        waveform, sample_rate = stereo_waveform

        encoded = encode_waveform(waveform, sample_rate, EncodingParameters.split(3, 0.5))

        assert not torch.equal(encoded.waveform, waveform)

    @pytest.mark.parametrize("num_samples", [1, 7, 44, 441, 4410, 44101])
    @pytest.mark.parametrize("parts", [2, 3, 5, 10])
    def test_uneven_lengths_at_44k1(self, num_samples, parts):
        """Sample counts that do not divide into whole intervals."""
        generator = torch.Generator().manual_seed(num_samples)
        waveform = torch.rand(1, num_samples, generator=generator)
        params = EncodingParameters.split(parts, 0.01, reversed=parts % 2 == 1)

        encoded = encode_waveform(waveform, 44100, params)
        decoded = decode_waveform(encoded.waveform, 44100, encoded.code)

        assert torch.equal(decoded.waveform, waveform)

    def test_decode_accepts_parameters(self, sample_waveform):
        """decode_waveform takes parameters as well as a code."""
        waveform, sample_rate = sample_waveform
        params = EncodingParameters.odd_even(0.25, True)

        encoded = encode_waveform(waveform, sample_rate, params)
        decoded = decode_waveform(encoded.waveform, sample_rate, params)

        assert torch.equal(decoded.waveform, waveform)
        assert decoded.code == "oebb0.25t"

    def test_interval_longer_than_audio(self, ramp_waveform):
        """A single segment round-trips (permutations degenerate to identity)."""
        waveform, sample_rate = ramp_waveform
        params = EncodingParameters.split(5, 10.0)

        encoded = encode_waveform(waveform, sample_rate, params)

        assert encoded.segment_count == 1
        assert torch.equal(encoded.waveform, waveform)
        assert torch.equal(decode_waveform(encoded.waveform, sample_rate, encoded.code).waveform, waveform)

    @pytest.mark.parametrize("params", [
        EncodingParameters.odd_even(0.5, True),
        EncodingParameters.odd_even(0.5, False),
        EncodingParameters.split(3, 0.5),
    ])
    def test_empty_waveform(self, params):
        """A zero-length buffer encodes and decodes to zero length."""
        waveform = torch.zeros(2, 0)

        encoded = encode_waveform(waveform, 16000, params)
        decoded = decode_waveform(encoded.waveform, 16000, encoded.code)

        assert encoded.segment_count == 0
        assert encoded.waveform.shape == (2, 0)
        assert decoded.waveform.shape == (2, 0)


class TestBatchHook:
    """The pipeline forwards the cooperative yield hook."""

    def test_progress_reported(self, sample_waveform):
        """on_batch runs with cumulative segment counts."""
        waveform, sample_rate = sample_waveform
        calls = []

        encode_waveform(
            waveform,
            sample_rate,
            EncodingParameters.split(4, 0.01),
            batch_size=50,
            on_batch=lambda done, total: calls.append((done, total)),
        )

        assert calls[-1] == (200, 200)
        assert [done for done, _ in calls] == [50, 100, 150, 200]

    def test_batch_size_does_not_change_output(self, stereo_waveform):
        """Same output with and without frequent yields."""
        waveform, sample_rate = stereo_waveform
        params = EncodingParameters.split(6, 0.02, True)

        a = encode_waveform(waveform, sample_rate, params, batch_size=1).waveform
        b = encode_waveform(waveform, sample_rate, params, batch_size=1000).waveform

        assert torch.equal(a, b)


class TestPipelineErrors:
    """Error propagation from the pipeline."""

    def test_bad_code_fails_before_work(self, ramp_waveform):
        """Parse errors surface from decode_waveform."""
        waveform, sample_rate = ramp_waveform

        with pytest.raises(PartsOutOfRangeError):
            decode_waveform(waveform, sample_rate, "sb1b0.2t")

    def test_1d_waveform_rejected(self):
        """Waveforms must be [channels, samples]."""
        with pytest.raises(SegmentationError):
            encode_waveform(torch.zeros(100), 10, EncodingParameters.odd_even())


class TestAudioEntryPoints:
    """encode_audio / decode_audio load and validate through audioio."""

    def test_bytes_round_trip(self):
        """Encode then decode WAV bytes of a stereo file."""
        wav = generate_noise_wav_bytes(duration_sec=1.3, sample_rate=16000, channels=2)
        params = EncodingParameters.split(3, 0.4, True)

        encoded = encode_audio(wav, params)
        original = encode_audio(wav, EncodingParameters.none()).waveform
        decoded = decode_waveform(encoded.waveform, encoded.sample_rate, encoded.code)

        assert encoded.num_channels == 2
        assert encoded.sample_rate == 16000
        assert torch.equal(decoded.waveform, original)

    def test_decode_audio_from_path(self, tmp_path: Path):
        """decode_audio reads files from disk."""
        wav_path = tmp_path / "clip.wav"
        wav_path.write_bytes(generate_noise_wav_bytes(duration_sec=0.5))

        result = decode_audio(wav_path, "oebb0.1f")

        assert result.segment_count == 5

    def test_bad_code_checked_before_loading(self, tmp_path: Path):
        """A bad code fails even when the file does not exist."""
        with pytest.raises(DescriptorParseError):
            decode_audio(tmp_path / "missing.wav", "nonsense")

    def test_invalid_audio(self):
        """Undecodable bytes raise AudioDecodeError."""
        with pytest.raises(AudioDecodeError):
            encode_audio(b"not a wav", EncodingParameters.odd_even())

    def test_too_long_audio(self):
        """Validation limits come from the audio config."""
        wav = generate_noise_wav_bytes(duration_sec=2.0)

        with pytest.raises(AudioValidationError) as exc_info:
            encode_audio(wav, EncodingParameters.odd_even(), audio_config=AudioConfig(max_duration_sec=1.0))

        assert exc_info.value.code == "TOO_LONG"
