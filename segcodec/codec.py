"""Encode/decode orchestration for the segment codec.

Encode:
1. Segment the buffer duration into fixed-interval spans
2. Cut the buffer into segments (views, no copies)
3. Permute the segments (forward)
4. Assemble the permuted segments into a new buffer
5. Time-reverse the buffer if requested

Decode runs the inverse from the encoding code alone:
1. Parse the code
2. Undo the time reversal
3. Segment the working buffer's duration with the same interval
4. Derive the encoded layout by permuting the spans forward, then cut
5. Inverse-permute and assemble

Step 4 of decode matters when the last span is shorter than the interval:
after encoding that short span sits wherever the permutation moved it, so
the encoded buffer is cut along the permuted span lengths, not in natural
order.

Example:
    >>> import torch
    >>> from segcodec import EncodingParameters, decode_waveform, encode_waveform
    >>> waveform = torch.randn(2, 48000)
    >>> encoded = encode_waveform(waveform, 16000, EncodingParameters.split(3, 0.25, True))
    >>> encoded.code
    'sb3b0.25t'
    >>> decoded = decode_waveform(encoded.waveform, 16000, encoded.code)
    >>> torch.equal(decoded.waveform, waveform)
    True
"""

import logging
from pathlib import Path
from typing import Union

import torch

from audioio import AudioConfig, load_validated

from .assembler import DEFAULT_BATCH_SIZE, BatchCallback, assemble_segments, cut_segments
from .descriptor import parse_descriptor, serialize_descriptor
from .params import EncodingParameters
from .permutation import permutation_for, permute, unpermute
from .reversal import reverse_waveform
from .schema import CodecResult
from .segmenter import segment_duration
from .utils import samples_to_seconds, validate_waveform_shape


logger = logging.getLogger(__name__)


def encode_waveform(
    waveform: torch.Tensor,
    sample_rate: int,
    params: EncodingParameters,
    batch_size: int = DEFAULT_BATCH_SIZE,
    on_batch: BatchCallback | None = None,
) -> CodecResult:
    """Permute the segments of a waveform.

    Args:
        waveform: Float tensor of shape [channels, samples].
        sample_rate: Sample rate in Hz.
        params: Encoding parameters.
        batch_size: Segments assembled between ``on_batch`` calls.
        on_batch: Optional progress/yield hook, see ``assemble_segments``.

    Returns:
        CodecResult holding the encoded waveform and its encoding code.

    Raises:
        SegmentationError: If the waveform is not [channels, samples].
    """
    num_channels, num_samples = validate_waveform_shape(waveform)
    duration_sec = samples_to_seconds(num_samples, sample_rate)

    spans = segment_duration(duration_sec, params.interval)
    segments = cut_segments(waveform, sample_rate, spans)
    segment_count = len(segments)

    ordered = permute(segments, params)
    del segments

    output = assemble_segments(
        ordered,
        num_channels=num_channels,
        batch_size=batch_size,
        on_batch=on_batch,
        dtype=waveform.dtype,
    )

    if params.reversed:
        output = reverse_waveform(output)

    code = serialize_descriptor(params)
    logger.info(
        "Encoded: scheme=%s segments=%d channels=%d duration_sec=%.3f code=%s",
        params.scheme.value,
        segment_count,
        num_channels,
        duration_sec,
        code,
    )

    return CodecResult(
        waveform=output,
        sample_rate=sample_rate,
        params=params,
        code=code,
        segment_count=segment_count,
    )


def decode_waveform(
    waveform: torch.Tensor,
    sample_rate: int,
    params: Union[EncodingParameters, str],
    batch_size: int = DEFAULT_BATCH_SIZE,
    on_batch: BatchCallback | None = None,
) -> CodecResult:
    """Restore the original order of an encoded waveform.

    Args:
        waveform: Encoded float tensor of shape [channels, samples].
        sample_rate: Sample rate in Hz.
        params: Encoding parameters, or the encoding code string.
        batch_size: Segments assembled between ``on_batch`` calls.
        on_batch: Optional progress/yield hook.

    Returns:
        CodecResult holding the decoded waveform.

    Raises:
        DescriptorParseError: If ``params`` is a code that does not parse.
        SegmentationError: If the waveform is not [channels, samples].
    """
    if isinstance(params, str):
        params = parse_descriptor(params)

    num_channels, num_samples = validate_waveform_shape(waveform)
    duration_sec = samples_to_seconds(num_samples, sample_rate)

    working = reverse_waveform(waveform) if params.reversed else waveform

    spans = segment_duration(duration_sec, params.interval)
    perm = permutation_for(params, len(spans))
    layout = [spans[i] for i in perm.tolist()]

    encoded_segments = cut_segments(working, sample_rate, layout, indices=perm.tolist())
    ordered = unpermute(encoded_segments, params)
    del encoded_segments

    output = assemble_segments(
        ordered,
        num_channels=num_channels,
        batch_size=batch_size,
        on_batch=on_batch,
        dtype=waveform.dtype,
    )

    code = serialize_descriptor(params)
    logger.info(
        "Decoded: scheme=%s segments=%d channels=%d duration_sec=%.3f code=%s",
        params.scheme.value,
        len(spans),
        num_channels,
        duration_sec,
        code,
    )

    return CodecResult(
        waveform=output,
        sample_rate=sample_rate,
        params=params,
        code=code,
        segment_count=len(spans),
    )


def encode_audio(
    path_or_bytes: Union[str, Path, bytes],
    params: EncodingParameters,
    audio_config: AudioConfig | None = None,
    batch_size: int = DEFAULT_BATCH_SIZE,
    on_batch: BatchCallback | None = None,
) -> CodecResult:
    """Load, validate and encode an audio file.

    Raises:
        AudioDecodeError: If the audio cannot be decoded.
        AudioValidationError: If the audio fails validation.
    """
    waveform, sample_rate = load_validated(path_or_bytes, audio_config)
    return encode_waveform(waveform, sample_rate, params, batch_size=batch_size, on_batch=on_batch)


def decode_audio(
    path_or_bytes: Union[str, Path, bytes],
    code: Union[EncodingParameters, str],
    audio_config: AudioConfig | None = None,
    batch_size: int = DEFAULT_BATCH_SIZE,
    on_batch: BatchCallback | None = None,
) -> CodecResult:
    """Load, validate and decode an encoded audio file.

    The code is parsed before the audio is loaded, so a bad code fails
    without touching the file.

    Raises:
        DescriptorParseError: If the code does not parse.
        AudioDecodeError: If the audio cannot be decoded.
        AudioValidationError: If the audio fails validation.
    """
    params = parse_descriptor(code) if isinstance(code, str) else code
    waveform, sample_rate = load_validated(path_or_bytes, audio_config)
    return decode_waveform(waveform, sample_rate, params, batch_size=batch_size, on_batch=on_batch)
