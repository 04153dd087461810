"""Reversible audio segment permutation codec.

This module slices decoded audio into fixed-duration segments, reorders them
with a named permutation scheme, optionally time-reverses the result, and
inverts all of it again from a short encoding code.

Schemes:
- split(k): deal the segments into k contiguous blocks, read across them
- oddEven: even-indexed segments first, then odd-indexed segments

Example:
    >>> import torch
    >>> from segcodec import EncodingParameters, decode_waveform, encode_waveform
    >>> waveform = torch.randn(1, 96000)  # 6 seconds at 16kHz
    >>> params = EncodingParameters.split(parts=3, interval=1.0)
    >>> encoded = encode_waveform(waveform, 16000, params)
    >>> encoded.code
    'sb3b1f'
    >>> decoded = decode_waveform(encoded.waveform, 16000, "sb3b1f")
    >>> torch.equal(decoded.waveform, waveform)
    True
"""

from .assembler import assemble_segments, cut_segments
from .codec import decode_audio, decode_waveform, encode_audio, encode_waveform
from .descriptor import is_valid_descriptor, parse_descriptor, serialize_descriptor
from .errors import (
    DescriptorParseError,
    IntervalOutOfRangeError,
    InvalidParameterError,
    InvalidReverseFlagError,
    MalformedCodeError,
    PartsOutOfRangeError,
    SegCodecError,
    SegmentationError,
    UnknownTypeError,
)
from .params import EncodingParameters, Scheme
from .permutation import (
    invert_permutation,
    odd_even_permutation,
    permutation_for,
    permute,
    split_permutation,
    unpermute,
)
from .reversal import reverse_segments, reverse_waveform
from .schema import CodecResult, Segment, Span
from .segmenter import segment_duration


__version__ = "0.1.0"

__all__ = [
    # Pipeline
    "encode_waveform",
    "decode_waveform",
    "encode_audio",
    "decode_audio",
    # Parameters
    "EncodingParameters",
    "Scheme",
    # Descriptor
    "serialize_descriptor",
    "parse_descriptor",
    "is_valid_descriptor",
    # Stages
    "segment_duration",
    "cut_segments",
    "assemble_segments",
    "split_permutation",
    "odd_even_permutation",
    "invert_permutation",
    "permutation_for",
    "permute",
    "unpermute",
    "reverse_segments",
    "reverse_waveform",
    # Schema
    "Span",
    "Segment",
    "CodecResult",
    # Errors
    "SegCodecError",
    "InvalidParameterError",
    "SegmentationError",
    "DescriptorParseError",
    "MalformedCodeError",
    "InvalidReverseFlagError",
    "IntervalOutOfRangeError",
    "PartsOutOfRangeError",
    "UnknownTypeError",
]
