"""Cutting buffers into segments and assembling segments back into buffers.

Segments produced by ``cut_segments`` are views into the source tensor, so
cutting never copies sample data. ``assemble_segments`` mints the single
output copy and releases every segment as soon as it has been written, so
at most one full copy of the samples exists beyond the source.

Example:
    >>> import torch
    >>> from segcodec.assembler import assemble_segments, cut_segments
    >>> from segcodec.segmenter import segment_duration
    >>> waveform = torch.arange(8, dtype=torch.float32).unsqueeze(0)
    >>> segments = cut_segments(waveform, 4, segment_duration(2.0, 0.5))
    >>> [s.waveform.tolist() for s in segments]
    [[[0.0, 1.0]], [[2.0, 3.0]], [[4.0, 5.0]], [[6.0, 7.0]]]
    >>> assemble_segments(segments[::-1], num_channels=1).tolist()
    [[6.0, 7.0, 4.0, 5.0, 2.0, 3.0, 0.0, 1.0]]
"""

import logging
from typing import Callable, Sequence

import torch

from .errors import SegmentationError
from .schema import Segment, Span
from .segmenter import span_bounds
from .utils import validate_waveform_shape


logger = logging.getLogger(__name__)


DEFAULT_BATCH_SIZE = 50

BatchCallback = Callable[[int, int], None]


def cut_segments(
    waveform: torch.Tensor,
    sample_rate: int,
    spans: Sequence[Span],
    indices: Sequence[int] | None = None,
) -> list[Segment]:
    """Cut a buffer into segments laid out back to back.

    The spans describe the buffer's layout in the order given: the first
    span's samples start at offset 0, the next span's samples follow
    immediately, and so on. Each piece is as long as its span's sample
    bounds. For a buffer in natural order pass the spans as segmented; for
    a permuted buffer pass the spans in permuted order.

    Args:
        waveform: Tensor of shape [channels, samples].
        sample_rate: Sample rate in Hz.
        spans: Spans in buffer layout order.
        indices: Original-order index of each span. Defaults to 0..n-1.

    Returns:
        One Segment per span, each holding a view into ``waveform``.

    Raises:
        SegmentationError: If the waveform shape is invalid or the spans do
            not cover the buffer exactly.
    """
    _, num_samples = validate_waveform_shape(waveform)

    if indices is None:
        indices = range(len(spans))
    elif len(indices) != len(spans):
        raise SegmentationError(
            message=f"Got {len(indices)} indices for {len(spans)} spans",
            code="LENGTH_MISMATCH",
            details={"indices": len(indices), "spans": len(spans)},
        )

    lengths = [end - start for start, end in span_bounds(list(spans), sample_rate)]
    total = sum(lengths)

    if total != num_samples:
        raise SegmentationError(
            message=f"Spans cover {total} samples but the buffer has {num_samples}",
            code="LENGTH_MISMATCH",
            details={
                "span_samples": total,
                "num_samples": num_samples,
                "sample_rate": sample_rate,
            },
        )

    segments: list[Segment] = []
    offset = 0
    for index, span, length in zip(indices, spans, lengths):
        segments.append(Segment(
            index=index,
            span=span,
            waveform=waveform[:, offset:offset + length],
        ))
        offset += length

    return segments


def assemble_segments(
    segments: Sequence[Segment],
    num_channels: int,
    batch_size: int = DEFAULT_BATCH_SIZE,
    on_batch: BatchCallback | None = None,
    dtype: torch.dtype = torch.float32,
) -> torch.Tensor:
    """Concatenate segments into a new buffer in the order presented.

    Every segment is released once its samples have been copied. The
    ``on_batch`` hook runs after each batch of ``batch_size`` segments with
    ``(segments_done, segments_total)``; it is a scheduling and progress
    point only and has no effect on the output.

    Args:
        segments: Segments in output order.
        num_channels: Channel count of the output buffer.
        batch_size: Segments copied between hook calls.
        on_batch: Optional callback run between batches.
        dtype: Output dtype.

    Returns:
        New tensor of shape [num_channels, total_samples].

    Raises:
        SegmentationError: If a segment is already released or has the
            wrong channel count.
    """
    if batch_size < 1:
        raise SegmentationError(
            message=f"batch_size must be >= 1, got {batch_size}",
            code="INVALID_BATCH_SIZE",
            details={"batch_size": batch_size},
        )

    for segment in segments:
        if segment.is_released:
            raise SegmentationError(
                message=f"Segment {segment.index} has already been consumed",
                code="SEGMENT_RELEASED",
                details={"index": segment.index},
            )
        if segment.waveform.shape[0] != num_channels:
            raise SegmentationError(
                message=f"Segment {segment.index} has {segment.waveform.shape[0]} channels, expected {num_channels}",
                code="CHANNEL_MISMATCH",
                details={
                    "index": segment.index,
                    "channels": int(segment.waveform.shape[0]),
                    "expected": num_channels,
                },
            )

    total_samples = sum(segment.num_samples for segment in segments)
    output = torch.empty(num_channels, total_samples, dtype=dtype)

    write_position = 0
    total = len(segments)
    for batch_start in range(0, total, batch_size):
        for segment in segments[batch_start:batch_start + batch_size]:
            length = segment.num_samples
            output[:, write_position:write_position + length] = segment.waveform
            write_position += length
            segment.release()

        done = min(batch_start + batch_size, total)
        logger.debug("Assembled %d/%d segments", done, total)
        if on_batch is not None:
            on_batch(done, total)

    return output
