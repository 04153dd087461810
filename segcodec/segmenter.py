"""Fixed-interval segmentation of an audio timeline.

A duration ``D`` cut with interval ``I`` yields ``floor(D / I)`` full spans
followed by one strictly shorter tail span when a remainder is left. Spans
are contiguous, ordered and partition ``[0, D]`` exactly.

Example:
    >>> from segcodec.segmenter import segment_duration
    >>> [(s.start_sec, s.end_sec) for s in segment_duration(2.5, 1.0)]
    [(0.0, 1.0), (1.0, 2.0), (2.0, 2.5)]
"""

import math

from .errors import InvalidParameterError
from .schema import Span


# Remainders closer than this to 0 or to a full interval are float noise.
EPSILON = 1e-9


def segment_duration(duration_sec: float, interval_sec: float) -> list[Span]:
    """Partition a duration into fixed-interval spans.

    Args:
        duration_sec: Total duration in seconds (>= 0).
        interval_sec: Span length in seconds (> 0).

    Returns:
        Ordered list of spans covering [0, duration_sec]. Empty when the
        duration is 0, a single span when the duration is below one interval.

    Raises:
        InvalidParameterError: If the interval is not positive or the
            duration is negative.

    Example:
        >>> len(segment_duration(6.0, 1.0))
        6
        >>> segment_duration(0.4, 1.0)
        [Span(start_sec=0.0, end_sec=0.4)]
    """
    if not math.isfinite(interval_sec) or interval_sec <= 0:
        raise InvalidParameterError(
            message=f"interval must be positive, got {interval_sec}",
            details={"parameter": "interval", "value": interval_sec},
        )

    if not math.isfinite(duration_sec) or duration_sec < 0:
        raise InvalidParameterError(
            message=f"duration must be non-negative, got {duration_sec}",
            details={"parameter": "duration", "value": duration_sec},
        )

    if duration_sec == 0:
        return []

    full_count = math.floor(duration_sec / interval_sec)
    remainder = duration_sec - full_count * interval_sec

    if remainder >= interval_sec - EPSILON:
        # D / I landed just below an integer
        full_count += 1
        remainder = 0.0

    spans = [
        Span(start_sec=i * interval_sec, end_sec=(i + 1) * interval_sec)
        for i in range(full_count)
    ]

    if remainder > EPSILON:
        spans.append(Span(start_sec=full_count * interval_sec, end_sec=duration_sec))
    elif spans:
        # Absorb float noise into the last full span so the tail ends at D
        spans[-1] = Span(start_sec=spans[-1].start_sec, end_sec=duration_sec)
    else:
        spans.append(Span(start_sec=0.0, end_sec=duration_sec))

    return spans


def span_bounds(spans: list[Span], sample_rate: int) -> list[tuple[int, int]]:
    """Map spans to [start, end) sample bounds.

    Args:
        spans: Spans in any order.
        sample_rate: Sample rate in Hz.

    Returns:
        One (start_sample, end_sample) pair per span, in the same order.
    """
    return [span.to_samples(sample_rate) for span in spans]


def span_lengths(spans: list[Span], sample_rate: int) -> list[int]:
    """Return the sample length of each span, in the given order."""
    return [end - start for start, end in span_bounds(spans, sample_rate)]
