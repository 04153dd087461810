"""Encoding code ("descriptor") serialization and parsing.

An encoding code is a short ASCII string that carries everything a decoder
needs to invert an encode::

    <type><partsToken>b<interval><flag>

- ``type``: ``s`` (split) or ``oe`` (oddEven)
- ``partsToken``: ``b<k>`` for split, ``b`` for oddEven (empty parts field)
- ``interval``: segment interval in seconds, shortest exact decimal form
- ``flag``: ``t`` when the buffer is reversed, ``f`` otherwise

Splitting a code on ``b`` therefore yields three fields:
``[type, parts, interval + flag]``. The parser also accepts the spelling
that separates the flag with one more ``b`` (``sb5b0.2bt``), which yields
four fields ``[type, parts, interval, flag]``.

Example:
    >>> from segcodec.descriptor import parse_descriptor, serialize_descriptor
    >>> from segcodec.params import EncodingParameters
    >>> serialize_descriptor(EncodingParameters.odd_even(interval=1))
    'oebb1f'
    >>> serialize_descriptor(EncodingParameters.split(parts=5, interval=0.2, reversed=True))
    'sb5b0.2t'
    >>> parse_descriptor("sb5b0.2t") == EncodingParameters.split(5, 0.2, True)
    True
"""

import re

from .errors import (
    DescriptorParseError,
    IntervalOutOfRangeError,
    InvalidReverseFlagError,
    MalformedCodeError,
    PartsOutOfRangeError,
    UnknownTypeError,
)
from .params import (
    MAX_INTERVAL_SEC,
    MAX_PARTS,
    MIN_INTERVAL_SEC,
    MIN_PARTS,
    EncodingParameters,
    Scheme,
)


SEPARATOR = "b"
SPLIT_PREFIX = "s"
ODD_EVEN_PREFIX = "oe"
REVERSED_FLAG = "t"
FORWARD_FLAG = "f"

_TYPE_PREFIXES = {
    Scheme.SPLIT: SPLIT_PREFIX,
    Scheme.ODD_EVEN: ODD_EVEN_PREFIX,
}

_DECIMAL_RE = re.compile(r"[0-9]+(?:\.[0-9]*)?|\.[0-9]+")
_DIGITS_RE = re.compile(r"[0-9]+")


def format_interval(interval: float) -> str:
    """Render an interval in its shortest exact decimal form.

    Integral values drop the fractional part, everything else uses the
    shortest representation that parses back to the same float.

    Examples:
        >>> format_interval(1.0)
        '1'
        >>> format_interval(0.2)
        '0.2'
    """
    value = float(interval)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def serialize_descriptor(params: EncodingParameters) -> str | None:
    """Build the encoding code for a set of parameters.

    Args:
        params: Validated encoding parameters.

    Returns:
        The encoding code, or None for ``Scheme.NONE`` (nothing to decode).
    """
    prefix = _TYPE_PREFIXES.get(params.scheme)
    if prefix is None:
        return None

    parts_token = SEPARATOR + (str(params.parts) if params.scheme is Scheme.SPLIT else "")
    interval_token = SEPARATOR + format_interval(params.interval)
    flag = REVERSED_FLAG if params.reversed else FORWARD_FLAG

    return f"{prefix}{parts_token}{interval_token}{flag}"


def parse_descriptor(code: str) -> EncodingParameters:
    """Parse an encoding code back into parameters.

    Args:
        code: Encoding code, e.g. ``"sb3b0.5f"`` or ``"oebb1t"``.

    Returns:
        The EncodingParameters the code describes.

    Raises:
        MalformedCodeError: Wrong field count, empty type or interval
            field, or a parts value given for oddEven.
        InvalidReverseFlagError: Flag is not 't' or 'f'.
        IntervalOutOfRangeError: Interval is not a decimal in [0.001, 10].
        PartsOutOfRangeError: Split parts is not an integer in [2, 10].
        UnknownTypeError: Type prefix is not 's' or 'oe'.
    """
    if not isinstance(code, str):
        raise MalformedCodeError(
            message=f"Encoding code must be a string, got {type(code).__name__}",
            details={"actual_type": type(code).__name__},
        )

    type_token, parts_token, interval_token, flag = _tokenize(code)

    if flag not in (REVERSED_FLAG, FORWARD_FLAG):
        raise InvalidReverseFlagError(
            message=f"Reverse flag must be '{REVERSED_FLAG}' or '{FORWARD_FLAG}', got {flag!r}",
            details={"code": code, "flag": flag},
        )

    interval = _parse_interval(interval_token, code)

    if type_token == SPLIT_PREFIX:
        parts = _parse_parts(parts_token, code)
        return EncodingParameters.split(parts=parts, interval=interval, reversed=flag == REVERSED_FLAG)

    if type_token == ODD_EVEN_PREFIX:
        if parts_token != "":
            raise MalformedCodeError(
                message=f"oddEven codes take no parts value, got {parts_token!r}",
                details={"code": code, "parts": parts_token},
            )
        return EncodingParameters.odd_even(interval=interval, reversed=flag == REVERSED_FLAG)

    raise UnknownTypeError(
        message=f"Unknown encoding type {type_token!r}. Must be '{SPLIT_PREFIX}' or '{ODD_EVEN_PREFIX}'",
        details={"code": code, "type": type_token},
    )


def is_valid_descriptor(code: str) -> bool:
    """Return True if the code parses.

    Example:
        >>> is_valid_descriptor("oebb1f"), is_valid_descriptor("oebb1")
        (True, False)
    """
    try:
        parse_descriptor(code)
    except DescriptorParseError:
        return False
    return True


def _tokenize(code: str) -> tuple[str, str, str, str]:
    """Split a code into (type, parts, interval, flag) tokens."""
    fields = code.split(SEPARATOR)

    if len(fields) == 3:
        type_token, parts_token, tail = fields
        if not type_token or not tail:
            raise MalformedCodeError(
                message="Encoding code has an empty type or interval field",
                details={"code": code, "fields": fields},
            )
        return type_token, parts_token, tail[:-1], tail[-1]

    if len(fields) == 4:
        type_token, parts_token, interval_token, flag = fields
        if not type_token or not interval_token or not flag:
            raise MalformedCodeError(
                message="Encoding code has an empty type, interval or flag field",
                details={"code": code, "fields": fields},
            )
        return type_token, parts_token, interval_token, flag

    raise MalformedCodeError(
        message=f"Encoding code must have 3 '{SEPARATOR}'-separated fields, got {len(fields)}",
        details={"code": code, "field_count": len(fields)},
    )


def _parse_interval(token: str, code: str) -> float:
    """Parse and range-check the interval token."""
    if not _DECIMAL_RE.fullmatch(token):
        raise IntervalOutOfRangeError(
            message=f"Interval {token!r} is not a decimal number",
            details={"code": code, "interval": token},
        )

    interval = float(token)
    if interval < MIN_INTERVAL_SEC or interval > MAX_INTERVAL_SEC:
        raise IntervalOutOfRangeError(
            message=f"Interval {interval} must be between {MIN_INTERVAL_SEC} and {MAX_INTERVAL_SEC}",
            details={
                "code": code,
                "interval": interval,
                "min_interval_sec": MIN_INTERVAL_SEC,
                "max_interval_sec": MAX_INTERVAL_SEC,
            },
        )
    return interval


def _parse_parts(token: str, code: str) -> int:
    """Parse and range-check the split parts token."""
    if not _DIGITS_RE.fullmatch(token):
        raise PartsOutOfRangeError(
            message=f"Parts {token!r} is not an integer",
            details={"code": code, "parts": token},
        )

    parts = int(token)
    if parts < MIN_PARTS or parts > MAX_PARTS:
        raise PartsOutOfRangeError(
            message=f"Parts {parts} must be between {MIN_PARTS} and {MAX_PARTS}",
            details={
                "code": code,
                "parts": parts,
                "min_parts": MIN_PARTS,
                "max_parts": MAX_PARTS,
            },
        )
    return parts
