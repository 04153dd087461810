"""Segment permutation engine.

Two named schemes reorder a sequence of ``n`` segments:

- **split(k)**: cut the sequence into ``k`` contiguous blocks of
  ``ceil(n / k)`` elements (the last blocks may be shorter or empty), then
  read across the blocks round-robin, skipping exhausted blocks.
- **oddEven**: elements at even original indices first, then those at
  odd original indices, each half in its original relative order.

Every permutation is represented as an index tensor ``perm`` where output
position ``j`` holds input element ``perm[j]``. The inverse is the inverse
index permutation, so forward followed by inverse restores the original
order for every ``n >= 0``.

Example:
    >>> from segcodec.permutation import split_permutation, odd_even_permutation
    >>> split_permutation(6, 3).tolist()
    [0, 2, 4, 1, 3, 5]
    >>> odd_even_permutation(5).tolist()
    [0, 2, 4, 1, 3]
"""

import math
from typing import Sequence, TypeVar

import torch

from .params import EncodingParameters, Scheme, validate_parts


T = TypeVar("T")


def split_permutation(n: int, parts: int) -> torch.Tensor:
    """Forward read order of the N-way interleave.

    Args:
        n: Sequence length (>= 0).
        parts: Number of blocks, in [2, 10].

    Returns:
        Int64 tensor of length n.

    Raises:
        InvalidParameterError: If parts is out of range.

    Example:
        >>> split_permutation(7, 3).tolist()
        [0, 3, 6, 1, 4, 2, 5]
    """
    validate_parts(parts)
    block_size = math.ceil(n / parts)

    # Lay the blocks out as rows, read down the columns, drop padding
    grid = torch.arange(parts * block_size, dtype=torch.long).reshape(parts, block_size)
    order = grid.t().reshape(-1)
    return order[order < n]


def odd_even_permutation(n: int) -> torch.Tensor:
    """Forward read order of the half-split interleave.

    Example:
        >>> odd_even_permutation(6).tolist()
        [0, 2, 4, 1, 3, 5]
    """
    indices = torch.arange(n, dtype=torch.long)
    return torch.cat([indices[0::2], indices[1::2]])


def identity_permutation(n: int) -> torch.Tensor:
    """Return the identity order for n elements."""
    return torch.arange(n, dtype=torch.long)


def invert_permutation(perm: torch.Tensor) -> torch.Tensor:
    """Return the inverse of an index permutation.

    Example:
        >>> invert_permutation(torch.tensor([2, 0, 1])).tolist()
        [1, 2, 0]
    """
    inverse = torch.empty_like(perm)
    inverse[perm] = torch.arange(len(perm), dtype=perm.dtype)
    return inverse


def permutation_for(params: EncodingParameters, n: int) -> torch.Tensor:
    """Return the forward permutation the parameters describe for n elements."""
    if params.scheme is Scheme.SPLIT:
        return split_permutation(n, params.parts)
    if params.scheme is Scheme.ODD_EVEN:
        return odd_even_permutation(n)
    return identity_permutation(n)


def apply_permutation(items: Sequence[T], perm: torch.Tensor) -> list[T]:
    """Reorder items so that output[j] is items[perm[j]]."""
    return [items[i] for i in perm.tolist()]


def permute(items: Sequence[T], params: EncodingParameters) -> list[T]:
    """Apply the forward permutation to a sequence.

    Args:
        items: Sequence in original order.
        params: Encoding parameters selecting the scheme.

    Returns:
        New list in permuted order. The input is not modified.
    """
    return apply_permutation(items, permutation_for(params, len(items)))


def unpermute(items: Sequence[T], params: EncodingParameters) -> list[T]:
    """Apply the inverse permutation to a sequence.

    Args:
        items: Sequence in permuted order, as produced by ``permute``.
        params: The same parameters that produced the permutation.

    Returns:
        New list in the original order.
    """
    perm = permutation_for(params, len(items))
    return apply_permutation(items, invert_permutation(perm))
