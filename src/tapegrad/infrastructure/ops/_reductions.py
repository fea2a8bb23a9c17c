"""
Whole-tensor reductions.

A reduction's output is a scalar, but the derivative it records has the
*input's* shape. During backward the scalar output gradient broadcasts
against that array and the product lands in the input's slot, which has the
input's shape. Any further reduction added here follows the same convention.
"""

from __future__ import annotations

import numpy as np

from ...domain._errors import DegenerateReductionError
from ..tensor._tensor import Tensor
from ._unary_ops import H, add_unary_op


def mean(t: Tensor[H]) -> Tensor[H]:
    """
    Arithmetic mean of all elements.

    Records ``1 / N`` for every input position.

    Raises
    ------
    DegenerateReductionError
        If `t` has zero elements.
    """
    n = t.numel()
    if n == 0:
        raise DegenerateReductionError("mean", t.shape)

    result = Tensor(np.mean(t.data), dtype=t.dtype)
    t, holder = t.split_tape_holder()
    holder.update_with(
        lambda tape: add_unary_op(
            tape, (t, result), np.full(t.shape, 1.0 / n, dtype=t.dtype)
        )
    )
    return result.with_tape_holder(holder)


def sum(t: Tensor[H]) -> Tensor[H]:
    """
    Sum of all elements.

    Records ``1`` for every input position. The sum of an empty tensor is 0.
    """
    result = Tensor(np.sum(t.data), dtype=t.dtype)
    t, holder = t.split_tape_holder()
    holder.update_with(
        lambda tape: add_unary_op(tape, (t, result), np.ones(t.shape, dtype=t.dtype))
    )
    return result.with_tape_holder(holder)
