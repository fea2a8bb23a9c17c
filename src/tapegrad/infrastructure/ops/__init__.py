"""
Operation application layer: the recording primitive, generic apply, the
per-function wrappers and reductions.
"""

from ._reductions import mean, sum
from ._unary_ops import (
    UNARY_FUNCTIONS,
    abs,
    abs_,
    add_unary_op,
    apply,
    apply_ref,
    cos,
    cos_,
    exp,
    exp_,
    ln,
    ln_,
    relu,
    relu_,
    sigmoid,
    sigmoid_,
    sin,
    sin_,
    square,
    square_,
    tanh,
    tanh_,
)

__all__ = [
    "UNARY_FUNCTIONS",
    "add_unary_op",
    "apply",
    "apply_ref",
    "mean",
    "sum",
    "relu",
    "sin",
    "cos",
    "ln",
    "exp",
    "sigmoid",
    "tanh",
    "square",
    "abs",
    "relu_",
    "sin_",
    "cos_",
    "ln_",
    "exp_",
    "sigmoid_",
    "tanh_",
    "square_",
    "abs_",
]
