"""
Unary-op application layer.

Every unary operation, activation or reduction, goes through the same three
steps:

1. compute the forward result as a fresh, non-tracking tensor;
2. split the tape holder off the input;
3. let the holder record one `UnaryOp` linking input, derivative and output
   (a no-op for `NoTape`), then attach the holder to the result.

`add_unary_op` is the single place where records are written. It does not
know what function was applied; only the derivative array matters.

Public functional wrappers (`relu`, `sin`, ... and their non-recording
``*_`` counterparts) are produced by binding a `DifferentiableFunction` to
`apply` / `apply_ref`.
"""

from __future__ import annotations

from typing import Callable, TypeVar

import numpy as np

from ...domain._errors import TrackingModeError
from ...domain._function import DifferentiableFunction
from ...domain._tape_holder import IGradientTape, ITapeHolder
from ...domain._tensor import ITensor
from .._functions import Abs, Cos, Exp, Ln, ReLU, Sigmoid, Sin, Square, Tanh
from ..tape._operations import UnaryOp
from ..tape._tape_holder import NoTape
from ..tensor._tensor import Tensor

H = TypeVar("H", bound=ITapeHolder)


def add_unary_op(
    tape: IGradientTape,
    operands: tuple[ITensor, ITensor],
    deriv: np.ndarray,
) -> None:
    """
    Record one unary operation on `tape`.

    Parameters
    ----------
    tape : IGradientTape
        Tape to record onto.
    operands : tuple[ITensor, ITensor]
        ``(input, output)`` of the operation.
    deriv : np.ndarray
        Local derivative of the output with respect to the input, shaped like
        the *input*. Ownership moves to the tape.
    """
    inp, out = operands
    parent_grad = tape.gradient_ref_for(inp.id, inp.shape)
    parent_deriv = tape.store_derivative(deriv)
    result_grad = tape.gradient_ref_for(out.id, out.shape)
    tape.add_operation(
        UnaryOp(
            parent_grad=parent_grad,
            parent_deriv=parent_deriv,
            result_grad=result_grad,
        )
    )


def apply(t: Tensor[H], fn: type[DifferentiableFunction]) -> Tensor[H]:
    """
    Apply `fn` elementwise, recording its derivative if `t` is tracking.

    Parameters
    ----------
    t : Tensor
        Input tensor in either mode. Its tape (if any) moves to the result.
    fn : type[DifferentiableFunction]
        Function to apply.

    Returns
    -------
    Tensor
        Result tensor carrying `t`'s tape holder.
    """
    result = Tensor(fn.f(t.data), dtype=t.dtype)
    t, holder = t.split_tape_holder()
    holder.update_with(lambda tape: add_unary_op(tape, (t, result), fn.df(t.data)))
    return result.with_tape_holder(holder)


def apply_ref(t: Tensor[NoTape], fn: type[DifferentiableFunction]) -> Tensor[NoTape]:
    """
    Apply `fn` elementwise without any tape interaction.

    Use this to compute a branch that is deliberately excluded from the
    gradient graph.

    Raises
    ------
    TrackingModeError
        If `t` is tracking.
    """
    if t.is_tracking:
        raise TrackingModeError(f"{fn.__name__.lower()}_", True)
    return Tensor(fn.f(t.data), dtype=t.dtype)


def _bind(name: str, fn: type[DifferentiableFunction]) -> Callable[[Tensor], Tensor]:
    def op(t: Tensor) -> Tensor:
        return apply(t, fn)

    op.__name__ = op.__qualname__ = name
    op.__doc__ = (
        f"Apply ``{name}`` elementwise; records onto the tape when `t` is tracking."
    )
    return op


def _bind_ref(
    name: str, fn: type[DifferentiableFunction]
) -> Callable[[Tensor[NoTape]], Tensor[NoTape]]:
    def op(t: Tensor[NoTape]) -> Tensor[NoTape]:
        return apply_ref(t, fn)

    op.__name__ = op.__qualname__ = name
    op.__doc__ = f"Apply ``{name[:-1]}`` elementwise to a non-tracking tensor."
    return op


UNARY_FUNCTIONS: dict[str, type[DifferentiableFunction]] = {
    "relu": ReLU,
    "sin": Sin,
    "cos": Cos,
    "ln": Ln,
    "exp": Exp,
    "sigmoid": Sigmoid,
    "tanh": Tanh,
    "square": Square,
    "abs": Abs,
}

# Module-level wrappers: ``relu``, ``relu_``, ``sin``, ``sin_``, ... one pair
# per entry above.
for _name, _fn in UNARY_FUNCTIONS.items():
    globals()[_name] = _bind(_name, _fn)
    globals()[f"{_name}_"] = _bind_ref(f"{_name}_", _fn)
del _name, _fn
