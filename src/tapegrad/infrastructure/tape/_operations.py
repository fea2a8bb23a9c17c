"""
Operation records stored on a gradient tape.

The operation log is an ordered sequence of a small tagged union. Each record
only holds references into the tape that owns it: gradient-slot references
for the tensors involved and a derivative-store reference for the local
derivative computed during the forward pass.

Only the unary record exists today. A binary record (two parent slots, two
derivatives, one result slot) slots into the `Operation` union without
touching the unary path.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class GradientRef:
    """
    Reference to a gradient-accumulator slot on a specific tape.

    Attributes
    ----------
    index : int
        Position of the slot in the owning tape's slot table.
    owner : object
        Provenance token of the issuing tape.
    """

    index: int
    owner: object = field(repr=False, compare=False)


@dataclass(frozen=True)
class DerivativeRef:
    """
    Reference to a derivative array held in a tape's derivative store.

    Attributes
    ----------
    index : int
        Position of the array in the owning tape's derivative store.
    owner : object
        Provenance token of the issuing tape.
    """

    index: int
    owner: object = field(repr=False, compare=False)


@dataclass(frozen=True)
class UnaryOp:
    """
    Record of one single-input operation.

    Backward rule::

        grad[parent_grad] += grad[result_grad] * deriv[parent_deriv]

    Attributes
    ----------
    parent_grad : GradientRef
        Slot of the operation's input.
    parent_deriv : DerivativeRef
        Local derivative of the output with respect to the input, shaped like
        the input.
    result_grad : GradientRef
        Slot of the operation's output.
    """

    parent_grad: GradientRef
    parent_deriv: DerivativeRef
    result_grad: GradientRef


Operation = Union[UnaryOp]
