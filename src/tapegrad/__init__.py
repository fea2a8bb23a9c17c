"""
tapegrad: reverse-mode autodiff bookkeeping on an exclusively owned tape.

Typical use::

    from tapegrad import tensor

    x = tensor([1.0, 2.0, 3.0])
    loss = x.trace().square().mean()
    grads = loss.backward()
    grads.ref_gradient(x)   # array([0.6667, 1.3333, 2.0])
"""

from typing import Any, Optional

from .domain import (
    DegenerateReductionError,
    DifferentiableFunction,
    IdAllocator,
    ShapeMismatchError,
    TapeConsumedError,
    TapegradError,
    TapeOwnershipError,
    TapeProvenanceError,
    TrackingModeError,
    UniqueId,
    UnknownIdentityError,
    unique_id,
)
from .infrastructure import (
    DEFAULT_DTYPE,
    Gradients,
    GradientTape,
    NoTape,
    OwnsTape,
    Tensor,
    backward,
)
from .infrastructure import ops


def tensor(data: Any, *, dtype: Optional[Any] = None) -> Tensor[NoTape]:
    """Create a non-tracking tensor from array-like `data` (always copied)."""
    return Tensor(data, dtype=dtype)


__all__ = [
    "tensor",
    "ops",
    "backward",
    "DEFAULT_DTYPE",
    Tensor.__name__,
    Gradients.__name__,
    GradientTape.__name__,
    NoTape.__name__,
    OwnsTape.__name__,
    DifferentiableFunction.__name__,
    IdAllocator.__name__,
    UniqueId.__name__,
    unique_id.__name__,
    TapegradError.__name__,
    DegenerateReductionError.__name__,
    ShapeMismatchError.__name__,
    TapeConsumedError.__name__,
    TapeOwnershipError.__name__,
    TapeProvenanceError.__name__,
    TrackingModeError.__name__,
    UnknownIdentityError.__name__,
]
