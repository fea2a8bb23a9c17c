"""
Backend-agnostic contracts of the tapegrad autograd engine.

The domain layer holds interfaces, the identity allocator and the error
taxonomy. It does not import NumPy.
"""

from ._errors import (
    DegenerateReductionError,
    ShapeMismatchError,
    TapeConsumedError,
    TapegradError,
    TapeOwnershipError,
    TapeProvenanceError,
    TrackingModeError,
    UnknownIdentityError,
)
from ._function import DifferentiableFunction
from ._identity import IdAllocator, UniqueId, unique_id
from ._tape_holder import IGradientTape, ITapeHolder
from ._tensor import ITensor

__all__ = [
    DegenerateReductionError.__name__,
    ShapeMismatchError.__name__,
    TapeConsumedError.__name__,
    TapegradError.__name__,
    TapeOwnershipError.__name__,
    TapeProvenanceError.__name__,
    TrackingModeError.__name__,
    UnknownIdentityError.__name__,
    DifferentiableFunction.__name__,
    IdAllocator.__name__,
    UniqueId.__name__,
    unique_id.__name__,
    IGradientTape.__name__,
    ITapeHolder.__name__,
    ITensor.__name__,
]
