"""
Gradient tape, operation records and tape holders.
"""

from ._gradient_tape import GradientTape
from ._gradients import Gradients
from ._operations import DerivativeRef, GradientRef, Operation, UnaryOp
from ._tape_holder import NoTape, OwnsTape

__all__ = [
    GradientTape.__name__,
    Gradients.__name__,
    DerivativeRef.__name__,
    GradientRef.__name__,
    "Operation",
    UnaryOp.__name__,
    NoTape.__name__,
    OwnsTape.__name__,
]
