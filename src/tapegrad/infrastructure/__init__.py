"""
NumPy-backed implementations of the tapegrad contracts.
"""

from ._backward import backward
from ._defaults import DEFAULT_DTYPE
from ._functions import Abs, Cos, Exp, Ln, ReLU, Sigmoid, Sin, Square, Tanh
from .tape import (
    DerivativeRef,
    GradientRef,
    Gradients,
    GradientTape,
    NoTape,
    OwnsTape,
    UnaryOp,
)
from .tensor import Tensor

__all__ = [
    "backward",
    "DEFAULT_DTYPE",
    Abs.__name__,
    Cos.__name__,
    Exp.__name__,
    Ln.__name__,
    ReLU.__name__,
    Sigmoid.__name__,
    Sin.__name__,
    Square.__name__,
    Tanh.__name__,
    DerivativeRef.__name__,
    GradientRef.__name__,
    Gradients.__name__,
    GradientTape.__name__,
    NoTape.__name__,
    OwnsTape.__name__,
    UnaryOp.__name__,
    Tensor.__name__,
]
