"""
Core activation and elementwise function implementations.

Each class here is a `DifferentiableFunction`: a stateless pair of vectorised
NumPy mappings ``f`` (forward value) and ``df`` (derivative evaluated at the
original input). The unary-op layer binds them to the shared recording
machinery; none of them knows about tapes.

Notes
-----
- Functions preserve the input dtype.
- Behaviour outside a function's domain (e.g. ``ln`` of a non-positive value)
  follows NumPy semantics (``-inf``/``nan`` with a NumPy RuntimeWarning).
"""

import numpy as np

from ..domain._function import DifferentiableFunction


class ReLU(DifferentiableFunction):
    """
    Rectified linear unit.

    Implements::

        f(x)  = max(x, 0)
        df(x) = 1 if x > 0 else 0

    The derivative at exactly 0 is taken to be 0.
    """

    @staticmethod
    def f(x: np.ndarray) -> np.ndarray:
        return np.maximum(x, 0).astype(x.dtype, copy=False)

    @staticmethod
    def df(x: np.ndarray) -> np.ndarray:
        return (x > 0).astype(x.dtype)


class Sin(DifferentiableFunction):
    """Sine: ``f = sin(x)``, ``df = cos(x)``."""

    @staticmethod
    def f(x: np.ndarray) -> np.ndarray:
        return np.sin(x)

    @staticmethod
    def df(x: np.ndarray) -> np.ndarray:
        return np.cos(x)


class Cos(DifferentiableFunction):
    """Cosine: ``f = cos(x)``, ``df = -sin(x)``."""

    @staticmethod
    def f(x: np.ndarray) -> np.ndarray:
        return np.cos(x)

    @staticmethod
    def df(x: np.ndarray) -> np.ndarray:
        return -np.sin(x)


class Ln(DifferentiableFunction):
    """Natural logarithm: ``f = ln(x)``, ``df = 1 / x``."""

    @staticmethod
    def f(x: np.ndarray) -> np.ndarray:
        return np.log(x)

    @staticmethod
    def df(x: np.ndarray) -> np.ndarray:
        return np.reciprocal(x)


class Exp(DifferentiableFunction):
    """Exponential: ``f = exp(x)``, ``df = exp(x)``."""

    @staticmethod
    def f(x: np.ndarray) -> np.ndarray:
        return np.exp(x)

    @staticmethod
    def df(x: np.ndarray) -> np.ndarray:
        return np.exp(x)


class Sigmoid(DifferentiableFunction):
    """
    Logistic sigmoid.

    Implements::

        f(x)  = 1 / (1 + exp(-x))
        df(x) = f(x) * (1 - f(x))

    The forward value is computed as ``exp(-logaddexp(0, -x))``, which does
    not overflow for large negative inputs.
    """

    @staticmethod
    def f(x: np.ndarray) -> np.ndarray:
        return np.exp(-np.logaddexp(0, -x)).astype(x.dtype, copy=False)

    @staticmethod
    def df(x: np.ndarray) -> np.ndarray:
        s = Sigmoid.f(x)
        return s * (1 - s)


class Tanh(DifferentiableFunction):
    """Hyperbolic tangent: ``f = tanh(x)``, ``df = 1 - tanh(x) ** 2``."""

    @staticmethod
    def f(x: np.ndarray) -> np.ndarray:
        return np.tanh(x)

    @staticmethod
    def df(x: np.ndarray) -> np.ndarray:
        t = np.tanh(x)
        return 1 - t * t


class Square(DifferentiableFunction):
    """Square: ``f = x ** 2``, ``df = 2 * x``."""

    @staticmethod
    def f(x: np.ndarray) -> np.ndarray:
        return np.square(x)

    @staticmethod
    def df(x: np.ndarray) -> np.ndarray:
        return 2 * x


class Abs(DifferentiableFunction):
    """
    Absolute value: ``f = |x|``, ``df = sign(x)``.

    The derivative at exactly 0 is 0.
    """

    @staticmethod
    def f(x: np.ndarray) -> np.ndarray:
        return np.abs(x)

    @staticmethod
    def df(x: np.ndarray) -> np.ndarray:
        return np.sign(x)
