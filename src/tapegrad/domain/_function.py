"""
Differentiable function interface definitions.

This module defines the abstract base class for the elementwise functions the
autograd engine knows how to apply. A `DifferentiableFunction` is a pure pair
of mappings:

- ``f(x)``: the forward value,
- ``df(x)``: the local derivative with respect to the input, evaluated at the
  *original* input ``x`` (not at the output).

Both mappings are applied elementwise over a whole array at once. The engine
never needs to know which function it is applying: it records ``df(x)`` on the
gradient tape and lets the backward pass multiply by it.
"""

from abc import ABC, abstractmethod

from .types._numpy import NDArrayLike


class DifferentiableFunction(ABC):
    """
    Abstract base class for elementwise differentiable functions.

    Subclasses implement `f` and `df` as static methods; the class itself is
    used as a stateless strategy object and is never instantiated.

    Notes
    -----
    - Both methods must be pure and shape-preserving.
    - `df` receives the same input as `f`. Functions whose derivative is
      cheaper to express through the output (e.g. ``exp``) recompute the
      forward value inside `df`.
    """

    @staticmethod
    @abstractmethod
    def f(x: NDArrayLike) -> NDArrayLike:
        """
        Compute the forward value elementwise.

        Parameters
        ----------
        x : NDArrayLike
            Input array.

        Returns
        -------
        NDArrayLike
            Array of the same shape as `x`.
        """
        ...

    @staticmethod
    @abstractmethod
    def df(x: NDArrayLike) -> NDArrayLike:
        """
        Compute the derivative ``d f(x) / dx`` elementwise.

        Parameters
        ----------
        x : NDArrayLike
            The original input array passed to `f`.

        Returns
        -------
        NDArrayLike
            Array of the same shape as `x`.
        """
        ...
