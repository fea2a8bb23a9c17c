"""
Domain-level structural typing for NumPy-like n-dimensional arrays.

This module defines :class:`NDArrayLike`, a backend-agnostic Protocol for the
small subset of ``ndarray`` behaviour the domain contracts talk about, so the
domain layer can describe array-valued data without importing NumPy.

Typical implementers include ``numpy.ndarray`` and read-only views of it.
"""

from __future__ import annotations

from typing import Any, Protocol, Tuple, runtime_checkable


@runtime_checkable
class NDArrayLike(Protocol):
    """
    Structural interface for objects that behave like NumPy ndarrays.

    Notes
    -----
    - Only the attributes the autograd contracts rely on are modelled: the
      shape, the element count, the dtype, and NumPy interop.
    - Exact semantics (view vs copy, broadcasting) are backend-defined.
    """

    @property
    def shape(self) -> Tuple[int, ...]:
        """Size of each dimension."""
        ...

    @property
    def size(self) -> int:
        """Total number of elements (product of :pyattr:`shape`)."""
        ...

    @property
    def dtype(self) -> Any:
        """Backend-defined element type descriptor."""
        ...

    def __array__(self, dtype: Any = ...) -> Any:
        """Return a backend-native array (enables ``np.asarray(obj)``)."""
        ...
