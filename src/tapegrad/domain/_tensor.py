"""
Tensor interface definitions.

This module defines the domain-level interface for tensor-like values that
flow through the autograd engine. The interface captures exactly what the
recording machinery needs: an identity to key gradient slots, a shape to size
them, the array data, and the tape holder that travels with the value.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ._identity import UniqueId
from ._tape_holder import ITapeHolder
from .types._numpy import NDArrayLike


@runtime_checkable
class ITensor(Protocol):
    """
    Tensor interface.

    Notes
    -----
    - Tensors are logically immutable. Operations produce new tensors.
    - Two tensor objects may share an identity (a value and its tape-less
      split); they then address the same gradient slot.
    """

    @property
    def id(self) -> UniqueId:
        """Identity used to key gradient slots."""
        ...

    @property
    def shape(self) -> tuple[int, ...]:
        """Shape of the tensor data."""
        ...

    @property
    def data(self) -> NDArrayLike:
        """Read-only view of the tensor data."""
        ...

    @property
    def tape_holder(self) -> ITapeHolder:
        """The tape holder carried by this tensor."""
        ...

    def numel(self) -> int:
        """Total number of elements."""
        ...

    def split_tape_holder(self) -> tuple["ITensor", ITapeHolder]:
        """Detach the tape holder, returning a tape-less copy and the holder."""
        ...

    def with_tape_holder(self, holder: ITapeHolder) -> "ITensor":
        """Return a tensor with the same identity and data carrying `holder`."""
        ...
