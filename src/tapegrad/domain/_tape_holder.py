"""
Gradient tape and tape holder interfaces.

A gradient tape records, during a forward pass, enough information to compute
gradients later with one reverse sweep. Tensors never reference a tape
directly; they carry a *tape holder*, which comes in two variants:

- a non-tracking holder that carries nothing and ignores every update,
- a tracking holder that exclusively owns exactly one tape.

Operation code is written once against `ITapeHolder.update_with` and works
identically in both modes; the non-tracking variant simply never calls the
mutator.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Hashable, Mapping, Protocol, runtime_checkable

from .types._numpy import NDArrayLike


@runtime_checkable
class IGradientTape(Protocol):
    """
    Gradient tape interface.

    Notes
    -----
    References returned by `gradient_ref_for` and `store_derivative` are only
    meaningful to the tape that issued them.
    """

    def gradient_ref_for(self, identity: Hashable, shape: tuple[int, ...]) -> Any:
        """
        Return the gradient slot for `identity`, allocating a zero slot of
        `shape` on first request.
        """
        ...

    def store_derivative(self, deriv: NDArrayLike) -> Any:
        """Move `deriv` into the derivative store and return a handle to it."""
        ...

    def add_operation(self, op: Any) -> None:
        """Append an operation record to the log."""
        ...

    def backward(self, seed: Hashable) -> Mapping[Hashable, NDArrayLike]:
        """Run the reverse sweep from `seed` and consume the tape."""
        ...


class ITapeHolder(ABC):
    """
    Abstract tape holder.

    Concrete holders are linear: `detach` moves whatever they carry into a
    fresh holder and leaves the original empty, so a tape is never reachable
    from two live holders at once.
    """

    @property
    @abstractmethod
    def is_tracking(self) -> bool:
        """Whether operations on the owning tensor are recorded."""
        ...

    @abstractmethod
    def update_with(self, mutator: Callable[[IGradientTape], None]) -> None:
        """
        Apply `mutator` to the owned tape in place.

        Non-tracking holders do nothing.
        """
        ...

    @abstractmethod
    def detach(self) -> "ITapeHolder":
        """
        Move the contents of this holder into a new holder and return it.

        After this call the original holder no longer grants access to the
        tape.
        """
        ...
