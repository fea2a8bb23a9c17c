"""
NumPy-backed tensor.

A `Tensor` bundles three things:

- an immutable NumPy array (private copy, marked read-only),
- a `UniqueId` used by gradient tapes to key gradient slots,
- a tape holder (`NoTape` or `OwnsTape`) deciding whether operations on the
  tensor are recorded.

Tensors are never mutated. Operations split the tape holder off their input,
compute a new tensor, and attach the holder to it; the tape therefore always
travels with the last tensor produced in a forward chain.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, Optional, TypeVar

import numpy as np
from typing_extensions import Self

from ...domain._errors import TapeOwnershipError, TrackingModeError
from ...domain._identity import UniqueId, unique_id
from ...domain._tape_holder import ITapeHolder
from .._defaults import DEFAULT_DTYPE
from ..tape._gradient_tape import GradientTape
from ..tape._gradients import Gradients
from ..tape._tape_holder import NoTape, OwnsTape
from .mixins import TensorMixinReduction, TensorMixinUnary

logger = logging.getLogger(__name__)

H = TypeVar("H", bound=ITapeHolder)


def _resolve_dtype(data: Any, dtype: Optional[Any]) -> np.dtype:
    """Pick the storage dtype: explicit, else floating NumPy dtype, else default."""
    if dtype is not None:
        return np.dtype(dtype)
    if isinstance(data, (np.ndarray, np.generic)) and np.issubdtype(
        data.dtype, np.floating
    ):
        return data.dtype
    return np.dtype(DEFAULT_DTYPE)


class Tensor(TensorMixinUnary, TensorMixinReduction, Generic[H]):
    """
    Immutable n-dimensional value participating in tape-based autograd.

    Parameters
    ----------
    data : array_like
        Initial values. Always copied.
    dtype : np.dtype, optional
        Storage dtype. Defaults to the dtype of floating NumPy input, and to
        `DEFAULT_DTYPE` for everything else (Python scalars and lists included).
    tape_holder : ITapeHolder, optional
        Holder to attach. Its contents are moved into the new tensor. Defaults
        to `NoTape()`.

    Notes
    -----
    - The type parameter ``H`` records the holder type statically, so
      signatures such as ``apply_ref(t: Tensor[NoTape], ...)`` can be checked
      by a type checker. Runtime checks back every such signature.
    - Two tensor objects can share an identity (see `split_tape_holder` and
      `duplicate`); they then refer to the same gradient slot on a tape.
    """

    def __init__(
        self,
        data: Any,
        *,
        dtype: Optional[Any] = None,
        tape_holder: Optional[H] = None,
    ) -> None:
        arr = np.array(data, dtype=_resolve_dtype(data, dtype), copy=True)
        arr.setflags(write=False)
        self._data: np.ndarray = arr
        self._id: UniqueId = unique_id()
        self._tape_holder: ITapeHolder = (
            NoTape() if tape_holder is None else tape_holder.detach()
        )

    @classmethod
    def _wrap(
        cls, data: np.ndarray, identity: UniqueId, holder: ITapeHolder
    ) -> Self:
        """Build a tensor around already-frozen `data` without copying."""
        t = cls.__new__(cls)
        t._data = data
        t._id = identity
        t._tape_holder = holder
        return t

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------
    @classmethod
    def zeros(cls, shape: tuple[int, ...], *, dtype: Optional[Any] = None) -> Self:
        """Create a non-tracking tensor of zeros."""
        return cls(np.zeros(shape, dtype=DEFAULT_DTYPE if dtype is None else dtype))

    @classmethod
    def ones(cls, shape: tuple[int, ...], *, dtype: Optional[Any] = None) -> Self:
        """Create a non-tracking tensor of ones."""
        return cls(np.ones(shape, dtype=DEFAULT_DTYPE if dtype is None else dtype))

    @classmethod
    def randn(
        cls,
        shape: tuple[int, ...],
        *,
        dtype: Optional[Any] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> Self:
        """
        Create a non-tracking tensor of standard-normal samples.

        Parameters
        ----------
        shape : tuple[int, ...]
            Output shape.
        dtype : np.dtype, optional
            Storage dtype. Defaults to `DEFAULT_DTYPE`.
        rng : np.random.Generator, optional
            Random generator to draw from. A fresh default generator is used
            when omitted.
        """
        rng = np.random.default_rng() if rng is None else rng
        dtype = DEFAULT_DTYPE if dtype is None else dtype
        return cls(rng.standard_normal(shape), dtype=dtype)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def id(self) -> UniqueId:
        """Identity keying this tensor's gradient slot."""
        return self._id

    @property
    def data(self) -> np.ndarray:
        """Read-only view of the tensor data."""
        return self._data

    @property
    def shape(self) -> tuple[int, ...]:
        return self._data.shape

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def tape_holder(self) -> ITapeHolder:
        return self._tape_holder

    @property
    def is_tracking(self) -> bool:
        """Whether operations on this tensor are recorded onto a tape."""
        return self._tape_holder.is_tracking

    @property
    def num_elements(self) -> int:
        """Total number of elements (``prod(shape)``)."""
        return int(self._data.size)

    def numel(self) -> int:
        """Return the total number of elements."""
        return int(self._data.size)

    def to_numpy(self) -> np.ndarray:
        """Return a writable copy of the tensor data."""
        return self._data.copy()

    def item(self) -> float:
        """
        Return the value of a single-element tensor as a Python float.

        Raises
        ------
        ValueError
            If the tensor does not hold exactly one element.
        """
        if self._data.size != 1:
            raise ValueError(
                f"item() requires a single-element tensor, got shape {self.shape}"
            )
        return float(self._data.reshape(()))

    def __repr__(self) -> str:
        return (
            f"Tensor(shape={self.shape}, dtype={self.dtype}, id={self._id!r}, "
            f"tape_holder={self._tape_holder!r})"
        )

    # ------------------------------------------------------------------
    # Tape holder hand-off
    # ------------------------------------------------------------------
    def split_tape_holder(self) -> tuple["Tensor[NoTape]", H]:
        """
        Detach the tape holder from this tensor.

        Returns
        -------
        tuple[Tensor[NoTape], ITapeHolder]
            A tape-less tensor with the same identity and data, and the holder
            that now owns this tensor's tape (if any).

        Raises
        ------
        TapeOwnershipError
            If this tensor's tape was already moved elsewhere.
        """
        holder = self._tape_holder.detach()
        return Tensor._wrap(self._data, self._id, NoTape()), holder

    def with_tape_holder(self, holder: H) -> "Tensor[H]":
        """
        Return a tensor with the same identity and data carrying `holder`.

        The holder's contents are moved: `holder` itself is left spent.
        """
        return Tensor._wrap(self._data, self._id, holder.detach())

    def put_tape(self, holder: H) -> "Tensor[H]":
        """Alias of `with_tape_holder`."""
        return self.with_tape_holder(holder)

    def trace(self) -> "Tensor[OwnsTape]":
        """
        Start recording operations on this value.

        Returns
        -------
        Tensor[OwnsTape]
            Tensor with the same identity and data owning a fresh tape.

        Raises
        ------
        TapeOwnershipError
            If this tensor's tape was already moved to another tensor (the
            value was consumed by an operation).
        TrackingModeError
            If this tensor is already tracking.
        """
        holder = self._tape_holder
        if isinstance(holder, OwnsTape) and holder.is_spent:
            raise TapeOwnershipError("start tracing")
        if holder.is_tracking:
            raise TrackingModeError("trace", True)
        logger.debug("tracing started at %r", self._id)
        return self.with_tape_holder(OwnsTape(GradientTape(dtype=self.dtype)))

    def duplicate(self) -> "Tensor[NoTape]":
        """
        Return a non-tracking tensor sharing this tensor's identity and data.

        Use this to feed one value into several operations: attach the tape
        to one consumer's input at a time and every contribution accumulates
        into the same gradient slot.
        """
        return Tensor._wrap(self._data, self._id, NoTape())

    def backward(self) -> Gradients:
        """
        Run the backward pass seeded at this tensor.

        Consumes the tape carried by this tensor. See
        `tapegrad.infrastructure.backward`.
        """
        from .._backward import backward

        return backward(self)
