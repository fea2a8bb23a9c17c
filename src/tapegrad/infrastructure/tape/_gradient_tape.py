"""
NumPy-backed gradient tape.

A `GradientTape` is the mutable heart of the autograd engine. During the
forward pass it grows by append only:

- gradient slots are allocated lazily, one per tensor identity, zero-filled
  and shaped like the tensor;
- derivative arrays computed by each operation are moved into a derivative
  store;
- one operation record per operation is appended to the log, linking the
  input slot, the derivative, and the output slot.

`backward` seeds one slot with ones, walks the log in strict reverse order and
accumulates ``grad[result] * deriv`` into ``grad[parent]`` by elementwise
addition. Addition is what makes fan-out correct: every consumer of a value
pushes an independent contribution into the same slot.

A tape is consumed by `backward` and cannot be used afterwards.
"""

from __future__ import annotations

import logging
import warnings
from typing import Hashable, Optional

import numpy as np

from ...domain._errors import (
    ShapeMismatchError,
    TapeConsumedError,
    TapeProvenanceError,
    UnknownIdentityError,
)
from ...domain.types._numpy import NDArrayLike
from .._defaults import DEFAULT_DTYPE
from ._gradients import Gradients
from ._operations import DerivativeRef, GradientRef, Operation, UnaryOp

logger = logging.getLogger(__name__)


def _sum_to_shape(arr: np.ndarray, target_shape: tuple[int, ...]) -> np.ndarray:
    """
    Bring `arr` to `target_shape` by broadcasting and sum-reducing.

    Axes where `arr` is smaller than `target_shape` (including missing leading
    axes) are broadcast up; axes where `target_shape` has size 1 or is missing
    are summed away. This is a no-op when the shapes already agree. It lets a
    record whose derivative and result gradient broadcast to a different
    shape still land in the parent's slot.

    Raises
    ------
    ValueError
        If `arr` and `target_shape` are not broadcast-compatible.
    """
    if arr.shape == target_shape:
        return arr

    try:
        full = np.broadcast_shapes(arr.shape, target_shape)
    except ValueError:
        raise ValueError(
            f"Cannot bring gradient of shape {arr.shape} to {target_shape}"
        ) from None
    if full != arr.shape:
        arr = np.broadcast_to(arr, full)

    pad = len(full) - len(target_shape)
    padded_tgt = (1,) * pad + tuple(target_shape)
    axes = tuple(
        i for i, (sd, td) in enumerate(zip(full, padded_tgt)) if td == 1 and sd != 1
    )
    out = arr.sum(axis=axes, keepdims=True) if axes else arr
    return out.reshape(target_shape)


class GradientTape:
    """
    Append-only operation log with derivative storage and gradient slots.

    Parameters
    ----------
    dtype : np.dtype, optional
        Element type of the gradient slots. Defaults to `DEFAULT_DTYPE`.

    Notes
    -----
    - References handed out by `gradient_ref_for` and `store_derivative`
      carry a provenance token; passing them to another tape raises
      `TapeProvenanceError`.
    - The tape is owned by exactly one tape holder at a time. It performs no
      locking of its own.
    """

    def __init__(self, dtype: Optional[np.dtype] = None) -> None:
        self._token = object()
        self._dtype = np.dtype(DEFAULT_DTYPE if dtype is None else dtype)
        self._operations: list[Operation] = []
        self._derivatives: list[np.ndarray] = []
        self._slots: list[np.ndarray] = []
        self._slot_ids: list[Hashable] = []
        self._slot_index: dict[Hashable, int] = {}
        self._consumed = False

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def dtype(self) -> np.dtype:
        """Element type of the gradient slots."""
        return self._dtype

    @property
    def consumed(self) -> bool:
        """Whether `backward` has already run on this tape."""
        return self._consumed

    @property
    def num_operations(self) -> int:
        """Number of operation records in the log."""
        return len(self._operations)

    def __len__(self) -> int:
        return len(self._operations)

    def __repr__(self) -> str:
        state = "consumed" if self._consumed else f"{len(self._operations)} ops"
        return f"GradientTape({state}, {len(self._slots)} slots)"

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------
    def gradient_ref_for(
        self, identity: Hashable, shape: tuple[int, ...]
    ) -> GradientRef:
        """
        Return the gradient slot for `identity`, allocating it on first use.

        Parameters
        ----------
        identity : Hashable
            Tensor identity keying the slot.
        shape : tuple[int, ...]
            Shape of the tensor. Fixed at first allocation.

        Returns
        -------
        GradientRef
            Reference to the (possibly pre-existing) slot.

        Raises
        ------
        ShapeMismatchError
            If `identity` already has a slot of a different shape.
        TapeConsumedError
            If the tape was consumed by `backward`.
        """
        self._ensure_live("allocate a gradient slot")
        shape = tuple(int(d) for d in shape)

        index = self._slot_index.get(identity)
        if index is None:
            index = len(self._slots)
            self._slots.append(np.zeros(shape, dtype=self._dtype))
            self._slot_ids.append(identity)
            self._slot_index[identity] = index
        elif self._slots[index].shape != shape:
            raise ShapeMismatchError(identity, self._slots[index].shape, shape)

        return GradientRef(index=index, owner=self._token)

    def store_derivative(self, deriv: NDArrayLike) -> DerivativeRef:
        """
        Move `deriv` into the derivative store.

        The array is kept as given (no copy); callers hand over ownership.

        Returns
        -------
        DerivativeRef
            Handle usable only with this tape.
        """
        self._ensure_live("store a derivative")
        self._derivatives.append(np.asarray(deriv))
        return DerivativeRef(index=len(self._derivatives) - 1, owner=self._token)

    def add_operation(self, op: Operation) -> None:
        """
        Append an operation record to the log.

        Raises
        ------
        TapeProvenanceError
            If any reference in `op` was issued by another tape.
        ShapeMismatchError
            If the derivative times the result gradient cannot broadcast into
            the parent's slot. Checked here so that `backward` never fails
            halfway through the sweep.
        TypeError
            If `op` is not a known operation record.
        """
        self._ensure_live("record an operation")
        match op:
            case UnaryOp(parent_grad=parent, parent_deriv=deriv, result_grad=result):
                for ref in (parent, deriv, result):
                    self._check_provenance(ref)
                self._check_broadcast(parent, deriv, result)
            case _:
                raise TypeError(f"Unsupported operation record: {op!r}")
        self._operations.append(op)

    # ------------------------------------------------------------------
    # Backward
    # ------------------------------------------------------------------
    def backward(self, seed: Hashable) -> Gradients:
        """
        Compute gradients of `seed` with respect to every recorded identity.

        The slot for `seed` is filled with ones (``d seed / d seed = 1``), then
        the log is scanned in reverse and each record's contribution is added
        into its parent's slot.

        Parameters
        ----------
        seed : Hashable
            Identity of the value being differentiated.

        Returns
        -------
        Gradients
            Read-only mapping from identity to accumulated gradient.

        Raises
        ------
        UnknownIdentityError
            If `seed` has no slot on this tape.
        TapeConsumedError
            If the tape was already consumed.
        """
        self._ensure_live("run backward")

        seed_index = self._slot_index.get(seed)
        if seed_index is None:
            raise UnknownIdentityError(seed)

        logger.debug(
            "backward from %r over %d operations", seed, len(self._operations)
        )

        slots = self._slots
        derivatives = self._derivatives
        slots[seed_index].fill(1)

        for op in reversed(self._operations):
            match op:
                case UnaryOp(parent_grad=parent, parent_deriv=deriv, result_grad=result):
                    contribution = slots[result.index] * derivatives[deriv.index]
                    parent_slot = slots[parent.index]
                    parent_slot += _sum_to_shape(contribution, parent_slot.shape)
                case _:
                    raise TypeError(f"Unsupported operation record: {op!r}")

        grads = dict(zip(self._slot_ids, slots))
        self._consume()
        logger.debug("backward produced %d gradients; tape consumed", len(grads))

        non_finite = [k for k, g in grads.items() if not np.all(np.isfinite(g))]
        if non_finite:
            warnings.warn(
                f"Non-finite gradients accumulated for {non_finite!r}.",
                RuntimeWarning,
                stacklevel=2,
            )

        return Gradients(grads)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _ensure_live(self, op: str) -> None:
        if self._consumed:
            raise TapeConsumedError(op)

    def _check_provenance(self, ref: GradientRef | DerivativeRef) -> None:
        if ref.owner is not self._token:
            raise TapeProvenanceError(ref)

    def _check_broadcast(
        self, parent: GradientRef, deriv: DerivativeRef, result: GradientRef
    ) -> None:
        parent_shape = self._slots[parent.index].shape
        deriv_shape = self._derivatives[deriv.index].shape
        try:
            np.broadcast_shapes(
                self._slots[result.index].shape, deriv_shape, parent_shape
            )
        except ValueError:
            raise ShapeMismatchError(
                self._slot_ids[parent.index],
                parent_shape,
                deriv_shape,
                source="the recorded derivative",
            ) from None

    def _consume(self) -> None:
        self._consumed = True
        self._operations = []
        self._derivatives = []
        self._slots = []
        self._slot_ids = []
        self._slot_index = {}
