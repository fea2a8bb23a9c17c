"""
Autograd bookkeeping exceptions for tapegrad.

This module defines the runtime errors raised when the gradient tape or the
tensors that carry it are misused. Every error here signals a programming
fault (a violated invariant), never a transient condition: nothing in the
engine performs I/O, so nothing is retried.

The errors are intentionally explicit and carry the offending values as
attributes to make debugging straightforward.
"""

from __future__ import annotations

from typing import Any, Optional


class TapegradError(RuntimeError):
    """
    Base class for all tapegrad errors.

    Catching `TapegradError` catches every invariant violation raised by the
    engine, regardless of which component detected it.
    """


class ShapeMismatchError(TapegradError, ValueError):
    """
    Raised when a gradient slot is requested for an identity that already
    owns a slot of a different shape, or when a recorded derivative cannot
    broadcast into its parent's slot.

    Gradient slots are allocated once per identity per tape and their shape
    is fixed at allocation. A conflicting request means an upstream operation
    reported the wrong shape for a tensor.

    Attributes
    ----------
    identity : Any
        The identity whose slot was requested.
    expected : tuple[int, ...]
        Shape of the existing slot.
    actual : tuple[int, ...]
        Shape of the conflicting request or derivative.
    """

    def __init__(
        self,
        identity: Any,
        expected: tuple[int, ...],
        actual: tuple[int, ...],
        *,
        source: Optional[str] = None,
    ) -> None:
        """
        Initialize the ShapeMismatchError.

        Parameters
        ----------
        identity : Any
            The identity whose slot was requested.
        expected : tuple[int, ...]
            Shape of the existing slot.
        actual : tuple[int, ...]
            Shape of the conflicting request or derivative.
        source : str, optional
            What carried the `actual` shape. Defaults to a slot request.
        """
        if source is None:
            msg = (
                f"Gradient slot for {identity!r} has shape {expected}, "
                f"but shape {actual} was requested."
            )
        else:
            msg = (
                f"Gradient slot for {identity!r} has shape {expected}, "
                f"which {source} of shape {actual} cannot broadcast into."
            )
        super().__init__(msg)
        self.identity = identity
        self.expected = expected
        self.actual = actual


class DegenerateReductionError(TapegradError, ValueError):
    """
    Raised when a reduction is undefined for its input (e.g. `mean` over a
    tensor with zero elements).

    Attributes
    ----------
    op : str
        Name of the reduction (e.g. "mean").
    shape : tuple[int, ...]
        Shape of the rejected input.
    """

    def __init__(self, op: str, shape: tuple[int, ...]) -> None:
        super().__init__(f"{op} is undefined for a tensor with shape {shape}.")
        self.op = op
        self.shape = shape


class TapeProvenanceError(TapegradError):
    """
    Raised when a gradient or derivative reference issued by one tape is
    handed to another tape.
    """

    def __init__(self, ref: Any) -> None:
        super().__init__(f"{ref!r} was not issued by this tape.")
        self.ref = ref


class TapeConsumedError(TapegradError):
    """
    Raised when a gradient tape is used after `backward` consumed it.

    Attributes
    ----------
    op : str
        The tape operation that was attempted.
    """

    def __init__(self, op: str) -> None:
        super().__init__(
            f"Cannot {op}: the gradient tape was consumed by backward()."
        )
        self.op = op


class TapeOwnershipError(TapegradError):
    """
    Raised when a tape holder whose tape has already been moved elsewhere is
    used again.

    A tracking tape holder is linear: its tape moves from one tensor to the
    next and is never shared. Splitting the same tensor twice, or attaching
    one holder to two tensors, would alias the tape; both are refused.
    """

    def __init__(self, op: str) -> None:
        super().__init__(
            f"Cannot {op}: the tape held here has already been moved to another tensor."
        )
        self.op = op


class TrackingModeError(TapegradError, TypeError):
    """
    Raised when an operation receives a tensor in the wrong tracking mode.

    Examples are calling a non-recording `*_` operation on a tracking tensor,
    calling `backward` on a tensor that carries no tape, or tracing a tensor
    that is already being traced.

    Attributes
    ----------
    op : str
        The operation that was attempted.
    tracking : bool
        Whether the offending tensor was in tracking mode.
    """

    def __init__(self, op: str, tracking: bool) -> None:
        mode = "tracking" if tracking else "non-tracking"
        super().__init__(f"{op} cannot be applied to a {mode} tensor.")
        self.op = op
        self.tracking = tracking


class UnknownIdentityError(TapegradError, KeyError):
    """
    Raised when an identity has no gradient slot (on a tape, or in a
    `Gradients` mapping returned by backward).
    """

    def __init__(self, identity: Any) -> None:
        super().__init__(f"No gradient recorded for {identity!r}.")
        self.identity = identity

    def __str__(self) -> str:
        return RuntimeError.__str__(self)
