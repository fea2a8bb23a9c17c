"""
Backward entry point for tracking tensors.
"""

from __future__ import annotations

from ..domain._errors import TrackingModeError
from .tape._gradients import Gradients
from .tape._tape_holder import OwnsTape
from .tensor._tensor import Tensor


def backward(t: Tensor[OwnsTape]) -> Gradients:
    """
    Differentiate `t` with respect to everything recorded on its tape.

    The tape is split off `t` and consumed; `t` itself is left without a
    usable tape.

    Parameters
    ----------
    t : Tensor[OwnsTape]
        The tracking tensor to differentiate (typically a scalar loss).

    Returns
    -------
    Gradients
        Mapping from identity to gradient. ``grads.ref_gradient(t)`` is all
        ones.

    Raises
    ------
    TrackingModeError
        If `t` is not tracking.
    """
    if not t.is_tracking:
        raise TrackingModeError("backward", False)
    t, holder = t.split_tape_holder()
    tape = holder.into_tape()
    # A trace with no recorded operation still has a gradient for its seed.
    tape.gradient_ref_for(t.id, t.shape)
    return tape.backward(t.id)
