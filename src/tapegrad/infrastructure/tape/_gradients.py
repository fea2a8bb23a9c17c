"""
Gradient mapping returned by a backward pass.
"""

from __future__ import annotations

from typing import Hashable, Iterator, Mapping

import numpy as np

from ...domain._errors import UnknownIdentityError
from ...domain._tensor import ITensor


class Gradients(Mapping[Hashable, np.ndarray]):
    """
    Immutable mapping from tensor identity to accumulated gradient.

    Every tensor that took part in a recorded operation has an entry, shaped
    like the tensor itself. The arrays are read-only.

    Parameters
    ----------
    grads : dict[Hashable, np.ndarray]
        Accumulated gradients keyed by identity. Ownership of the arrays is
        taken over by this mapping.
    """

    def __init__(self, grads: dict[Hashable, np.ndarray]) -> None:
        for g in grads.values():
            g.setflags(write=False)
        self._grads = grads

    def __getitem__(self, identity: Hashable) -> np.ndarray:
        try:
            return self._grads[identity]
        except KeyError:
            raise UnknownIdentityError(identity) from None

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._grads)

    def __len__(self) -> int:
        return len(self._grads)

    def ref_gradient(self, t: ITensor) -> np.ndarray:
        """
        Return the gradient accumulated for tensor `t`.

        Parameters
        ----------
        t : ITensor
            Any tensor carrying the identity of interest (tracking or not).

        Returns
        -------
        np.ndarray
            Read-only gradient array shaped like `t`.

        Raises
        ------
        UnknownIdentityError
            If `t` took no part in the recorded computation.
        """
        return self[t.id]

    def __repr__(self) -> str:
        entries = ", ".join(
            f"{k!r}: shape={v.shape}" for k, v in self._grads.items()
        )
        return f"Gradients({{{entries}}})"
