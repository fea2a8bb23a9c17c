"""
Concrete tape holders: `NoTape` and `OwnsTape`.

Every tensor carries one of these. Operation code detaches the holder from its
input, lets it record onto its tape (if any) through `update_with`, and
attaches it to the output. With `NoTape` the mutator is never called, so the
non-tracking path performs no tape work at all while sharing the exact same
operation code.

`OwnsTape` enforces linear ownership at runtime: `detach` moves the tape into
a fresh holder and empties the original, so a tape is reachable from exactly
one live holder. Touching an emptied holder raises `TapeOwnershipError`.
"""

from __future__ import annotations

from typing import Callable, Optional

from ...domain._errors import TapeOwnershipError
from ...domain._tape_holder import ITapeHolder
from ._gradient_tape import GradientTape


class NoTape(ITapeHolder):
    """
    Non-tracking tape holder.

    Carries nothing; `update_with` is a no-op. Instances are stateless, so
    `detach` returns the holder itself.
    """

    __slots__ = ()

    @property
    def is_tracking(self) -> bool:
        return False

    def update_with(self, mutator: Callable[[GradientTape], None]) -> None:
        return None

    def detach(self) -> "NoTape":
        return self

    def __repr__(self) -> str:
        return "NoTape()"


class OwnsTape(ITapeHolder):
    """
    Tracking tape holder owning exactly one `GradientTape`.

    Parameters
    ----------
    tape : GradientTape
        The tape to own. The caller must not keep using it directly.
    """

    __slots__ = ("_tape",)

    def __init__(self, tape: GradientTape) -> None:
        self._tape: Optional[GradientTape] = tape

    @property
    def is_tracking(self) -> bool:
        return True

    @property
    def is_spent(self) -> bool:
        """Whether the tape has been moved out of this holder."""
        return self._tape is None

    def update_with(self, mutator: Callable[[GradientTape], None]) -> None:
        """Apply `mutator` to the owned tape in place."""
        mutator(self._require("record onto the tape"))

    def detach(self) -> "OwnsTape":
        """Move the tape into a new holder, leaving this one spent."""
        tape = self._require("move the tape")
        self._tape = None
        return OwnsTape(tape)

    def into_tape(self) -> GradientTape:
        """Take the tape out of the holder for good (used by backward)."""
        tape = self._require("take the tape")
        self._tape = None
        return tape

    def _require(self, op: str) -> GradientTape:
        if self._tape is None:
            raise TapeOwnershipError(op)
        return self._tape

    def __repr__(self) -> str:
        return "OwnsTape(<spent>)" if self._tape is None else f"OwnsTape({self._tape!r})"
