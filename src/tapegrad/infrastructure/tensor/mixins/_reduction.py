"""
Reduction mixin defining whole-tensor Tensor reductions.

Reductions produce a scalar (shape ``()``) tensor but record a derivative
shaped like their *input*: the backward pass multiplies the scalar output
gradient by that array, which lands directly in the input's gradient slot.
"""

from abc import ABC


class TensorMixinReduction(ABC):
    """
    Abstract mixin defining reduction operations.

    Notes
    -----
    Backward rules:

    - ``mean``: ``d mean(x) / d x_i = 1 / N``
    - ``sum``:  ``d sum(x) / d x_i = 1``
    """

    def mean(self):
        """
        Arithmetic mean of all elements.

        Raises
        ------
        DegenerateReductionError
            If the tensor has no elements.
        """
        from ...ops._reductions import mean

        return mean(self)

    def sum(self):
        """Sum of all elements (0 for an empty tensor)."""
        from ...ops._reductions import sum as _sum

        return _sum(self)
