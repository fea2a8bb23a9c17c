"""
Unary operation mixin defining elementwise Tensor activation APIs.

This module declares :class:`TensorMixinUnary`, which exposes every
elementwise differentiable function as a Tensor method in two flavours:

- ``t.sin()`` and friends record onto the tensor's tape when it is tracking
  (and simply compute the value otherwise);
- ``t.sin_()`` and friends never touch a tape and refuse tracking tensors.

The methods are thin delegations. Numerical kernels live in
``infrastructure._functions``, the recording logic in ``infrastructure.ops``.
Imports are deferred to call time to avoid import cycles with the Tensor
class.
"""

from abc import ABC


class TensorMixinUnary(ABC):
    """
    Abstract mixin defining elementwise unary tensor operations.

    Notes
    -----
    Derivatives recorded on the tape (``df`` evaluated at the input ``x``):

    ========  ==============================
    relu      ``1 if x > 0 else 0``
    sin       ``cos(x)``
    cos       ``-sin(x)``
    ln        ``1 / x``
    exp       ``exp(x)``
    sigmoid   ``sigmoid(x) * (1 - sigmoid(x))``
    tanh      ``1 - tanh(x) ** 2``
    square    ``2 * x``
    abs       ``sign(x)``
    ========  ==============================
    """

    def _apply(self, fn):
        from ...ops._unary_ops import apply

        return apply(self, fn)

    def _apply_ref(self, fn):
        from ...ops._unary_ops import apply_ref

        return apply_ref(self, fn)

    # ----------------------------
    # Recording variants
    # ----------------------------
    def relu(self):
        """Elementwise ``max(x, 0)``."""
        from ..._functions import ReLU

        return self._apply(ReLU)

    def sin(self):
        """Elementwise sine."""
        from ..._functions import Sin

        return self._apply(Sin)

    def cos(self):
        """Elementwise cosine."""
        from ..._functions import Cos

        return self._apply(Cos)

    def ln(self):
        """Elementwise natural logarithm."""
        from ..._functions import Ln

        return self._apply(Ln)

    def exp(self):
        """Elementwise exponential."""
        from ..._functions import Exp

        return self._apply(Exp)

    def sigmoid(self):
        """Elementwise logistic sigmoid."""
        from ..._functions import Sigmoid

        return self._apply(Sigmoid)

    def tanh(self):
        """Elementwise hyperbolic tangent."""
        from ..._functions import Tanh

        return self._apply(Tanh)

    def square(self):
        """Elementwise ``x ** 2``."""
        from ..._functions import Square

        return self._apply(Square)

    def abs(self):
        """Elementwise absolute value."""
        from ..._functions import Abs

        return self._apply(Abs)

    # ----------------------------
    # Non-recording variants
    # ----------------------------
    def relu_(self):
        from ..._functions import ReLU

        return self._apply_ref(ReLU)

    def sin_(self):
        from ..._functions import Sin

        return self._apply_ref(Sin)

    def cos_(self):
        from ..._functions import Cos

        return self._apply_ref(Cos)

    def ln_(self):
        from ..._functions import Ln

        return self._apply_ref(Ln)

    def exp_(self):
        from ..._functions import Exp

        return self._apply_ref(Exp)

    def sigmoid_(self):
        from ..._functions import Sigmoid

        return self._apply_ref(Sigmoid)

    def tanh_(self):
        from ..._functions import Tanh

        return self._apply_ref(Tanh)

    def square_(self):
        from ..._functions import Square

        return self._apply_ref(Square)

    def abs_(self):
        from ..._functions import Abs

        return self._apply_ref(Abs)
