"""
Tensor method mixins.

The mixins only delegate; implementations live in ``infrastructure.ops``.
"""

from ._reduction import TensorMixinReduction
from ._unary import TensorMixinUnary

__all__ = [
    TensorMixinReduction.__name__,
    TensorMixinUnary.__name__,
]
