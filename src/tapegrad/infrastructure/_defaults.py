"""
Library-wide numeric defaults.

Tensors built from anything but floating NumPy input (Python floats and ints,
nested lists, integer arrays) are stored with `DEFAULT_DTYPE`; floating NumPy
input keeps its own dtype.
Gradient tapes accumulate in the dtype of the tensor that started tracing.
"""

import numpy as np

DEFAULT_DTYPE = np.float32
