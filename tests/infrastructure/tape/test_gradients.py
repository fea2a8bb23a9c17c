import unittest

import numpy as np

from tapegrad.domain._errors import UnknownIdentityError
from tapegrad.domain._identity import UniqueId
from tapegrad.infrastructure.tape._gradients import Gradients
from tapegrad.infrastructure.tensor._tensor import Tensor


class TestGradients(unittest.TestCase):

    def setUp(self) -> None:
        self.a = UniqueId(1)
        self.b = UniqueId(2)
        self.grads = Gradients(
            {self.a: np.ones((2,)), self.b: np.zeros((3,), dtype=np.float32)}
        )

    def test_mapping_protocol(self) -> None:
        self.assertEqual(len(self.grads), 2)
        self.assertEqual(set(self.grads), {self.a, self.b})
        self.assertIn(self.a, self.grads)
        self.assertNotIn(UniqueId(3), self.grads)
        self.assertIsNone(self.grads.get(UniqueId(3)))

    def test_arrays_are_read_only(self) -> None:
        with self.assertRaises(ValueError):
            self.grads[self.a][0] = 5.0

    def test_missing_identity(self) -> None:
        with self.assertRaises(UnknownIdentityError):
            self.grads[UniqueId(3)]
        with self.assertRaises(KeyError):
            self.grads[UniqueId(3)]

    def test_ref_gradient_uses_tensor_identity(self) -> None:
        t = Tensor([1.0, 2.0])
        grads = Gradients({t.id: np.array([0.5, 0.25])})

        np.testing.assert_array_equal(grads.ref_gradient(t), [0.5, 0.25])
        np.testing.assert_array_equal(grads.ref_gradient(t.duplicate()), [0.5, 0.25])

    def test_repr_lists_shapes(self) -> None:
        self.assertIn("shape=(3,)", repr(self.grads))


if __name__ == "__main__":
    unittest.main()
