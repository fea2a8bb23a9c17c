import unittest

import numpy as np

from tapegrad.domain._function import DifferentiableFunction
from tapegrad.infrastructure._functions import (
    Abs,
    Cos,
    Exp,
    Ln,
    ReLU,
    Sigmoid,
    Sin,
    Square,
    Tanh,
)


def central_diff(f, x: np.ndarray, eps: float = 1e-6) -> np.ndarray:
    """Elementwise central difference of an elementwise function."""
    return (f(x + eps) - f(x - eps)) / (2.0 * eps)


def sample_inputs(fn, rng: np.random.Generator, n: int = 64) -> np.ndarray:
    """Random float64 inputs inside `fn`'s domain, away from kinks."""
    if fn is Ln:
        return rng.uniform(0.1, 5.0, size=n)
    x = rng.uniform(-3.0, 3.0, size=n)
    if fn in (ReLU, Abs):
        x = np.where(np.abs(x) < 1e-2, 0.5, x)
    return x


ALL_FUNCTIONS = (ReLU, Sin, Cos, Ln, Exp, Sigmoid, Tanh, Square, Abs)


class TestDifferentiableFunctions(unittest.TestCase):

    def test_all_are_differentiable_functions(self) -> None:
        for fn in ALL_FUNCTIONS:
            self.assertTrue(issubclass(fn, DifferentiableFunction), fn.__name__)

    def test_abstract_base_cannot_be_instantiated(self) -> None:
        with self.assertRaises(TypeError):
            DifferentiableFunction()  # type: ignore[abstract]

    def test_df_matches_finite_difference(self) -> None:
        rng = np.random.default_rng(1234)
        for fn in ALL_FUNCTIONS:
            with self.subTest(fn=fn.__name__):
                x = sample_inputs(fn, rng)
                np.testing.assert_allclose(
                    fn.df(x), central_diff(fn.f, x), rtol=1e-3, atol=1e-3
                )

    def test_shape_and_dtype_preserved(self) -> None:
        x = np.linspace(0.1, 2.0, 12, dtype=np.float32).reshape(3, 4)
        for fn in ALL_FUNCTIONS:
            with self.subTest(fn=fn.__name__):
                self.assertEqual(fn.f(x).shape, x.shape)
                self.assertEqual(fn.df(x).shape, x.shape)
                self.assertEqual(fn.f(x).dtype, np.float32)
                self.assertEqual(fn.df(x).dtype, np.float32)


class TestForwardValues(unittest.TestCase):

    def setUp(self) -> None:
        self.x = np.array([-2.0, -0.5, 0.0, 0.5, 3.0])

    def test_relu(self) -> None:
        np.testing.assert_array_equal(ReLU.f(self.x), [0.0, 0.0, 0.0, 0.5, 3.0])
        # derivative at 0 is 0
        np.testing.assert_array_equal(ReLU.df(self.x), [0.0, 0.0, 0.0, 1.0, 1.0])

    def test_abs(self) -> None:
        np.testing.assert_array_equal(Abs.f(self.x), np.abs(self.x))
        np.testing.assert_array_equal(Abs.df(self.x), [-1.0, -1.0, 0.0, 1.0, 1.0])

    def test_trig(self) -> None:
        np.testing.assert_allclose(Sin.f(self.x), np.sin(self.x))
        np.testing.assert_allclose(Sin.df(self.x), np.cos(self.x))
        np.testing.assert_allclose(Cos.f(self.x), np.cos(self.x))
        np.testing.assert_allclose(Cos.df(self.x), -np.sin(self.x))

    def test_exp_and_ln(self) -> None:
        np.testing.assert_allclose(Exp.f(self.x), np.exp(self.x))
        np.testing.assert_allclose(Exp.df(self.x), np.exp(self.x))
        pos = np.array([0.5, 1.0, 4.0])
        np.testing.assert_allclose(Ln.f(pos), np.log(pos))
        np.testing.assert_allclose(Ln.df(pos), [2.0, 1.0, 0.25])

    def test_sigmoid(self) -> None:
        expected = 1.0 / (1.0 + np.exp(-self.x))
        np.testing.assert_allclose(Sigmoid.f(self.x), expected, rtol=1e-12)
        np.testing.assert_allclose(
            Sigmoid.df(self.x), expected * (1.0 - expected), rtol=1e-12
        )

    def test_sigmoid_saturates_without_overflow(self) -> None:
        x = np.array([-1000.0, 1000.0])
        with np.errstate(over="raise"):
            y = Sigmoid.f(x)
        np.testing.assert_allclose(y, [0.0, 1.0])

    def test_tanh_and_square(self) -> None:
        np.testing.assert_allclose(Tanh.f(self.x), np.tanh(self.x))
        np.testing.assert_allclose(Tanh.df(self.x), 1.0 - np.tanh(self.x) ** 2)
        np.testing.assert_allclose(Square.f(self.x), self.x**2)
        np.testing.assert_allclose(Square.df(self.x), 2.0 * self.x)


if __name__ == "__main__":
    unittest.main()
