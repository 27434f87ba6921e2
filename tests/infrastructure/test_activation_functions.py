import unittest
import numpy as np

from seqdnn import (
    LeakyReLU,
    ReLU,
    Sigmoid,
    Softmax,
    Tanh,
    activation_from_name,
    register_activation,
)


class TestActivationValues(unittest.TestCase):
    def setUp(self):
        self.x = np.array([-2.0, -0.5, 0.0, 0.5, 3.0])

    def test_tanh(self):
        fn = Tanh()
        y = fn.f(self.x)
        np.testing.assert_allclose(y, np.tanh(self.x))
        np.testing.assert_allclose(fn.df_optimized(y), 1.0 - np.tanh(self.x) ** 2)
        np.testing.assert_allclose(fn.df(self.x), fn.df_optimized(y))

    def test_sigmoid_is_stable_for_large_inputs(self):
        fn = Sigmoid()
        y = fn.f(np.array([-1000.0, 0.0, 1000.0]))
        np.testing.assert_allclose(y, [0.0, 0.5, 1.0])
        self.assertTrue(np.all(np.isfinite(y)))

    def test_sigmoid_derivative(self):
        fn = Sigmoid()
        y = fn.f(self.x)
        np.testing.assert_allclose(y, 1.0 / (1.0 + np.exp(-self.x)))
        np.testing.assert_allclose(fn.df_optimized(y), y * (1.0 - y))

    def test_relu(self):
        fn = ReLU()
        y = fn.f(self.x)
        np.testing.assert_array_equal(y, [0.0, 0.0, 0.0, 0.5, 3.0])
        np.testing.assert_array_equal(fn.df_optimized(y), [0.0, 0.0, 0.0, 1.0, 1.0])

    def test_leaky_relu(self):
        fn = LeakyReLU(alpha=0.1)
        y = fn.f(self.x)
        np.testing.assert_allclose(y, [-0.2, -0.05, 0.0, 0.5, 3.0])
        np.testing.assert_allclose(fn.df_optimized(y), [0.1, 0.1, 0.1, 1.0, 1.0])
        with self.assertRaises(ValueError):
            LeakyReLU(alpha=-1.0)

    def test_softmax_sums_to_one(self):
        fn = Softmax()
        y = fn.f(np.array([1000.0, 1001.0, 1002.0]))
        self.assertAlmostEqual(float(y.sum()), 1.0)
        self.assertTrue(np.all(np.diff(y) > 0))
        np.testing.assert_allclose(fn.df_optimized(y), y * (1.0 - y))


class TestActivationRegistry(unittest.TestCase):
    def test_builtin_names(self):
        for name, cls in (
            ("tanh", Tanh),
            ("sigmoid", Sigmoid),
            ("relu", ReLU),
            ("leaky_relu", LeakyReLU),
            ("softmax", Softmax),
        ):
            with self.subTest(name=name):
                fn = activation_from_name(name)
                self.assertIsInstance(fn, cls)
                self.assertEqual(fn.name, name)

    def test_unknown_name_raises(self):
        with self.assertRaises(ValueError):
            activation_from_name("not_an_activation")

    def test_config_arguments_are_forwarded(self):
        fn = activation_from_name("leaky_relu", alpha=0.3)
        self.assertEqual(fn, LeakyReLU(alpha=0.3))

    def test_register_custom_activation(self):
        @register_activation("test_identity")
        class Identity:
            def f(self, x):
                return np.asarray(x)

            def df(self, x):
                return np.ones_like(x)

            def df_optimized(self, fx):
                return np.ones_like(fx)

        fn = activation_from_name("test_identity")
        self.assertIsInstance(fn, Identity)
        self.assertEqual(Identity.name, "test_identity")


if __name__ == "__main__":
    unittest.main()
