from unittest import TestCase

import numpy as np
from numpy.testing import assert_allclose

from pyroots.numeric.solve import (DomainError, SolverOptions, brent_dekker,
                                   get_solver_options, jacobian,
                                   newton_raphson, set_solver_options)
from pyroots.numeric.solve.callables import ScalarFunction, VectorFunction
from .scalar_tst_functions import f


# ======================================================================

class TestSolverOptions(TestCase):
    def setUp(self):
        self.saved = get_solver_options()

    def tearDown(self):
        set_solver_options(**vars(self.saved))

    def test_defaults(self):
        opts = SolverOptions()
        self.assertEqual(opts.tol, 1e-12)
        self.assertEqual(opts.maxiter, 100)
        self.assertGreater(opts.jac_cond_max, 1)

    def test_module_defaults(self):
        # The defaults object is built when the module is imported.
        from pyroots.numeric.solve import options
        self.assertIsInstance(options._solver_options, SolverOptions)
        set_solver_options(**vars(SolverOptions()))
        self.assertEqual(get_solver_options(), SolverOptions())
        self.assertEqual(options.resolve_options(), (1e-12, 100))

    def test_invalid_options(self):
        with self.assertRaises(DomainError):
            SolverOptions(tol=0.0)
        with self.assertRaises(DomainError):
            SolverOptions(maxiter=0)
        with self.assertRaises(DomainError):
            SolverOptions(maxiter=2.5)
        with self.assertRaises(DomainError):
            set_solver_options(tolerance=1e-6)

    def test_set_solver_options(self):
        set_solver_options(maxiter=3)
        self.assertEqual(get_solver_options().maxiter, 3)
        self.assertEqual(get_solver_options().tol, self.saved.tol)

        # Solvers pick up the new default...
        res = newton_raphson(f, 100.0)
        self.assertFalse(res.converged)
        self.assertEqual(res.iterations, 3)

        # ... unless overridden in the call.
        res = newton_raphson(f, 100.0, maxiter=50)
        self.assertTrue(res.converged)

    def test_invalid_call_arguments(self):
        with self.assertRaises(DomainError):
            brent_dekker(f, 1.0, 2.0, tol=-1.0)
        with self.assertRaises(DomainError):
            brent_dekker(f, 1.0, 2.0, maxiter=0)


# ======================================================================

class TestScalarFunction(TestCase):
    def test_scalar_function(self):
        fn = ScalarFunction(lambda x, c: x * c, (3.0,))
        self.assertEqual(fn(2.0), 6.0)
        self.assertEqual(fn(np.array(2.0)), 6.0)  # 0-D array.
        self.assertEqual(fn.fevals, 2)
        self.assertAlmostEqual(fn.deriv(1.0), 3.0, places=8)
        self.assertAlmostEqual(fn.deriv2(1.0), 0.0, places=5)

        # Analytic derivatives are used when given.
        fn = ScalarFunction(f, fprime=lambda x: 99.0,
                            fprime2=lambda x: -99.0)
        self.assertEqual(fn.deriv(1.0), 99.0)
        self.assertEqual(fn.deriv2(1.0), -99.0)

    def test_bad_values(self):
        with self.assertRaises(DomainError):
            ScalarFunction(lambda x: np.nan)(1.0)
        with self.assertRaises(DomainError):
            ScalarFunction(lambda x: [x, x])(1.0)
        with self.assertRaises(DomainError):
            ScalarFunction(lambda x: x + 1j)(1.0)
        with self.assertRaises(DomainError):
            ScalarFunction(42)

        # Zero imaginary parts are accepted by real solvers.
        self.assertEqual(ScalarFunction(lambda x: x + 0j)(1.0), 1.0)
        self.assertEqual(ScalarFunction(lambda x: x + 1j,
                                        allow_complex=True)(1.0), 1 + 1j)

    def test_complex_value_in_real_solver(self):
        with self.assertRaises(DomainError):
            brent_dekker(lambda x: complex(x, 1.0), -1.0, 1.0)


# ----------------------------------------------------------------------

class TestVectorFunction(TestCase):
    def test_vector_function(self):
        fn = VectorFunction(lambda x: [x[0] ** 2, x[0] * x[1], 1.0],
                            [1.0, 2.0])
        fx = fn(np.array([1.0, 2.0]))
        assert_allclose(fx, [1.0, 2.0, 1.0])
        self.assertEqual((fn.m, fn.n), (2, 3))

        jx = fn.jacobian(np.array([1.0, 2.0]), fx)
        self.assertEqual(jx.shape, (3, 2))
        assert_allclose(jx, [[2.0, 0.0], [2.0, 1.0], [0.0, 0.0]],
                        atol=1e-6)

    def test_output_size_fixed(self):
        sizes = iter([2, 3])
        fn = VectorFunction(lambda x: np.ones(next(sizes)), [1.0, 2.0])
        fn(np.array([1.0, 2.0]))
        with self.assertRaises(DomainError):
            fn(np.array([1.0, 2.0]))

    def test_bad_jacobian(self):
        fn = VectorFunction(lambda x: x, [1.0, 2.0],
                            jac=lambda x: np.eye(3))
        with self.assertRaises(DomainError):
            fn.jacobian(np.array([1.0, 2.0]))

    def test_complex_output(self):
        fn = VectorFunction(lambda x: x + 1j, [1.0, 2.0])
        with self.assertRaises(DomainError):
            fn(np.array([1.0, 2.0]))

    def test_jacobian(self):
        jx = jacobian(lambda x: [x[0] * x[1], x[0] + 3 * x[1]], [2.0, 5.0])
        assert_allclose(jx, [[5.0, 2.0], [1.0, 3.0]], atol=1e-6)
