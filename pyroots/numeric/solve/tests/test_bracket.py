from fractions import Fraction
from functools import partial
from unittest import TestCase

import pytest

from pyroots.numeric.solve import (
    BracketError, ConvergenceError, DomainError, SingularityError, Status,
    bisect_root, bracket_root, brent_dekker, regula_falsi, ridders, secant)
from .scalar_tst_functions import f, f_exact, g, g_exact, g_interval


# ======================================================================

_g_solvers = [
    bisect_root,
    brent_dekker,
    ridders,
    partial(regula_falsi, variant='illinois', maxiter=500),
    partial(regula_falsi, variant='pegasus', maxiter=500),
    partial(regula_falsi, variant='anderson', maxiter=500),
]


@pytest.mark.parametrize("solver", _g_solvers)
def test_bracket_methods_steep_function(solver):
    """
    All bracketing methods find the root of the badly scaled function
    g(x) to within tol = 1e-8 and stay inside the bracket.  Stopping on
    |g| <= tol allows an error in x of about tol / g'(x) = 1e-7.
    """
    res = solver(g, *g_interval, tol=1e-8)
    assert res.converged
    assert g_interval[0] <= res.root <= g_interval[1]
    assert abs(g(res.root)) <= 1e-8 or res.error <= 1e-8
    assert res.root == pytest.approx(g_exact, abs=1e-7)


@pytest.mark.parametrize("solver", [brent_dekker, ridders])
def test_interpolating_methods_steep_function(solver):
    res = solver(g, *g_interval, tol=1e-8)
    assert res.root == pytest.approx(g_exact, abs=1e-8)


@pytest.mark.parametrize("solver", _g_solvers)
def test_bracket_methods_reversed_ends(solver):
    res = solver(g, g_interval[1], g_interval[0], tol=1e-8)
    assert res.root == pytest.approx(g_exact, abs=1e-7)


@pytest.mark.parametrize("solver", [bisect_root, brent_dekker, ridders,
                                    regula_falsi])
def test_bracket_methods_same_sign(solver):
    # f(2) = 1 and f(3) = 5.
    with pytest.raises(BracketError):
        solver(f, 2.0, 3.0)


@pytest.mark.parametrize("solver", [bisect_root, brent_dekker, ridders,
                                    regula_falsi])
def test_bracket_methods_zero_end(solver):
    res = solver(lambda x: x - 1.0, 1.0, 3.0)
    assert res.converged
    assert res.root == 1.0
    assert res.iterations == 0
    assert res.error == 0


# ======================================================================

class TestBisectRoot(TestCase):
    def test_bisect_root(self):
        # Check normal operation.
        res = bisect_root(f, 1.0, 2.0, tol=1e-15)
        self.assertTrue(res.converged)
        self.assertAlmostEqual(res.root, f_exact, places=14)
        self.assertEqual(res.method, 'bisect_root')

        # Check failure to converge is flagged.
        res = bisect_root(f, 1.0, 2.0, maxiter=10, tol=1e-15)
        self.assertIs(res.status, Status.MAXITER)
        self.assertEqual(res.iterations, 10)
        self.assertTrue(1.0 <= res.root <= 2.0)
        with self.assertRaises(ConvergenceError) as cm:
            res.check()
        self.assertIs(cm.exception.result, res)

    def test_bisect_root_fraction(self):
        # Exact arithmetic passes straight through.
        tol = Fraction(1, 10 ** 6)
        res = bisect_root(lambda x: x * x - 2, Fraction(1), Fraction(2),
                          tol=tol)
        self.assertTrue(res.converged)
        self.assertIsInstance(res.root, Fraction)
        self.assertTrue(abs(res.root * res.root - 2) <= tol or
                        res.error <= tol)
        self.assertAlmostEqual(float(res.root), 2 ** 0.5, places=5)

    def test_exact_types(self):
        # Regula falsi keeps exact arithmetic, Ridders' square root does
        # not.
        res = regula_falsi(lambda x: x * x - 2, Fraction(1), Fraction(2),
                           tol=Fraction(1, 10 ** 6))
        self.assertIsInstance(res.root, Fraction)
        self.assertAlmostEqual(float(res.root), 2 ** 0.5, places=5)

        res = ridders(lambda x: x * x - 2, Fraction(1), Fraction(2),
                      tol=Fraction(1, 10 ** 6))
        self.assertIsInstance(res.root, float)
        self.assertAlmostEqual(res.root, 2 ** 0.5, places=5)

    def test_bisect_root_args(self):
        res = bisect_root(lambda x, c: x - c, 0.0, 1.0, args=(0.25,))
        self.assertEqual(res.root, 0.25)


# ----------------------------------------------------------------------

class TestBrentDekker(TestCase):
    def test_brent_dekker(self):
        res = brent_dekker(f, 1.0, 2.0)
        self.assertTrue(res.converged)
        self.assertAlmostEqual(res.root, f_exact, places=11)
        self.assertLessEqual(abs(f(res.root)), 1e-11)

        # Superlinear, so far fewer steps than bisection would need.
        self.assertLess(res.iterations, 15)

    def test_brent_dekker_maxiter(self):
        res = brent_dekker(g, *g_interval, maxiter=2)
        self.assertIs(res.status, Status.MAXITER)
        self.assertEqual(res.iterations, 2)
        self.assertTrue(g_interval[0] <= res.root <= g_interval[1])

    def test_brent_dekker_repeatable(self):
        res_1 = brent_dekker(g, *g_interval, tol=1e-10)
        res_2 = brent_dekker(g, *g_interval, tol=1e-10)
        self.assertEqual(res_1, res_2)


# ----------------------------------------------------------------------

class TestRidders(TestCase):
    def test_ridders(self):
        res = ridders(f, 1.0, 2.0)
        self.assertTrue(res.converged)
        self.assertAlmostEqual(res.root, f_exact, places=11)


# ----------------------------------------------------------------------

class TestRegulaFalsi(TestCase):
    def test_regula_falsi(self):
        for variant in ('illinois', 'pegasus', 'anderson', 'plain'):
            with self.subTest(variant=variant):
                res = regula_falsi(f, 1.0, 2.0, variant=variant)
                self.assertTrue(res.converged)
                self.assertAlmostEqual(res.root, f_exact, places=11)

    def test_regula_falsi_bad_variant(self):
        with self.assertRaises(DomainError):
            regula_falsi(f, 1.0, 2.0, variant='chicago')


# ----------------------------------------------------------------------

class TestSecant(TestCase):
    def test_secant(self):
        res = secant(f, 1.0, 2.0)
        self.assertTrue(res.converged)
        self.assertAlmostEqual(res.root, f_exact, places=11)

        # Start points need not bracket the root.
        res = secant(f, 3.0, 4.0)
        self.assertAlmostEqual(res.root, f_exact, places=11)

    def test_secant_failures(self):
        with self.assertRaises(DomainError):
            secant(f, 1.0, 1.0)

        with self.assertRaises(SingularityError) as cm:
            secant(lambda x: 1.0, 0.0, 1.0)
        self.assertEqual(cm.exception.flag, 1)


# ======================================================================

class TestBracketRoot(TestCase):
    def test_bracket_root(self):
        def example_fn(x):
            return x ** 2 - 3 * x + 2

        br = bracket_root(example_fn, -2, -1)
        self.assertEqual((br.low, br.high), (-2, 1.375))
        self.assertLess(br.f_low * br.f_high, 0)

        # Result is passed on to a bracketing method.
        res = brent_dekker(example_fn, br.low, br.high)
        self.assertAlmostEqual(res.root, 1.0, places=11)

    def test_bracket_root_failures(self):
        # No root at all.
        with self.assertRaises(BracketError) as cm:
            bracket_root(lambda x: x ** 2 + 1, -1, 1, max_steps=5)
        self.assertEqual(cm.exception.flag, 1)
        self.assertEqual(cm.exception.steps, 5)

        # Root outside the limits.
        with self.assertRaises(BracketError) as cm:
            bracket_root(lambda x: x - 100, 0, 1, x_limits=(-10, 10))
        self.assertEqual(cm.exception.flag, 2)

        with self.assertRaises(DomainError):
            bracket_root(f, 2, 1)
