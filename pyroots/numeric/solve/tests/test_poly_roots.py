import warnings
from unittest import TestCase

import numpy as np
from numpy.testing import assert_allclose
import pytest

from pyroots.numeric.solve import (
    DomainError, MultiplicityWarning, Status, laguerre, laguerre_roots,
    poly_multiplicity, poly_roots_eig, poly_roots_mult, quadratic_roots)


# ======================================================================

# Real roots 1.2 and 2.1 (double), complex pair ±i√5.
_ROOTS_5 = [1.2, 2.1, 2.1, 1j * np.sqrt(5), -1j * np.sqrt(5)]
_POLY_5 = np.poly(_ROOTS_5).real


def _assert_roots_match(found, expected, atol):
    # Each expected root has a match within atol (order independent).
    found = np.asarray(found)
    assert len(found) == len(expected)
    for r in expected:
        assert np.min(np.abs(found - r)) <= atol, f"No match for {r}"


# ======================================================================

class TestQuadraticRoots(TestCase):
    def test_quadratic_roots_real(self):
        self.assertEqual(quadratic_roots(1, -3, 2), (2.0, 1.0))
        self.assertEqual(quadratic_roots(1, -2, 1), (1.0,))
        self.assertEqual(quadratic_roots(0, 5, -3), (0.6,))
        self.assertEqual(quadratic_roots(0, 0, 2), ())
        self.assertEqual(quadratic_roots(1, 4, 5, allow_complex=False), ())

        r1, r2 = quadratic_roots(1, 4, 5)
        self.assertEqual({r1, r2}, {-2 - 1j, -2 + 1j})

    def test_quadratic_roots_builtin_types(self):
        # Python number inputs give Python number roots.
        roots = quadratic_roots(1, -3, 2)
        self.assertEqual(repr(roots), "(2.0, 1.0)")
        self.assertTrue(all(type(r) is float for r in roots))
        roots = quadratic_roots(1, 4, 5)
        self.assertEqual(repr(roots), "((-2-1j), (-2+1j))")
        self.assertTrue(all(type(r) is complex for r in roots))

    def test_quadratic_roots_ill_conditioned(self):
        # Roots 1e8 and 1e-8; the small root is kept accurate.
        r_big, r_small = quadratic_roots(1, -(1e8 + 1e-8), 1.0)
        self.assertAlmostEqual(r_big / 1e8, 1.0, places=14)
        self.assertAlmostEqual(r_small / 1e-8, 1.0, places=14)

    def test_quadratic_roots_complex_coeffs(self):
        # (x - (1 + 2i))(x - (3 - i)) = x² - (4 + i)x + (5 + 5i)
        roots = quadratic_roots(1, -(4 + 1j), 5 + 5j)
        _assert_roots_match(roots, [1 + 2j, 3 - 1j], 1e-14)


# ----------------------------------------------------------------------

class TestPolyRootsEig(TestCase):
    def test_poly_roots_eig(self):
        roots = poly_roots_eig([1, 0, -5, 0, 4])
        self.assertEqual(roots.dtype, complex)
        assert_allclose(np.sort(roots.real), [-2, -1, 1, 2], atol=1e-12)
        assert_allclose(roots.imag, 0, atol=1e-12)

    def test_poly_roots_eig_complex(self):
        _assert_roots_match(poly_roots_eig(_POLY_5), _ROOTS_5, 1e-6)

    def test_poly_roots_eig_invalid(self):
        with self.assertRaises(DomainError):
            poly_roots_eig([0, 0, 3])  # Constant.
        with self.assertRaises(DomainError):
            poly_roots_eig([0, 0, 0])


# ----------------------------------------------------------------------

class TestLaguerre(TestCase):
    def test_laguerre(self):
        res = laguerre(_POLY_5, 2j)
        self.assertTrue(res.converged)
        self.assertIsInstance(res.root, complex)
        self.assertAlmostEqual(abs(res.root - 1j * np.sqrt(5)), 0.0,
                               places=10)

    def test_laguerre_real_start(self):
        # Real polynomial and start point but complex result type.
        res = laguerre([1, -3, 2], 0.0)
        self.assertIsInstance(res.root, complex)
        self.assertAlmostEqual(abs(res.root - 1.0), 0.0, places=12)

    def test_laguerre_maxiter(self):
        res = laguerre(_POLY_5, 100.0, maxiter=1)
        self.assertIs(res.status, Status.MAXITER)

    def test_laguerre_roots(self):
        roots = laguerre_roots(_POLY_5)
        _assert_roots_match(roots, _ROOTS_5, 1e-6)

        # Simple roots are found to full accuracy.
        roots = laguerre_roots([1, -6, 11, -6])
        assert_allclose(roots, [1, 2, 3], atol=1e-12)
        assert_allclose(roots.imag, 0)


# ----------------------------------------------------------------------

class TestMultiplicity(TestCase):
    def test_poly_multiplicity(self):
        rec = poly_multiplicity([1, -3, 3, -1], 1.0)
        self.assertEqual(rec.multiplicity, 3)
        self.assertTrue(rec.reliable)

        rec = poly_multiplicity(_POLY_5, 2.1)
        self.assertEqual(rec.multiplicity, 2)
        self.assertTrue(rec.reliable)

        rec = poly_multiplicity(_POLY_5, 1.2)
        self.assertEqual(rec.multiplicity, 1)

    def test_poly_multiplicity_not_root(self):
        with self.assertWarns(MultiplicityWarning):
            rec = poly_multiplicity(_POLY_5, 5.0)
        self.assertEqual(rec.multiplicity, 0)
        self.assertFalse(rec.reliable)
        self.assertGreater(rec.residual, 1.0)

    def test_poly_roots_mult(self):
        with warnings.catch_warnings():
            warnings.simplefilter('error', MultiplicityWarning)
            records = poly_roots_mult(_POLY_5)

        self.assertEqual(len(records), 4)
        self.assertEqual(sum(r.multiplicity for r in records), 5)
        self.assertTrue(all(r.reliable for r in records))

        double = [r for r in records if r.multiplicity == 2]
        self.assertEqual(len(double), 1)
        self.assertAlmostEqual(abs(double[0].value - 2.1), 0.0, places=8)

    def test_poly_roots_mult_quadruple(self):
        # Computed roots spread by about 2e-4 around x = 1.
        p = np.poly([1.0, 1.0, 1.0, 1.0, 3.0])
        spread = np.abs(poly_roots_eig(p) - 1.0)
        self.assertGreater(np.sort(spread)[-2], 1e-5)

        with warnings.catch_warnings():
            warnings.simplefilter('error', MultiplicityWarning)
            records = poly_roots_mult(p)

        self.assertEqual([r.multiplicity for r in records], [4, 1])
        self.assertTrue(all(r.reliable for r in records))
        self.assertAlmostEqual(abs(records[0].value - 1.0), 0.0, places=8)
        self.assertEqual(poly_multiplicity(p, records[0].value)
                         .multiplicity, 4)


# ======================================================================

@pytest.mark.parametrize("roots, mults", [
    ([1.0, 2.0], [1, 1]),
    ([1.0, 1.0, 2.0], [2, 1]),
    ([-1.0, -1.0, -1.0, 3.0], [3, 1]),
    ([1.0, 1.0, 1.0, 1.0, 3.0], [4, 1]),
    ([2.0] * 5, [5]),
])
def test_poly_roots_mult_cases(roots, mults):
    records = poly_roots_mult(np.poly(roots))
    assert [r.multiplicity for r in records] == mults
    assert [r.value.real for r in records] == pytest.approx(
        sorted(set(roots)), abs=1e-8)
