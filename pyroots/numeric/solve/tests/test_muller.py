import cmath
from unittest import TestCase

from pyroots.numeric.solve import (DomainError, SingularityError, Status,
                                   muller)


# ======================================================================

class TestMuller(TestCase):
    def test_muller_real_root(self):
        res = muller(lambda x: x ** 3 - 2 * x - 5, 1.0, 2.0, 3.0)
        self.assertTrue(res.converged)
        self.assertIsInstance(res.root, complex)
        self.assertAlmostEqual(abs(res.root - 2.0945514815423265), 0.0,
                               places=10)

    def test_muller_complex_root(self):
        # Real starting points, complex roots only.
        res = muller(lambda x: x ** 2 + 1, 0.0, 0.5, 1.0)
        self.assertTrue(res.converged)
        self.assertAlmostEqual(abs(res.root ** 2 + 1), 0.0, places=12)
        self.assertAlmostEqual(abs(res.root.imag), 1.0, places=12)

    def test_muller_analytic(self):
        # z = log(2i) = ln 2 + iπ/2.
        res = muller(lambda z: cmath.exp(z) - 2j, 0.0, 0.5j, 1j)
        self.assertTrue(res.converged)
        self.assertAlmostEqual(abs(cmath.exp(res.root) - 2j), 0.0,
                               places=10)

    def test_muller_maxiter(self):
        res = muller(lambda x: x ** 3 - 2 * x - 5, 10.0, 11.0, 12.0,
                     maxiter=2)
        self.assertIs(res.status, Status.MAXITER)
        self.assertEqual(res.iterations, 2)

    def test_muller_failures(self):
        with self.assertRaises(DomainError):
            muller(lambda x: x ** 2 + 1, 0.0, 0.0, 1.0)

        # Constant function; the parabola is a horizontal line.
        with self.assertRaises(SingularityError) as cm:
            muller(lambda x: 5.0, 0.0, 1.0, 2.0)
        self.assertEqual(cm.exception.flag, 1)
