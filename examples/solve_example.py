#!/usr/bin/env python3

# Examples of finding roots of scalar, complex, polynomial and vector
# functions.

import cmath
import math

import numpy as np

from pyroots.numeric.solve import (brent_dekker, findzeros, gauss_newton,
                                   laguerre, muller, poly_roots_mult)


# -- Scalar function with a bracket ------------------------------------

def steep(x):
    """Badly scaled function with a single root near x = 0.537."""
    return (x - 1) * math.exp(-9 * x) + x ** 9


res = brent_dekker(steep, -1.4, 1.0, tol=1e-10, disp=True)
print(f"Brent-Dekker root = {res.root:.10f} ({res.iterations} "
      f"iterations)\n")

# -- All real roots on an interval, including touching ones ------------

roots = findzeros(lambda x: x * math.sin(math.pi * x), -2, 2)
print(f"Roots of x.sin(πx) on [-2, 2]: {roots}\n")

# -- Complex root from real starting points ----------------------------

res = muller(lambda z: cmath.exp(z) + 1, 0.0, 1.0, 2.0)
print(f"Muller root of exp(z) + 1 = {res.root:.10f}\n")

# -- Polynomial roots and multiplicities -------------------------------

p = np.poly([1.2, 2.1, 2.1, 1j * np.sqrt(5), -1j * np.sqrt(5)]).real
print(f"Laguerre from 2i: {laguerre(p, 2j).root:.10f}")
for rec in poly_roots_mult(p):
    print(f"    Root {rec.value:.8f}, multiplicity {rec.multiplicity}")
print()


# -- System of equations -----------------------------------------------

def complex_eqn(x):
    """sin²(z) + √z - log(z) = 0 split into real and imaginary parts."""
    z = complex(x[0], x[1])
    w = cmath.sin(z) ** 2 + cmath.sqrt(z) - cmath.log(z)
    return [w.real, w.imag]


res = gauss_newton(complex_eqn, [1.0, 1.0], disp=True)
print(f"Gauss-Newton root z = {res.root[0]:.7f} + {res.root[1]:.7f}i")
