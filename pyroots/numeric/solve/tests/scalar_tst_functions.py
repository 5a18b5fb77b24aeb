import math

import numpy as np


# ======================================================================

# Define test functions, along with first and second derivatives.  For
# use on scalars or element-wise on arrays.

def f(x):
    return x ** 2 - x - 1


def df_dx(x):
    return 2 * x - 1


def df2_dx2(x):
    return 2 * np.ones_like(x)


f_exact = 1.618033988749895


# ----------------------------------------------------------------------

# Very steep on the left of [-1.4, 1] and flat near the root, which
# makes interpolating methods work hard.

def g(x):
    return (x - 1) * math.exp(-9 * x) + x ** 9


g_interval = (-1.4, 1.0)
g_exact = 0.5367416625


# ----------------------------------------------------------------------

# Double root at x = π.

def sin_sq(x):
    return math.sin(x) ** 2


def dsin_sq_dx(x):
    return math.sin(2 * x)
