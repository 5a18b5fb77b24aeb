"""
Numeric (:mod:`pyroots.numeric`)
================================

.. currentmodule:: pyroots.numeric

Root finding algorithms and the polynomial operations they rely on.

.. autosummary::
    :toctree:

    solve
    polynomial

"""
from . import solve
from .polynomial import (Polynomial, as_polynomial, companion_matrix,
                         newton_poly_coeff)
