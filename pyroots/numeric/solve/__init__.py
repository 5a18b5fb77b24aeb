"""
======================================
Solvers (:mod:`pyroots.numeric.solve`)
======================================

.. currentmodule:: pyroots.numeric.solve

Functions for finding the roots of scalar, complex, polynomial and
vector-valued functions.  Every solver returns a `ConvergenceResult`
(or a collection of roots) and takes optional `tol` and `maxiter`
arguments, with defaults taken from `get_solver_options()`.

Bracketing Methods
------------------

.. autosummary::
    :toctree:

    bisect_root
    bracket_root
    brent_dekker
    regula_falsi
    ridders
    secant

Open and Complex Methods
------------------------

.. autosummary::
    :toctree:

    halley
    muller
    newton_raphson

Multiple Real Roots
-------------------

.. autosummary::
    :toctree:

    findzeros

Polynomials
-----------

.. autosummary::
    :toctree:

    laguerre
    laguerre_roots
    poly_multiplicity
    poly_roots_eig
    poly_roots_mult
    quadratic_roots

Systems of Equations
--------------------

.. autosummary::
    :toctree:

    broyden
    gauss_newton
    jacobian
    newton_system

Results and Options
-------------------

.. autosummary::
    :toctree:

    Bracket
    ConvergenceResult
    Interval
    RootRecord
    SolverOptions
    Status
    get_solver_options
    set_solver_options

Exceptions
----------

.. autosummary::
    :toctree:

    BracketError
    ConvergenceError
    DomainError
    MultiplicityWarning
    SingularityError
    SingularJacobianError
    SolverError

"""

from .exception import (BracketError, ConvergenceError, DomainError,
                        MultiplicityWarning, SingularityError,
                        SingularJacobianError, SolverError)
from .options import SolverOptions, get_solver_options, set_solver_options
from .results import (Bracket, ConvergenceResult, Interval, RootRecord,
                      Status)
from .callables import jacobian
from .bracket import (bisect_root, bracket_root, brent_dekker,
                      regula_falsi, ridders, secant)
from .newton import halley, newton_raphson
from .findzeros import findzeros
from .poly_roots import (laguerre, laguerre_roots, poly_multiplicity,
                         poly_roots_eig, poly_roots_mult, quadratic_roots)
from .muller import muller
from .multivariate import broyden, gauss_newton, newton_system
