from __future__ import annotations

import operator
from dataclasses import dataclass, replace

import numpy as np

from .exception import DomainError


# ======================================================================

@dataclass(frozen=True, kw_only=True)
class SolverOptions:
    """
    Dataclass holding the default settings used by solvers when the
    corresponding argument is not given (or is `None`).  See
    `get_solver_options` and `set_solver_options`.

    Parameters
    ----------
    tol : float, default = 1e-12
        Default stopping tolerance.
    maxiter : int, default = 100
        Default iteration limit.
    deriv_floor : float, default = smallest normal float
        Derivatives with ``|f'(x)| <= deriv_floor`` are treated as zero
        by open methods (Newton-Raphson, Halley).
    jac_cond_max : float, default = 1e15
        Jacobians with a condition number above this value are treated
        as singular.
    """
    tol: float = 1e-12
    maxiter: int = 100
    deriv_floor: float = float(np.finfo(float).tiny)
    jac_cond_max: float = 1e15

    def __post_init__(self):
        """Check certain values"""
        check_tol(self.tol)
        check_maxiter(self.maxiter)
        if self.deriv_floor < 0:
            raise DomainError("Require 'deriv_floor' >= 0.")
        if self.jac_cond_max <= 1:
            raise DomainError("Require 'jac_cond_max' > 1.")


# ======================================================================

def check_tol(tol):
    """Raise `DomainError` unless ``tol > 0``."""
    if not tol > 0:
        raise DomainError(f"tol too small ({tol} <= 0)")
    return tol


def check_maxiter(maxiter) -> int:
    """Raise `DomainError` unless `maxiter` is an integer >= 1."""
    try:
        maxiter = operator.index(maxiter)
    except TypeError as e:
        raise DomainError(f"maxiter must be an integer, got "
                          f"{maxiter!r}.") from e
    if maxiter < 1:
        raise DomainError("maxiter must be greater than 0")
    return maxiter


def resolve_options(tol=None, maxiter: int = None) -> tuple:
    """
    Fill in `tol` and `maxiter` from the current defaults where they are
    `None` and check their values.

    Returns
    -------
    tol, maxiter
    """
    if tol is None:
        tol = _solver_options.tol
    if maxiter is None:
        maxiter = _solver_options.maxiter
    return check_tol(tol), check_maxiter(maxiter)


# ======================================================================

_solver_options = SolverOptions()


def get_solver_options() -> SolverOptions:
    """
    Returns
    -------
    SolverOptions
        A copy of the current default options.
    """
    return replace(_solver_options)


def set_solver_options(**kwargs):
    """
    Set the default solver options.  Keywords are the fields of
    `SolverOptions`; fields not given keep their present value.

    Raises
    ------
    DomainError
        If an option is unknown or invalid.

    Examples
    --------
    >>> set_solver_options(maxiter=200)
    >>> get_solver_options().maxiter
    200
    >>> set_solver_options(maxiter=100)
    """
    global _solver_options
    try:
        _solver_options = replace(_solver_options, **kwargs)
    except TypeError as e:
        raise DomainError(f"Invalid solver option: {e}") from e
