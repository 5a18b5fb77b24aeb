"""
Data types shared by the solvers: intervals and brackets, per-call
iteration state, and the records returned to the caller.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable

import numpy as np

from pyroots.util.display import disp_print
from .exception import BracketError, ConvergenceError, DomainError


# ======================================================================

class Status(enum.Enum):
    """
    Convergence status of an iterative solution.

    The solvers in this package only return `CONVERGED` or `MAXITER`;
    hard failures (bad bracket, singular derivative or Jacobian) raise
    a `SolverError` instead.  `UNCONVERGED` and `FAILED` are available
    for results built by other code, e.g. wrappers that catch those
    errors.
    """
    UNCONVERGED = 'unconverged'
    CONVERGED = 'converged'
    MAXITER = 'maxIterReached'
    FAILED = 'failed'


# ======================================================================

@dataclass(frozen=True)
class Interval:
    """
    Closed real interval ``[low, high]`` with ``low <= high``.

    Raises
    ------
    DomainError
        If ``low > high`` (or either is NaN).
    """
    low: Any
    high: Any

    def __post_init__(self):
        if not self.low <= self.high:
            raise DomainError(f"Interval requires low <= high, got "
                              f"[{self.low}, {self.high}].")

    @property
    def width(self):
        return self.high - self.low

    @property
    def midpoint(self):
        return self.low + (self.high - self.low) / 2

    def contains(self, x) -> bool:
        return self.low <= x <= self.high


# ----------------------------------------------------------------------

@dataclass(frozen=True)
class Bracket(Interval):
    """
    An `Interval` together with the function values at each end, where
    the function values have opposite signs (or one is exactly zero).
    Normally constructed using ``Bracket.from_func(...)``.
    """
    f_low: Any
    f_high: Any

    def __post_init__(self):
        super().__post_init__()
        if not sign_differs(self.f_low, self.f_high):
            raise BracketError(
                "f(low) and f(high) must have opposite signs.",
                low=self.low, high=self.high, f_low=self.f_low,
                f_high=self.f_high)

    @classmethod
    def from_func(cls, func: Callable, a, b) -> Bracket:
        """
        Evaluate `func` at `a` and `b` and return the resulting bracket.
        The ends may be given in either order.

        Raises
        ------
        DomainError
            If ``a == b``.
        BracketError
            If ``func(a)`` and ``func(b)`` have the same sign.
        """
        if a == b:
            raise DomainError("Bracket ends must have different values.")
        if b < a:
            a, b = b, a
        return cls(a, b, func(a), func(b))

    @property
    def has_zero_end(self) -> bool:
        """`True` if either end is an exact zero of the function."""
        return self.f_low == 0 or self.f_high == 0


def sign_differs(fa, fb) -> bool:
    """
    Returns `True` if `fa` and `fb` have opposite signs or either is
    zero.  Only comparisons with zero are used, so any ordered numeric
    type is accepted.
    """
    if fa == 0 or fb == 0:
        return True
    return (fa < 0) != (fb < 0)


# ======================================================================

@dataclass(frozen=True, kw_only=True)
class ConvergenceResult:
    """
    Result of a single solver call.  Instances are immutable; array
    valued roots are returned as read-only arrays.

    Parameters
    ----------
    root : float, complex or ndarray
        Best estimate of the root.  The type reflects the domain that
        was actually searched, e.g. complex methods always return
        `complex` even when started from a real value.
    fval : float, complex or ndarray
        Function value at `root`.
    iterations : int
        Number of iterations performed.
    fevals : int
        Number of function evaluations (derivative / Jacobian
        evaluations included).
    error : float
        Estimated error in `root`, usually the size of the last step or
        the final bracket half-width.
    status : Status
        `CONVERGED` or `MAXITER`.  In the latter case `root` is the best
        estimate available when the iteration limit was reached.
    method : str
        Name of the solver that produced the result.
    """
    root: Any
    fval: Any
    iterations: int
    fevals: int = 0
    error: Any = np.nan
    status: Status = Status.UNCONVERGED
    method: str = ''

    def __post_init__(self):
        for attr in ('root', 'fval'):
            val = getattr(self, attr)
            if isinstance(val, np.ndarray):
                val = val.copy()
                val.flags.writeable = False
                object.__setattr__(self, attr, val)

    @property
    def converged(self) -> bool:
        return self.status is Status.CONVERGED

    def check(self) -> ConvergenceResult:
        """
        Returns this result if it converged, otherwise raises
        `ConvergenceError` carrying the result as attribute `result`.
        """
        if not self.converged:
            raise ConvergenceError(
                f"{self.method or 'Solver'} failed to converge after "
                f"{self.iterations} iterations.", flag=1,
                details=self.status.value, result=self)
        return self


# ----------------------------------------------------------------------

@dataclass(frozen=True, kw_only=True)
class RootRecord:
    """
    A root together with its estimated multiplicity.

    Parameters
    ----------
    value : float or complex
        Location of the root.
    multiplicity : int, default = 1
        Estimated multiplicity.  Zero means the value was found not to
        be a root.  Only meaningful after explicit refinement (see
        ``poly_multiplicity(...)``).
    residual : float
        Magnitude of the function value at `value`.
    reliable : bool, default = True
        `False` if the multiplicity could not be confirmed.
    """
    value: Any
    multiplicity: int = 1
    residual: float = np.nan
    reliable: bool = True


# ======================================================================

@dataclass(kw_only=True)
class IterationState:
    """
    Mutable working state of one solver call.  Each call creates its
    own instance; it is never shared.  ``finish(...)`` converts it to
    the immutable `ConvergenceResult` handed back to the caller.
    """
    x: Any
    fx: Any = None
    iterations: int = 0
    step: Any = np.inf
    status: Status = Status.UNCONVERGED

    def advance(self, x, fx, step):
        """Record a new estimate, completing one iteration."""
        self.x, self.fx, self.step = x, fx, step
        self.iterations += 1

    def finish(self, status: Status, *, method: str, fevals: int = 0,
               error=None) -> ConvergenceResult:
        """
        Set the final status and return the result.  If `error` is not
        given, the magnitude of the last step is used.
        """
        self.status = status
        if status is Status.CONVERGED:
            disp_print("... Converged.")
        elif status is Status.MAXITER:
            disp_print(f"... Reached iteration limit ({self.iterations}).")

        if error is None:
            error = (np.linalg.norm(self.step) if np.ndim(self.step) > 0
                     else abs(self.step))
        return ConvergenceResult(root=self.x, fval=self.fx,
                                 iterations=self.iterations, fevals=fevals,
                                 error=error, status=status, method=method)
