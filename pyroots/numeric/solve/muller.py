"""
Muller's method for real or complex roots of a scalar function,
using the parabola through the three most recent points.
"""
from __future__ import annotations

from collections.abc import Callable

from pyroots.numeric.polynomial import newton_poly_coeff
from pyroots.util.display import disp_enter, disp_exit, disp_print
from .callables import ScalarFunction
from .exception import DomainError, SingularityError
from .options import resolve_options
from .poly_roots import quadratic_roots
from .results import ConvergenceResult, IterationState, Status


# ======================================================================

def muller(func: Callable, x0, x1, x2, *, args=(), tol=None,
           maxiter: int = None,
           disp: int | bool = None) -> ConvergenceResult:
    r"""
    Find a zero of a real or complex function using Muller's method.

    A parabola is passed through the three most recent points using
    divided differences.  The next point is the root of the parabola
    closest to the most recent point `x2`, found using the stable
    quadratic formula (see ``quadratic_roots(...)``).  The oldest point
    is then discarded.  As the parabola may have complex roots the
    iteration is always carried out in complex arithmetic, so complex
    roots can be found from real starting points.

    Parameters
    ----------
    func : Callable[[complex, ...], complex]
        Function returning :math:`f(x)`.  It must accept complex `x`.
    x0, x1, x2 : float or complex
        Three distinct starting points, with `x2` the best estimate.
    args : tuple, optional
        Extra arguments passed to `func`.
    tol : float, optional
        Stop when :math:`|h| \le tol (1 + |x|)` where `h` is the last
        step, or when :math:`f(x) = 0`.  Default from
        `get_solver_options()`.
    maxiter : int, optional
        Iteration limit.  Default from `get_solver_options()`.
    disp : int or bool, optional
        Print progress; see ``pyroots.util.disp_enter(...)``.

    Returns
    -------
    ConvergenceResult
        `root` is always `complex`.

    Raises
    ------
    DomainError
        If the starting points are not distinct.
    SingularityError
        If the interpolating parabola degenerates to a horizontal line
        (no root), or two points coincide during the iteration.

    Notes
    -----
    Convergence near a simple root is of order about 1.84.  Only
    function values are required.

    Examples
    --------
    Starting on the real axis, :math:`x^2 + 1` converges to a complex
    root:

    >>> res = muller(lambda x: x ** 2 + 1, 0.0, 0.5, 1.0)
    >>> res.converged, abs(abs(res.root.imag) - 1) < 1e-12
    (True, True)
    """
    tol, maxiter = resolve_options(tol, maxiter)
    x0, x1, x2 = complex(x0), complex(x1), complex(x2)
    if x0 == x1 or x1 == x2 or x0 == x2:
        raise DomainError("Starting points must be distinct.")

    f = ScalarFunction(func, args, allow_complex=True)
    disp_enter(disp)
    try:
        disp_print(f"Muller Root:")
        f0, f1, f2 = f(x0), f(x1), f(x2)
        state = IterationState(x=x2, fx=f2)

        while True:
            if f2 == 0:
                return state.finish(Status.CONVERGED, method='muller',
                                    fevals=f.fevals,
                                    error=None if state.iterations else 0.0)

            if state.iterations >= maxiter:
                return state.finish(Status.MAXITER, method='muller',
                                    fevals=f.fevals)

            if x0 == x1 or x1 == x2 or x0 == x2:
                raise SingularityError("muller() failed: points coincide.",
                                       flag=2, x=x2, fx=f2,
                                       iterations=state.iterations)

            # Parabola in Newton form through (x2, x1, x0) rewritten as
            # a*h² + b*h + c where h = x - x2.
            _, d1, d2 = newton_poly_coeff([x2, x1, x0], [f2, f1, f0])
            a, b, c = d2, d1 + d2 * (x2 - x1), f2

            hs = quadratic_roots(a, b, c)
            if not hs:
                raise SingularityError(
                    "muller() failed: interpolating parabola has no "
                    "root.", flag=1, x=x2, fx=f2,
                    iterations=state.iterations)
            h = complex(min(hs, key=abs))

            x0, x1, x2 = x1, x2, x2 + h
            f0, f1, f2 = f1, f2, f(x2)
            state.advance(x2, f2, h)
            disp_print(f"... Iteration {state.iterations}: x = {x2}, "
                       f"|f(x)| = {abs(f2):.6e}")

            if abs(h) <= tol * (1 + abs(x2)):
                return state.finish(Status.CONVERGED, method='muller',
                                    fevals=f.fevals)

    finally:
        disp_exit()
