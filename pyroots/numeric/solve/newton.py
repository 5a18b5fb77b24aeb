"""
Open (derivative based) methods for a root of a real or complex scalar
function: Newton-Raphson and Halley's method.  No bracket is required,
and these methods are intended for refining a starting estimate that is
already reasonably close to the root.  This includes 'touching' roots
where :math:`f(x)` does not change sign and bracketing methods cannot
be used.
"""
from __future__ import annotations

from collections.abc import Callable

from pyroots.util.display import disp_enter, disp_exit, disp_print
from .callables import ScalarFunction
from .exception import SingularityError
from .options import get_solver_options, resolve_options
from .results import ConvergenceResult, IterationState, Status


# ======================================================================

def newton_raphson(func: Callable, x0, *, fprime: Callable = None,
                   args=(), tol=None, maxiter: int = None,
                   deriv_floor: float = None,
                   disp: int | bool = None) -> ConvergenceResult:
    r"""
    Find a zero of a real or complex function using the Newton-Raphson
    method :math:`x_{n+1} = x_n - f(x_n) / f'(x_n)`.

    Parameters
    ----------
    func : Callable[[x, ...], scalar]
        Function returning :math:`f(x)`.
    x0 : float or complex
        Starting estimate.  A complex `x0` searches the complex plane.
    fprime : Callable[[x, ...], scalar], optional
        Derivative :math:`f'(x)`.  If omitted a central finite
        difference is used.
    args : tuple, optional
        Extra arguments passed to `func` and `fprime`.
    tol : float, optional
        Stop when :math:`|\Delta x| \le tol (1 + |x|)` or
        :math:`f(x) = 0`.  Default from `get_solver_options()`.
    maxiter : int, optional
        Iteration limit.  Default from `get_solver_options()`.
    deriv_floor : float, optional
        Derivatives with :math:`|f'(x)| \le` `deriv_floor` are treated
        as zero.  Default from `get_solver_options()`.
    disp : int or bool, optional
        Print progress; see ``pyroots.util.disp_enter(...)``.

    Returns
    -------
    ConvergenceResult

    Raises
    ------
    SingularityError
        If the derivative vanishes (attributes `x` and `iterations` give
        the point reached) or the step is not finite.

    Notes
    -----
    Convergence is quadratic near a simple root.  Near a root of
    multiplicity `m` it is only linear, with the error reducing by a
    factor of :math:`(m - 1) / m` each step, e.g. halving for a double
    root.

    Examples
    --------
    >>> import math
    >>> res = newton_raphson(math.cos, 1.0, fprime=lambda x: -math.sin(x))
    >>> res.converged, round(res.root, 12)
    (True, 1.570796326795)
    """
    tol, maxiter = resolve_options(tol, maxiter)
    f = ScalarFunction(func, args, fprime=fprime, allow_complex=True)
    disp_enter(disp)
    try:
        disp_print(f"Newton-Raphson Root:")
        return _iterate_open(f, x0, tol, maxiter, deriv_floor,
                             method='newton_raphson', use_halley=False)
    finally:
        disp_exit()


# ----------------------------------------------------------------------

def halley(func: Callable, x0, *, fprime: Callable = None,
           fprime2: Callable = None, args=(), tol=None,
           maxiter: int = None, deriv_floor: float = None,
           disp: int | bool = None) -> ConvergenceResult:
    r"""
    Find a zero of a real or complex function using Halley's method.

    The Newton step :math:`\delta = f / f'` is adjusted using the second
    derivative:

    .. math:: x_{n+1} = x_n - \frac{\delta}{1 - \delta f'' / (2 f')}

    The adjustment is only made while :math:`|\delta f'' / (2 f')| < 1`.
    If this is not the case Halley's method would send `x` in the
    opposite direction to Newton's method, which doesn't happen if `x`
    is close enough to the root, so a plain Newton step is taken.

    Parameters
    ----------
    fprime2 : Callable[[x, ...], scalar], optional
        Second derivative :math:`f''(x)`.  If omitted a central finite
        difference is used.
    func, x0, fprime, args, tol, maxiter, deriv_floor, disp :
        See ``newton_raphson(...)``.

    Returns
    -------
    ConvergenceResult

    Raises
    ------
    SingularityError
        If the derivative vanishes or the step is not finite.

    Notes
    -----
    Convergence is cubic near a simple root.
    """
    tol, maxiter = resolve_options(tol, maxiter)
    f = ScalarFunction(func, args, fprime=fprime, fprime2=fprime2,
                       allow_complex=True)
    disp_enter(disp)
    try:
        disp_print(f"Halley Root:")
        return _iterate_open(f, x0, tol, maxiter, deriv_floor,
                             method='halley', use_halley=True)
    finally:
        disp_exit()


# ======================================================================

def _iterate_open(f: ScalarFunction, x0, tol, maxiter: int,
                  deriv_floor, *, method: str,
                  use_halley: bool) -> ConvergenceResult:
    if deriv_floor is None:
        deriv_floor = get_solver_options().deriv_floor

    x, fx = x0, f(x0)
    state = IterationState(x=x, fx=fx)

    while True:
        if fx == 0:
            return state.finish(Status.CONVERGED, method=method,
                                fevals=f.fevals, error=0)

        if state.iterations >= maxiter:
            return state.finish(Status.MAXITER, method=method,
                                fevals=f.fevals)

        fder = f.deriv(x)
        if abs(fder) <= deriv_floor:
            raise SingularityError(
                f"{method}() failed: derivative was zero.", flag=1,
                details=f"|f'(x)| <= {deriv_floor}", x=x, fx=fx,
                iterations=state.iterations)

        # Compute step using derivative.
        step = fx / fder
        if use_halley:
            fder2 = f.deriv2(x, fx)
            adj = step * fder2 / fder / 2
            if abs(adj) < 1:
                step = step / (1 - adj)

        x_new = x - step
        if x_new != x_new or abs(x_new) == float('inf'):
            raise SingularityError(
                f"{method}() failed: step is not finite.", flag=2,
                details="Overflow in step.", x=x, fx=fx, fprime=fder,
                iterations=state.iterations)

        x, fx = x_new, f(x_new)
        state.advance(x, fx, step)
        disp_print(f"... Iteration {state.iterations}: x = {x}, "
                   f"f(x) = {fx}, Δx = {-step}")

        if abs(step) <= tol * (1 + abs(x)):
            return state.finish(Status.CONVERGED, method=method,
                                fevals=f.fevals)
