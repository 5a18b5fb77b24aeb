"""
Bracketing methods for a real root of a scalar function :math:`f(x)`.

All methods share the same contract:

- ``f(a)`` and ``f(b)`` must have opposite signs, otherwise a
  `BracketError` is raised before any iteration takes place.  An end
  point that is already an exact zero is returned immediately.
- On convergence the returned root `r` satisfies ``a <= r <= b`` and
  either ``|f(r)| <= tol`` or the final bracket width is ``<= tol``.
- Reaching `maxiter` is not an error; the result has status
  ``Status.MAXITER`` and holds the best estimate found.

The exception is `secant`, which is included with this group for
reference but does not preserve a bracket (see its notes).

`bisect_root`, `regula_falsi` and `secant` only apply scalar arithmetic
and comparisons to `x` and `f(x)`, so any ordered numeric type (e.g.
`fractions.Fraction`) is kept throughout.  `brent_dekker` mixes in
machine epsilon and `ridders` needs a square root, so these may return
`float` results unless the type supports both (e.g. `mpmath.mpf`).
"""
from __future__ import annotations

from collections.abc import Callable

import numpy as np

from pyroots.util.display import disp_enter, disp_exit, disp_print
from .callables import ScalarFunction
from .exception import BracketError, DomainError, SingularityError
from .options import resolve_options
from .results import (Bracket, ConvergenceResult, IterationState, Status,
                      sign_differs)

_EPS = float(np.finfo(float).eps)


# ======================================================================

def bisect_root(func: Callable, a, b, *, args=(), tol=None,
                maxiter: int = None,
                disp: int | bool = None) -> ConvergenceResult:
    r"""
    Approximate solution of :math:`f(x) = 0` on interval :math:`x \in
    [a, b]` by the bisection method.  For bisection to work :math:`f(x)`
    must change sign across the interval, i.e. ``func(a)`` and
    ``func(b)`` must return values of opposite sign.

    .. note:: This function is able to be used with exact number types
       such as `fractions.Fraction`.

    Parameters
    ----------
    func : Callable[[x, ...], scalar]
        Function which we are searching for root.
    a, b : scalar
        Each end of the search interval, in any order.
    args : tuple, optional
        Extra arguments passed to `func`.
    tol : scalar, optional
        Stop when :math:`|f(x)| \le tol` or the bracket width is
        :math:`\le tol`.  Default from `get_solver_options()`.
    maxiter : int, optional
        Maximum number of iterations.  Default from
        `get_solver_options()`.
    disp : int or bool, optional
        Print progress; see ``pyroots.util.disp_enter(...)``.

    Returns
    -------
    ConvergenceResult
        The midpoint of the final bracket as `root`, with the bracket
        half-width as `error`.

    Raises
    ------
    BracketError
        If `func(a)` and `func(b)` do not have opposite signs.

    Examples
    --------
    >>> res = bisect_root(lambda x: x**2 - x - 1, 1, 2, tol=1e-6)
    >>> round(res.root, 6), res.iterations
    (1.618034, 17)
    >>> res = bisect_root(lambda x: (2*x - 1)*(x - 3), 0, 1)
    >>> res.root, res.iterations  # Solution was in centre.
    (0.5, 1)
    """
    tol, maxiter = resolve_options(tol, maxiter)
    f = ScalarFunction(func, args)
    disp_enter(disp)
    try:
        br = Bracket.from_func(f, a, b)
        disp_print(f"Bisecting Root:")
        if br.has_zero_end:
            return _zero_end_result(br, f, 'bisect_root')

        lo, hi, f_lo = br.low, br.high, br.f_low
        state = _best_end_state(br)
        while state.iterations < maxiter:
            # Compute midpoint; stop if the interval cannot be halved
            # any further.
            x_m = lo + (hi - lo) / 2
            if not lo < x_m < hi:
                return state.finish(Status.CONVERGED, method='bisect_root',
                                    fevals=f.fevals, error=hi - lo)

            f_m = f(x_m)
            state.advance(x_m, f_m, (hi - lo) / 2)
            disp_print(f"... Iteration {state.iterations}: x = [{lo}, "
                       f"{x_m}, {hi}], f(x_m) = {f_m}")

            # Check stopping criteria.
            if abs(f_m) <= tol or (hi - lo) / 2 <= tol:
                return state.finish(Status.CONVERGED, method='bisect_root',
                                    fevals=f.fevals)

            # Check which side root is on, narrow interval.
            if sign_differs(f_lo, f_m):
                hi = x_m
            else:
                lo, f_lo = x_m, f_m

        return state.finish(Status.MAXITER, method='bisect_root',
                            fevals=f.fevals)

    finally:
        disp_exit()


# ----------------------------------------------------------------------

def brent_dekker(func: Callable, a, b, *, args=(), tol=None,
                 maxiter: int = None,
                 disp: int | bool = None) -> ConvergenceResult:
    r"""
    Find a root of :math:`f(x)` bracketed by `a` and `b` using the
    Brent-Dekker method [1]_.

    The method keeps three points: the best estimate `b`, the previous
    estimate `a` and the contrapoint `c` such that the root lies between
    `b` and `c`.  Each step tries inverse quadratic interpolation (or
    the secant line when only two distinct points are available).  The
    interpolated step is accepted only if it falls inside the bracket
    and is smaller than half the step taken two iterations earlier;
    otherwise the method bisects.  Convergence is therefore guaranteed
    at the bisection rate at worst and is superlinear when
    interpolation behaves well.

    Parameters
    ----------
    func : Callable[[x, ...], scalar]
        Scalar function.
    a, b : scalar
        Ends of the bracket, in any order.
    args : tuple, optional
        Extra arguments passed to `func`.
    tol : scalar, optional
        Stop when :math:`|f(x)| \le tol` or when the bracket has shrunk
        to :math:`tol + 4 \epsilon |x|`.  Default from
        `get_solver_options()`.
    maxiter : int, optional
        Iteration limit.  Default from `get_solver_options()`.
    disp : int or bool, optional
        Print progress; see ``pyroots.util.disp_enter(...)``.

    Returns
    -------
    ConvergenceResult
        The `error` is half the final bracket width.

    Raises
    ------
    BracketError
        If `func(a)` and `func(b)` do not have opposite signs.

    References
    ----------
    .. [1] Press, W. H.; Flannery, B. P.; Teukolsky, S. A.; and
       Vetterling, W. T. *Numerical Recipes: The Art of Scientific
       Computing*, 3rd ed. Cambridge, England: Cambridge University
       Press, 2007. Section 9.3: "Van Wijngaarden-Dekker-Brent
       Method".

    Examples
    --------
    >>> res = brent_dekker(lambda x: x**3 - 2*x - 5, 2, 3)
    >>> res.converged, round(res.root, 10)
    (True, 2.0945514815)
    """
    tol, maxiter = resolve_options(tol, maxiter)
    f = ScalarFunction(func, args)
    disp_enter(disp)
    try:
        br = Bracket.from_func(f, a, b)
        disp_print(f"Brent-Dekker Root:")
        if br.has_zero_end:
            return _zero_end_result(br, f, 'brent_dekker')

        a, b, fa, fb = br.low, br.high, br.f_low, br.f_high
        c, fc = b, fb
        d = e = b - a
        state = IterationState(x=b, fx=fb)

        while True:
            if (fb > 0 and fc > 0) or (fb < 0 and fc < 0):
                # Root is not between b and c; reset contrapoint.
                c, fc = a, fa
                d = e = b - a

            if abs(fc) < abs(fb):
                # Keep b as the best estimate.
                a, b, c = b, c, b
                fa, fb, fc = fb, fc, fb

            tol1 = 2 * _EPS * abs(b) + tol / 2
            x_m = (c - b) / 2
            state.x, state.fx = b, fb

            # Check stopping criteria.
            if abs(x_m) <= tol1 or abs(fb) <= tol:
                return state.finish(Status.CONVERGED, method='brent_dekker',
                                    fevals=f.fevals, error=abs(x_m))

            if state.iterations >= maxiter:
                return state.finish(Status.MAXITER, method='brent_dekker',
                                    fevals=f.fevals, error=abs(x_m))

            if abs(e) >= tol1 and abs(fa) > abs(fb):
                # Attempt interpolation.
                s = fb / fa
                if a == c:
                    # Secant (linear) interpolation.
                    p = 2 * x_m * s
                    q = 1 - s
                else:
                    # Inverse quadratic interpolation.
                    q, r = fa / fc, fb / fc
                    p = s * (2 * x_m * q * (q - r) - (b - a) * (r - 1))
                    q = (q - 1) * (r - 1) * (s - 1)

                if p > 0:
                    q = -q
                p = abs(p)

                # Accept only if inside the bracket and less than half
                # the step before last.
                if 2 * p < min(3 * x_m * q - abs(tol1 * q), abs(e * q)):
                    e, d = d, p / q
                    kind = 'interpolation'
                else:
                    d = e = x_m
                    kind = 'bisection'

            else:
                # Bounds decreasing too slowly; bisect.
                d = e = x_m
                kind = 'bisection'

            # Move last best estimate to a and take the step.
            a, fa = b, fb
            if abs(d) > tol1:
                b += d
            else:
                b += tol1 if x_m > 0 else -tol1

            fb = f(b)
            state.advance(b, fb, d)
            disp_print(f"... Iteration {state.iterations}: x = {b}, "
                       f"f(x) = {fb} ({kind})")

    finally:
        disp_exit()


# ----------------------------------------------------------------------

def ridders(func: Callable, a, b, *, args=(), tol=None,
            maxiter: int = None,
            disp: int | bool = None) -> ConvergenceResult:
    r"""
    Find a root of :math:`f(x)` bracketed by `a` and `b` using Ridders'
    method [1]_.

    Each iteration evaluates :math:`f` at the midpoint :math:`x_m` of
    the bracket :math:`[x_1, x_2]`, then factors out an exponential so
    that the three points lie on a straight line, giving the new
    estimate:

    .. math:: x_4 = x_m + (x_m - x_1) \frac{\mathrm{sign}(f_1 - f_2)
              f_m}{\sqrt{f_m^2 - f_1 f_2}}

    The sub-interval containing the sign change is kept.  The new
    estimate always lies within the bracket and convergence is
    quadratic per iteration (two function evaluations).

    The square root is taken with ``** 0.5``, so `Fraction` arguments
    give a `float` result.

    Parameters
    ----------
    func, a, b, args, tol, maxiter, disp :
        See ``bisect_root(...)``.  Iteration also stops when successive
        estimates are within `tol`.

    Returns
    -------
    ConvergenceResult

    Raises
    ------
    BracketError
        If `func(a)` and `func(b)` do not have opposite signs.

    References
    ----------
    .. [1] Ridders, C. J. F., "A New Algorithm for Computing a Single
       Root of a Real Continuous Function", IEEE Transactions on
       Circuits and Systems, Vol. 26, No. 11, pp. 979-980, 1979.
    """
    tol, maxiter = resolve_options(tol, maxiter)
    f = ScalarFunction(func, args)
    disp_enter(disp)
    try:
        br = Bracket.from_func(f, a, b)
        disp_print(f"Ridders Root:")
        if br.has_zero_end:
            return _zero_end_result(br, f, 'ridders')

        x1, x2, f1, f2 = br.low, br.high, br.f_low, br.f_high
        state = _best_end_state(br)
        x_prev = None

        while state.iterations < maxiter:
            x_m = x1 + (x2 - x1) / 2
            f_m = f(x_m)
            s = (f_m * f_m - f1 * f2) ** 0.5
            if s == 0:
                state.advance(x_m, f_m, (x2 - x1) / 2)
                return state.finish(Status.CONVERGED, method='ridders',
                                    fevals=f.fevals)

            # Exponential extrapolation.
            sgn = 1 if f1 >= f2 else -1
            x_new = x_m + (x_m - x1) * sgn * f_m / s
            f_new = f(x_new)
            step = x_new - x_prev if x_prev is not None else x2 - x1
            state.advance(x_new, f_new, step)
            disp_print(f"... Iteration {state.iterations}: x = {x_new}, "
                       f"f(x) = {f_new}")

            if abs(f_new) <= tol or abs(step) <= tol:
                return state.finish(Status.CONVERGED, method='ridders',
                                    fevals=f.fevals)

            # Keep the sub-interval containing the sign change.
            if sign_differs(f_m, f_new):
                x1, f1, x2, f2 = x_m, f_m, x_new, f_new
            elif sign_differs(f1, f_new):
                x2, f2 = x_new, f_new
            else:
                x1, f1 = x_new, f_new

            if abs(x2 - x1) <= tol:
                return state.finish(Status.CONVERGED, method='ridders',
                                    fevals=f.fevals, error=abs(x2 - x1))

            x_prev = x_new

        return state.finish(Status.MAXITER, method='ridders',
                            fevals=f.fevals, error=abs(x2 - x1))

    finally:
        disp_exit()


# ----------------------------------------------------------------------

_RF_VARIANTS = ('illinois', 'pegasus', 'anderson', 'plain')


def regula_falsi(func: Callable, a, b, *, args=(), tol=None,
                 maxiter: int = None, variant: str = 'illinois',
                 disp: int | bool = None) -> ConvergenceResult:
    """
    Find a root of :math:`f(x)` bracketed by `a` and `b` using the
    method of false position (regula falsi).

    Each new estimate is where the secant line through the bracket ends
    crosses zero, and the bracket is narrowed as for bisection.  This
    combines the guaranteed bracket of bisection with the faster
    convergence of the secant line.

    Parameters
    ----------
    func, a, b, args, tol, maxiter, disp :
        See ``bisect_root(...)``.
    variant : str, default = 'illinois'
        Plain regula falsi can stagnate with one end of the bracket
        fixed.  The modified methods scale the function value at the
        retained end whenever it is retained twice in a row [1]_:

        - ``'illinois'``: Halve it.
        - ``'pegasus'``: Multiply by :math:`f_b / (f_b + f_x)`.
        - ``'anderson'``: Multiply by :math:`1 - f_x / f_b` (or halve if
          this is not positive).
        - ``'plain'``: Unmodified method.

    Returns
    -------
    ConvergenceResult

    Raises
    ------
    BracketError
        If `func(a)` and `func(b)` do not have opposite signs.
    DomainError
        If `variant` is unknown.

    References
    ----------
    .. [1] Ford, J. A., "Improved Algorithms of Illinois-Type for the
       Numerical Solution of Nonlinear Equations", University of Essex
       Technical Report CSM-257, 1995.
    """
    if variant not in _RF_VARIANTS:
        raise DomainError(f"Unknown regula falsi variant '{variant}', "
                          f"must be one of {_RF_VARIANTS}.")

    tol, maxiter = resolve_options(tol, maxiter)
    f = ScalarFunction(func, args)
    disp_enter(disp)
    try:
        br = Bracket.from_func(f, a, b)
        disp_print(f"Regula Falsi Root ({variant}):")
        if br.has_zero_end:
            return _zero_end_result(br, f, 'regula_falsi')

        a, b, fa, fb = br.low, br.high, br.f_low, br.f_high
        state = _best_end_state(br)

        while state.iterations < maxiter:
            x = b - fb * (b - a) / (fb - fa)
            fx = f(x)
            state.advance(x, fx, x - b)
            disp_print(f"... Iteration {state.iterations}: x = {x}, "
                       f"f(x) = {fx}")

            if abs(fx) <= tol:
                return state.finish(Status.CONVERGED, method='regula_falsi',
                                    fevals=f.fevals)

            if sign_differs(fx, fb):
                # Root between x and b; b becomes the retained end.
                a, fa = b, fb
            elif variant == 'illinois':
                fa = fa / 2
            elif variant == 'pegasus':
                fa = fa * fb / (fb + fx)
            elif variant == 'anderson':
                m = 1 - fx / fb
                fa = fa * m if m > 0 else fa / 2

            b, fb = x, fx
            if abs(b - a) <= tol:
                return state.finish(Status.CONVERGED, method='regula_falsi',
                                    fevals=f.fevals, error=abs(b - a))

        return state.finish(Status.MAXITER, method='regula_falsi',
                            fevals=f.fevals, error=abs(b - a))

    finally:
        disp_exit()


# ----------------------------------------------------------------------

def secant(func: Callable, x0, x1, *, args=(), tol=None,
           maxiter: int = None,
           disp: int | bool = None) -> ConvergenceResult:
    r"""
    Find a root of :math:`f(x)` using the secant method, starting from
    two points `x0` and `x1`.

    .. note:: Unlike the other methods in this module there is no
       bracket requirement and **no guarantee that the estimates stay
       within** :math:`[x_0, x_1]`.  The iteration may leave the
       interval, converge to a different root or diverge.  Use a
       bracketing method where this matters.

    Parameters
    ----------
    func : Callable[[x, ...], scalar]
        Scalar function.
    x0, x1 : scalar
        Distinct starting points.  They need not bracket a root.
    args, maxiter, disp :
        See ``bisect_root(...)``.
    tol : scalar, optional
        Stop when :math:`|f(x)| \le tol` or the step satisfies
        :math:`|\Delta x| \le tol (1 + |x|)`.

    Returns
    -------
    ConvergenceResult

    Raises
    ------
    DomainError
        If ``x0 == x1``.
    SingularityError
        If the two most recent points have equal function values, so
        the secant line has no root.
    """
    tol, maxiter = resolve_options(tol, maxiter)
    if x0 == x1:
        raise DomainError("x1 and x0 must be different")

    f = ScalarFunction(func, args)
    disp_enter(disp)
    try:
        disp_print(f"Secant Root:")
        p0, p1 = x0, x1
        q0, q1 = f(p0), f(p1)
        if abs(q1) > abs(q0):
            p0, p1, q0, q1 = p1, p0, q1, q0

        state = IterationState(x=p1, fx=q1, step=p1 - p0)
        if q1 == 0:
            return state.finish(Status.CONVERGED, method='secant',
                                fevals=f.fevals, error=0)

        while state.iterations < maxiter:
            if q1 == q0:
                # Reached a level state: f(p0) = f(p1) -> df/dp = 0.
                raise SingularityError(
                    "secant() failed: f(x) equal at two points.", flag=1,
                    details="Secant line is horizontal.", x0=p0, x1=p1,
                    fx=q1, iterations=state.iterations)

            p = p1 - q1 * (p1 - p0) / (q1 - q0)
            q = f(p)
            state.advance(p, q, p - p1)
            disp_print(f"... Iteration {state.iterations}: x = {p}, "
                       f"f(x) = {q}")

            if abs(q) <= tol or abs(p - p1) <= tol * (1 + abs(p)):
                return state.finish(Status.CONVERGED, method='secant',
                                    fevals=f.fevals)

            p0, q0, p1, q1 = p1, q1, p, q

        return state.finish(Status.MAXITER, method='secant',
                            fevals=f.fevals)

    finally:
        disp_exit()


# ======================================================================

def bracket_root(func: Callable, x1, x2, *, args=(),
                 x_limits: tuple = (-np.inf, np.inf),
                 grow_factor: float = 0.5, Δx_max: float = np.inf,
                 max_steps: int = 50,
                 disp: int | bool = None) -> Bracket:
    """
    Given an initial guessed range `x1` to `x2`, the range is expanded
    geometrically until a root of the function `func(x)` is bracketed or
    until the stopping criteria are met.  The result can be passed to
    any of the bracketing methods.

    Parameters
    ----------
    func : Callable[[x, ...], scalar]
        Scalar function taking a float as the first argument. May accept
        additional arguments (see parameter `args`).
    x1, x2 : float
        Starting points for bracket, with `x1` < `x2`.
    args : tuple, optional
        Extra arguments passed to be passed to `func`.
    x_limits : tuple[float, float], default = (-∞, +∞)
        Stops if the next step will exceed this value.
    grow_factor : float, default = 0.5
        Size factor that determines the amount `x1` or `x2` are moved in
        each step to expand the range (`Δx`), with
        ``Δx = grow_factor * (x2 - x1)`` (unless `Δx_max` is reached -
        see below).
    Δx_max : float, default = ∞
        Maximum magnitude of movement permitted for `x1` or `x2` when
        expanding the range.
    max_steps : int, default = 50
        Stops once this number of steps has been completed.
    disp : int or bool, optional
        Print progress; see ``pyroots.util.disp_enter(...)``.

    Returns
    -------
    Bracket
        `x`-values bracketing the root, with their function values.

    Raises
    ------
    DomainError
        Illegal starting conditions.

    BracketError
        Failure to find a bracket raises a `BracketError` exception
        including the following attributes:

        - `x1`, `x2`: Most recent bracket values used.
        - `f1`, `f2`: Function values corresponding to `x1`, `x2`.
        - `flag` and `detail`:
            - 1: Reached max_steps.
            - 2: Reached x_limit.
        - 'steps': Number of steps taken.
        - 'fevals': Number of function evaluations.

    Notes
    -----
    - A bracket is found when `f(x1)` and `f(x2)` have opposite signs,
      or if either `f(x1)` or `f(x2)` become exactly zero.
    - Basic stepping can easily fail for functions that have extrema
      near the area of interest. Quoting [1]_: `'The procedure “go
      downhill until your function changes sign,” can be foiled by a
      function that has a simple extremum.  Nevertheless, if you are
      prepared to deal with a “failure” outcome, this procedure is
      often a good first start; success is usual if your function has
      opposite signs in the limit x → ±∞.'`

    References
    ----------
    .. [1] Press, W. H.; Flannery, B. P.; Teukolsky, S. A.; and
       Vetterling, W. T. *Numerical Recipes: The Art of Scientific
       Computing*, 3rd ed. Cambridge, England: Cambridge University
       Press, pp. 447, 2007. Section 9.1: "Bracketing and Bisection".

    Examples
    --------
    Equation :math:`y = x^2 -3x + 2` has roots at `x` = 1 and `x` = 2.
    >>> def example_fn(x):
    ...     return x**2 - 3 * x + 2

    Find bracket starting from left side:
    >>> br = bracket_root(example_fn, -2, -1)
    >>> br.low, br.high
    (-2, 1.375)

    Find bracket starting from right side:
    >>> br = bracket_root(example_fn, 3, 4)
    >>> br.low, br.high
    (1.75, 4)
    """
    if x1 >= x2:
        raise DomainError("Requires x1 < x2.")

    if Δx_max <= 0:
        raise DomainError("Requires Δx_max > 0.")

    f = ScalarFunction(func, args)
    disp_enter(disp)
    try:
        disp_print(f"Bracketing Root:")
        f1, f2 = f(x1), f(x2)
        steps = 0

        while not sign_differs(f1, f2):
            if steps >= max_steps:
                raise BracketError("bracket_root() failed to converge:",
                                   flag=1, details="Reached max_steps.",
                                   x1=x1, x2=x2, f1=f1, f2=f2, steps=steps,
                                   fevals=f.fevals)

            # Check if we had stopped at the boundary on the last step.
            if (x1 <= x_limits[0]) or (x2 >= x_limits[1]):
                raise BracketError("bracket_root() failed to converge:",
                                   flag=2, details="Reached x_limit.",
                                   x1=x1, x2=x2, f1=f1, f2=f2, steps=steps,
                                   fevals=f.fevals)

            # Advance one step; clip to limits if necessary.
            Δx = min(grow_factor * (x2 - x1), Δx_max)
            if abs(f1) < abs(f2):
                x1 = max(x1 - Δx, x_limits[0])  # <- Grow left
                f1 = f(x1)
            else:
                x2 = min(x2 + Δx, x_limits[1])  # Grow right ->
                f2 = f(x2)

            steps += 1
            disp_print(f"... Step {steps}: x = [{x1}, {x2}], "
                       f"f(x) = [{f1}, {f2}]")

        return Bracket(x1, x2, f1, f2)

    finally:
        disp_exit()


# ======================================================================

def _best_end_state(br: Bracket) -> IterationState:
    # Starting state holds the end with the smaller |f|.
    if abs(br.f_low) <= abs(br.f_high):
        return IterationState(x=br.low, fx=br.f_low, step=br.width)
    return IterationState(x=br.high, fx=br.f_high, step=br.width)


def _zero_end_result(br: Bracket, f: ScalarFunction,
                     method: str) -> ConvergenceResult:
    # One end of the bracket is already an exact root.
    if br.f_low == 0:
        state = IterationState(x=br.low, fx=br.f_low)
    else:
        state = IterationState(x=br.high, fx=br.f_high)
    return state.finish(Status.CONVERGED, method=method, fevals=f.fevals,
                        error=0)
