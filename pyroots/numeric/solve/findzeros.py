"""
Scan an interval for all real zeros of a scalar function.  Sign
changes between grid points are refined by a bracketing method and the
remaining sub-intervals are searched for touching (even multiplicity)
zeros by minimising :math:`|f(x)|`.
"""
from __future__ import annotations

from collections.abc import Callable

from scipy.optimize import minimize_scalar

from pyroots.util.display import disp_enter, disp_exit, disp_print
from .bracket import bisect_root, brent_dekker, regula_falsi, ridders
from .callables import ScalarFunction
from .exception import DomainError
from .options import check_maxiter, check_tol, get_solver_options
from .results import Interval, sign_differs

_BRACKET_METHODS = {'brent': brent_dekker,
                    'ridders': ridders,
                    'bisect': bisect_root,
                    'regula_falsi': regula_falsi}


# ======================================================================

def findzeros(func: Callable, a: float, b: float, *, args=(),
              n: int = 100, tol: float = 1e-8, ftol: float = None,
              maxiter: int = None, method: str = 'brent',
              disp: int | bool = None) -> list[float]:
    """
    Find all real roots of :math:`f(x)` on the interval :math:`[a, b]`
    that can be resolved by scanning it in sub-intervals.

    The interval is divided into equal sub-intervals, each no narrower
    than `tol`.  Then:

    - Every sub-interval end point (including `a` and `b`) with
      :math:`|f(x)| \\le ftol` is a root.
    - A sub-interval where :math:`f` changes sign is passed to a
      bracketing method.
    - In a sub-interval without a sign change, :math:`|f|` is minimised
      (SciPy bounded scalar minimiser).  An interior minimum with
      :math:`|f| \\le ftol` is a 'touching' root, where :math:`f`
      reaches zero without crossing it (e.g. :math:`x^2` at zero).

    Roots closer together than `tol` are merged (the one with the
    smaller residual is kept) and the result is sorted.

    Parameters
    ----------
    func : Callable[[float, ...], float]
        Real scalar function.
    a, b : float
        Ends of the interval with ``a < b``.
    args : tuple, optional
        Extra arguments passed to `func`.
    n : int, default = 100
        Number of sub-intervals, reduced if required so that each is at
        least `tol` wide.
    tol : float, default = 1e-8
        Resolution in `x`: minimum sub-interval width, minimiser
        tolerance and distance below which roots are merged.
    ftol : float, optional
        Residual :math:`|f(x)|` accepted as a root; also passed as `tol`
        to the bracketing method.  Default from `get_solver_options()`.
    maxiter : int, optional
        Iteration limit for each bracketing / minimisation call.
    method : str, default = 'brent'
        Bracketing method: ``'brent'``, ``'ridders'``, ``'bisect'`` or
        ``'regula_falsi'``.
    disp : int or bool, optional
        Print progress; see ``pyroots.util.disp_enter(...)``.  Use
        ``disp=2`` to also show the bracketing method iterations.

    Returns
    -------
    list[float]
        Roots in increasing order.

    Raises
    ------
    DomainError
        Invalid interval or parameters.

    Notes
    -----
    - Roots are only found if they are separated by the sub-interval
      width; two simple roots within one sub-interval cancel in sign
      and may be missed.  Increase `n` if this is suspected.
    - Touching roots are only located to roughly the square root of
      machine precision, as :math:`|f|` is flat near such a root.
    - The scan is a single pass over the interval.

    Examples
    --------
    >>> import math
    >>> roots = findzeros(lambda x: x * math.sin(math.pi * x), -2, 2)
    >>> [round(r, 8) + 0.0 for r in roots]
    [-2.0, -1.0, 0.0, 1.0, 2.0]
    """
    opts = get_solver_options()
    ftol = check_tol(opts.tol if ftol is None else ftol)
    maxiter = check_maxiter(opts.maxiter if maxiter is None else maxiter)
    check_tol(tol)
    if n < 1:
        raise DomainError("Require n >= 1.")
    if not a < b:
        raise DomainError("Requires a < b.")
    try:
        solver = _BRACKET_METHODS[method]
    except KeyError:
        raise DomainError(f"Unknown method '{method}', must be one of "
                          f"{tuple(_BRACKET_METHODS)}.")

    span = Interval(a, b)
    n = max(min(n, int(span.width / tol)), 1)
    f = ScalarFunction(func, args)

    disp_enter(disp)
    try:
        disp_print(f"Scanning [{a}, {b}] for zeros using {n} "
                   f"sub-intervals:")

        # Grid points are computed directly (not accumulated) so that
        # round numbers are hit exactly where possible.
        x_pts = [a + span.width * i / n for i in range(n)] + [float(b)]
        f_pts = [f(x) for x in x_pts]
        found = []  # Pairs of (x, |f(x)|).

        for x, fx in zip(x_pts, f_pts):
            if abs(fx) <= ftol:
                disp_print(f"... Root at grid point x = {x}")
                found.append((x, abs(fx)))

        for x1, x2, f1, f2 in zip(x_pts[:-1], x_pts[1:], f_pts[:-1],
                                  f_pts[1:]):
            if f1 == 0 or f2 == 0:
                continue  # Already recorded above.

            if sign_differs(f1, f2):
                res = solver(f.func, x1, x2, args=f.args, tol=ftol,
                             maxiter=maxiter)
                if res.converged:
                    disp_print(f"... Root in [{x1}, {x2}]: x = {res.root}")
                    found.append((res.root, abs(res.fval)))
                else:
                    disp_print(f"... Unconverged in [{x1}, {x2}], "
                               f"skipped.")
                continue

            # No sign change; look for a touching root.
            res = minimize_scalar(lambda x_: abs(f(x_)), bounds=(x1, x2),
                                  method='bounded',
                                  options={'xatol': tol,
                                           'maxiter': maxiter})
            # Minima at (or better at) an end point belong to the grid.
            x_min = float(res.x)
            if (x1 + tol < x_min < x2 - tol and res.fun <= ftol and
                    res.fun < min(abs(f1), abs(f2))):
                disp_print(f"... Touching root in [{x1}, {x2}]: "
                           f"x = {x_min}")
                found.append((x_min, float(res.fun)))

        roots = _merge_roots(found, tol)
        disp_print(f"... Found {len(roots)} root(s).")
        return roots

    finally:
        disp_exit()


# ----------------------------------------------------------------------

def _merge_roots(found: list[tuple], tol: float) -> list:
    # Sort then merge neighbours closer than tol, keeping the smaller
    # residual of each group.
    merged = []
    for x, res in sorted(found):
        if merged and x - merged[-1][0] <= tol:
            if res < merged[-1][1]:
                merged[-1] = (x, res)
            continue
        merged.append((x, res))
    return [float(x) for x, _ in merged]
