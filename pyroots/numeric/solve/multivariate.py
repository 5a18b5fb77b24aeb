"""
Solvers for systems of nonlinear equations :math:`F(x) = 0` where
:math:`F: R^m -> R^n`.  Complex equations are handled by splitting them
into real and imaginary parts.

All solvers share the same stopping rule: converged when
:math:`\\|F(x)\\| \\le tol` or when the step satisfies
:math:`\\|\\Delta x\\| \\le tol (1 + \\|x\\|)`.
"""
from __future__ import annotations

from collections.abc import Callable

import numpy as np
from numpy.typing import ArrayLike
from scipy.linalg import lu_factor, lu_solve

from pyroots.util.display import disp_enter, disp_exit, disp_print
from .callables import VectorFunction
from .exception import DomainError, SingularJacobianError
from .options import get_solver_options, resolve_options
from .results import ConvergenceResult, IterationState, Status


# ======================================================================

def gauss_newton(func: Callable, x0: ArrayLike, *, jac: Callable = None,
                 args=(), tol=None, maxiter: int = None,
                 disp: int | bool = None) -> ConvergenceResult:
    r"""
    Solve :math:`F(x) = 0` using the Gauss-Newton method.

    Each step is the least-squares solution of :math:`J \Delta x = -F`,
    which is the same as solving the normal equations
    :math:`J^T J \Delta x = -J^T F` but is computed by SVD (NumPy
    ``lstsq``) for better numerical stability.

    Parameters
    ----------
    func : Callable[[ndarray, ...], array_like]
        Vector function called as ``func(x, *args)``, returning `n`
        values.
    x0 : array_like, shape (m,)
        Starting point.
    jac : Callable[[ndarray, ...], array_like], optional
        Jacobian of shape ``(n, m)``.  If omitted, forward differences
        are used.
    args : tuple, optional
        Extra arguments passed to `func` and `jac`.
    tol : float, optional
        Stopping tolerance (see module notes).  Default from
        `get_solver_options()`.
    maxiter : int, optional
        Iteration limit.  Default from `get_solver_options()`.
    disp : int or bool, optional
        Print progress; see ``pyroots.util.disp_enter(...)``.

    Returns
    -------
    ConvergenceResult
        `root` and `fval` are read-only 1-D arrays.

    Raises
    ------
    SingularJacobianError
        If the Jacobian is rank deficient at any iterate.
    DomainError
        If `func` or `jac` return values of the wrong shape or type.

    Notes
    -----
    When ``n != m`` the method converges (if at all) to a least-squares
    minimiser of :math:`\|F(x)\|`, which is not necessarily a zero.  In
    this case `fval` should be checked.

    Examples
    --------
    Intersection of the unit circle and the line :math:`y = x`:

    >>> res = gauss_newton(lambda x: [x[0]**2 + x[1]**2 - 1, x[0] - x[1]],
    ...                    [1.0, 0.5])
    >>> res.converged, np.round(res.root, 8)
    (True, array([0.70710678, 0.70710678]))
    """
    tol, maxiter = resolve_options(tol, maxiter)
    fn = VectorFunction(func, x0, args, jac=jac)

    def step(x, fx):
        jx = fn.jacobian(x, fx)
        dx, _, rank, _ = np.linalg.lstsq(jx, -fx, rcond=None)
        if rank < min(jx.shape):
            raise SingularJacobianError(
                "gauss_newton() failed: Jacobian is rank deficient.",
                flag=1, details=f"rank {rank} < {min(jx.shape)}", x=x,
                fx=fx)
        return dx

    disp_enter(disp)
    try:
        disp_print(f"Gauss-Newton Method:")
        return _iterate_system(fn, x0, tol, maxiter, step,
                               method='gauss_newton')
    finally:
        disp_exit()


# ----------------------------------------------------------------------

def broyden(func: Callable, x0: ArrayLike, *, jac: Callable = None,
            args=(), tol=None, maxiter: int = None,
            disp: int | bool = None) -> ConvergenceResult:
    r"""
    Solve the square system :math:`F(x) = 0` using Broyden's
    quasi-Newton method.

    An approximate Jacobian `B` is computed once at the start (analytic
    or by finite differences) and afterwards corrected at each step by
    the rank-one secant update:

    .. math:: B \leftarrow B + \frac{(\Delta F - B s) s^T}{s^T s}

    where :math:`s = \Delta x`.  If `B` becomes numerically singular it
    is replaced by a freshly computed Jacobian, and the step retried.

    Parameters
    ----------
    func, x0, jac, args, tol, maxiter, disp :
        See ``gauss_newton(...)``.

    Returns
    -------
    ConvergenceResult

    Raises
    ------
    DomainError
        If the system is not square (``n != m``).
    SingularJacobianError
        If a freshly computed Jacobian is also singular.

    Notes
    -----
    Only one Jacobian evaluation is normally required, so each iteration
    is cheap.  Convergence is superlinear near a root.
    """
    tol, maxiter = resolve_options(tol, maxiter)
    cond_max = get_solver_options().jac_cond_max
    fn = VectorFunction(func, x0, args, jac=jac)
    b_mat, last = None, None

    def step(x, fx):
        nonlocal b_mat, last
        if b_mat is None:
            b_mat = fn.jacobian(x, fx)
        else:
            s, df = x - last[0], fx - last[1]
            b_mat = b_mat + np.outer(df - b_mat @ s, s) / (s @ s)
        last = (x, fx)

        try:
            return _lu_step(b_mat, fx, cond_max, method='broyden')
        except SingularJacobianError:
            disp_print(f"... Singular Broyden matrix, recomputing "
                       f"Jacobian.")
            b_mat = fn.jacobian(x, fx)
            return _lu_step(b_mat, fx, cond_max, method='broyden')

    disp_enter(disp)
    try:
        disp_print(f"Broyden Method:")
        return _iterate_system(fn, x0, tol, maxiter, step,
                               method='broyden', square=True)
    finally:
        disp_exit()


# ----------------------------------------------------------------------

def newton_system(func: Callable, x0: ArrayLike, *, jac: Callable = None,
                  args=(), tol=None, maxiter: int = None,
                  disp: int | bool = None) -> ConvergenceResult:
    r"""
    Solve the square system :math:`F(x) = 0` using Newton's method, with
    each step :math:`J \Delta x = -F` found by LU decomposition (SciPy
    ``lu_factor`` / ``lu_solve``).

    Parameters
    ----------
    func, x0, jac, args, tol, maxiter, disp :
        See ``gauss_newton(...)``.

    Returns
    -------
    ConvergenceResult

    Raises
    ------
    DomainError
        If the system is not square (``n != m``).
    SingularJacobianError
        If the condition number of the Jacobian exceeds
        ``get_solver_options().jac_cond_max`` or is not finite.

    Examples
    --------
    >>> res = newton_system(lambda x: [x[0] + x[1] - 3, x[0] * x[1] - 2],
    ...                     [0.0, 1.5])
    >>> np.round(res.root, 10)
    array([1., 2.])
    """
    tol, maxiter = resolve_options(tol, maxiter)
    cond_max = get_solver_options().jac_cond_max
    fn = VectorFunction(func, x0, args, jac=jac)

    def step(x, fx):
        return _lu_step(fn.jacobian(x, fx), fx, cond_max,
                        method='newton_system')

    disp_enter(disp)
    try:
        disp_print(f"Newton Method ({fn.m} Variables):")
        return _iterate_system(fn, x0, tol, maxiter, step,
                               method='newton_system', square=True)
    finally:
        disp_exit()


# ======================================================================

def _iterate_system(fn: VectorFunction, x0, tol, maxiter: int,
                    step: Callable, *, method: str,
                    square: bool = False) -> ConvergenceResult:
    # Common iteration; `step(x, fx)` returns the change in x.
    x = np.atleast_1d(np.array(x0, dtype=float))
    fx = fn(x)
    if square and fn.n != fn.m:
        raise DomainError(f"{method}() requires a square system, got "
                          f"{fn.n} equations in {fn.m} variables.")

    state = IterationState(x=x, fx=fx)
    while True:
        f_norm = np.linalg.norm(fx)
        if f_norm <= tol:
            return state.finish(Status.CONVERGED, method=method,
                                fevals=fn.fevals,
                                error=None if state.iterations else 0.0)

        if state.iterations >= maxiter:
            return state.finish(Status.MAXITER, method=method,
                                fevals=fn.fevals)

        dx = step(x, fx)
        if not np.all(np.isfinite(dx)):
            raise SingularJacobianError(f"{method}() failed: step is not "
                                        f"finite.", flag=2, x=x, fx=fx)

        x = x + dx
        fx = fn(x)
        state.advance(x, fx, dx)
        disp_print(f"... Iteration {state.iterations}: "
                   f"||F(x)|| = {np.linalg.norm(fx):.5G}, "
                   f"||Δx|| = {np.linalg.norm(dx):.5G}")

        if np.linalg.norm(dx) <= tol * (1 + np.linalg.norm(x)):
            return state.finish(Status.CONVERGED, method=method,
                                fevals=fn.fevals)


def _lu_step(jx: np.ndarray, fx: np.ndarray, cond_max: float, *,
             method: str) -> np.ndarray:
    # Solve J.dx = -F by LU decomposition after checking conditioning.
    cond = np.linalg.cond(jx)
    if not np.isfinite(cond) or cond > cond_max:
        raise SingularJacobianError(
            f"{method}() failed: Jacobian is singular.", flag=1,
            details=f"cond(J) = {cond:.5G} > {cond_max:.5G}")
    return lu_solve(lu_factor(jx), -fx)
