"""
Wrappers giving user supplied functions a uniform calling contract.
Solvers wrap the function they are given at entry; the type and shape
of each returned value is checked when it is produced, so that a badly
behaved function fails with a clear `DomainError` instead of
corrupting the iteration.
"""
from __future__ import annotations

from collections.abc import Callable

import numpy as np
from numpy.typing import ArrayLike

from .exception import DomainError

_EPS = float(np.finfo(float).eps)


# ======================================================================

class ScalarFunction:
    """
    Scalar function :math:`f(x)` of one real or complex variable, with
    optional analytic first and second derivatives.  Calls are counted
    in `fevals`.

    Parameters
    ----------
    func : Callable[[x, ...], scalar]
        The function; called as ``func(x, *args)``.
    args : tuple, optional
        Extra arguments passed to `func` (and to `fprime`, `fprime2`).
    fprime, fprime2 : Callable[[x, ...], scalar], optional
        First and second derivatives.  If omitted, central finite
        differences are used.
    allow_complex : bool, default = False
        If `False`, a value with a non-zero imaginary part raises
        `DomainError` (real solvers).  Complex values with a zero
        imaginary part are reduced to their real part.

    Notes
    -----
    Only scalar arithmetic is used on `x` so that exact or extended
    precision number types (e.g. `fractions.Fraction`) pass through
    unchanged.  Finite difference derivatives are the exception, their
    step sizes are based on double precision.
    """

    def __init__(self, func: Callable, args=(), *,
                 fprime: Callable = None, fprime2: Callable = None,
                 allow_complex: bool = False):
        for label, fn in (('func', func), ('fprime', fprime),
                          ('fprime2', fprime2)):
            if fn is not None and not callable(fn):
                raise DomainError(f"'{label}' must be callable.")

        self.func, self.args = func, tuple(args)
        self.fprime, self.fprime2 = fprime, fprime2
        self.allow_complex = allow_complex
        self.fevals = 0

    def __call__(self, x):
        return self._check(self.func(x, *self.args), 'f')

    # -- Public Methods ------------------------------------------------

    def deriv(self, x):
        """First derivative at `x`, analytic or central difference."""
        if self.fprime is not None:
            return self._check(self.fprime(x, *self.args), "f'")

        h = _EPS ** (1 / 3) * max(1.0, abs(x))
        return (self(x + h) - self(x - h)) / (2 * h)

    def deriv2(self, x, fx=None):
        """
        Second derivative at `x`, analytic or central difference.  `fx`
        may be supplied to save an evaluation of ``f(x)``.
        """
        if self.fprime2 is not None:
            return self._check(self.fprime2(x, *self.args), "f''")

        if fx is None:
            fx = self(x)
        h = _EPS ** (1 / 4) * max(1.0, abs(x))
        return (self(x + h) - 2 * fx + self(x - h)) / (h * h)

    # -- Private Methods -----------------------------------------------

    def _check(self, y, label: str):
        self.fevals += 1
        if np.ndim(y) != 0:
            raise DomainError(f"{label}(x) must return a scalar, got "
                              f"shape {np.shape(y)}.")
        if isinstance(y, np.ndarray):
            y = y[()]  # 0-D array -> NumPy scalar.

        if y != y:
            raise DomainError(f"{label}(x) returned NaN.")

        if isinstance(y, (complex, np.complexfloating)):
            if not self.allow_complex:
                if y.imag != 0:
                    raise DomainError(
                        f"{label}(x) returned complex value {y} in a real "
                        f"solver; use a complex method instead.")
                y = y.real

        return y


# ======================================================================

class VectorFunction:
    """
    Vector function :math:`F: R^m -> R^n` with an optional analytic
    Jacobian.  The number of outputs `n` is fixed by the first call and
    checked on every later call.  Calls are counted in `fevals`.

    Parameters
    ----------
    func : Callable[[ndarray, ...], array_like]
        The function; called as ``func(x, *args)`` with `x` a 1-D float
        array of length `m`.
    x0 : array_like, shape (m,)
        Starting point; used only to set the input dimension.
    args : tuple, optional
        Extra arguments passed to `func` and `jac`.
    jac : Callable[[ndarray, ...], array_like], optional
        Jacobian returning shape ``(n, m)``.  If omitted, forward
        differences are used.
    """

    def __init__(self, func: Callable, x0: ArrayLike, args=(), *,
                 jac: Callable = None):
        if not callable(func) or (jac is not None and not callable(jac)):
            raise DomainError("'func' and 'jac' must be callable.")

        x0 = np.array(x0, dtype=float)
        if x0.ndim > 1 or x0.size == 0:
            raise DomainError(f"x0 must be a scalar or 1-D array, got "
                              f"shape {x0.shape}.")

        self.func, self.args, self.jac = func, tuple(args), jac
        self.m = x0.size
        self.n = None
        self.fevals = 0

    def __call__(self, x: np.ndarray) -> np.ndarray:
        fx = np.asarray(self.func(x, *self.args))
        self.fevals += 1

        if np.iscomplexobj(fx):
            raise DomainError("F(x) must be real-valued; split complex "
                              "equations into real and imaginary parts.")
        fx = np.atleast_1d(fx.astype(float))
        if fx.ndim != 1:
            raise DomainError(f"F(x) must return a 1-D array, got shape "
                              f"{fx.shape}.")

        if self.n is None:
            self.n = fx.size
        elif fx.size != self.n:
            raise DomainError(f"Wrong size output from F(x): expected "
                              f"{self.n} got {fx.size}.")

        if np.any(np.isnan(fx)):
            raise DomainError(f"F(x) returned NaN at x = {x}.")

        return fx

    # -- Public Methods ------------------------------------------------

    def jacobian(self, x: np.ndarray, fx: np.ndarray = None) -> np.ndarray:
        """
        Jacobian matrix at `x`, shape ``(n, m)``.  If no analytic
        Jacobian was given, each column is a forward difference with
        step ``sqrt(eps) * max(1, |x_j|)``.  `fx` may be supplied to save
        an evaluation of ``F(x)``.
        """
        if fx is None:
            fx = self(x)

        if self.jac is not None:
            jx = np.asarray(self.jac(x, *self.args), dtype=float)
            self.fevals += 1
            if jx.size != self.n * self.m:
                raise DomainError(f"Wrong size Jacobian: expected "
                                  f"({self.n}, {self.m}) got {jx.shape}.")
            return jx.reshape(self.n, self.m)

        jx = np.empty((self.n, self.m))
        for j in range(self.m):
            x_step = np.array(x, dtype=float)
            x_step[j] += np.sqrt(_EPS) * max(1.0, abs(x[j]))
            jx[:, j] = (self(x_step) - fx) / (x_step[j] - x[j])

        return jx


# ----------------------------------------------------------------------

def jacobian(func: Callable, x: ArrayLike, args=()) -> np.ndarray:
    """
    Forward difference estimate of the Jacobian of `func` at `x`.

    Parameters
    ----------
    func : Callable[[ndarray, ...], array_like]
        Vector function called as ``func(x, *args)``.
    x : array_like, shape (m,)
        Point of evaluation.
    args : tuple, optional
        Extra arguments passed to `func`.

    Returns
    -------
    ndarray, shape (n, m)

    Examples
    --------
    >>> jx = jacobian(lambda x: [x[0] * x[1], x[0] + 3 * x[1]], [2.0, 5.0])
    >>> np.round(jx, 6)
    array([[5., 2.],
           [1., 3.]])
    """
    fn = VectorFunction(func, x, args)
    return fn.jacobian(np.atleast_1d(np.array(x, dtype=float)))
