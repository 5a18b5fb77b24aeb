"""
Polynomials (:mod:`pyroots.numeric.polynomial`)
===============================================

.. currentmodule:: pyroots.numeric.polynomial

Polynomial operations used by the root finders.  Coefficients are
always ordered highest degree first, as for ``numpy.polyval``.
"""
from __future__ import annotations

import numpy as np
import numpy.typing as npt

from pyroots.numeric.solve.exception import DomainError


# ======================================================================

class Polynomial:
    """
    Polynomial :math:`p(x) = c_0 x^n + c_1 x^{n-1} + ... + c_n` with
    real or complex coefficients.

    Zero leading coefficients are removed on construction so that
    ``coeffs[0] != 0`` and ``len(coeffs) == degree + 1`` always hold.
    Instances are immutable.

    Parameters
    ----------
    coeffs : array_like, shape (n + 1,)
        Coefficients, highest degree first.  Integer coefficients are
        converted to `float`.

    Raises
    ------
    DomainError
        If `coeffs` is empty, not 1-D, not finite or all zero.

    Examples
    --------
    >>> p = Polynomial([0, 0, 1, -3, 2])  # Leading zeros are removed.
    >>> p
    Polynomial([1.0, -3.0, 2.0])
    >>> p.degree
    2
    >>> p(3.0)
    2.0
    """

    def __init__(self, coeffs: npt.ArrayLike | Polynomial):
        if isinstance(coeffs, Polynomial):
            c = coeffs.coeffs

        else:
            c = np.array(coeffs)
            if c.dtype.kind in 'biu':
                c = c.astype(float)
            if c.dtype.kind not in 'fc':
                raise DomainError(f"Polynomial coefficients must be real "
                                  f"or complex numbers, got {c.dtype}.")
            if c.ndim != 1 or c.size == 0:
                raise DomainError("Polynomial coefficients must be a "
                                  "non-empty 1-D sequence.")
            if not np.all(np.isfinite(c)):
                raise DomainError("Polynomial coefficients must be "
                                  "finite.")

            nonzero = np.flatnonzero(c)
            if nonzero.size == 0:
                raise DomainError("All polynomial coefficients are zero.")
            c = c[nonzero[0]:].copy()
            c.flags.writeable = False

        self._c = c

    def __call__(self, x):
        """Evaluate at `x` (scalar or array) using Horner's method."""
        val = self._c[0] * np.ones_like(x)
        for c_i in self._c[1:]:
            val = val * x + c_i
        return val.item() if np.ndim(val) == 0 else val

    def __repr__(self):
        return f"Polynomial({self._c.tolist()})"

    # -- Public Methods ------------------------------------------------

    @property
    def coeffs(self) -> np.ndarray:
        """Read-only array of coefficients, highest degree first."""
        return self._c

    @property
    def degree(self) -> int:
        return self._c.size - 1

    def deflate(self, root) -> tuple[Polynomial, complex | float]:
        """
        Divide by :math:`(x - root)` using synthetic division.

        Returns
        -------
        quotient : Polynomial
            Polynomial of degree ``n - 1``.
        remainder : float or complex
            Equal to ``p(root)``; zero (to round-off) if `root` is a
            root.

        Raises
        ------
        DomainError
            If the polynomial has degree zero.
        """
        if self.degree < 1:
            raise DomainError("Cannot deflate a constant polynomial.")

        dtype = np.result_type(self._c, root)
        q = np.empty(self.degree, dtype=dtype)
        b = self._c[0]
        for i, c_i in enumerate(self._c[1:]):
            q[i] = b
            b = c_i + b * root
        return Polynomial(q), b

    def deriv(self, k: int = 1) -> np.ndarray:
        """
        Coefficients of the `k`-th derivative (highest degree first).
        Returns ``[0.0]`` if `k` exceeds the degree.
        """
        if k > self.degree:
            return np.zeros(1, dtype=self._c.dtype)
        return np.polyder(self._c, k)

    def monic(self) -> Polynomial:
        """Return the polynomial scaled so that the leading coefficient
        is one."""
        return Polynomial(self._c / self._c[0])

    def taylor(self, x) -> tuple[np.ndarray, np.ndarray]:
        r"""
        Taylor coefficients about `x`, i.e. the coefficients of
        :math:`p(x + h) = \sum_k t_k h^k`, where :math:`t_k =
        p^{(k)}(x) / k!`, together with a scale for the round-off error
        in each.

        Returns
        -------
        t : ndarray, shape (n + 1,)
            Taylor coefficients, lowest order first (`t[0]` = `p(x)`).
        scale : ndarray, shape (n + 1,)
            The same coefficients computed from :math:`|c_i|` and
            :math:`|x|`.  ``eps * scale[k]`` bounds the round-off error in
            ``t[k]``.

        Notes
        -----
        Computed by repeated synthetic division (Horner's scheme applied
        `n + 1` times).
        """
        n = self.degree
        t = np.array(self._c, dtype=np.result_type(self._c, x))
        s = np.abs(self._c).astype(float)
        abs_x = abs(x)
        for k in range(n + 1):
            for i in range(1, n + 1 - k):
                t[i] += t[i - 1] * x
                s[i] += s[i - 1] * abs_x

        # Entries were accumulated highest order first.
        return t[::-1].copy(), s[::-1].copy()


def as_polynomial(p: npt.ArrayLike | Polynomial,
                  min_degree: int = 1) -> Polynomial:
    """
    Convert `p` to a `Polynomial`, checking that its degree (after
    removal of zero leading coefficients) is at least `min_degree`.

    Raises
    ------
    DomainError
        If the degree is too low.
    """
    p = Polynomial(p)
    if p.degree < min_degree:
        raise DomainError(f"Polynomial must have degree >= {min_degree}, "
                          f"got {p.degree}.")
    return p


# ----------------------------------------------------------------------

def companion_matrix(p: npt.ArrayLike | Polynomial) -> np.ndarray:
    """
    Companion matrix of a polynomial of degree `n` >= 1.  After scaling
    to monic form the first row holds the negated lower coefficients and
    the sub-diagonal holds ones.  The eigenvalues of this matrix are the
    roots of `p`.

    Returns
    -------
    ndarray, shape (n, n)

    Examples
    --------
    >>> companion_matrix([2, -6, 4])  # 2x^2 - 6x + 4 = 2(x - 1)(x - 2)
    array([[ 3., -2.],
           [ 1.,  0.]])
    """
    c = as_polynomial(p).monic().coeffs
    n = c.size - 1
    a = np.diag(np.ones(n - 1, dtype=c.dtype), -1)
    a[0, :] = -c[1:]
    return a


# ======================================================================

# This code heavily inspired by https://stackoverflow.com/a/49547968

def newton_poly_coeff(x: npt.ArrayLike,
                      y: npt.ArrayLike) -> np.ndarray:
    """
    Generate an array of increasing divided differences for multiple
    points `(x, y)`. These are the coefficients of the interpolating
    polynomial in Newton form.

    The array contains the divided differences arranged as follows::

        `[[y0], [y0, y1], [y0, y1, y2], ...]`

    Where `[y_i, ..., y_j]` is the divided difference operator that also
    depends on the `x` values.  This can also be written `f[x_i, ...,
    x_j]`.

    Parameters
    ----------
    x, y : array_like, shape (n,)
        Arrays of `x` and `y` values, real or complex.  The `x` values
        must be distinct but need not be sorted or collinear.

    Returns
    -------
    np.ndarray, shape (n,)
        Array of divided differences, as the coefficients of the
        interpolating polynomial in Newton form `[f[x0], f[x1, x0],
        f[x2, x1, x0], ...]`.

    Notes
    -----
    Inputs are cast to at least `float` as purely integer parameters may
    result in integer division giving incorrect results.

    Examples
    --------
    >>> newton_poly_coeff([-1, 0, 1], [11.3, 2, -2.7])
    array([11.3, -9.3,  2.3])
    """
    dtype = np.result_type(np.asarray(x), np.asarray(y), float)
    x = np.asarray(x, dtype=dtype)
    a = np.array(y, dtype=dtype, copy=True)
    if (np.ndim(x) != 1) or (x.shape != a.shape):
        raise ValueError("'x' and 'y' must have the same shape (n,).")

    n = len(x)
    for i in range(1, n):
        a[i:n] = (a[i:n] - a[i - 1]) / (x[i:n] - x[i - 1])

    return a
