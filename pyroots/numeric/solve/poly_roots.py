"""
Roots of polynomials.  All roots (real and complex) are found either
from the eigenvalues of the companion matrix or by Laguerre's method
with deflation.  Repeated roots are identified using the Taylor
coefficients of the polynomial about each candidate.
"""
from __future__ import annotations

import cmath
import math
import warnings

import numpy as np
import numpy.typing as npt

from pyroots.numeric.polynomial import (Polynomial, as_polynomial,
                                        companion_matrix)
from pyroots.util.display import disp_enter, disp_exit, disp_print
from .exception import DomainError, MultiplicityWarning
from .options import resolve_options
from .results import ConvergenceResult, IterationState, RootRecord, Status

_EPS = np.finfo(float).eps

# Fractional steps used to break limit cycles in Laguerre's method.
_LAG_FRAC = (0.5, 0.25, 0.75, 0.13, 0.38, 0.62, 0.88, 1.0)
_LAG_CYCLE = 10


# ======================================================================

def quadratic_roots(a, b, c, *, allow_complex: bool = True
                    ) -> tuple[float | complex, ...]:
    """
    Return roots of the quadratic equation given by
    :math:`0 = ax^2 + bx + c`.  The calculation is performed in such a
    way as to minimise roundoff errors for poorly conditioned equations
    [1]_.  The straight-line case (``a=0``) is also handled.

    Parameters
    ----------
    a, b, c : float or complex
        Coefficients of the equation.  If any is complex the square
        root of the discriminant is taken with the sign that maximises
        :math:`|q|`, where :math:`q = -(b \\pm \\sqrt{\\Delta}) / 2`.

    allow_complex : bool, default = True
        If `True`, complex valued roots are included in the result (if
        present).  If `False`, these are omitted.  Only applies to
        real coefficients.

    Returns
    -------
    roots : tuple[float | complex, ...]
        A tuple containing the roots of the quadratic equation, with
        length depending on the result:

        - `len(roots) == 0`: No real roots if ``allow_complex=False``,
          or no root for a line parallel to the x-axis (i.e. ``a=0``
          and ``b=0``).
        - `len(roots) == 1`: One (repeated) root or a sloping line.
        - `len(roots) == 2`: Two distinct roots.

    References
    ----------
    .. [1] Press, W. H.; Flannery, B. P.; Teukolsky, S. A.; and
           Vetterling, W. T. *Numerical Recipes: The Art of Scientific
           Computing*, 3rd ed. Cambridge, England: Cambridge University
           Press, pp. 227, 2007. Section 5.6: "Quadratic and Cubic
           Equations".

    Examples
    --------
    Equation :math:`x^2 -3x + 2 = 0` has two real roots:
    >>> quadratic_roots(1, -3, 2)
    (2.0, 1.0)

    Equation :math:`x^2 -2x + 1 = 0` has a single real root:
    >>> quadratic_roots(1, -2, 1)
    (1.0,)

    Equation :math:`x^2 + 4x + 5 = 0` has two complex roots:
    >>> quadratic_roots(1, 4, 5)
    ((-2-1j), (-2+1j))

    Repeating this equation with ``allow_complex=False`` omits them:
    >>> quadratic_roots(1, 4, 5, allow_complex=False)
    ()

    Equation :math:`x^2 - 2ix - 1 = 0` has complex coefficients and the
    repeated root :math:`i`:
    >>> quadratic_roots(1, -2j, -1)
    (1j,)

    Equation :math:`0x + 2 = 0` is a straight line parallel to the
    x-axis (no roots):
    >>> quadratic_roots(0, 0, 2)
    ()
    """
    # Check for the straight-line case and shortcut if possible.
    if a == 0:
        if b != 0:
            return (-c / b,)  # Line with slope, one root.
        else:
            return ()  # Line parallel to x-axis, no roots.

    Δ = b * b - 4 * a * c

    if any(np.iscomplexobj(v) for v in (a, b, c)):
        if Δ == 0:
            return (-0.5 * b / a,)

        sqrt_Δ = cmath.sqrt(Δ)
        if (b.conjugate() * sqrt_Δ).real < 0:
            sqrt_Δ = -sqrt_Δ
        q = -0.5 * (b + sqrt_Δ)
        return q / a, c / q

    # Real coefficients.  Note: np.sign(0) = 0, so we calculate sign(b)
    # manually.
    sign_b = +1 if b >= 0 else -1

    if Δ > 0.0:  # Two real roots.
        q = -0.5 * (b + sign_b * math.sqrt(Δ))
        return q / a, c / q

    elif Δ == 0.0:  # Single real root.
        return (-0.5 * b / a,)

    else:  # Two complex roots.
        if allow_complex:
            q = -0.5 * (b + sign_b * cmath.sqrt(Δ))
            return q / a, c / q

        else:
            return ()  # Omit complex roots.


# ======================================================================

def poly_roots_eig(p: npt.ArrayLike | Polynomial) -> np.ndarray:
    """
    All roots of polynomial `p` (degree `n` >= 1) computed as the
    eigenvalues of its companion matrix.

    Parameters
    ----------
    p : array_like or Polynomial
        Coefficients, highest degree first.

    Returns
    -------
    ndarray, shape (n,), complex
        Roots in no particular order.  Repeated roots are returned as
        clusters, typically spread by about :math:`\\epsilon^{1/m}`
        for multiplicity `m`.

    Raises
    ------
    DomainError
        If `p` has degree less than one.

    Examples
    --------
    >>> r = poly_roots_eig([1, 0, -5, 0, 4])  # (x² - 1)(x² - 4)
    >>> np.sort(r.real).round(10) + 0.0
    array([-2., -1.,  1.,  2.])
    """
    return np.linalg.eigvals(companion_matrix(p)).astype(complex)


# ----------------------------------------------------------------------

def laguerre(p: npt.ArrayLike | Polynomial, x0, *, tol=None,
             maxiter: int = None,
             disp: int | bool = None) -> ConvergenceResult:
    r"""
    Find one root of polynomial `p` using Laguerre's method, starting
    from `x0`.

    Each step is :math:`\Delta x = n / (G \pm \sqrt{(n - 1)(nH - G^2)})`
    where :math:`G = p'/p` and :math:`H = G^2 - p''/p`, with the sign
    giving the larger denominator.  Every tenth iteration a fractional
    step is taken instead to break any limit cycle.

    Parameters
    ----------
    p : array_like or Polynomial
        Coefficients (real or complex), highest degree first.
    x0 : float or complex
        Starting point.  The iteration is always performed in complex
        arithmetic, so real starting points may converge to complex
        roots.
    tol : float, optional
        Stop when :math:`|\Delta x| \le tol (1 + |x|)`, or when
        :math:`|p(x)|` is below the round-off bound of its evaluation.
        Default from `get_solver_options()`.
    maxiter : int, optional
        Iteration limit.  Default from `get_solver_options()`.
    disp : int or bool, optional
        Print progress; see ``pyroots.util.disp_enter(...)``.

    Returns
    -------
    ConvergenceResult
        `root` is always `complex`.

    Notes
    -----
    Converges from almost any starting point, cubically near a simple
    root and linearly near a multiple root.

    Examples
    --------
    >>> res = laguerre([1, 0, 1], 0.5)  # x² + 1
    >>> res.converged, abs(res.root - 1j) < 1e-12
    (True, True)
    """
    poly = as_polynomial(p)
    tol, maxiter = resolve_options(tol, maxiter)
    c, n = poly.coeffs, poly.degree

    disp_enter(disp)
    try:
        disp_print(f"Laguerre Root:")
        x = complex(x0)
        state = IterationState(x=x, fx=poly(x))

        while state.iterations < maxiter:
            # Evaluate p (b), p' (d) and p''/2 (f) together with the
            # round-off bound of p.
            b, d, f = complex(c[0]), 0j, 0j
            err, abs_x = abs(b), abs(x)
            for c_j in c[1:]:
                f = x * f + d
                d = x * d + b
                b = x * b + c_j
                err = abs(b) + abs_x * err
            err *= _EPS

            if abs(b) <= err:
                state.fx = b
                return state.finish(Status.CONVERGED, method='laguerre',
                                    fevals=state.iterations + 1,
                                    error=None if state.iterations else 0.0)

            g = d / b
            g2 = g * g
            h = g2 - 2 * f / b
            sq = cmath.sqrt((n - 1) * (n * h - g2))
            g_p, g_m = g + sq, g - sq
            denom = g_p if abs(g_p) >= abs(g_m) else g_m

            its = state.iterations + 1
            if denom != 0:
                dx = n / denom
            else:
                dx = (1 + abs_x) * cmath.exp(1j * its)

            if its % _LAG_CYCLE:
                x_new = x - dx
            else:
                frac = _LAG_FRAC[(its // _LAG_CYCLE - 1) % len(_LAG_FRAC)]
                x_new = x - frac * dx

            state.advance(x_new, poly(x_new), x_new - x)
            disp_print(f"... Iteration {state.iterations}: x = {x_new}, "
                       f"|p(x)| = {abs(state.fx):.6e}")

            if abs(dx) <= tol * (1 + abs(x_new)):
                return state.finish(Status.CONVERGED, method='laguerre',
                                    fevals=state.iterations + 1)
            x = x_new

        return state.finish(Status.MAXITER, method='laguerre',
                            fevals=state.iterations + 1)

    finally:
        disp_exit()


# ----------------------------------------------------------------------

def laguerre_roots(p: npt.ArrayLike | Polynomial, *, polish: bool = True,
                   tol=None, maxiter: int = None,
                   disp: int | bool = None) -> np.ndarray:
    """
    All roots of polynomial `p` found by Laguerre's method, deflating
    the polynomial after each root.

    Parameters
    ----------
    p : array_like or Polynomial
        Coefficients, highest degree first.
    polish : bool, default = True
        If `True`, each root found from a deflated polynomial is refined
        by a further application of ``laguerre(...)`` to the original
        polynomial, removing the errors accumulated by deflation.
    tol, maxiter, disp :
        See ``laguerre(...)``.

    Returns
    -------
    ndarray, shape (n,), complex
        Roots sorted by real then imaginary part.  Imaginary parts that
        are negligible compared to the real part are set to zero.

    Warns
    -----
    RuntimeWarning
        If ``laguerre(...)`` did not converge for one of the roots.  The
        best estimate is still used.

    Examples
    --------
    >>> r = laguerre_roots([1, -6, 11, -6])  # (x - 1)(x - 2)(x - 3)
    >>> r.real.round(12) + 0.0
    array([1., 2., 3.])
    """
    poly = as_polynomial(p)
    disp_enter(disp)
    try:
        disp_print(f"Laguerre Roots (degree {poly.degree}):")
        q, roots = poly, []
        while q.degree > 1:
            res = laguerre(q, 0j, tol=tol, maxiter=maxiter)
            if not res.converged:
                warnings.warn(f"Laguerre's method unconverged for root "
                              f"{len(roots) + 1} of {poly.degree}.",
                              RuntimeWarning, stacklevel=2)
            roots.append(res.root)
            q, _ = q.deflate(res.root)

        c = q.coeffs
        roots.append(complex(-c[1] / c[0]))

        if polish:
            roots = [laguerre(poly, r, tol=tol, maxiter=maxiter).root
                     for r in roots]

        for i, r in enumerate(roots):
            if abs(r.imag) <= 2 * _EPS * abs(r.real):
                roots[i] = complex(r.real, 0.0)
            disp_print(f"... Root {i + 1}: {roots[i]}")

        roots.sort(key=lambda z: (z.real, z.imag))
        return np.array(roots, dtype=complex)

    finally:
        disp_exit()


# ======================================================================

def poly_multiplicity(p: npt.ArrayLike | Polynomial, x, *,
                      tol: float = 1e-6) -> RootRecord:
    r"""
    Determine the multiplicity of root `x` of polynomial `p`.

    The Taylor coefficients :math:`t_k = p^{(k)}(x) / k!` are compared
    with the scale of the round-off error in each; :math:`t_k` is
    negligible if :math:`|t_k| \le tol \cdot scale_k`.  The
    multiplicity is the order of the first non-negligible coefficient
    after :math:`t_0`.

    Parameters
    ----------
    p : array_like or Polynomial
        Coefficients, highest degree first.
    x : float or complex
        Approximate root, typically the mean of a cluster of computed
        roots.
    tol : float, default = 1e-6
        Relative threshold for negligible coefficients, ``0 < tol < 1``.
        This needs to be much larger than machine precision because a
        root of multiplicity `m` is normally only known to about
        :math:`\epsilon^{1/m}`.

    Returns
    -------
    RootRecord
        With ``multiplicity=0, reliable=False`` if `x` is not a root to
        within `tol`.

    Warns
    -----
    MultiplicityWarning
        If `x` is not a root to within `tol`.

    Examples
    --------
    >>> rec = poly_multiplicity([1, -3, 3, -1], 1.0)  # (x - 1)³
    >>> rec.multiplicity, rec.reliable
    (3, True)
    """
    poly = as_polynomial(p)
    if not 0 < tol < 1:
        raise DomainError(f"Require 0 < tol < 1, got {tol}.")

    mult, residual = _taylor_multiplicity(poly, x, tol)
    if mult == 0:
        warnings.warn(f"x = {x} is not a root within tolerance "
                      f"(|p(x)| = {residual:.3e}), multiplicity could "
                      f"not be determined.", MultiplicityWarning,
                      stacklevel=2)
        return RootRecord(value=x, multiplicity=0, residual=residual,
                          reliable=False)

    return RootRecord(value=x, multiplicity=mult, residual=residual)


# ----------------------------------------------------------------------

def poly_roots_mult(p: npt.ArrayLike | Polynomial, *,
                    cluster_tol: float = 1e-4,
                    tol: float = 1e-6) -> list[RootRecord]:
    r"""
    Distinct roots of polynomial `p` together with their
    multiplicities.

    The eigenvalue roots (see ``poly_roots_eig(...)``) are grouped into
    clusters, each replaced by its mean.  The mean is usually a much
    more accurate estimate of a multiple root than any single member.

    Computed roots of multiplicity `m` are spread over a distance of
    roughly :math:`\epsilon^{1/m}`, so no fixed grouping distance suits
    every case.  Starting from the leftmost remaining root, clusters of
    its `k` nearest neighbours (within a search radius that widens with
    the degree) are tried and the largest one whose size agrees with
    the multiplicity found by ``poly_multiplicity(...)`` at its mean is
    accepted.  If no size agrees, the roots within
    ``cluster_tol * (1 + |z|)`` are grouped instead.

    Parameters
    ----------
    p : array_like or Polynomial
        Coefficients, highest degree first.
    cluster_tol : float, default = 1e-4
        Minimum relative search radius, also used for grouping when the
        multiplicity test does not agree with any cluster size.
    tol : float, default = 1e-6
        Passed to the multiplicity test.

    Returns
    -------
    list[RootRecord]
        Sorted by real then imaginary part.  The multiplicities always
        sum to the degree.  Where the cluster size and the Taylor
        coefficient test disagree, the cluster size is used and
        `reliable` is `False`.

    Warns
    -----
    MultiplicityWarning
        For each cluster where the two multiplicity estimates disagree.

    Examples
    --------
    >>> recs = poly_roots_mult([1, -4, 5, -2])  # (x - 1)²(x - 2)
    >>> [(round(r.value.real, 6), r.multiplicity) for r in recs]
    [(1.0, 2), (2.0, 1)]
    """
    poly = as_polynomial(p)
    if not 0 < tol < 1:
        raise DomainError(f"Require 0 < tol < 1, got {tol}.")
    if not cluster_tol > 0:
        raise DomainError(f"Require cluster_tol > 0, got {cluster_tol}.")

    search_tol = max(cluster_tol, 10 * _EPS ** (1 / poly.degree))
    remaining = sorted(poly_roots_eig(poly), key=lambda z: (z.real, z.imag))
    records = []
    while remaining:
        seed = remaining[0]
        near = abs(seed) + 1
        dist = [abs(z - seed) for z in remaining]
        order = sorted((i for i, d in enumerate(dist)
                        if d <= search_tol * near), key=dist.__getitem__)

        # Largest group of nearest neighbours confirmed by the Taylor
        # coefficients.
        members, z, residual, mult = None, None, None, None
        for k in range(len(order), 0, -1):
            z_k = complex(sum(remaining[i] for i in order[:k]) / k)
            m_k, res_k = _taylor_multiplicity(poly, z_k, tol)
            if m_k == k:
                members, z, residual, mult = order[:k], z_k, res_k, m_k
                break

        if members is None:
            members = [i for i, d in enumerate(dist)
                       if d <= cluster_tol * near]
            z = complex(sum(remaining[i] for i in members) / len(members))
            mult, residual = _taylor_multiplicity(poly, z, tol)
            warnings.warn(f"Root near {z} found {len(members)} times but "
                          f"derivative test gives multiplicity {mult}.",
                          MultiplicityWarning, stacklevel=2)

        records.append(RootRecord(value=z, multiplicity=len(members),
                                  residual=residual,
                                  reliable=mult == len(members)))
        taken = set(members)
        remaining = [w for i, w in enumerate(remaining) if i not in taken]

    records.sort(key=lambda r: (r.value.real, r.value.imag))
    return records


# ----------------------------------------------------------------------

def _taylor_multiplicity(poly: Polynomial, x, tol: float
                         ) -> tuple[int, float]:
    # Returns (multiplicity, |p(x)|), multiplicity = 0 if not a root.
    t, scale = poly.taylor(x)
    residual = float(abs(t[0]))
    negligible = np.abs(t) <= tol * scale
    if not negligible[0]:
        return 0, residual

    # The leading coefficient is never negligible so this terminates.
    return int(np.argmin(negligible[1:])) + 1, residual
