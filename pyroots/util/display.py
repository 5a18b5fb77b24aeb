"""
Nested display of progress information from solvers.  See
``disp_print(...)`` for examples.
"""
from __future__ import annotations


# ======================================================================

_DISP_CURRENT_LEVEL = 1
_DISP_MAX_LEVEL: int | None = None  # Disabled = None, Enabled = 1, 2, ...


def disp_enter(disp: int | bool = None):
    """
    Called when entering a function scope where nested display is
    desired.  See ``disp_print(...)`` for examples.

    Parameters
    ----------
    disp : int or bool, optional
        - `None` (default): The current nested function level is
          automatically updated.
        - `int`: Sets the maximum function depth to print.  Values >= 1
          mean information will be printed.  For example, if ``disp=2``
          then ``disp_print(...)`` will be active for this solver and
          any solver it calls internally.
        - `bool`: Converted to `int`, `True` = 1 and `False` = 0.
    """
    global _DISP_CURRENT_LEVEL, _DISP_MAX_LEVEL

    if disp is not None:
        # New max level declared; start at level one.  Values <= 0 or
        # False will disable display.
        _DISP_MAX_LEVEL = max(int(disp), 0) or None
        _DISP_CURRENT_LEVEL = 1

    else:
        # Move up a display level.
        _DISP_CURRENT_LEVEL += 1


# ----------------------------------------------------------------------

def disp_exit():
    """
    Called when exiting a function scope that uses nested display.  See
    ``disp_print(...)`` for examples.
    """
    global _DISP_CURRENT_LEVEL, _DISP_MAX_LEVEL

    if _DISP_CURRENT_LEVEL <= 1:
        # If exiting a function at level 1, display will be terminated.
        _DISP_MAX_LEVEL = None
        _DISP_CURRENT_LEVEL = 1

    else:
        # Drop back a display level.
        _DISP_CURRENT_LEVEL -= 1


# ----------------------------------------------------------------------

def disp_active() -> bool:
    """Returns `True` if ``disp_print(...)`` would produce output."""
    return (_DISP_MAX_LEVEL is not None and
            _DISP_CURRENT_LEVEL <= _DISP_MAX_LEVEL)


def disp_print(s: str, *args, **kwargs):
    """
    ``disp_print(...)`` is used to print information from multi-level
    nested solvers and works in conjunction with ``disp_enter(...)`` and
    ``disp_exit()``. Depending on the current level / function depth
    the output message is either indented or supressed.  `*args` and
    `**kwargs` are identical to the ``print(...)`` statement.

    Examples
    --------
    First define an 'inner' working function:

    >>> def inner_solver(disp: int = None):
    ...     disp_enter(disp)  # Setup output at this level.
    ...     # ... does some other things ...
    ...     disp_print("In inner_solver()...")
    ...     disp_exit()  # Upon leaving this scope.

    Then define a top-level function that calls the 'inner' function.
    The default of `None` is used to enable automatic nesting,
    otherwise a display level can be assigned:

    >>> def outer_solver(disp: int | bool = None):
    ...     disp_enter(disp)  # Setup output at this level.
    ...     disp_print("In outer_solver()...")
    ...     inner_solver()  # Default 'disp' argument automatically indents.
    ...     disp_exit()

    Running `outer_solver` with ``disp=False`` produces no output:

    >>> outer_solver(disp=False)

    Running the top level function with ``disp=True`` (equivalent to
    ``disp=1``):

    >>> outer_solver(disp=True)
    In outer_solver()...

    Running the top level function with ``disp=2`` produces indented
    output:

    >>> outer_solver(disp=2) # doctest: +NORMALIZE_WHITESPACE
    In outer_solver()...
        In inner_solver()...
    """
    if disp_active():
        print('\t' * (_DISP_CURRENT_LEVEL - 1) + s, *args, **kwargs)
