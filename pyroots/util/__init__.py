"""
==============================
Utilities (:mod:`pyroots.util`)
==============================

.. currentmodule:: pyroots.util

Utilities used by the solvers.

Display
-------

.. autosummary::
    :toctree:

    disp_active
    disp_enter
    disp_exit
    disp_print

"""

from .display import disp_active, disp_enter, disp_exit, disp_print
