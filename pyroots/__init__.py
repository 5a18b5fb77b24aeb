"""
.. This module acts as the top-level API documentation.

.. module: pyroots

Root finding for scalar, complex, polynomial and vector-valued
functions.

.. autosummary::
    :toctree: generated/

    numeric
    util

"""

__version__ = "0.1.0"

import sys

# ======================================================================

assert sys.version_info >= (3, 10)
