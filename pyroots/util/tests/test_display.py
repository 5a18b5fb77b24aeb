import math

from pyroots.numeric.solve import BracketError, brent_dekker, findzeros
from pyroots.util import (disp_active, disp_enter, disp_exit,
                          disp_print)


# ======================================================================

def _inner(disp=None):
    disp_enter(disp)
    disp_print("inner")
    disp_exit()


def _outer(disp=None):
    disp_enter(disp)
    disp_print("outer")
    _inner()
    disp_exit()


# ----------------------------------------------------------------------

def test_disp_levels(capsys):
    _outer(disp=False)
    assert capsys.readouterr().out == ""

    _outer(disp=True)
    assert capsys.readouterr().out == "outer\n"

    _outer(disp=2)
    assert capsys.readouterr().out == "outer\n\tinner\n"

    # Display is switched off after leaving the top level.
    assert not disp_active()
    _inner()
    assert capsys.readouterr().out == ""


def test_solver_display(capsys):
    brent_dekker(lambda x: x ** 2 - 2, 1.0, 2.0, disp=True)
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Brent-Dekker Root:"
    assert lines[-1] == "... Converged."
    assert all(line.startswith("... Iteration") for line in lines[1:-1])


def test_nested_solver_display(capsys):
    findzeros(math.sin, 1.0, 4.0, n=3, disp=2)
    out = capsys.readouterr().out
    assert out.startswith("Scanning [1.0, 4.0] for zeros")
    assert "\tBrent-Dekker Root:" in out
    assert "... Found 1 root(s)." in out

    # Inner output is suppressed at level 1.
    findzeros(math.sin, 1.0, 4.0, n=3, disp=1)
    assert "Brent-Dekker" not in capsys.readouterr().out


def test_display_reset_after_error(capsys):
    try:
        brent_dekker(lambda x: x ** 2 + 1, 1.0, 2.0, disp=True)
    except BracketError:
        pass
    assert not disp_active()
