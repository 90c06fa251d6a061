"""
Pytest configuration and fixtures for pyfsm tests.

Provides the bundled sample sources and their validated automata.
"""

import pytest


@pytest.fixture
def rotation_source():
    """
    Three-state rotation machine (A, B, final C) over {0, 1}.
    """
    from pyfsm.samples import ROTATION_SOURCE
    return ROTATION_SOURCE


@pytest.fixture
def rotation_automaton():
    from pyfsm.samples import make_rotation_automaton
    return make_rotation_automaton()


@pytest.fixture
def div3_automaton():
    """
    Binary divisible-by-three machine; accepts in q0.
    """
    from pyfsm.samples import make_div3_automaton
    return make_div3_automaton()
