from __future__ import annotations

from pyfsm.core.pipeline import load_automaton
from pyfsm.core.types import Automaton

# Three-state rotation: 0 steps forward, 1 steps back; accepts in C.
ROTATION_SOURCE = """states:
\tA
\tB
\tfinal: C

transitions:
\t0: A -> B
\t0: B -> C
\t0: C -> A
\t1: B -> A
\t1: C -> B
\t1: A -> C

start: A
"""

# Binary numbers (most significant bit first) divisible by three.
DIV3_SOURCE = """start: q0

transitions:
\t0: q0 -> q0
\t1: q0 -> q1
\t0: q1 -> q2
\t1: q1 -> q0
\t0: q2 -> q1
\t1: q2 -> q2

states:
\tfinal: q0
\tq1
\tq2
"""


def make_rotation_automaton() -> Automaton:
    return load_automaton(ROTATION_SOURCE)


def make_div3_automaton() -> Automaton:
    return load_automaton(DIV3_SOURCE)
