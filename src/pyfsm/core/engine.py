"""
Execution engine: drive an Automaton over an input string.

The engine does not normalize input. Strip line endings before calling, or
they are treated as ordinary characters.
"""

from __future__ import annotations

from typing import Iterator

from pyfsm.core.errors import CharNotInInputAlphabet
from pyfsm.core.types import Automaton, StateIdentity


def iter_states(automaton: Automaton, text: str) -> Iterator[StateIdentity]:
    """
    Yield the start state, then the state reached after each character.

    Raises CharNotInInputAlphabet as soon as an unknown character is reached;
    nothing after it is consumed.
    """
    alphabet = frozenset(automaton.alphabet)
    current = automaton.start
    yield current
    for char in text:
        if char not in alphabet:
            raise CharNotInInputAlphabet(char)
        current = automaton.transitions[(char, current)]
        yield current


def trace(automaton: Automaton, text: str) -> tuple[StateIdentity, ...]:
    return tuple(iter_states(automaton, text))


def final_state(automaton: Automaton, text: str) -> StateIdentity:
    current = automaton.start
    for current in iter_states(automaton, text):
        pass
    return current


def run(automaton: Automaton, text: str) -> bool:
    """Return True if ``text`` drives the automaton into an accepting state."""
    return final_state(automaton, text).accepting
