"""
Batch acceptance measures over many input strings.

Strings are run against a dense transition table:
- transition_matrix: (n_states, n_symbols) table of next-state indices
- run_batch: accept/reject for each input
- acceptance_rate: fraction of accepted inputs
- final_state_counts: histogram of final states, indexed like automaton.states
"""

from __future__ import annotations

import numpy as np

from pyfsm.core.errors import CharNotInInputAlphabet
from pyfsm.core.types import Automaton


def transition_matrix(automaton: Automaton) -> np.ndarray:
    """
    Dense next-state table.

    Row i is ``automaton.states[i]``, column j is ``automaton.alphabet[j]``,
    and each entry is the index of the target state in ``automaton.states``.
    """
    state_to_idx = {state: idx for idx, state in enumerate(automaton.states)}
    matrix = np.zeros((len(automaton.states), len(automaton.alphabet)), dtype=np.int64)

    for (symbol, state), next_state in automaton.transitions.items():
        matrix[state_to_idx[state], automaton.alphabet.index(symbol)] = state_to_idx[next_state]

    return matrix


def _final_indices(automaton: Automaton, inputs: list[str]) -> np.ndarray:
    if not inputs:
        raise ValueError("inputs must not be empty")

    matrix = transition_matrix(automaton)
    symbol_to_idx = {symbol: idx for idx, symbol in enumerate(automaton.alphabet)}
    start_idx = automaton.states.index(automaton.start)

    finals = np.empty(len(inputs), dtype=np.int64)
    for i, text in enumerate(inputs):
        current = start_idx
        for char in text:
            column = symbol_to_idx.get(char)
            if column is None:
                raise CharNotInInputAlphabet(char)
            current = matrix[current, column]
        finals[i] = current

    return finals


def run_batch(automaton: Automaton, inputs: list[str]) -> np.ndarray:
    accepting = np.array([state.accepting for state in automaton.states], dtype=bool)
    return accepting[_final_indices(automaton, inputs)]


def acceptance_rate(automaton: Automaton, inputs: list[str]) -> float:
    accepted = run_batch(automaton, inputs)
    return float(np.count_nonzero(accepted)) / float(accepted.size)


def final_state_counts(automaton: Automaton, inputs: list[str]) -> np.ndarray:
    finals = _final_indices(automaton, inputs)
    return np.bincount(finals, minlength=len(automaton.states)).astype(np.int64)
