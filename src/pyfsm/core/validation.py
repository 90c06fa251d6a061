"""
Validator/constructor: ParsedSpecification -> Automaton.

Validation order is fixed, which decides the reported error when a
specification has several problems:

1. start state lookup (NoStartState)
2. for each symbol in first-appearance order, for each state in declaration
   order: MissingTransition, ExtraTransition or UnknownState for that pair

The first violation aborts construction.
"""

from __future__ import annotations

import logging

from pyfsm.core.errors import ExtraTransition, MissingTransition, NoStartState, UnknownState
from pyfsm.core.types import (
    Automaton,
    DeclaredState,
    DeclaredTransition,
    ParsedSpecification,
    StateIdentity,
    TransitionKey,
)

logger = logging.getLogger("pyfsm")


def resolve_states(declared: tuple[DeclaredState, ...]) -> tuple[StateIdentity, ...]:
    """
    Resolve declarations to identities, keeping declaration order.

    A name declared twice keeps its first declaration; later ones are dropped
    with a warning, whatever their accepting tag.
    """
    resolved: dict[str, StateIdentity] = {}
    for state in declared:
        if state.name in resolved:
            logger.warning("state %r declared more than once; keeping first declaration", state.name)
            continue
        resolved[state.name] = StateIdentity(state.name, state.accepting)
    return tuple(resolved.values())


def derive_alphabet(transitions: tuple[DeclaredTransition, ...]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(transition.symbol for transition in transitions))


def _find_state(states: tuple[StateIdentity, ...], name: str) -> StateIdentity | None:
    for state in states:
        if state.name == name:
            return state
    return None


def _resolve_pair(
    symbol: str,
    state: StateIdentity,
    states: tuple[StateIdentity, ...],
    transitions: tuple[DeclaredTransition, ...],
) -> StateIdentity:
    found = [t for t in transitions if t.symbol == symbol and t.start == state.name]
    if not found:
        raise MissingTransition(symbol, state)
    if len(found) > 1:
        raise ExtraTransition(found[0], found[1])

    end_state = _find_state(states, found[0].end)
    if end_state is None:
        raise UnknownState(found[0].end)
    return end_state


def validate(parsed: ParsedSpecification) -> Automaton:
    """
    Build an Automaton from a parsed specification.

    Raises:
        NoStartState: the start name matches no declared state.
        MissingTransition: some (symbol, state) pair has no transition.
        ExtraTransition: some (symbol, state) pair has two or more
            transitions, even with identical targets.
        UnknownState: a transition targets an undeclared state.
    """
    states = resolve_states(parsed.states)
    start = _find_state(states, parsed.start)
    if start is None:
        raise NoStartState(parsed.start)

    alphabet = derive_alphabet(parsed.transitions)

    table: dict[TransitionKey, StateIdentity] = {}
    for symbol in alphabet:
        for state in states:
            table[(symbol, state)] = _resolve_pair(symbol, state, states, parsed.transitions)

    automaton = Automaton(start=start, states=states, alphabet=alphabet, transitions=table)
    logger.debug(
        "validated automaton: %d states, alphabet %r, start %s",
        len(states),
        "".join(alphabet),
        start,
    )
    return automaton
