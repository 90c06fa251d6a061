"""
Core types for pyfsm: DeclaredState, DeclaredTransition, ParsedSpecification,
StateIdentity, Automaton.

Pure data containers with validation. No parsing or simulation logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

# Characters that may not appear in a state name or transition symbol
FORBIDDEN_NAME_CHARS = frozenset(" \t\r\n:")


def _validate_name(kind: str, name: str) -> None:
    if not isinstance(name, str) or not name:
        raise ValueError(f"{kind} name must be a non-empty string")
    bad = sorted(FORBIDDEN_NAME_CHARS.intersection(name))
    if bad:
        raise ValueError(f"{kind} name {name!r} contains forbidden characters: {bad!r}")


def _validate_symbol(symbol: str) -> None:
    if not isinstance(symbol, str) or len(symbol) != 1:
        raise ValueError(f"symbol must be a single character, got {symbol!r}")
    if symbol in FORBIDDEN_NAME_CHARS:
        raise ValueError(f"symbol {symbol!r} is whitespace or a colon")


# ============================================================================
# Parser output
# ============================================================================


@dataclass(frozen=True)
class DeclaredState:
    """A state line from the `states:` block. Names are unresolved text."""

    name: str
    accepting: bool = False

    def __post_init__(self):
        _validate_name("state", self.name)

    def __str__(self) -> str:
        return f"final: {self.name}" if self.accepting else self.name


@dataclass(frozen=True)
class DeclaredTransition:
    """A transition line from the `transitions:` block."""

    symbol: str
    start: str
    end: str

    def __post_init__(self):
        _validate_symbol(self.symbol)
        _validate_name("start state", self.start)
        _validate_name("end state", self.end)

    def __str__(self) -> str:
        return f"{self.symbol}: {self.start} -> {self.end}"


@dataclass(frozen=True)
class ParsedSpecification:
    """
    Unvalidated intermediate representation produced by the parser.

    Consumed once by the validator and discarded afterwards.
    """

    start: str
    states: tuple[DeclaredState, ...] = ()
    transitions: tuple[DeclaredTransition, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "states", tuple(self.states))
        object.__setattr__(self, "transitions", tuple(self.transitions))


# ============================================================================
# Validator output
# ============================================================================


@dataclass(frozen=True, eq=False)
class StateIdentity:
    """
    Resolved identity of one machine state.

    Equality and hashing use ``name`` only. ``accepting`` is ordinary data
    read by the execution engine and is NOT part of the identity, so
    ``StateIdentity("A", True) == StateIdentity("A", False)``. Compare
    ``accepting`` explicitly wherever the tag matters.
    """

    name: str
    accepting: bool = False

    def __post_init__(self):
        _validate_name("state", self.name)

    def __eq__(self, other):
        if not isinstance(other, StateIdentity):
            return NotImplemented
        return self.name == other.name

    def __hash__(self):
        return hash(self.name)

    def __str__(self) -> str:
        kind = "AcceptState" if self.accepting else "State"
        return f"{kind}({self.name})"


TransitionKey = tuple[str, StateIdentity]


@dataclass(frozen=True, eq=False)
class Automaton:
    """
    Validated, immutable DFA.

    ``transitions`` maps ``(symbol, state)`` to the next state and holds
    exactly one entry for every pair in ``alphabet x states``. The mapping is
    wrapped read-only on construction.
    """

    start: StateIdentity
    states: tuple[StateIdentity, ...]
    alphabet: tuple[str, ...]
    transitions: Mapping[TransitionKey, StateIdentity] = field(repr=False)

    def __post_init__(self):
        object.__setattr__(self, "states", tuple(self.states))
        object.__setattr__(self, "alphabet", tuple(self.alphabet))
        object.__setattr__(self, "transitions", MappingProxyType(dict(self.transitions)))

        if not self.states:
            raise ValueError("states must not be empty")
        if len(set(self.states)) != len(self.states):
            raise ValueError("states must be unique")
        if len(set(self.alphabet)) != len(self.alphabet):
            raise ValueError("alphabet symbols must be unique")
        for symbol in self.alphabet:
            _validate_symbol(symbol)

        state_set = set(self.states)
        by_name = {state.name: state for state in self.states}
        if self.start not in state_set:
            raise ValueError(f"start state {self.start.name!r} must be in states")
        # Identity ignores the tag, so check it against the declared entry
        if self.start.accepting != by_name[self.start.name].accepting:
            raise ValueError(f"start state {self.start.name!r} has a mismatched accepting tag")

        expected_count = len(self.states) * len(self.alphabet)
        if len(self.transitions) != expected_count:
            raise ValueError("transitions must define exactly one edge per symbol-state pair")

        alphabet_set = set(self.alphabet)
        for (symbol, state), next_state in self.transitions.items():
            if symbol not in alphabet_set:
                raise ValueError(f"transition references unknown symbol: {symbol}")
            if state not in state_set:
                raise ValueError(f"transition references unknown state: {state.name}")
            if next_state not in state_set:
                raise ValueError(f"transition has unknown next state: {next_state.name}")
            if next_state.accepting != by_name[next_state.name].accepting:
                raise ValueError(
                    f"next state {next_state.name!r} has a mismatched accepting tag"
                )

    @property
    def accepting_states(self) -> tuple[StateIdentity, ...]:
        return tuple(state for state in self.states if state.accepting)

    def next_state(self, symbol: str, state: StateIdentity) -> StateIdentity:
        """Look up the unique successor of ``state`` on ``symbol``."""
        return self.transitions[(symbol, state)]
