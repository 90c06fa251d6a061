from __future__ import annotations

import logging

import pytest

from pyfsm.core.errors import (
    ExtraTransition,
    MissingTransition,
    NoStartState,
    UnknownState,
    ValidationError,
)
from pyfsm.core.parser import parse
from pyfsm.core.types import DeclaredState, DeclaredTransition, ParsedSpecification, StateIdentity
from pyfsm.core.validation import derive_alphabet, resolve_states, validate


def _spec(states: str, transitions: list[str], start: str = "A") -> ParsedSpecification:
    """Build a ParsedSpecification from 'A B final:C' and '0: A -> B' strings."""
    declared = []
    for token in states.split():
        if token.startswith("final:"):
            declared.append(DeclaredState(token[len("final:") :], accepting=True))
        else:
            declared.append(DeclaredState(token))

    parsed_transitions = []
    for line in transitions:
        symbol, rest = line.split(":", 1)
        source, target = (part.strip() for part in rest.split("->"))
        parsed_transitions.append(DeclaredTransition(symbol.strip(), source, target))

    return ParsedSpecification(start=start, states=declared, transitions=parsed_transitions)


ROTATION = [
    "0: A -> B",
    "0: B -> C",
    "0: C -> A",
    "1: B -> A",
    "1: C -> B",
    "1: A -> C",
]


# ============================================================================
# Successful construction
# ============================================================================


def test_validate_sample(rotation_source: str) -> None:
    """Sample validates into a three-state automaton."""
    automaton = validate(parse(rotation_source))

    assert automaton.start.name == "A"
    assert [s.name for s in automaton.states] == ["A", "B", "C"]
    assert automaton.alphabet == ("0", "1")
    assert len(automaton.transitions) == 6
    assert [s.name for s in automaton.accepting_states] == ["C"]


def test_targets_carry_declared_tag() -> None:
    automaton = validate(_spec("A B final:C", ROTATION))

    target = automaton.next_state("0", StateIdentity("B"))
    assert target.name == "C"
    assert target.accepting is True


def test_totality_for_every_symbol_and_state(rotation_automaton, div3_automaton) -> None:
    """Every symbol-state pair has one entry."""
    for automaton in (rotation_automaton, div3_automaton):
        for symbol in automaton.alphabet:
            for state in automaton.states:
                assert (symbol, state) in automaton.transitions
        assert len(automaton.transitions) == len(automaton.alphabet) * len(automaton.states)


def test_alphabet_in_first_appearance_order() -> None:
    parsed = _spec("A", ["b: A -> A", "a: A -> A", "c: A -> A"])
    assert derive_alphabet(parsed.transitions) == ("b", "a", "c")


# ============================================================================
# Validation failures
# ============================================================================


def test_unknown_start_state() -> None:
    """Undeclared start raises NoStartState."""
    with pytest.raises(NoStartState) as excinfo:
        validate(_spec("A B final:C", ROTATION, start="Z"))
    assert excinfo.value.name == "Z"


def test_no_declared_states_means_no_start() -> None:
    with pytest.raises(NoStartState):
        validate(_spec("", ["0: A -> A"]))


def test_unknown_target_state() -> None:
    """Undeclared target raises UnknownState."""
    transitions = ["0: A -> D", "0: B -> A"]
    with pytest.raises(UnknownState, match="'D'") as excinfo:
        validate(_spec("A B", transitions))
    assert excinfo.value.name == "D"


def test_missing_transition() -> None:
    """Uncovered pair raises MissingTransition."""
    transitions = [t for t in ROTATION if t != "1: C -> B"]

    with pytest.raises(MissingTransition) as excinfo:
        validate(_spec("A B final:C", transitions))

    err = excinfo.value
    assert err.symbol == "1"
    assert err.state.name == "C"
    assert err.state.accepting is True
    assert "AcceptState(C)" in str(err)


def test_extra_transition_with_identical_targets() -> None:
    """Duplicate lines conflict even with the same target."""
    transitions = ROTATION + ["0: A -> B"]

    with pytest.raises(ExtraTransition) as excinfo:
        validate(_spec("A B final:C", transitions))

    err = excinfo.value
    assert str(err.first) == "0: A -> B"
    assert str(err.second) == "0: A -> B"


def test_extra_transition_with_different_targets() -> None:
    transitions = ROTATION + ["1: B -> C"]

    with pytest.raises(ExtraTransition, match="conflict") as excinfo:
        validate(_spec("A B final:C", transitions))

    assert excinfo.value.first == DeclaredTransition("1", "B", "A")
    assert excinfo.value.second == DeclaredTransition("1", "B", "C")


def test_symbol_from_undeclared_state_still_joins_alphabet() -> None:
    """Symbols come from every transition line."""
    transitions = ["0: A -> A", "x: Z -> A"]

    with pytest.raises(MissingTransition) as excinfo:
        validate(_spec("A", transitions))

    assert excinfo.value.symbol == "x"
    assert excinfo.value.state.name == "A"


def test_start_checked_before_transitions() -> None:
    with pytest.raises(NoStartState):
        validate(_spec("A", ["0: A -> Nowhere"], start="Z"))


def test_error_order_is_symbol_major() -> None:
    # '0' is seen first, so its conflict wins over the gap on '1'
    transitions = ["0: A -> A", "0: B -> A", "0: B -> B", "1: A -> A"]

    with pytest.raises(ExtraTransition):
        validate(_spec("A B", transitions))


def test_error_order_follows_declared_states() -> None:
    """States are checked in declaration order."""
    transitions = ["0: A -> Nowhere"]

    with pytest.raises(MissingTransition) as excinfo:
        validate(_spec("B A", transitions, start="A"))

    assert excinfo.value.state.name == "B"


def test_all_validation_errors_share_base() -> None:
    for exc_type in (NoStartState, UnknownState, MissingTransition, ExtraTransition):
        assert issubclass(exc_type, ValidationError)
        assert issubclass(exc_type, ValueError)


# ============================================================================
# Duplicate state declarations
# ============================================================================


def test_duplicate_state_keeps_first_declaration(caplog) -> None:
    """Repeated name keeps the first tag and warns."""
    declared = (DeclaredState("A"), DeclaredState("A", accepting=True), DeclaredState("B"))

    with caplog.at_level(logging.WARNING, logger="pyfsm"):
        resolved = resolve_states(declared)

    assert [s.name for s in resolved] == ["A", "B"]
    assert resolved[0].accepting is False
    assert "declared more than once" in caplog.text


def test_duplicate_state_validates_as_single_state() -> None:
    automaton = validate(_spec("A final:A", ["0: A -> A"]))

    assert len(automaton.states) == 1
    assert automaton.start.accepting is False
