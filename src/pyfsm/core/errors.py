"""
Error hierarchy for pyfsm.

Three tiers, all raised to the caller unchanged:
- ParseError: source text does not match the grammar
- ValidationError: well-formed text describing a malformed automaton
- ExecutionError: input string the automaton cannot consume
"""

from __future__ import annotations

from pyfsm.core.types import DeclaredTransition, StateIdentity


class FsmError(ValueError):
    """Base class for every error raised by pyfsm."""


class ParseError(FsmError):
    def __init__(self, expected: str, line: int, column: int, found: str = ""):
        self.expected = expected
        self.line = line
        self.column = column
        self.found = found
        where = f"line {line}, column {column}"
        if found:
            message = f"parse error at {where}: expected {expected}, found {found!r}"
        else:
            message = f"parse error at {where}: expected {expected}, found end of input"
        super().__init__(message)


# ============================================================================
# Validation
# ============================================================================


class ValidationError(FsmError):
    pass


class NoStartState(ValidationError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"no start state set: {name!r} is not a declared state")


class UnknownState(ValidationError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown state {name!r}")


class MissingTransition(ValidationError):
    def __init__(self, symbol: str, state: StateIdentity):
        self.symbol = symbol
        self.state = state
        super().__init__(f"missing transition on {symbol!r} from {state}")


class ExtraTransition(ValidationError):
    def __init__(self, first: DeclaredTransition, second: DeclaredTransition):
        self.first = first
        self.second = second
        super().__init__(f"transition '{first}' and '{second}' conflict")


# ============================================================================
# Execution
# ============================================================================


class ExecutionError(FsmError):
    pass


class CharNotInInputAlphabet(ExecutionError):
    def __init__(self, char: str):
        self.char = char
        super().__init__(f"{char!r} not in input alphabet")
