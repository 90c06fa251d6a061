"""
Grammar parser: raw source text -> ParsedSpecification.

The source holds three blocks, accepted in any relative order:

    states:
    	A
    	final: B
    transitions:
    	0: A -> B
    	0: B -> A
    start: A

Each block has a fixed internal shape. The parser performs no semantic
checks: duplicate names, dangling targets, non-determinism and missing
transitions are left to the validator.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from pyfsm.core.errors import ParseError
from pyfsm.core.types import DeclaredState, DeclaredTransition, ParsedSpecification

logger = logging.getLogger("pyfsm")

STATES_KEYWORD = "states:"
TRANSITIONS_KEYWORD = "transitions:"
START_KEYWORD = "start:"
FINAL_MARKER = "\tfinal:"
ARROW = "->"

_SEPARATORS = re.compile(r"[\r\n\0]*")
_BLANKS = re.compile(r"[ \t]*")
_TRAILER = re.compile(r"[ \t\r\n\0]*")
_NAME = re.compile(r"[^ \t\r\n:]+")
_SYMBOL = re.compile(r"[^ \t\r\n:]")


class _Failure(Exception):
    def __init__(self, pos: int):
        super().__init__(pos)
        self.pos = pos


class _Scanner:
    """
    Position-passing scanner over the source text.

    Every rule takes a position and returns ``(value, new_position)`` or
    raises ``_Failure``. The furthest failure seen is kept for reporting,
    together with everything that was expected there.
    """

    def __init__(self, text: str):
        self.text = text
        self.furthest_pos = -1
        self.expected: list[str] = []

    def fail(self, pos: int, expected: str) -> _Failure:
        if pos > self.furthest_pos:
            self.furthest_pos = pos
            self.expected = [expected]
        elif pos == self.furthest_pos and expected not in self.expected:
            self.expected.append(expected)
        return _Failure(pos)

    def error(self) -> ParseError:
        pos = max(self.furthest_pos, 0)
        line = self.text.count("\n", 0, pos) + 1
        column = pos - (self.text.rfind("\n", 0, pos) + 1) + 1
        found = self.text[pos:].split("\n", 1)[0][:20] or self.text[pos : pos + 1]
        return ParseError(" or ".join(self.expected), line, column, found)

    # ------------------------------------------------------------------
    # Terminals
    # ------------------------------------------------------------------

    def skip(self, pattern: re.Pattern, pos: int) -> int:
        return pattern.match(self.text, pos).end()

    def literal(self, pos: int, literal: str) -> int:
        if not self.text.startswith(literal, pos):
            raise self.fail(pos, repr(literal))
        return pos + len(literal)

    def name(self, pos: int) -> tuple[str, int]:
        match = _NAME.match(self.text, pos)
        if match is None:
            raise self.fail(pos, "state name")
        return match.group(), match.end()

    def symbol(self, pos: int) -> tuple[str, int]:
        match = _SYMBOL.match(self.text, pos)
        if match is None:
            raise self.fail(pos, "transition symbol")
        return match.group(), match.end()

    # ------------------------------------------------------------------
    # Lines
    # ------------------------------------------------------------------

    def state_line(self, pos: int) -> tuple[DeclaredState, int]:
        if self.text.startswith(FINAL_MARKER, pos):
            pos = self.skip(_BLANKS, pos + len(FINAL_MARKER))
            name, pos = self.name(pos)
            state = DeclaredState(name, accepting=True)
        else:
            if not self.text.startswith("\t", pos):
                raise self.fail(pos, "tab-indented state line")
            name, pos = self.name(pos + 1)
            state = DeclaredState(name)
        return state, self.skip(_SEPARATORS, pos)

    def transition_line(self, pos: int) -> tuple[DeclaredTransition, int]:
        pos = self.skip(_BLANKS, pos)
        symbol, pos = self.symbol(pos)
        pos = self.literal(pos, ":")
        pos = self.skip(_BLANKS, pos)
        start, pos = self.name(pos)
        pos = self.skip(_BLANKS, pos)
        pos = self.literal(pos, ARROW)
        pos = self.skip(_BLANKS, pos)
        end, pos = self.name(pos)
        return DeclaredTransition(symbol, start, end), self.skip(_SEPARATORS, pos)

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def header(self, pos: int, keyword: str) -> int:
        pos = self.skip(_SEPARATORS, pos)
        return self.literal(pos, keyword)

    def states_block(self, pos: int) -> tuple[tuple[DeclaredState, ...], int]:
        pos = self.skip(_SEPARATORS, self.header(pos, STATES_KEYWORD))
        states = []
        while True:
            try:
                state, pos = self.state_line(pos)
            except _Failure:
                break
            states.append(state)
        return tuple(states), pos

    def transitions_block(self, pos: int) -> tuple[tuple[DeclaredTransition, ...], int]:
        pos = self.skip(_SEPARATORS, self.header(pos, TRANSITIONS_KEYWORD))
        transition, pos = self.transition_line(pos)
        transitions = [transition]
        while True:
            try:
                transition, pos = self.transition_line(pos)
            except _Failure:
                break
            transitions.append(transition)
        return tuple(transitions), pos

    def start_block(self, pos: int) -> tuple[str, int]:
        pos = self.skip(_BLANKS, self.header(pos, START_KEYWORD))
        return self.name(pos)


def parse(text: str) -> ParsedSpecification:
    """
    Parse source text into a ParsedSpecification.

    The three top-level blocks are tried repeatedly in any order until each
    has matched once. A pass in which no remaining block matches is a parse
    error, as is any non-whitespace text left after the last block.

    Raises:
        ParseError: the text does not match the grammar. Carries the 1-based
            line and column of the furthest failure and what was expected.
    """
    if not isinstance(text, str):
        raise TypeError(f"text must be str, got {type(text)}")

    scanner = _Scanner(text)
    blocks: dict[str, Callable[[int], tuple]] = {
        "states": scanner.states_block,
        "transitions": scanner.transitions_block,
        "start": scanner.start_block,
    }
    results: dict[str, object] = {}
    pos = 0

    while len(results) < len(blocks):
        progressed = False
        for key, block in blocks.items():
            if key in results:
                continue
            try:
                results[key], pos = block(pos)
            except _Failure:
                continue
            progressed = True
        if not progressed:
            raise scanner.error()

    end = scanner.skip(_TRAILER, pos)
    if end != len(text):
        scanner.fail(end, "end of input")
        raise scanner.error()

    parsed = ParsedSpecification(
        start=results["start"],
        states=results["states"],
        transitions=results["transitions"],
    )
    logger.debug(
        "parsed %d states, %d transitions, start %r",
        len(parsed.states),
        len(parsed.transitions),
        parsed.start,
    )
    return parsed
