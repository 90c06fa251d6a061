from __future__ import annotations

from pyfsm.core.engine import run
from pyfsm.core.parser import parse
from pyfsm.core.types import Automaton
from pyfsm.core.validation import validate


def load_automaton(source: str) -> Automaton:
    """Parse and validate source text in one step."""
    return validate(parse(source))


def evaluate(source: str, text: str) -> bool:
    return run(load_automaton(source), text)
