"""
Command line entry point: pyfsm --fsm-file PATH --input-string TEXT

Prints ``true``/``false``, or the error description in place of a result.
"""

from __future__ import annotations

import argparse
import logging
import logging.config
import os
import sys

import yaml

from pyfsm.core.engine import run
from pyfsm.core.errors import FsmError
from pyfsm.core.pipeline import load_automaton

logger = logging.getLogger("pyfsm")

LOG_CONFIG_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "log.yaml")


def configure_logging(path: str = LOG_CONFIG_PATH) -> None:
    try:
        with open(path, "rt") as f:
            config = yaml.safe_load(f.read())
        logging.config.dictConfig(config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(e, file=sys.stderr)
        logging.basicConfig(level=logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pyfsm",
        description="Validate a finite state machine description and run it on an input string",
    )
    parser.add_argument("-f", "--fsm-file", required=True, help="path to the state machine description")
    parser.add_argument("-i", "--input-string", required=True, help="input to run the machine on")
    return parser


def strip_line_ending(text: str) -> str:
    """Remove one trailing CRLF, LF or CR."""
    for ending in ("\r\n", "\n", "\r"):
        if text.endswith(ending):
            return text[: -len(ending)]
    return text


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        with open(args.fsm_file, "r", encoding="utf-8") as fsm_file:
            source = fsm_file.read()
    except (OSError, UnicodeDecodeError) as e:
        print(e)
        return 1

    try:
        automaton = load_automaton(source)
        accepted = run(automaton, strip_line_ending(args.input_string))
    except FsmError as e:
        logger.debug("rejected %s: %s", args.fsm_file, type(e).__name__)
        print(e)
        return 1

    print("true" if accepted else "false")
    return 0


if __name__ == "__main__":
    sys.exit(main())
