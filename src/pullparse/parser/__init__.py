"""Stateful parsing with draw, peek and pushback."""

from pullparse.parser.state import (
    ParserState,
    run_parser,
    eval_parser,
    exec_parser,
)

__all__ = [
    "ParserState",
    "run_parser",
    "eval_parser",
    "exec_parser",
]
