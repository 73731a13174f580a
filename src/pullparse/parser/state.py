"""
Stateful parsing over a pull stream.

A parser is any callable that takes a :class:`ParserState` and returns a
value. The state holds the remaining stream; drawing advances it and
``undraw`` pushes elements back in front of it.
"""

import logging
from typing import Any, Callable, Iterable, Iterator, List, Tuple, TypeVar

from pullparse.config import config
from pullparse.memory import monitor
from pullparse.streams.stream import PushbackStream, Done, observe

T = TypeVar('T')
X = TypeVar('X')
B = TypeVar('B')

logger = logging.getLogger(__name__)

_MISSING = object()


class ParserState(Iterator[T]):
    """The remaining input of a parse."""

    def __init__(self, stream: Iterable[T]):
        if isinstance(stream, PushbackStream):
            self._stream = stream
        else:
            self._stream = PushbackStream(stream)

    @property
    def stream(self) -> PushbackStream[T]:
        """The remaining stream, pushed-back elements included."""
        return self._stream

    @property
    def is_exhausted(self) -> bool:
        """True once the end of input has been drawn."""
        return self._stream.exhausted

    @property
    def result(self) -> Any:
        """Terminal value of the input, available once it is exhausted."""
        if not self._stream.exhausted:
            raise RuntimeError("Input not exhausted; terminal value unavailable")
        return self._stream.result

    def _pull(self) -> Any:
        step = observe(self._stream)
        if isinstance(step, Done):
            return _MISSING
        return step.value

    def draw(self, default: Any = None) -> Any:
        """Draw one element, or return ``default`` at end of input."""
        value = self._pull()
        if value is _MISSING:
            return default
        return value

    def skip(self) -> bool:
        """Skip one element; False if there was none."""
        return self._pull() is not _MISSING

    def draw_all(self) -> List[T]:
        """
        Draw all remaining elements into a list.

        Loads the whole input into memory, so this is meant for tests and
        small inputs. Memory pressure is checked every
        ``config.memory_check_interval`` elements.
        """
        result = []
        interval = config.memory_check_interval
        while True:
            value = self._pull()
            if value is _MISSING:
                return result
            result.append(value)
            if config.memory_checks and interval > 0 and len(result) % interval == 0:
                monitor.check_memory_pressure(buffered=len(result))

    def skip_all(self) -> None:
        """Drain all remaining elements."""
        while self._pull() is not _MISSING:
            pass

    def undraw(self, value: T) -> None:
        """Push ``value`` back so the next draw returns it."""
        self._stream.push(value)

    pushback = undraw

    def peek(self, default: Any = None) -> Any:
        """Return the next element without consuming it."""
        value = self._pull()
        if value is _MISSING:
            return default
        self.undraw(value)
        return value

    def is_end_of_input(self) -> bool:
        """True if no element remains. Observes at most one element."""
        return self.peek(_MISSING) is _MISSING

    def fold_all(self,
                 step: Callable[[X, T], X],
                 begin: X,
                 done: Callable[[X], B]) -> B:
        """
        Fold all remaining elements.

        Args:
            step: Step function
            begin: Initial accumulator
            done: Extraction function
        """
        acc = begin
        while True:
            value = self._pull()
            if value is _MISSING:
                return done(acc)
            acc = step(acc, value)

    def fold_all_m(self,
                   step: Callable[[X, T], X],
                   begin: Callable[[], X],
                   done: Callable[[X], B]) -> B:
        """
        Fold all remaining elements with effectful callbacks.

        ``begin`` runs once before the first draw; ``step`` runs after each
        draw and ``done`` after the end of input is observed.

        Args:
            step: Step action
            begin: Action producing the initial accumulator
            done: Extraction action
        """
        acc = begin()
        while True:
            value = self._pull()
            if value is _MISSING:
                return done(acc)
            acc = step(acc, value)

    # Iterating a parser state draws from it

    def __iter__(self) -> 'ParserState[T]':
        return self

    def __next__(self) -> T:
        return next(self._stream)


def run_parser(parser: Callable[[ParserState[T]], X],
               stream: Iterable[T]) -> Tuple[X, PushbackStream[T]]:
    """Run ``parser`` on ``stream``; return its value and the remaining stream."""
    state = ParserState(stream)
    value = parser(state)
    logger.debug("Parser %r finished", getattr(parser, '__name__', parser))
    return value, state.stream


def eval_parser(parser: Callable[[ParserState[T]], X], stream: Iterable[T]) -> X:
    """Run ``parser`` on ``stream`` and return its value."""
    return run_parser(parser, stream)[0]


def exec_parser(parser: Callable[[ParserState[T]], Any],
                stream: Iterable[T]) -> PushbackStream[T]:
    """Run ``parser`` on ``stream`` and return the remaining stream."""
    return run_parser(parser, stream)[1]
