"""
Pull streams: iterators that end with a terminal value.

A stream is any iterator. Its elements come from ``next()`` and its terminal
value is the ``value`` of the ``StopIteration`` that ends it, i.e. the
``return`` value of a generator. Plain iterators end with ``None``.
"""

from dataclasses import dataclass
from typing import (
    Any, Callable, Generator, Generic, Iterable, Iterator, List, Optional,
    TypeVar, Union
)

from pullparse.config import config

T = TypeVar('T')
R = TypeVar('R')

# A producer yields T and returns R
Producer = Generator[T, None, R]


@dataclass(frozen=True)
class Next(Generic[T]):
    """An observed element together with the stream that continues after it."""
    value: T
    rest: Iterator[T]


@dataclass(frozen=True)
class Done(Generic[R]):
    """The terminal value of an exhausted stream."""
    value: R


def observe(stream: Iterator[T]) -> Union[Next[T], Done[Any]]:
    """Pull once from ``stream``.

    Every operation in this package is built on this single step. Exceptions
    raised while producing the element propagate unchanged.
    """
    try:
        value = next(stream)
    except StopIteration as stop:
        return Done(stop.value)
    return Next(value, stream)


def emit(value: T) -> Producer[T, None]:
    """One-element stream."""
    yield value


def returning(value: R) -> Producer[Any, R]:
    """Empty stream ending with ``value``."""
    return value
    yield  # pragma: no cover


def each(iterable: Iterable[T]) -> Producer[T, None]:
    """Lift any iterable into a stream ending with ``None``."""
    yield from iterable


def concat(stream: Iterator[T]) -> Producer[T, Any]:
    """Flatten a stream whose terminal value is itself a stream.

    This joins a ``span``/``split_at`` result (prefix, then continuation)
    back into a single stream.
    """
    rest = yield from stream
    return (yield from rest)


def run_effect(stream: Iterator[T], effect: Callable[[T], Any]) -> Any:
    """Run ``stream`` to completion, calling ``effect`` on every element.

    Returns the terminal value.
    """
    while True:
        step = observe(stream)
        if isinstance(step, Done):
            return step.value
        effect(step.value)


def discard(stream: Iterator[T]) -> Any:
    """Drain ``stream``, ignoring its elements, and return its terminal value."""
    while True:
        step = observe(stream)
        if isinstance(step, Done):
            return step.value


class PushbackStream(Iterator[T]):
    """
    A stream with a LIFO stack of pushed-back elements in front of it.

    Pushed-back elements are returned most-recent-first before the underlying
    stream is touched again. Once the underlying stream has ended, every
    further ``next()`` ends again with the same terminal value.
    """

    __slots__ = ('_stack', '_source', '_done', '_result')

    def __init__(self, source: Iterable[T]):
        self._stack: List[T] = []
        self._source = iter(source)
        self._done = False
        self._result: Any = None

    def push(self, value: T) -> None:
        """Make ``value`` the next element of this stream."""
        self._stack.append(value)

    @property
    def exhausted(self) -> bool:
        """True once the underlying stream has ended and no pushback remains."""
        return self._done and not self._stack

    @property
    def result(self) -> Any:
        """Terminal value of the underlying stream once it has ended."""
        return self._result

    def __iter__(self) -> 'PushbackStream[T]':
        return self

    def __next__(self) -> T:
        if self._stack:
            return self._stack.pop()
        if self._done:
            raise StopIteration(self._result)
        try:
            return next(self._source)
        except StopIteration as stop:
            self._done = True
            self._result = stop.value
            self._source = iter(())
            raise StopIteration(self._result) from None


def prepend(value: T, stream: Iterator[T]) -> PushbackStream[T]:
    """Stream that yields ``value`` and then the rest of ``stream``.

    Prepending onto a ``PushbackStream`` pushes onto its stack, so repeated
    splitting of the same source never nests wrappers.
    """
    if not isinstance(stream, PushbackStream):
        stream = PushbackStream(stream)
    stream.push(value)
    return stream


class Stream(Iterable[T]):
    """
    A re-iterable source of pull streams with parsing and splitting helpers.

    Every terminal operation starts a fresh pass over the source.
    """

    def __init__(self, source: Union[Iterable[T], Callable[[], Iterator[T]]]):
        """
        Initialize stream.

        Args:
            source: Data source (iterable, or callable returning an iterator)
        """
        if callable(source):
            self._source = source
        elif hasattr(source, '__iter__'):
            self._source = lambda: iter(source)
        else:
            raise TypeError("Source must be iterable or callable")

    def __iter__(self) -> Iterator[T]:
        return iter(self._source())

    # Parsing

    def parser(self) -> 'ParserState[T]':
        """Start a stateful parse over a fresh pass of the source."""
        from pullparse.parser import ParserState
        return ParserState(iter(self))

    # Bisection

    def span(self, predicate: Callable[[T], bool]) -> Producer[T, Iterator[T]]:
        """Split off the longest prefix satisfying ``predicate``."""
        from pullparse.segments.split import span
        return span(predicate, iter(self))

    def split_at(self, n: int) -> Producer[T, Iterator[T]]:
        """Split off the first ``n`` elements."""
        from pullparse.segments.split import split_at
        return split_at(n, iter(self))

    # Segmentation

    def group_by(self, equals: Callable[[T, T], bool]) -> 'Segments':
        """Segment into runs of elements equal to the first of their run."""
        from pullparse.segments.segmentation import group_by
        return group_by(equals, iter(self))

    def group(self) -> 'Segments':
        """Segment into runs of equal elements."""
        from pullparse.segments.segmentation import group
        return group(iter(self))

    def chunks_of(self, size: Optional[int] = None) -> 'Segments':
        """Segment into chunks of ``size`` elements."""
        from pullparse.segments.segmentation import chunks_of
        return chunks_of(config.resolve_chunk_size(size), iter(self))

    # Factory methods

    @classmethod
    def from_iterable(cls, iterable: Iterable[T]) -> 'Stream[T]':
        """Create stream from iterable."""
        return cls(iterable)

    @classmethod
    def range(cls, *args) -> 'Stream[int]':
        """Create stream of integers."""
        return cls(lambda: iter(range(*args)))
