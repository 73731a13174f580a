"""
Segment streams: lazy sequences of sub-streams ending in a terminal value.

Stepping a :class:`Segments` yields either :class:`Final` (no more layers)
or a :class:`Layer`. A layer's stream yields the elements of one segment and
returns the :class:`Segments` that continues after it, so the next layer can
only be reached by running the current one to its end.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, Optional, TypeVar, Union

from pullparse.streams.stream import PushbackStream

T = TypeVar('T')
R = TypeVar('R')


@dataclass(frozen=True)
class Final(Generic[R]):
    """No more layers; ``value`` is the terminal value of the whole input."""
    value: R


@dataclass(frozen=True)
class Layer(Generic[T]):
    """One segment. ``stream`` returns the :class:`Segments` after it.

    The stream keeps its end state: draining it again returns the same
    :class:`Segments` without touching the input.
    """
    stream: Iterator[T]

    def __post_init__(self):
        if not isinstance(self.stream, PushbackStream):
            object.__setattr__(self, 'stream', PushbackStream(self.stream))


Step = Union[Final, Layer]


class Segments(Generic[T, R]):
    """
    A lazily built segment stream.

    Wraps a step function that runs when the segment stream is observed.
    Each :class:`Segments` may be stepped only once.
    """

    __slots__ = ('_step',)

    def __init__(self, step: Callable[[], Step]):
        self._step: Optional[Callable[[], Step]] = step

    def step(self) -> Step:
        """Observe the next layer or the terminal value."""
        step, self._step = self._step, None
        if step is None:
            raise RuntimeError("Segment stream has already been stepped")
        return step()

    @classmethod
    def final(cls, value: R) -> 'Segments[Any, R]':
        """Segment stream with no layers."""
        return cls(lambda: Final(value))

    @classmethod
    def layer(cls, stream: Iterator[T]) -> 'Segments[T, Any]':
        """Segment stream of one layer; ``stream`` must return the next Segments."""
        return cls(lambda: Layer(stream))

    # Algebra

    def concats(self) -> Iterator[T]:
        from pullparse.segments.operators import concats
        return concats(self)

    def intercalate(self, sep) -> Iterator[T]:
        from pullparse.segments.operators import intercalate
        return intercalate(sep, self)

    def takes(self, n: int) -> 'Segments[T, None]':
        from pullparse.segments.operators import takes
        return takes(n, self)

    def takes_draining(self, n: int) -> 'Segments[T, R]':
        from pullparse.segments.operators import takes_draining
        return takes_draining(n, self)

    def drops(self, n: int) -> 'Segments[T, R]':
        from pullparse.segments.operators import drops
        return drops(n, self)

    def folds(self, step, begin, done) -> Iterator[Any]:
        from pullparse.segments.operators import folds
        return folds(step, begin, done, self)

    def folds_m(self, step, begin, done) -> Iterator[Any]:
        from pullparse.segments.operators import folds_m
        return folds_m(step, begin, done, self)

    def map_layers(self, transform: Callable[[Iterator[T]], Iterator[Any]]) -> 'Segments[Any, R]':
        return map_layers(transform, self)


def map_return(stream: Iterator[T], func: Callable[[Any], Any]):
    """Stream with the elements of ``stream`` and terminal value ``func(r)``."""
    result = yield from stream
    return func(result)


def map_layers(transform: Callable[[Iterator[T]], Iterator[Any]],
               segments: Segments[T, R]) -> Segments[Any, R]:
    """
    Apply ``transform`` to every layer.

    ``transform`` takes a layer stream and must return a stream that ends
    with the layer's own terminal value (e.g. a generator that does
    ``return (yield from layer)``), so the continuation is preserved.
    """
    def step() -> Step:
        s = segments.step()
        if isinstance(s, Final):
            return s
        return Layer(map_return(transform(s.stream),
                                lambda rest: map_layers(transform, rest)))
    return Segments(step)
