"""
Operators over segment streams.

Joiners (``concats``, ``intercalate``) and folds (``folds``, ``folds_m``)
turn a segment stream back into a stream; ``takes``, ``takes_draining`` and
``drops`` produce a new segment stream. Layers are always run strictly in
order and each element is observed once.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Iterator, Tuple, TypeVar, Union

from pullparse.config import config
from pullparse.segments.segments import Final, Layer, Segments, map_return
from pullparse.streams.stream import Done, discard, observe, run_effect

T = TypeVar('T')
X = TypeVar('X')
B = TypeVar('B')

logger = logging.getLogger(__name__)


def _drain(layer: Iterator[T], index: int) -> Segments:
    """Run a layer to its end, discarding its elements."""
    if not config.log_drains:
        return discard(layer)
    count = 0

    def tally(_):
        nonlocal count
        count += 1

    rest = run_effect(layer, tally)
    logger.debug("Drained layer %d (%d elements)", index, count)
    return rest


class SegmentOperator(ABC):
    """Base class for segment stream operators."""

    @abstractmethod
    def apply(self, segments: Segments) -> Any:
        """Apply operator to a segment stream."""
        pass


class ConcatsOperator(SegmentOperator):
    """Join all layers into one stream ending with the terminal value."""

    def apply(self, segments: Segments) -> Iterator[T]:
        while True:
            step = segments.step()
            if isinstance(step, Final):
                return step.value
            segments = yield from step.stream


class IntercalateOperator(SegmentOperator):
    """Join all layers, emitting a separator between consecutive layers."""

    def __init__(self, sep: Union[Iterable[T], Callable[[], Iterator[T]]]):
        self.sep = sep
        self._cached = None

    def separator(self) -> Iterator[T]:
        """A fresh pass over the separator."""
        if callable(self.sep):
            return iter(self.sep())
        if iter(self.sep) is self.sep:
            # One-shot iterator: keep its elements for every later gap
            if self._cached is None:
                self._cached = tuple(self.sep)
            return iter(self._cached)
        return iter(self.sep)

    def apply(self, segments: Segments) -> Iterator[T]:
        first = True
        while True:
            step = segments.step()
            if isinstance(step, Final):
                return step.value
            if not first:
                yield from self.separator()
            first = False
            segments = yield from step.stream


class TakesOperator(SegmentOperator):
    """Keep the first ``n`` layers; later layers are never observed.

    The terminal value is lost: the result always ends with ``None``.
    """

    def __init__(self, n: int):
        self.n = n

    def apply(self, segments: Segments) -> Segments:
        n = self.n

        def step():
            if n <= 0:
                logger.debug("Truncated segment stream; terminal value dropped")
                return Final(None)
            s = segments.step()
            if isinstance(s, Final):
                return Final(None)
            return Layer(map_return(s.stream, TakesOperator(n - 1).apply))

        return Segments(step)


class DrainingTakesOperator(SegmentOperator):
    """Keep the first ``n`` layers and drain the rest to reach the terminal value."""

    def __init__(self, n: int):
        self.n = n

    def apply(self, segments: Segments) -> Segments:
        n = self.n

        def step():
            if n > 0:
                s = segments.step()
                if isinstance(s, Final):
                    return s
                return Layer(map_return(s.stream, DrainingTakesOperator(n - 1).apply))
            rest, index = segments, 0
            while True:
                s = rest.step()
                if isinstance(s, Final):
                    return s
                rest = _drain(s.stream, index)
                index += 1

        return Segments(step)


class DropsOperator(SegmentOperator):
    """Drain the first ``n`` layers and continue with the rest.

    Dropping is not free: the dropped layers are run to their end.
    """

    def __init__(self, n: int):
        self.n = n

    def apply(self, segments: Segments) -> Segments:
        if self.n <= 0:
            return segments
        n = self.n

        def step():
            rest = segments
            for index in range(n):
                s = rest.step()
                if isinstance(s, Final):
                    return s
                rest = _drain(s.stream, index)
            return rest.step()

        return Segments(step)


class FoldsOperator(SegmentOperator):
    """Fold every layer into a single value."""

    def __init__(self,
                 step: Callable[[X, T], X],
                 begin: X,
                 done: Callable[[X], B]):
        self.step = step
        self.begin = begin
        self.done = done

    def initial(self) -> X:
        return self.begin

    def fold(self, layer: Iterator[T]) -> Tuple[Segments, B]:
        acc = self.initial()
        while True:
            s = observe(layer)
            if isinstance(s, Done):
                return s.value, self.done(acc)
            acc = self.step(acc, s.value)

    def apply(self, segments: Segments) -> Iterator[B]:
        while True:
            s = segments.step()
            if isinstance(s, Final):
                return s.value
            segments, value = self.fold(s.stream)
            yield value


class FoldsMOperator(FoldsOperator):
    """Fold every layer with effectful callbacks.

    ``begin`` is an action run at the start of every layer.
    """

    def initial(self) -> X:
        return self.begin()


def concats(segments: Segments) -> Iterator[T]:
    """Join a segment stream into a single stream.

    Inverse of the segmentations: ``concats(group_by(eq, s))`` yields the
    elements of ``s`` and returns its terminal value.
    """
    return ConcatsOperator().apply(segments)


def intercalate(sep: Union[Iterable[T], Callable[[], Iterator[T]]],
                segments: Segments) -> Iterator[T]:
    """Join a segment stream, emitting ``sep`` between layers.

    ``sep`` may be a re-iterable, a callable returning a fresh stream, or a
    one-shot iterator (its elements are kept after the first pass).
    """
    return IntercalateOperator(sep).apply(segments)


def takes(n: int, segments: Segments) -> Segments:
    """Keep only the first ``n`` layers, dropping the terminal value."""
    return TakesOperator(n).apply(segments)


def takes_draining(n: int, segments: Segments) -> Segments:
    """Keep only the first ``n`` layers, draining the rest to keep the terminal value."""
    return DrainingTakesOperator(n).apply(segments)


def drops(n: int, segments: Segments) -> Segments:
    """Drop the first ``n`` layers by draining them."""
    return DropsOperator(n).apply(segments)


def folds(step: Callable[[X, T], X],
          begin: X,
          done: Callable[[X], B],
          segments: Segments) -> Iterator[B]:
    """
    Fold each layer.

    Args:
        step: Step function
        begin: Initial accumulator for every layer
        done: Extraction function
        segments: Segment stream to fold

    Returns:
        A stream of one value per layer ending with the terminal value
    """
    return FoldsOperator(step, begin, done).apply(segments)


def folds_m(step: Callable[[X, T], X],
            begin: Callable[[], X],
            done: Callable[[X], B],
            segments: Segments) -> Iterator[B]:
    """Fold each layer with effectful callbacks.

    ``begin`` is called at the start of every layer, ``step`` after each
    element and ``done`` once the layer has ended.
    """
    return FoldsMOperator(step, begin, done).apply(segments)
