"""
Segment a stream into runs or fixed-size chunks.

Each segmentation is built one layer at a time: the next layer is only
started when the consumer steps the segment stream returned by the previous
one, so arbitrarily long inputs are split without recursion or buffering.
"""

import operator
from typing import Callable, Iterable, TypeVar

from pullparse.segments.segments import Final, Layer, Segments
from pullparse.segments.split import span, split_at
from pullparse.streams.stream import Done, observe

T = TypeVar('T')


def group_by(equals: Callable[[T, T], bool], stream: Iterable[T]) -> Segments:
    """
    Segment ``stream`` into maximal runs.

    Every layer starts with the first element of its run and continues with
    the following elements ``x`` for which ``equals(first, x)`` holds. The
    first element always belongs to its run, whatever ``equals`` says about
    it. The terminal value of the input becomes the terminal value of the
    segment stream.
    """
    stream = iter(stream)

    def run(first: T):
        yield first
        rest = yield from span(lambda x: equals(first, x), stream)
        return group_by(equals, rest)

    def step():
        s = observe(stream)
        if isinstance(s, Done):
            return Final(s.value)
        return Layer(run(s.value))

    return Segments(step)


def group(stream: Iterable[T]) -> Segments:
    """Segment ``stream`` into runs of equal elements."""
    return group_by(operator.eq, stream)


def chunks_of(n: int, stream: Iterable[T]) -> Segments:
    """
    Segment ``stream`` into chunks of ``n`` elements.

    The last chunk has between 1 and ``n`` elements. With ``n <= 0`` nothing
    is split: a non-empty input becomes a single layer, an empty one none.
    """
    stream = iter(stream)

    def chunk(first: T):
        yield first
        if n <= 0:
            result = yield from stream
            return Segments.final(result)
        rest = yield from split_at(n - 1, stream)
        return chunks_of(n, rest)

    def step():
        s = observe(stream)
        if isinstance(s, Done):
            return Final(s.value)
        return Layer(chunk(s.value))

    return Segments(step)
