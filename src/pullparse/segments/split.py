"""
Split a stream into a prefix and the stream that continues after it.

Both splitters return a generator that yields the prefix and returns the
continuation. Nothing is observed until the prefix is iterated. Joining the
two parts back (``concat``) gives the original stream.
"""

from typing import Callable, Iterable, Iterator, TypeVar

from pullparse.streams.stream import Producer, Done, observe, prepend, returning

T = TypeVar('T')


def span(predicate: Callable[[T], bool],
         stream: Iterable[T]) -> Producer[T, Iterator[T]]:
    """
    Yield the longest prefix of elements satisfying ``predicate``.

    Returns a stream starting at the first element that fails the predicate,
    or an empty stream ending with the input's terminal value.
    """
    stream = iter(stream)
    while True:
        step = observe(stream)
        if isinstance(step, Done):
            return returning(step.value)
        if not predicate(step.value):
            return prepend(step.value, stream)
        yield step.value


def split_at(n: int, stream: Iterable[T]) -> Producer[T, Iterator[T]]:
    """
    Yield the first ``n`` elements, fewer if the stream ends first.

    Returns the stream after them. With ``n <= 0`` nothing is observed and
    the input is returned unchanged.
    """
    stream = iter(stream)
    for _ in range(n):
        step = observe(stream)
        if isinstance(step, Done):
            return returning(step.value)
        yield step.value
    return stream
