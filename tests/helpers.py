"""Shared helpers for the test suite."""

from pullparse import Final, run_effect


def source(items, result=None, log=None):
    """Generator over ``items`` returning ``result``; records pulls in ``log``."""
    for item in items:
        if log is not None:
            log.append(item)
        yield item
    return result


def run(stream):
    """Collect a stream's elements and its terminal value."""
    items = []
    result = run_effect(stream, items.append)
    return items, result


def layers(segments):
    """Collect every layer of a segment stream and its terminal value."""
    collected = []
    while True:
        step = segments.step()
        if isinstance(step, Final):
            return collected, step.value
        items, segments = run(step.stream)
        collected.append(items)


class CountingIterator:
    """Iterator that counts calls to ``__next__``."""

    def __init__(self, items, result=None):
        self._items = iter(items)
        self.result = result
        self.calls = 0

    def __iter__(self):
        return self

    def __next__(self):
        self.calls += 1
        for item in self._items:
            return item
        raise StopIteration(self.result)
