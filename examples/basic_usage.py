#!/usr/bin/env python3
"""
Basic usage examples for pullparse.
"""

import io
import logging

from pullparse import (
    Stream,
    ParserState,
    ParseConfig,
    group_by,
    chunks_of,
    concats,
    intercalate,
    takes,
    takes_draining,
    drops,
    folds,
    emit,
    run_effect,
)

TEXT = """\
# header
# more header
alpha
alpha
beta
gamma
gamma
gamma
"""


def read_lines(handle):
    """Yield stripped lines and return the number of lines read."""
    count = 0
    for line in handle:
        count += 1
        yield line.rstrip("\n")
    return count


def example_parser():
    """Example: skip a header with peek and draw."""
    print("\n=== Parser Example ===")

    state = ParserState(read_lines(io.StringIO(TEXT)))
    header = []
    while (state.peek() or "").startswith("#"):
        header.append(state.draw())

    print(f"Header lines: {header}")
    print(f"First body line: {state.peek()}")
    body = state.draw_all()
    print(f"Body: {body}")
    print(f"Lines read: {state.result}")


def example_group_boundaries():
    """Example: print group boundaries of a line stream."""
    print("\n=== Group Boundaries Example ===")

    body = (line for line in TEXT.splitlines() if not line.startswith("#"))
    joined = intercalate(emit("----"), group_by(lambda a, b: a == b, body))
    for line in joined:
        print(line)


def example_chunk_sums():
    """Example: per-chunk aggregation without buffering chunks."""
    print("\n=== Chunk Sums Example ===")

    sums = folds(lambda acc, x: acc + x, 0, lambda acc: acc, chunks_of(3, range(1, 10)))
    print(f"Chunk sums: {list(sums)}")

    ParseConfig.set_defaults(default_chunk_size=4)
    lengths = Stream.range(10).chunks_of().folds(lambda n, _: n + 1, 0, int)
    print(f"Default chunk lengths: {list(lengths)}")


def example_bounding():
    """Example: keep, drain and skip layers."""
    print("\n=== Bounding Example ===")

    def numbers():
        yield from range(1, 10)
        return "done"

    items = []
    result = run_effect(concats(takes(1, chunks_of(3, numbers()))), items.append)
    print(f"takes(1): {items}, terminal value: {result}")

    items = []
    result = run_effect(concats(takes_draining(1, chunks_of(3, numbers()))), items.append)
    print(f"takes_draining(1): {items}, terminal value: {result}")

    items = []
    result = run_effect(concats(drops(2, chunks_of(3, numbers()))), items.append)
    print(f"drops(2): {items}, terminal value: {result}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)

    example_parser()
    example_group_boundaries()
    example_chunk_sums()
    example_bounding()
