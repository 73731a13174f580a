#!/usr/bin/env python3
"""
Tests for the pull stream primitives.
"""

import unittest

from pullparse import (
    Stream, PushbackStream, ParseConfig, observe, emit, returning, each,
    run_effect, discard
)
from pullparse.streams import Next, Done, prepend
from tests.helpers import source, run, layers


class TestPrimitives(unittest.TestCase):
    """Test observe and the basic constructors."""

    def test_observe(self):
        stream = source([1], "end")
        step = observe(stream)
        self.assertIsInstance(step, Next)
        self.assertEqual(step.value, 1)
        self.assertIs(step.rest, stream)
        self.assertEqual(observe(stream), Done("end"))

    def test_plain_iterator_ends_with_none(self):
        self.assertEqual(run(iter([1, 2])), ([1, 2], None))

    def test_constructors(self):
        self.assertEqual(run(emit(3)), ([3], None))
        self.assertEqual(run(returning("r")), ([], "r"))
        self.assertEqual(run(each("ab")), (["a", "b"], None))

    def test_run_effect_and_discard(self):
        seen = []
        self.assertEqual(run_effect(source([1, 2], "end"), seen.append), "end")
        self.assertEqual(seen, [1, 2])
        log = []
        self.assertEqual(discard(source([1, 2], "end", log)), "end")
        self.assertEqual(log, [1, 2])


class TestPushbackStream(unittest.TestCase):
    """Test the pushback stack and idempotent end state."""

    def test_lifo(self):
        stream = PushbackStream([3])
        stream.push(2)
        stream.push(1)
        self.assertEqual(run(stream), ([1, 2, 3], None))

    def test_end_is_idempotent(self):
        stream = PushbackStream(source([], "end"))
        self.assertEqual(observe(stream), Done("end"))
        self.assertEqual(observe(stream), Done("end"))
        self.assertTrue(stream.exhausted)
        self.assertEqual(stream.result, "end")

    def test_prepend_reuses_pushback_stream(self):
        stream = prepend(1, source([2], "end"))
        self.assertIsInstance(stream, PushbackStream)
        self.assertIs(prepend(0, stream), stream)
        self.assertEqual(run(stream), ([0, 1, 2], "end"))


class TestStream(unittest.TestCase):
    """Test the re-iterable stream facade."""

    def setUp(self):
        self._chunk_size = ParseConfig.get_instance().default_chunk_size
        ParseConfig.set_defaults(default_chunk_size=4)

    def tearDown(self):
        ParseConfig.set_defaults(default_chunk_size=self._chunk_size)

    def test_reiterable(self):
        stream = Stream([1, 2, 3])
        self.assertEqual(list(stream), [1, 2, 3])
        self.assertEqual(list(stream), [1, 2, 3])

    def test_invalid_source(self):
        with self.assertRaises(TypeError):
            Stream(42)

    def test_parser(self):
        stream = Stream.range(3)
        self.assertEqual(stream.parser().draw_all(), [0, 1, 2])
        self.assertEqual(stream.parser().draw(), 0)

    def test_span_and_split_at(self):
        stream = Stream.from_iterable([1, 2, 3, 1])
        prefix, rest = run(stream.span(lambda x: x < 3))
        self.assertEqual(prefix, [1, 2])
        self.assertEqual(list(rest), [3, 1])
        prefix, rest = run(stream.split_at(3))
        self.assertEqual(prefix, [1, 2, 3])
        self.assertEqual(list(rest), [1])

    def test_segmentations(self):
        stream = Stream("aabccc")
        self.assertEqual(layers(stream.group())[0], [["a", "a"], ["b"], ["c", "c", "c"]])
        by_case = Stream("aAb").group_by(lambda a, b: a.lower() == b.lower())
        self.assertEqual(layers(by_case)[0], [["a", "A"], ["b"]])

    def test_chunks_of_default_size(self):
        chunks, _ = layers(Stream.range(10).chunks_of())
        self.assertEqual([len(c) for c in chunks], [4, 4, 2])
        chunks, _ = layers(Stream.range(10).chunks_of(5))
        self.assertEqual([len(c) for c in chunks], [5, 5])


if __name__ == "__main__":
    unittest.main()
