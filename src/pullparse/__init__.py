"""
pullparse: incremental parsing and segmentation of pull streams.

A stream is any iterator; its terminal value is the ``return`` value of the
generator that produced it. A :class:`ParserState` draws from a stream with
pushback, and the segmentations (``group_by``, ``chunks_of``) split a stream
into a lazy segment stream that the algebra (``concats``, ``takes``,
``folds``, ...) joins, bounds or summarizes without loading it into memory.
"""

from pullparse.config import ParseConfig
from pullparse.streams import (
    Stream,
    PushbackStream,
    observe,
    emit,
    returning,
    each,
    concat,
    run_effect,
    discard,
)
from pullparse.parser import ParserState, run_parser, eval_parser, exec_parser
from pullparse.segments import (
    Segments,
    Final,
    Layer,
    span,
    split_at,
    group_by,
    group,
    chunks_of,
    concats,
    intercalate,
    takes,
    takes_draining,
    drops,
    folds,
    folds_m,
    map_layers,
)
from pullparse.memory import MemoryMonitor, MemoryPressureLevel

__version__ = "0.1.0"
__license__ = "Apache-2.0"

__all__ = [
    "ParseConfig",
    "Stream",
    "PushbackStream",
    "observe",
    "emit",
    "returning",
    "each",
    "concat",
    "run_effect",
    "discard",
    "ParserState",
    "run_parser",
    "eval_parser",
    "exec_parser",
    "Segments",
    "Final",
    "Layer",
    "span",
    "split_at",
    "group_by",
    "group",
    "chunks_of",
    "concats",
    "intercalate",
    "takes",
    "takes_draining",
    "drops",
    "folds",
    "folds_m",
    "map_layers",
    "MemoryMonitor",
    "MemoryPressureLevel",
]

# Configure default settings
ParseConfig.set_defaults()
