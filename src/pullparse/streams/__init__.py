"""Pull streams with terminal values."""

from pullparse.streams.stream import (
    Stream,
    Producer,
    PushbackStream,
    Next,
    Done,
    observe,
    emit,
    returning,
    each,
    concat,
    prepend,
    run_effect,
    discard,
)

__all__ = [
    "Stream",
    "Producer",
    "PushbackStream",
    "Next",
    "Done",
    "observe",
    "emit",
    "returning",
    "each",
    "concat",
    "prepend",
    "run_effect",
    "discard",
]
