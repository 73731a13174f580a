"""Splitting streams into segment streams and joining them back."""

from pullparse.segments.segments import (
    Segments,
    Final,
    Layer,
    map_layers,
)
from pullparse.segments.split import span, split_at
from pullparse.segments.segmentation import group_by, group, chunks_of
from pullparse.segments.operators import (
    SegmentOperator,
    ConcatsOperator,
    IntercalateOperator,
    TakesOperator,
    DrainingTakesOperator,
    DropsOperator,
    FoldsOperator,
    FoldsMOperator,
    concats,
    intercalate,
    takes,
    takes_draining,
    drops,
    folds,
    folds_m,
)

__all__ = [
    "Segments",
    "Final",
    "Layer",
    "map_layers",
    "span",
    "split_at",
    "group_by",
    "group",
    "chunks_of",
    "SegmentOperator",
    "ConcatsOperator",
    "IntercalateOperator",
    "TakesOperator",
    "DrainingTakesOperator",
    "DropsOperator",
    "FoldsOperator",
    "FoldsMOperator",
    "concats",
    "intercalate",
    "takes",
    "takes_draining",
    "drops",
    "folds",
    "folds_m",
]
