from .marker import Marker, MarkerKind
from .marker_diff import MarkerDiff, diff_markers
from .marker_index import MarkerIndex

__all__ = [
    "Marker",
    "MarkerKind",
    "MarkerIndex",
    "MarkerDiff",
    "diff_markers",
]
