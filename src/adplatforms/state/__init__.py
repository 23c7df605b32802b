"""State/store layer.

Closes raw assignments over the location hierarchy and keeps the resulting
index available for concurrent point lookups.
"""

from adplatforms.state.closure import ClosedIndex, build_closed_index, iter_ancestors, parent_path
from adplatforms.state.store import IndexSnapshot, IndexStore

__all__ = [
    "ClosedIndex",
    "IndexSnapshot",
    "IndexStore",
    "build_closed_index",
    "iter_ancestors",
    "parent_path",
]
