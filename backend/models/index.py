"""Index snapshot data model."""
from dataclasses import dataclass
from typing import Mapping, Tuple

from models.chunk import IndexedPassage


@dataclass(frozen=True)
class IndexSnapshot:
    """One immutable generation of the passage index.

    Built in full from a document set and replaced wholesale on the next
    rebuild. ``n`` is the passage count used for IDF, which is 1 for an empty
    snapshot; use ``len(snapshot)`` for the real passage count.
    """
    passages: Tuple[IndexedPassage, ...]
    doc_freq: Mapping[str, int]
    n: int
    chunk_size: int
    chunk_overlap: int

    def __len__(self) -> int:
        return len(self.passages)

    @property
    def is_empty(self) -> bool:
        return not self.passages

    @property
    def vocabulary_size(self) -> int:
        return len(self.doc_freq)
