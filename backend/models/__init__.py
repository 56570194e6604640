"""Data models for the Pathfinder retrieval backend."""
from .document import Document
from .chunk import Passage, WeightVector, IndexedPassage, ScoredPassage
from .index import IndexSnapshot

__all__ = [
    "Document",
    "Passage",
    "WeightVector",
    "IndexedPassage",
    "ScoredPassage",
    "IndexSnapshot",
]
