"""Passage (chunk) data models."""
from dataclasses import dataclass
from typing import Mapping, Tuple


@dataclass(frozen=True)
class Passage:
    """Represents an indexed passage cut from a document."""
    id: str  # Format: "c{n}", unique within one index snapshot
    document_id: str
    title: str
    text: str
    tokens: Tuple[str, ...]


@dataclass(frozen=True)
class WeightVector:
    """Sparse TF-IDF weights of a passage or query, with their Euclidean norm."""
    weights: Mapping[str, float]
    norm: float

    def dot(self, other: "WeightVector") -> float:
        """Dot product over the terms both vectors share."""
        small, large = (self, other) if len(self.weights) <= len(other.weights) else (other, self)
        return sum(w * large.weights.get(term, 0.0) for term, w in small.weights.items())


@dataclass(frozen=True)
class IndexedPassage:
    """Passage paired with its precomputed weight vector."""
    passage: Passage
    vector: WeightVector


@dataclass(frozen=True)
class ScoredPassage:
    """Passage with similarity score from retrieval."""
    passage: Passage
    score: float  # cosine similarity, 0.0 to 1.0
