"""Retrieval engine ranking indexed passages by cosine similarity."""
import logging
from typing import List, Optional

from config import DEFAULT_TOP_K, RELEVANCE_THRESHOLD
from models.chunk import ScoredPassage
from models.index import IndexSnapshot
from services.index_builder import weigh_terms
from services.tokenizer import tokenize

logger = logging.getLogger(__name__)


class RetrievalEngine:
    """Rank the passages of an index snapshot against free-text queries."""

    def __init__(self, default_top_k: int = DEFAULT_TOP_K, min_score: float = RELEVANCE_THRESHOLD):
        """
        Initialize the retrieval engine.

        Args:
            default_top_k: Number of passages returned when the caller gives no k
            min_score: Passages must score strictly above this to be returned
        """
        if default_top_k < 0:
            raise ValueError("default_top_k cannot be negative")

        self.default_top_k = default_top_k
        self.min_score = min_score
        logger.info(f"Initialized RetrievalEngine (top_k={default_top_k}, min_score={min_score})")

    def query(self, snapshot: IndexSnapshot, text: str, k: Optional[int] = None) -> List[ScoredPassage]:
        """
        Rank passages of a snapshot against a query.

        1. Return nothing for an empty snapshot or a query without terms
        2. Weigh the query like a passage, against the snapshot's document frequencies
        3. Score every passage by cosine similarity with the query vector
        4. Drop passages at or below ``min_score``; by default those sharing no term
        5. Sort by descending score, keeping passage order on ties, and keep the first k

        The snapshot is only read.

        Args:
            snapshot: Index snapshot to search
            text: User question
            k: Maximum number of passages (default: ``default_top_k``)

        Returns:
            Scored passages, best first; empty if nothing matches

        Raises:
            ValueError: If k is negative
        """
        if k is None:
            k = self.default_top_k
        if k < 0:
            raise ValueError("k cannot be negative")

        if k == 0 or snapshot is None or snapshot.is_empty:
            return []

        terms = tokenize(text)
        if not terms:
            logger.debug("Query has no recognizable terms, returning empty results")
            return []

        query_vector = weigh_terms(terms, snapshot.doc_freq, snapshot.n)

        scored = []
        for indexed in snapshot.passages:
            dot = query_vector.dot(indexed.vector)
            # Weights are non-negative, so cosine lies in [0, 1] up to rounding
            score = min(1.0, dot / (query_vector.norm * indexed.vector.norm))
            if score > self.min_score:
                scored.append(ScoredPassage(passage=indexed.passage, score=score))

        # sorted() is stable, so equal scores keep snapshot order
        ranked = sorted(scored, key=lambda hit: hit.score, reverse=True)[:k]

        logger.debug(
            f"Query matched {len(scored)} of {len(snapshot)} passages, returning {len(ranked)}"
        )
        return ranked
