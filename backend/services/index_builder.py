"""Index builder computing TF-IDF weight vectors over document passages."""
import logging
import math
from collections import Counter
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence

from models.chunk import IndexedPassage, Passage, WeightVector
from models.document import Document
from models.index import IndexSnapshot
from services.chunking_engine import ChunkingEngine
from services.tokenizer import tokenize

logger = logging.getLogger(__name__)

# idf(t) = ln((N + IDF_SMOOTHING) / (df(t) + IDF_SMOOTHING)) + IDF_OFFSET
# The smoothing term keeps the ratio finite for terms with df == 0 (unseen query
# terms); the offset keeps idf positive for terms found in every passage.
IDF_SMOOTHING = 1.0
IDF_OFFSET = 1.0

# Norm used in place of a zero-length vector so cosine never divides by zero.
NORM_FALLBACK = 1.0


def smoothed_idf(doc_freq: int, n: int) -> float:
    """Smoothed inverse document frequency; positive for every df in [0, n]."""
    return math.log((n + IDF_SMOOTHING) / (doc_freq + IDF_SMOOTHING)) + IDF_OFFSET


def weigh_terms(tokens: Sequence[str], doc_freq: Mapping[str, int], n: int) -> WeightVector:
    """
    Build the TF-IDF weight vector for a token sequence.

    Term frequency is normalised by the sequence length. Terms missing from
    ``doc_freq`` are weighted as if their document frequency were zero.

    Args:
        tokens: Terms of a passage or query
        doc_freq: Document frequency per term
        n: Passage count of the index (at least 1)

    Returns:
        WeightVector holding one weight per distinct term
    """
    if not tokens:
        return WeightVector(weights=MappingProxyType({}), norm=NORM_FALLBACK)

    total = len(tokens)
    weights = {}
    for term, freq in Counter(tokens).items():
        weights[term] = (freq / total) * smoothed_idf(doc_freq.get(term, 0), n)

    norm = math.sqrt(sum(w * w for w in weights.values())) or NORM_FALLBACK
    return WeightVector(weights=MappingProxyType(weights), norm=norm)


class IndexBuilder:
    """Builds immutable index snapshots from a document set."""

    def __init__(self, chunking_engine: Optional[ChunkingEngine] = None):
        """
        Initialize IndexBuilder.

        Args:
            chunking_engine: Engine used to split documents (defaults to configured sizes)
        """
        self.chunking_engine = chunking_engine or ChunkingEngine()

    def build(self, documents: Iterable[Document]) -> IndexSnapshot:
        """
        Build a fresh snapshot over all documents.

        Passages keep document order, then chunk order within a document, and
        are numbered ``c0, c1, ...``. Chunks without any term are dropped.

        Args:
            documents: Documents to index; not modified

        Returns:
            A new, fully independent IndexSnapshot
        """
        documents = list(documents)
        passages = self._cut_passages(documents)

        doc_freq = Counter()
        for passage in passages:
            doc_freq.update(set(passage.tokens))

        n = len(passages) or 1
        frozen_df = MappingProxyType(dict(doc_freq))
        indexed = tuple(
            IndexedPassage(passage=passage, vector=weigh_terms(passage.tokens, frozen_df, n))
            for passage in passages
        )

        logger.info(
            f"Built index: {len(documents)} documents, {len(indexed)} passages, "
            f"{len(frozen_df)} distinct terms"
        )
        return IndexSnapshot(
            passages=indexed,
            doc_freq=frozen_df,
            n=n,
            chunk_size=self.chunking_engine.chunk_size,
            chunk_overlap=self.chunking_engine.chunk_overlap,
        )

    def _cut_passages(self, documents: List[Document]) -> List[Passage]:
        """Chunk and tokenize every document, keeping only chunks with terms."""
        passages = []
        for document in documents:
            kept = 0
            for piece in self.chunking_engine.chunk_text(document.text):
                tokens = tokenize(piece)
                if not tokens:
                    continue
                passages.append(Passage(
                    id=f"c{len(passages)}",
                    document_id=document.id,
                    title=document.title,
                    text=piece,
                    tokens=tuple(tokens),
                ))
                kept += 1

            if not kept:
                logger.debug(f"Document {document.id!r} contributed no passages")
        return passages
