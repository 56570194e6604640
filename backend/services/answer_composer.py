"""Answer composition from ranked passages."""
from dataclasses import dataclass, field
from typing import List

from models.chunk import ScoredPassage


@dataclass
class Citation:
    """Source metadata for a passage an answer was grounded on."""
    title: str
    document_id: str
    passage_id: str
    relevance_score: float


@dataclass
class ComposedAnswer:
    """User-facing answer text plus its citations."""
    answer: str
    sources: List[Citation] = field(default_factory=list)


class AnswerComposer:
    """Turns ranked passages into a short answer that names its sources."""

    GROUNDED_PREFIX = "Based on your docs: "
    FALLBACK_ANSWER = "General tip: break study into chunks, practice past questions."

    def compose(self, hits: List[ScoredPassage]) -> ComposedAnswer:
        """
        Compose an answer from query results.

        Titles are listed once each, in rank order. Without hits the fallback
        study tip is returned and no sources are cited.

        Args:
            hits: Ranked passages, best first

        Returns:
            ComposedAnswer with one citation per hit
        """
        if not hits:
            return ComposedAnswer(answer=self.FALLBACK_ANSWER)

        titles = list(dict.fromkeys(hit.passage.title for hit in hits))
        sources = [
            Citation(
                title=hit.passage.title,
                document_id=hit.passage.document_id,
                passage_id=hit.passage.id,
                relevance_score=hit.score,
            )
            for hit in hits
        ]
        return ComposedAnswer(answer=self.GROUNDED_PREFIX + ", ".join(titles), sources=sources)
