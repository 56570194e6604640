"""Document data models."""
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Document:
    """A source document supplied by the document store.

    The retrieval engine only borrows documents while it rebuilds an index;
    it never mutates them. ``text`` is already-decoded plain text and may be
    empty, in which case the document contributes no passages.
    """
    id: str
    title: str
    text: str = ""
    tags: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Document":
        """
        Build a Document from a loosely-typed record.

        Args:
            data: Mapping with ``id`` and ``title`` keys, optional ``text`` and ``tags``

        Returns:
            Document instance

        Raises:
            ValueError: If ``id`` or ``title`` is missing, or ``tags`` is not a list
        """
        doc_id = data.get("id")
        title = data.get("title")
        if doc_id is None or title is None:
            raise ValueError("Document records require 'id' and 'title' fields")

        text: Optional[Any] = data.get("text")
        tags = data.get("tags") or ()
        if isinstance(tags, str):
            tags = (tags,)
        elif not isinstance(tags, (list, tuple)):
            raise ValueError(f"Document tags must be a list of strings, got {type(tags).__name__}")
        return cls(
            id=str(doc_id),
            title=str(title),
            text=text if isinstance(text, str) else "",
            tags=tuple(str(tag) for tag in tags),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the document back to a plain record."""
        return {"id": self.id, "title": self.title, "text": self.text, "tags": list(self.tags)}
