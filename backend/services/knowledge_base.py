"""Knowledge base holding the document set and the published index snapshot."""
import json
import logging
import threading
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from models.chunk import ScoredPassage
from models.document import Document
from models.index import IndexSnapshot
from services.index_builder import IndexBuilder
from services.retrieval_engine import RetrievalEngine

logger = logging.getLogger(__name__)


class KnowledgeBase:
    """Owns the current documents and publishes a rebuilt snapshot on every change.

    Writers (document changes) are serialised by a lock and publish a brand-new
    snapshot by swapping one reference. Readers grab that reference once and
    never lock; a query in flight keeps using the snapshot it started with.
    """

    def __init__(
        self,
        index_builder: Optional[IndexBuilder] = None,
        retrieval_engine: Optional[RetrievalEngine] = None,
        documents: Iterable[Document] = (),
    ):
        """
        Initialize the knowledge base and build the first snapshot.

        Args:
            index_builder: Builder used for every rebuild
            retrieval_engine: Engine used by ``query``
            documents: Initial document set
        """
        self.index_builder = index_builder or IndexBuilder()
        self.retrieval_engine = retrieval_engine or RetrievalEngine()
        self._write_lock = threading.Lock()
        # Published as one (documents, snapshot) pair so readers never mix generations
        self._state: Tuple[Tuple[Document, ...], IndexSnapshot] = ((), self.index_builder.build(()))
        self.replace_documents(documents)

    def current(self) -> Tuple[Tuple[Document, ...], IndexSnapshot]:
        """The published (documents, snapshot) pair, taken in a single read."""
        return self._state

    @property
    def snapshot(self) -> IndexSnapshot:
        """The currently published snapshot."""
        return self._state[1]

    @property
    def documents(self) -> Tuple[Document, ...]:
        return self._state[0]

    def get_document(self, document_id: str) -> Optional[Document]:
        for document in self._state[0]:
            if document.id == document_id:
                return document
        return None

    def search_documents(self, term: str = "") -> List[Document]:
        """Case-insensitive substring filter over document titles."""
        needle = (term or "").lower()
        return [doc for doc in self._state[0] if needle in doc.title.lower()]

    def replace_documents(self, documents: Iterable[Document]) -> IndexSnapshot:
        """
        Replace the whole document set and publish a rebuilt snapshot.

        Args:
            documents: New document set, in index order

        Returns:
            The newly published snapshot
        """
        with self._write_lock:
            return self._publish(tuple(documents))

    def add_document(self, document: Document) -> IndexSnapshot:
        """
        Add a document, or replace the one with the same id in place.

        Args:
            document: Document to store

        Returns:
            The newly published snapshot
        """
        with self._write_lock:
            current = list(self._state[0])
            for position, existing in enumerate(current):
                if existing.id == document.id:
                    current[position] = document
                    break
            else:
                current.append(document)
            return self._publish(tuple(current))

    def remove_document(self, document_id: str) -> bool:
        """
        Remove a document by id.

        Returns:
            True if a document was removed (and the index rebuilt), False if unknown
        """
        with self._write_lock:
            documents = self._state[0]
            remaining = tuple(doc for doc in documents if doc.id != document_id)
            if len(remaining) == len(documents):
                logger.warning(f"Cannot remove unknown document {document_id!r}")
                return False
            self._publish(remaining)
            return True

    def rebuild(self) -> IndexSnapshot:
        """Rebuild the snapshot from the current document set."""
        with self._write_lock:
            return self._publish(self._state[0])

    def query(self, text: str, k: Optional[int] = None) -> List[ScoredPassage]:
        """Rank passages of the current snapshot against a query."""
        snapshot = self._state[1]
        return self.retrieval_engine.query(snapshot, text, k)

    def _publish(self, documents: Tuple[Document, ...]) -> IndexSnapshot:
        # Build fully before swapping, so readers never see a partial index
        snapshot = self.index_builder.build(documents)
        self._state = (documents, snapshot)
        logger.info(f"Published snapshot with {len(snapshot)} passages for {len(documents)} documents")
        return snapshot


def load_documents(path: Union[str, Path]) -> List[Document]:
    """
    Load seed documents from a JSON array of ``{id, title, text, tags?}`` records.

    Args:
        path: Path to the JSON file

    Returns:
        Documents in file order

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a JSON array of document records
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        try:
            records = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(records, list):
        raise ValueError(f"Expected a JSON array of documents in {path}")

    documents = []
    for record in records:
        if not isinstance(record, dict):
            raise ValueError(f"Expected document objects in {path}, got {type(record).__name__}")
        documents.append(Document.from_dict(record))

    logger.info(f"Loaded {len(documents)} documents from {path}")
    return documents
