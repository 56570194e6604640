"""Chunking engine producing overlapping fixed-length passages."""
import logging
from typing import List

from config import CHUNK_SIZE, CHUNK_OVERLAP

logger = logging.getLogger(__name__)


class ChunkingEngine:
    """Segments raw document text into overlapping character windows."""

    def __init__(self, chunk_size: int = CHUNK_SIZE, chunk_overlap: int = CHUNK_OVERLAP):
        """
        Initialize ChunkingEngine.

        Sizes are raw character counts, not tokens, so text with many
        multi-byte characters is not narrowed to compensate.

        Args:
            chunk_size: Window length in characters
            chunk_overlap: Characters shared by consecutive windows

        Raises:
            ValueError: If the window would not advance (overlap >= size) or a size is out of range
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        if chunk_overlap < 0:
            raise ValueError(f"chunk_overlap cannot be negative, got {chunk_overlap}")
        if chunk_overlap >= chunk_size:
            raise ValueError(
                f"chunk_overlap ({chunk_overlap}) must be smaller than chunk_size ({chunk_size})"
            )

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    @property
    def step(self) -> int:
        """Distance the window moves between consecutive chunks."""
        return self.chunk_size - self.chunk_overlap

    def chunk_text(self, text: str) -> List[str]:
        """
        Split text into trimmed, non-empty, overlapping chunks.

        The window starts at 0 and moves forward by ``chunk_size - chunk_overlap``
        until it has covered the end of the text, so text no longer than
        ``chunk_size`` yields a single chunk.

        Args:
            text: Plain text to split

        Returns:
            Chunks in document order; empty for blank or non-string input
        """
        if not isinstance(text, str) or not text:
            return []

        chunks = []
        length = len(text)
        cursor = 0

        while cursor < length:
            end = min(length, cursor + self.chunk_size)
            piece = text[cursor:end].strip()
            if piece:
                chunks.append(piece)
            if end >= length:
                break
            cursor = max(0, cursor + self.step)

        logger.debug(f"Split {length} characters into {len(chunks)} chunks")
        return chunks


def chunk_text(text: str, chunk_size: int = CHUNK_SIZE, chunk_overlap: int = CHUNK_OVERLAP) -> List[str]:
    """Split text with a one-off ChunkingEngine. See ChunkingEngine.chunk_text."""
    return ChunkingEngine(chunk_size, chunk_overlap).chunk_text(text)
