"""Pydantic models for API requests and responses."""
from typing import List, Optional

from pydantic import BaseModel, Field

from models.document import Document


class DocumentIn(BaseModel):
    """Request model for adding or replacing a document."""

    id: str = Field(..., min_length=1, description="Opaque document identifier")
    title: str = Field(..., description="Document title, shown as the citation")
    text: Optional[str] = Field(None, description="Already-extracted plain text; null is stored as empty")
    tags: List[str] = Field(default_factory=list, description="Optional free-form tags")

    def to_document(self) -> Document:
        return Document(id=self.id, title=self.title, text=self.text or "", tags=tuple(self.tags))


class DocumentOut(BaseModel):
    """Response model for a stored document."""

    id: str
    title: str
    text: str
    tags: List[str] = Field(default_factory=list)

    @classmethod
    def from_document(cls, document: Document) -> "DocumentOut":
        return cls(id=document.id, title=document.title, text=document.text, tags=list(document.tags))


class QueryRequest(BaseModel):
    """Request model for ranking passages against a question."""

    question: str = Field(..., max_length=2000, description="Free-text query")
    top_k: Optional[int] = Field(None, ge=0, le=50, description="Maximum number of passages to return")


class PassageHit(BaseModel):
    """A ranked passage."""

    passage_id: str
    document_id: str
    title: str
    text: str
    score: float = Field(..., ge=0, le=1, description="Cosine similarity to the query")


class QueryResponse(BaseModel):
    """Response model for ranked passages."""

    question: str
    hits: List[PassageHit] = Field(default_factory=list)


class ChatRequest(BaseModel):
    """Request model for a chat question."""

    question: str = Field(..., max_length=2000, description="The student's question")
    top_k: Optional[int] = Field(None, ge=0, le=50, description="Maximum number of passages to cite")


class Source(BaseModel):
    """Citation for a passage used in an answer."""

    title: str
    document_id: str
    passage_id: str
    relevance_score: float = Field(..., ge=0, le=1)


class ChatResponse(BaseModel):
    """Response model for a chat answer."""

    answer: str
    sources: List[Source] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    service: str
    version: str
    documents: int
    passages: int
    vocabulary: int
