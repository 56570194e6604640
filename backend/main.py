"""Main entry point for the Pathfinder retrieval API."""
import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from config import (
    CORS_ORIGINS,
    LOG_FORMAT,
    LOG_LEVEL,
    PORT,
    SEED_DOCUMENTS_PATH,
)
from logger import setup_logging
from models.api import (
    ChatRequest,
    ChatResponse,
    DocumentIn,
    DocumentOut,
    HealthResponse,
    PassageHit,
    QueryRequest,
    QueryResponse,
    Source,
)
from services.answer_composer import AnswerComposer
from services.knowledge_base import KnowledgeBase, load_documents

if LOG_FORMAT == "json":
    setup_logging(LOG_LEVEL)

# Initialize logging
logger = logging.getLogger(__name__)

SERVICE_NAME = "pathfinder-retrieval"
VERSION = "1.0.0"

# Initialize services (will be done on startup)
knowledge_base: KnowledgeBase = None
answer_composer: AnswerComposer = None


def init_services(seed_path: Optional[str] = SEED_DOCUMENTS_PATH) -> None:
    """Create the knowledge base, seeded from ``seed_path`` when that file exists."""
    global knowledge_base, answer_composer

    logger.info("Initializing Pathfinder retrieval services...")

    documents = []
    if seed_path and Path(seed_path).exists():
        documents = load_documents(seed_path)
    else:
        logger.info(f"No seed documents at {seed_path}, starting with an empty knowledge base")

    knowledge_base = KnowledgeBase(documents=documents)
    answer_composer = AnswerComposer()
    logger.info("All services initialized successfully")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize services on startup."""
    try:
        init_services()
    except Exception as e:
        logger.error(f"Failed to initialize services: {e}", exc_info=True)
        raise
    yield


# Initialize FastAPI app
app = FastAPI(
    title="Pathfinder Retrieval API",
    description="Lexical passage retrieval over a student's uploaded study material",
    version=VERSION,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "message": "Pathfinder Retrieval API"}


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Detailed health check."""
    documents, snapshot = knowledge_base.current()
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        version=VERSION,
        documents=len(documents),
        passages=len(snapshot),
        vocabulary=snapshot.vocabulary_size,
    )


@app.get("/documents", response_model=List[DocumentOut])
async def list_documents(search: str = "") -> List[DocumentOut]:
    """List documents whose title contains ``search`` (case-insensitive)."""
    return [DocumentOut.from_document(doc) for doc in knowledge_base.search_documents(search)]


@app.get("/documents/{document_id}", response_model=DocumentOut)
async def get_document(document_id: str) -> DocumentOut:
    document = knowledge_base.get_document(document_id)
    if document is None:
        raise HTTPException(status_code=404, detail=f"Document not found: {document_id}")
    return DocumentOut.from_document(document)


# Handlers that rebuild or rank are plain functions, so FastAPI runs them in its threadpool
@app.post("/documents", response_model=DocumentOut, status_code=201)
def upsert_document(request: DocumentIn) -> DocumentOut:
    """Add a document, or replace the one with the same id, and rebuild the index."""
    document = request.to_document()
    knowledge_base.add_document(document)
    logger.info(f"Stored document {document.id!r} ({len(document.text)} characters)")
    return DocumentOut.from_document(document)


@app.put("/documents", response_model=List[DocumentOut])
def replace_documents(request: List[DocumentIn]) -> List[DocumentOut]:
    """Replace the whole document set and rebuild the index."""
    documents = [item.to_document() for item in request]
    ids = [doc.id for doc in documents]
    if len(set(ids)) != len(ids):
        raise HTTPException(status_code=400, detail="Document ids must be unique")

    knowledge_base.replace_documents(documents)
    return [DocumentOut.from_document(doc) for doc in documents]


@app.delete("/documents/{document_id}", status_code=204)
def delete_document(document_id: str) -> None:
    if not knowledge_base.remove_document(document_id):
        raise HTTPException(status_code=404, detail=f"Document not found: {document_id}")


@app.post("/query", response_model=QueryResponse)
def query_endpoint(request: QueryRequest) -> QueryResponse:
    """
    Rank indexed passages against a question.

    A question without recognizable terms yields an empty hit list rather
    than an error.

    Args:
        request: QueryRequest with question and optional top_k

    Returns:
        QueryResponse with passages ordered best first
    """
    start_time = time.time()

    try:
        hits = knowledge_base.query(request.question, request.top_k)
    except Exception as e:
        logger.error(f"Unexpected error processing query: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")

    latency_ms = int((time.time() - start_time) * 1000)
    logger.info(f"Query returned {len(hits)} passages in {latency_ms}ms")

    return QueryResponse(
        question=request.question,
        hits=[
            PassageHit(
                passage_id=hit.passage.id,
                document_id=hit.passage.document_id,
                title=hit.passage.title,
                text=hit.passage.text,
                score=hit.score,
            )
            for hit in hits
        ],
    )


@app.post("/chat", response_model=ChatResponse)
def chat_endpoint(request: ChatRequest) -> ChatResponse:
    """
    Answer a question from the uploaded material.

    Args:
        request: ChatRequest with the question

    Returns:
        ChatResponse with the composed answer and the cited passages

    Raises:
        HTTPException: 400 for a blank question, 500 for unexpected failures
    """
    if not request.question or not request.question.strip():
        raise HTTPException(status_code=400, detail="Question field is required and cannot be empty")

    try:
        hits = knowledge_base.query(request.question.strip(), request.top_k)
        composed = answer_composer.compose(hits)
    except Exception as e:
        logger.error(f"Unexpected error answering question: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")

    logger.info(f"Answered question with {len(composed.sources)} sources")
    return ChatResponse(
        answer=composed.answer,
        sources=[
            Source(
                title=source.title,
                document_id=source.document_id,
                passage_id=source.passage_id,
                relevance_score=source.relevance_score,
            )
            for source in composed.sources
        ],
    )


if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting Pathfinder Retrieval API on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
