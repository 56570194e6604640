"""Services for the Pathfinder retrieval backend."""
from .tokenizer import tokenize
from .chunking_engine import ChunkingEngine, chunk_text
from .index_builder import IndexBuilder, smoothed_idf, weigh_terms
from .retrieval_engine import RetrievalEngine
from .knowledge_base import KnowledgeBase, load_documents
from .answer_composer import AnswerComposer, ComposedAnswer, Citation

__all__ = ['tokenize', 'ChunkingEngine', 'chunk_text', 'IndexBuilder', 'smoothed_idf', 'weigh_terms', 'RetrievalEngine', 'KnowledgeBase', 'load_documents', 'AnswerComposer', 'ComposedAnswer', 'Citation']
