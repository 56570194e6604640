"""Integration tests for the HTTP endpoints."""
import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock
import sys
import os

# Add backend to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'backend'))


@pytest.fixture
def client():
    """Create a test client backed by a small in-memory knowledge base."""
    # Import after path is set
    import main
    from models.document import Document
    from services.answer_composer import AnswerComposer
    from services.knowledge_base import KnowledgeBase

    # The lifespan hook only runs when the client is used as a context manager,
    # so the services are set directly here
    main.knowledge_base = KnowledgeBase(documents=[
        Document(id="d1", title="DSA Notes - Arrays & Strings", text="Arrays store elements contiguously."),
        Document(id="d2", title="Operating Systems - Scheduling", text="CPU scheduling algorithms: FCFS, SJF, round robin."),
        Document(id="d3", title="Career: Data Scientist Pathway", text="Foundations: Python, statistics, linear algebra."),
    ])
    main.answer_composer = AnswerComposer()

    yield TestClient(main.app)


class TestHealth:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_health_reports_index_size(self, client):
        data = client.get("/health").json()

        assert data["status"] == "healthy"
        assert data["documents"] == 3
        assert data["passages"] == 3
        assert data["vocabulary"] > 0


class TestDocumentEndpoints:

    def test_list_documents(self, client):
        response = client.get("/documents")
        assert response.status_code == 200
        assert [doc["id"] for doc in response.json()] == ["d1", "d2", "d3"]

    def test_search_documents_by_title(self, client):
        response = client.get("/documents", params={"search": "career"})
        assert [doc["id"] for doc in response.json()] == ["d3"]

    def test_get_document(self, client):
        assert client.get("/documents/d2").json()["title"] == "Operating Systems - Scheduling"
        assert client.get("/documents/nope").status_code == 404

    def test_add_document_is_searchable(self, client):
        response = client.post("/documents", json={
            "id": "d4", "title": "Networks", "text": "TCP handshake uses SYN and ACK.", "tags": ["cn"],
        })
        assert response.status_code == 201
        assert response.json()["tags"] == ["cn"]

        hits = client.post("/query", json={"question": "handshake"}).json()["hits"]
        assert hits[0]["document_id"] == "d4"

    def test_add_document_with_null_text(self, client):
        response = client.post("/documents", json={"id": "blank", "title": "Untitled scan", "text": None})

        assert response.status_code == 201
        assert response.json()["text"] == ""
        assert client.get("/documents/blank").json()["text"] == ""

        hits = client.post("/query", json={"question": "untitled scan blank", "top_k": 10}).json()["hits"]
        assert all(hit["document_id"] != "blank" for hit in hits)
        assert client.get("/health").json()["passages"] == 3

    def test_replace_documents_with_null_text(self, client):
        response = client.put("/documents", json=[
            {"id": "a", "title": "A", "text": None},
            {"id": "b", "title": "B"},
            {"id": "c", "title": "C", "text": "graphs"},
        ])

        assert response.status_code == 200
        assert [doc["text"] for doc in response.json()] == ["", "", "graphs"]
        assert client.get("/health").json()["passages"] == 1

    def test_add_document_requires_id(self, client):
        response = client.post("/documents", json={"id": "", "title": "No id"})
        assert response.status_code == 422

    def test_replace_documents(self, client):
        response = client.put("/documents", json=[{"id": "only", "title": "Only", "text": "graphs"}])
        assert response.status_code == 200
        assert client.get("/health").json()["documents"] == 1

    def test_replace_documents_rejects_duplicate_ids(self, client):
        response = client.put("/documents", json=[
            {"id": "a", "title": "A", "text": "x"},
            {"id": "a", "title": "B", "text": "y"},
        ])
        assert response.status_code == 400

    def test_delete_document(self, client):
        assert client.delete("/documents/d1").status_code == 204
        assert client.delete("/documents/d1").status_code == 404
        assert client.get("/health").json()["passages"] == 2


class TestQueryEndpoint:

    def test_query_ranks_passages(self, client):
        response = client.post("/query", json={"question": "How does CPU scheduling work?"})

        assert response.status_code == 200
        hits = response.json()["hits"]
        assert hits[0]["document_id"] == "d2"
        assert hits[0]["passage_id"] == "c1"
        assert 0 < hits[0]["score"] <= 1
        assert "scheduling" in hits[0]["text"]

    def test_query_respects_top_k(self, client):
        response = client.post("/query", json={"question": "arrays scheduling python", "top_k": 2})
        assert len(response.json()["hits"]) == 2

    def test_query_without_terms_returns_no_hits(self, client):
        response = client.post("/query", json={"question": "?!"})
        assert response.status_code == 200
        assert response.json()["hits"] == []

    def test_query_on_empty_knowledge_base(self, client):
        client.put("/documents", json=[])
        response = client.post("/query", json={"question": "anything"})
        assert response.json()["hits"] == []

    def test_negative_top_k_is_rejected(self, client):
        response = client.post("/query", json={"question": "arrays", "top_k": -1})
        assert response.status_code == 422

    def test_unexpected_error_returns_500(self, client):
        import main
        main.knowledge_base = Mock()
        main.knowledge_base.query.side_effect = RuntimeError("boom")

        response = client.post("/query", json={"question": "arrays"})

        assert response.status_code == 500
        assert "boom" in response.json()["detail"]


class TestChatEndpoint:

    def test_chat_cites_matching_documents(self, client):
        response = client.post("/chat", json={"question": "What are arrays?"})

        assert response.status_code == 200
        data = response.json()
        assert data["answer"] == "Based on your docs: DSA Notes - Arrays & Strings"
        assert data["sources"][0]["document_id"] == "d1"

    def test_chat_falls_back_without_matches(self, client):
        data = client.post("/chat", json={"question": "quantum chromodynamics"}).json()

        assert data["answer"].startswith("General tip:")
        assert data["sources"] == []

    def test_chat_accepts_same_top_k_bounds_as_query(self, client):
        query = client.post("/query", json={"question": "arrays", "top_k": 0})
        chat = client.post("/chat", json={"question": "arrays", "top_k": 0})

        assert query.status_code == 200
        assert query.json()["hits"] == []
        assert chat.status_code == 200
        assert chat.json()["answer"].startswith("General tip:")
        assert client.post("/chat", json={"question": "arrays", "top_k": -1}).status_code == 422

    def test_chat_rejects_blank_question(self, client):
        response = client.post("/chat", json={"question": "   "})
        assert response.status_code == 400


def test_init_services_loads_seed_documents(tmp_path):
    import json
    import main

    seed = tmp_path / "seed.json"
    seed.write_text(json.dumps([{"id": "s1", "title": "Seed", "text": "seeded text"}]))

    main.init_services(str(seed))

    assert [doc.id for doc in main.knowledge_base.documents] == ["s1"]
    assert len(main.knowledge_base.snapshot) == 1


def test_init_services_without_seed_file(tmp_path):
    import main

    main.init_services(str(tmp_path / "missing.json"))

    assert main.knowledge_base.documents == ()


def test_rebuilding_handlers_run_off_the_event_loop():
    import inspect
    import main

    for handler in (main.upsert_document, main.replace_documents, main.delete_document,
                    main.query_endpoint, main.chat_endpoint):
        assert not inspect.iscoroutinefunction(handler), handler.__name__
