"""
Test Configuration

Pytest configuration and fixtures for the test suite.
"""

import os

os.environ.setdefault("OPENAI_API_KEY", "sk-test-key")
os.environ.setdefault("MONGO_ENSURE_INDEXES", "false")
os.environ.setdefault("LOG_JSON_FORMAT", "false")

import copy
from types import SimpleNamespace
from typing import Any, Dict, Generator, List, Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError

from app.api.users import get_user_repository
from app.main import app
from app.services import user_store
from app.services.ai_engine import AIGenerationError
from app.services.review_orchestrator import ReviewOrchestrator, get_review_orchestrator
from app.services.user_store import UserRepository


# =============================================================================
# Fake text generator
# =============================================================================

class FakeGenerator:
    """Deterministic generator that records every call."""

    def __init__(self, fail_on: tuple = (), error: type = AIGenerationError):
        self.calls: List[tuple] = []
        self.fail_on = set(fail_on)
        self.error = error

    async def generate(self, prompt: str, system_instruction: str) -> str:
        self.calls.append((prompt, system_instruction))
        call_number = len(self.calls)
        if call_number in self.fail_on:
            raise self.error(f"upstream failure on call {call_number}")
        return f"review {call_number}"


# =============================================================================
# Fake MongoDB
# =============================================================================

class FakeCursor:
    def __init__(self, documents: List[Dict[str, Any]]):
        self._documents = documents

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        return self._documents if length is None else self._documents[:length]


class FakeCollection:
    """In-memory stand-in for the few collection methods the store uses."""

    def __init__(self):
        self.documents: List[Dict[str, Any]] = []
        self.indexes: List[tuple] = []

    def _matches(self, document: Dict[str, Any], query: Dict[str, Any]) -> bool:
        return all(document.get(key) == value for key, value in query.items())

    async def create_index(self, key: str, unique: bool = False) -> str:
        self.indexes.append((key, unique))
        return f"{key}_1"

    async def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        for document in self.documents:
            if self._matches(document, query):
                return copy.deepcopy(document)
        return None

    async def insert_one(self, document: Dict[str, Any]) -> SimpleNamespace:
        if any(existing["email"] == document["email"] for existing in self.documents):
            raise DuplicateKeyError("E11000 duplicate key error")
        stored = dict(document, _id=ObjectId())
        self.documents.append(stored)
        return SimpleNamespace(inserted_id=stored["_id"])

    def find(self, query: Dict[str, Any], projection: Optional[Dict[str, int]] = None) -> FakeCursor:
        excluded = {key for key, flag in (projection or {}).items() if not flag}
        return FakeCursor([
            {key: value for key, value in document.items() if key not in excluded}
            for document in self.documents
            if self._matches(document, query)
        ])

    async def delete_one(self, query: Dict[str, Any]) -> SimpleNamespace:
        for index, document in enumerate(self.documents):
            if self._matches(document, query):
                del self.documents[index]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


class FakeDatabase:
    def __init__(self):
        self.collections: Dict[str, FakeCollection] = {}
        self.commands: List[str] = []

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())

    async def command(self, name: str) -> Dict[str, Any]:
        self.commands.append(name)
        return {"ok": 1.0}


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    """Keep PBKDF2 cheap in tests."""
    monkeypatch.setattr(user_store, "PASSWORD_HASH_ITERATIONS", 1000)


@pytest.fixture
def fake_generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def make_generator():
    """Factory for generators that fail on given 1-based call numbers."""
    return FakeGenerator


@pytest.fixture
def fake_database() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def user_repository(fake_database: FakeDatabase) -> UserRepository:
    return UserRepository(fake_database)


@pytest.fixture
def client(
    fake_generator: FakeGenerator,
    user_repository: UserRepository
) -> Generator[TestClient, None, None]:
    """Create a test client wired to fake collaborators."""
    app.dependency_overrides[get_review_orchestrator] = (
        lambda: ReviewOrchestrator(fake_generator, chunk_size=5000)
    )
    app.dependency_overrides[get_user_repository] = lambda: user_repository

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def code_sample() -> str:
    """A 12000-character JavaScript sample."""
    line = "const value = computeTotal(items, taxRate);\n"
    return (line * (12000 // len(line) + 1))[:12000]
