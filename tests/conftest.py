"""Shared pytest fixtures: an in-memory Firestore stand-in and synthetic datasets."""

from __future__ import annotations

import itertools
from typing import Any, Dict, List, Optional

import pytest

from seed_models import QuizDataset

SERVER_TS = object()


class FakeBatch:
    def __init__(self, store: "FakeStore") -> None:
        self.store = store
        self.pending: List[tuple] = []

    def set(self, collection_path: str, fields: Dict[str, Any]) -> None:
        self.pending.append((collection_path, fields))

    def commit(self) -> None:
        self.store.commit_attempts += 1
        if self.store.fail_on_commit == self.store.commit_attempts:
            raise self.store.error
        for path, fields in self.pending:
            self.store.docs.append((path, next(self.store._ids), fields))
        self.store.commits.append(len(self.pending))


class FakeStore:
    """Records every write; can be told to fail the Nth create or commit."""

    def __init__(self, supports_batch: bool = True, fail_on_create: Optional[int] = None,
                 fail_on_commit: Optional[int] = None, error: Optional[Exception] = None) -> None:
        self.supports_batch = supports_batch
        self.fail_on_create = fail_on_create
        self.fail_on_commit = fail_on_commit
        self.error = error or RuntimeError("boom")
        self.docs: List[tuple] = []
        self.commits: List[int] = []
        self.create_attempts = 0
        self.commit_attempts = 0
        self.closed = False
        self._ids = (f"doc{i}" for i in itertools.count(1))

    def create_document(self, collection_path: str, fields: Dict[str, Any]) -> str:
        self.create_attempts += 1
        if self.fail_on_create == self.create_attempts:
            raise self.error
        doc_id = next(self._ids)
        self.docs.append((collection_path, doc_id, fields))
        return doc_id

    def batch(self) -> FakeBatch:
        return FakeBatch(self)

    def server_timestamp(self):
        return SERVER_TS

    def sample_documents(self, collection_path: str, limit: int = 1) -> List[dict]:
        return [fields for path, _, fields in self.docs if path == collection_path][:limit]

    def close(self) -> None:
        self.closed = True

    def under(self, collection_path: str) -> List[dict]:
        return [fields for path, _, fields in self.docs if path == collection_path]


def make_dataset(n: int, categories: Optional[List[str]] = None) -> QuizDataset:
    categories = categories or ["General"]
    return QuizDataset.model_validate({
        "quiz": {
            "title": "Synthetic quiz",
            "description": "Generated for tests",
            "difficulty": "Mixed",
            "estimatedTime": 5,
            "isActive": True,
        },
        "questions": [
            {
                "question": f"Question number {i}?",
                "options": ["a", "b", "c", "d"],
                "correctAnswer": i % 4,
                "hasImage": False,
                "category": categories[i % len(categories)],
                "difficulty": 1 + i % 5,
                "isActive": True,
            }
            for i in range(n)
        ],
    })


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def dataset_factory():
    return make_dataset
