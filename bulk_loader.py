"""
bulk_loader.py

Writes one quiz document and its questions to Firestore.

Layout:

    quizzes/{quizId}                     <- quiz fields, totalQuestions, categories
    quizzes/{quizId}/questions/{auto}    <- one document per question

The quiz document is created (and acknowledged) before any question is written.
Questions are then written either one by one ("incremental") or in batches of
``CHUNK_SIZE`` ("batched"), depending on what the store client supports.

Nothing here is idempotent: every call creates a brand-new quiz with a fresh
set of questions, so running a seeding script twice leaves two quizzes behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from seed_errors import UploadInterrupted
from seed_models import QuizDataset

logger = logging.getLogger(__name__)

QUIZZES_COLLECTION = "quizzes"
QUESTIONS_COLLECTION = "questions"
CHUNK_SIZE = 10

INCREMENTAL = "incremental"
BATCHED = "batched"


@dataclass
class LoadResult:
    quiz_id: str
    written: int
    total: int
    mode: str
    commits: List[int] = field(default_factory=list)


def questions_path(quiz_id: str) -> str:
    return f"{QUIZZES_COLLECTION}/{quiz_id}/{QUESTIONS_COLLECTION}"


def select_mode(store, mode: Optional[str] = None) -> str:
    if mode is None:
        return BATCHED if getattr(store, "supports_batch", False) else INCREMENTAL
    if mode not in (INCREMENTAL, BATCHED):
        raise ValueError(f"Unknown write mode: {mode}")
    if mode == BATCHED and not getattr(store, "supports_batch", False):
        raise ValueError(f"{type(store).__name__} has no batch commit; use {INCREMENTAL!r} mode")
    return mode


def create_quiz(store, dataset: QuizDataset) -> str:
    ts = store.server_timestamp()
    fields = {**dataset.quiz_fields(), "createdAt": ts, "updatedAt": ts}
    quiz_id = store.create_document(QUIZZES_COLLECTION, fields)
    logger.info(f"📋 Created quiz document: {quiz_id}")
    return quiz_id


def _write_incremental(store, quiz_id: str, dataset: QuizDataset, result: LoadResult) -> None:
    path = questions_path(quiz_id)
    for question in dataset.questions:
        store.create_document(path, {**question.to_fields(), "createdAt": store.server_timestamp()})
        result.written += 1
        logger.info(f"✅ Uploaded question {result.written}/{result.total}: {question.question[:50]}...")


def _write_batched(store, quiz_id: str, dataset: QuizDataset, result: LoadResult) -> None:
    path = questions_path(quiz_id)
    batch = store.batch()
    pending = 0
    for question in dataset.questions:
        batch.set(path, {**question.to_fields(), "createdAt": store.server_timestamp()})
        pending += 1
        if pending == CHUNK_SIZE:
            batch.commit()
            result.written += pending
            result.commits.append(pending)
            logger.info(f"📤 Uploaded batch of {pending} questions... ({result.written}/{result.total})")
            batch = store.batch()
            pending = 0

    if pending:
        batch.commit()
        result.written += pending
        result.commits.append(pending)
        logger.info(f"📤 Uploaded final batch of {pending} questions... ({result.written}/{result.total})")


def upload_quiz(store, dataset: QuizDataset, mode: Optional[str] = None) -> LoadResult:
    """Create the quiz document, then all of its questions.

    Raises:
        UploadInterrupted: a store write failed; carries how many questions were
            acknowledged before the failure. The underlying store error is chained
            as ``__cause__``. Nothing already written is rolled back.
    """
    mode = select_mode(store, mode)
    total = len(dataset.questions)

    try:
        quiz_id = create_quiz(store, dataset)
    except Exception as e:
        raise UploadInterrupted(None, 0, total) from e

    result = LoadResult(quiz_id=quiz_id, written=0, total=total, mode=mode)
    logger.info(f"☁️ Uploading {total} questions to Firestore ({mode})...")
    try:
        if mode == BATCHED:
            _write_batched(store, quiz_id, dataset, result)
        else:
            _write_incremental(store, quiz_id, dataset, result)
    except Exception as e:
        raise UploadInterrupted(quiz_id, result.written, total) from e

    return result
