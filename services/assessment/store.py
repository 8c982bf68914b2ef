# services/assessment/store.py
"""In-memory test / attempt store for the Assessment service.

Stands in for the platform's document store: tests keyed by id, attempts keyed
by a generated id together with their latest `ScoreResult`.
"""

import threading
import uuid
from dataclasses import dataclass, replace
from typing import Dict, Optional

from packages.schemas.assessment import Attempt, ScoreResult, TestDefinition


@dataclass
class StoredAttempt:
    """An attempt and the result currently recorded for it."""
    id: str
    attempt: Attempt
    result: Optional[ScoreResult] = None


class AssessmentStore:
    """Thread-safe dictionary-backed store.

    Attempts are handed out as copies taken under the lock, so a reader never
    sees the answers of one write paired with the result of another.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tests: Dict[str, TestDefinition] = {}
        self._attempts: Dict[str, StoredAttempt] = {}

    def put_test(self, test: TestDefinition) -> None:
        with self._lock:
            self._tests[test.id] = test

    def get_test(self, test_id: str) -> Optional[TestDefinition]:
        with self._lock:
            return self._tests.get(test_id)

    def add_attempt(self, attempt: Attempt, result: Optional[ScoreResult] = None) -> StoredAttempt:
        """Insert a new attempt and return it with its generated id."""
        stored = StoredAttempt(id=uuid.uuid4().hex, attempt=attempt, result=result)
        with self._lock:
            self._attempts[stored.id] = stored
            return replace(stored)

    def get_attempt(self, attempt_id: str) -> Optional[StoredAttempt]:
        with self._lock:
            stored = self._attempts.get(attempt_id)
            return None if stored is None else replace(stored)

    def save_result(self, attempt_id: str, attempt: Attempt, result: ScoreResult) -> StoredAttempt:
        """Overwrite the answers and result recorded for an existing attempt.

        Raises:
            KeyError: unknown `attempt_id`.
        """
        with self._lock:
            stored = self._attempts[attempt_id]
            stored.attempt = attempt
            stored.result = result
            return replace(stored)

    def clear(self) -> None:
        with self._lock:
            self._tests.clear()
            self._attempts.clear()


store = AssessmentStore()
