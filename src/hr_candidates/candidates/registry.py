"""
SignalCraft
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Any, Callable, Iterable, List, Mapping, Optional, Set, Union

from hr_candidates.candidates.models import (
    Candidate,
    CandidatePatch,
    CandidateValidationError,
    apply_patch,
    coerce_candidate,
    coerce_patch,
    email_key,
    revalidate_candidate,
)
from hr_candidates.candidates.store import write_candidates_snapshot

CandidateChange = Union[CandidatePatch, Callable[[Candidate], Candidate], Mapping[str, Any]]


def _require_email(email: Optional[str]) -> str:
    key = email_key(email)
    if not key:
        raise CandidateValidationError("email cannot be empty")
    return key


class CandidateRegistry:
    """Process-wide store of candidates.

    Every read and write goes through one exclusive lock. Mutations schedule a
    snapshot save on *executor* and return without waiting for it; the save
    copies the collection under the lock and writes the file after releasing
    it. Save failures are logged and never reach the caller of the mutation.
    """

    def __init__(
        self,
        candidates: Iterable[Candidate] = (),
        *,
        candidates_path: Optional[Path] = None,
        executor: Optional[Executor] = None,
        max_save_workers: int = 1,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._candidates: List[Candidate] = [coerce_candidate(c) for c in candidates]
        self._lock = threading.Lock()
        self._candidates_path = candidates_path
        self._owns_executor = executor is None
        self._executor: Executor = executor or ThreadPoolExecutor(
            max_workers=max(1, max_save_workers), thread_name_prefix="candidate-save"
        )
        self._pending: Set[Future] = set()
        self._pending_lock = threading.Lock()
        self._closed = False
        self._logger = logger or logging.getLogger(__name__)

    @property
    def candidates_path(self) -> Optional[Path]:
        return self._candidates_path

    def __len__(self) -> int:
        with self._lock:
            return len(self._candidates)

    def __enter__(self) -> "CandidateRegistry":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_candidates(self) -> List[Candidate]:
        with self._lock:
            return [c.model_copy(deep=True) for c in self._candidates]

    def get_candidate(self, email: str) -> Optional[Candidate]:
        key = _require_email(email)
        with self._lock:
            index = self._index_of(key)
            if index is None:
                return None
            return self._candidates[index].model_copy(deep=True)

    def search_candidates(self, term: Optional[str]) -> List[Candidate]:
        needle = (term or "").strip().casefold()
        if not needle:
            return self.list_candidates()
        with self._lock:
            return [
                c.model_copy(deep=True)
                for c in self._candidates
                if any(needle in value.casefold() for value in c.searchable_fields())
            ]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_candidate(self, candidate: Union[Candidate, dict]) -> bool:
        record = coerce_candidate(candidate)
        key = _require_email(record.email)
        with self._lock:
            if self._index_of(key) is not None:
                return False
            self._candidates.append(record)
        self._logger.info("Added new candidate: %s (%s)", record.full_name, record.email)
        self._schedule_save()
        return True

    def update_candidate(self, email: str, change: CandidateChange) -> bool:
        key = _require_email(email)
        if change is None:
            raise CandidateValidationError("candidate change is required")
        transform = self._as_transform(change)
        with self._lock:
            index = self._index_of(key)
            if index is None:
                return False
            updated = transform(self._candidates[index].model_copy(deep=True))
            if not isinstance(updated, Candidate):
                raise CandidateValidationError("candidate update must return a Candidate")
            self._candidates[index] = revalidate_candidate(updated)
        self._logger.info("Updated candidate with email: %s", email)
        self._schedule_save()
        return True

    def remove_candidate(self, email: str) -> bool:
        key = _require_email(email)
        with self._lock:
            index = self._index_of(key)
            if index is None:
                return False
            del self._candidates[index]
        self._logger.info("Removed candidate with email: %s", email)
        self._schedule_save()
        return True

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save_snapshot(self) -> bool:
        path = self._candidates_path
        try:
            if path is None:
                self._logger.warning("Candidates path not configured. Cannot save to file.")
                return False
            with self._lock:
                snapshot = [c.model_copy(deep=True) for c in self._candidates]
            write_candidates_snapshot(path, snapshot)
            self._logger.info("Saved %d candidates to file: %s", len(snapshot), path)
            return True
        except Exception:
            self._logger.exception("Error saving candidates to file: %s", path)
            return False

    def wait_for_pending_saves(self, timeout: Optional[float] = None) -> bool:
        """Block until every save scheduled so far has finished. Returns False on timeout."""
        with self._pending_lock:
            pending = list(self._pending)
        if not pending:
            return True
        _done, not_done = wait(pending, timeout=timeout)
        return not not_done

    def close(self) -> bool:
        """Flush scheduled saves, write a final snapshot and release the executor."""
        if self._closed:
            return True
        self.wait_for_pending_saves()
        saved = self.save_snapshot() if self._candidates_path is not None else True
        self._closed = True
        if self._owns_executor:
            self._executor.shutdown(wait=True)
        return saved

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _index_of(self, key: str) -> Optional[int]:
        # caller holds self._lock
        for index, candidate in enumerate(self._candidates):
            if email_key(candidate.email) == key:
                return index
        return None

    def _schedule_save(self) -> None:
        if self._closed:
            self._logger.warning("Registry closed; skipping scheduled save.")
            return
        try:
            future = self._executor.submit(self.save_snapshot)
        except RuntimeError as exc:
            self._logger.warning("Could not schedule candidates save (%s)", exc)
            return
        with self._pending_lock:
            self._pending.add(future)
        future.add_done_callback(self._forget_save)

    def _forget_save(self, future: Future) -> None:
        with self._pending_lock:
            self._pending.discard(future)

    @staticmethod
    def _as_transform(change: CandidateChange) -> Callable[[Candidate], Candidate]:
        if isinstance(change, (CandidatePatch, Mapping)):
            patch = coerce_patch(change)
            return lambda candidate: apply_patch(candidate, patch)
        if callable(change):
            return change
        raise CandidateValidationError(f"unsupported candidate change: {type(change).__name__}")
