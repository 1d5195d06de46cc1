"""
SignalCraft
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from hr_candidates import config
from hr_candidates.candidates.registry import CandidateRegistry
from hr_candidates.candidates.store import load_candidates

logger = logging.getLogger(__name__)


def open_registry(
    candidates_path: Optional[Path] = None,
    *,
    max_save_workers: Optional[int] = None,
) -> CandidateRegistry:
    """
    Build the process-wide registry, seeded from the snapshot file.

    Falls back to ``HR_CANDIDATES_PATH`` when *candidates_path* is not given.
    Without any path the registry starts empty and saves are skipped.
    """
    path = candidates_path if candidates_path is not None else config.CANDIDATES_PATH
    workers = max_save_workers if max_save_workers is not None else config.SAVE_WORKERS
    if path is None:
        logger.warning("Candidates path not configured; starting with an empty registry.")
        return CandidateRegistry(max_save_workers=workers)

    candidates = load_candidates(path)
    logger.info("Loaded %d candidates from %s", len(candidates), path)
    return CandidateRegistry(candidates, candidates_path=path, max_save_workers=workers)
