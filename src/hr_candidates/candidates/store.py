"""
SignalCraft
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Sequence

from pydantic import ValidationError

from hr_candidates.candidates.models import Candidate, CandidateValidationError


def _dump_json(payload: List[Dict[str, Any]]) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"


def snapshot_payload(candidates: Sequence[Candidate]) -> List[Dict[str, Any]]:
    return [candidate.model_dump(exclude_none=True) for candidate in candidates]


def write_candidates_snapshot(path: Path, candidates: Sequence[Candidate]) -> None:
    """
    Write *candidates* to *path* as an indented JSON array.

    Null fields are omitted. The file is written in place; a crash mid-write
    can leave it truncated.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(_dump_json(snapshot_payload(candidates)), encoding="utf-8")


def load_candidates(path: Path) -> List[Candidate]:
    if not path.exists():
        return []
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise CandidateValidationError(f"invalid candidates file: {path}: {exc}") from exc
    if not isinstance(payload, list):
        raise CandidateValidationError(f"invalid candidates file: {path}: expected a JSON array")

    candidates: List[Candidate] = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise CandidateValidationError(f"invalid candidates file: {path}: entry {index} is not an object")
        try:
            candidates.append(Candidate.model_validate(item))
        except ValidationError as exc:
            raise CandidateValidationError(f"invalid candidates file: {path}: entry {index}: {exc}") from exc
    return candidates
