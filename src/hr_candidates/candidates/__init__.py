"""
SignalCraft
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from hr_candidates.candidates.bootstrap import open_registry
from hr_candidates.candidates.models import Candidate, CandidatePatch, CandidateValidationError
from hr_candidates.candidates.registry import CandidateRegistry
from hr_candidates.candidates.store import load_candidates, write_candidates_snapshot

__all__ = [
    "Candidate",
    "CandidatePatch",
    "CandidateRegistry",
    "CandidateValidationError",
    "load_candidates",
    "open_registry",
    "write_candidates_snapshot",
]
