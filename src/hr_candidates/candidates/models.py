"""
SignalCraft
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator


class CandidateValidationError(ValueError):
    pass


def email_key(email: Optional[str]) -> str:
    """Comparison key for candidate emails (trimmed, case-folded)."""
    return (email or "").strip().casefold()


def _joined_name(first_name: str, last_name: str) -> str:
    return f"{first_name} {last_name}".strip()


class Candidate(BaseModel):
    """One job candidate record.

    Unknown keys are kept as extra profile fields so they survive a
    load/save cycle untouched.
    """

    model_config = ConfigDict(extra="allow")

    first_name: str = ""
    last_name: str = ""
    full_name: Optional[str] = None
    email: str = ""
    current_role: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    spoken_languages: List[str] = Field(default_factory=list)

    @field_validator("first_name", "last_name", "email", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("skills", "spoken_languages", mode="before")
    @classmethod
    def _none_as_empty_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @model_validator(mode="after")
    def _derive_full_name(self) -> "Candidate":
        if not (self.full_name or "").strip():
            self.full_name = _joined_name(self.first_name, self.last_name) or None
        return self

    def searchable_fields(self) -> List[str]:
        fields = [self.first_name, self.last_name, self.full_name or "", self.email, self.current_role or ""]
        return fields + list(self.skills) + list(self.spoken_languages)


class CandidatePatch(BaseModel):
    """Partial update for a stored candidate.

    Only fields that were explicitly set to a non-null value are applied;
    extra keys become extra profile fields on the candidate.
    """

    model_config = ConfigDict(extra="allow")

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    current_role: Optional[str] = None
    skills: Optional[List[str]] = None
    spoken_languages: Optional[List[str]] = None

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


def coerce_candidate(value: Any) -> Candidate:
    if value is None:
        raise CandidateValidationError("candidate is required")
    if isinstance(value, Candidate):
        return value.model_copy(deep=True)
    if isinstance(value, Mapping):
        try:
            return Candidate.model_validate(dict(value))
        except ValidationError as exc:
            raise CandidateValidationError(f"invalid candidate: {exc}") from exc
    raise CandidateValidationError(f"unsupported candidate type: {type(value).__name__}")


def coerce_patch(value: Any) -> CandidatePatch:
    if isinstance(value, CandidatePatch):
        return value
    if not isinstance(value, Mapping):
        raise CandidateValidationError(f"unsupported candidate patch type: {type(value).__name__}")
    try:
        return CandidatePatch.model_validate(dict(value))
    except ValidationError as exc:
        raise CandidateValidationError(f"invalid candidate patch: {exc}") from exc


def apply_patch(candidate: Candidate, patch: CandidatePatch) -> Candidate:
    """Return a new candidate with *patch* applied.

    A full name that was derived from the old first/last name follows a
    rename unless the patch sets ``full_name`` itself.
    """
    changes = patch.changes()
    payload = candidate.model_dump()
    renamed = "first_name" in changes or "last_name" in changes
    if renamed and "full_name" not in changes:
        if candidate.full_name == _joined_name(candidate.first_name, candidate.last_name):
            payload.pop("full_name", None)
    payload.update(changes)
    try:
        return Candidate.model_validate(payload)
    except ValidationError as exc:
        raise CandidateValidationError(f"invalid candidate patch: {exc}") from exc


def revalidate_candidate(candidate: Candidate) -> Candidate:
    """Run validation again on a candidate built without it (``model_copy``, attribute assignment)."""
    try:
        return Candidate.model_validate(candidate.model_dump())
    except ValidationError as exc:
        raise CandidateValidationError(f"invalid candidate update: {exc}") from exc
