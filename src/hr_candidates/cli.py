"""
SignalCraft
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from hr_candidates import config
from hr_candidates.candidates import (
    Candidate,
    CandidatePatch,
    CandidateRegistry,
    CandidateValidationError,
    open_registry,
)


def _setup_logging() -> None:
    if logging.getLogger().hasHandlers():
        return
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def _candidate_json(candidate: Candidate) -> Dict[str, Any]:
    return candidate.model_dump(exclude_none=True)


def _print_table(candidates: List[Candidate]) -> None:
    print("email\tfull_name\tcurrent_role\tskills")
    for item in candidates:
        skills = ",".join(item.skills)
        print(f"{item.email}\t{item.full_name or ''}\t{item.current_role or ''}\t{skills}")


def cmd_list(args: argparse.Namespace, registry: CandidateRegistry) -> int:
    candidates = registry.list_candidates()
    if args.json:
        print(json.dumps({"candidates": [_candidate_json(c) for c in candidates]}, sort_keys=True))
    else:
        _print_table(candidates)
    return 0


def cmd_search(args: argparse.Namespace, registry: CandidateRegistry) -> int:
    candidates = registry.search_candidates(args.term)
    if args.json:
        print(json.dumps({"term": args.term, "candidates": [_candidate_json(c) for c in candidates]}, sort_keys=True))
    else:
        _print_table(candidates)
    return 0


def cmd_show(args: argparse.Namespace, registry: CandidateRegistry) -> int:
    candidate = registry.get_candidate(args.email)
    if candidate is None:
        print(f"candidate not found: {args.email}", file=sys.stderr)
        return 1
    print(json.dumps(_candidate_json(candidate), indent=2 if not args.json else None, sort_keys=True))
    return 0


def cmd_add(args: argparse.Namespace, registry: CandidateRegistry) -> int:
    candidate = Candidate(
        first_name=args.first_name,
        last_name=args.last_name,
        full_name=args.full_name,
        email=args.email,
        current_role=args.role,
        skills=args.skill or [],
        spoken_languages=args.language or [],
    )
    added = registry.add_candidate(candidate)
    if args.json:
        print(json.dumps({"email": args.email, "added": added}, sort_keys=True))
    elif added:
        print(f"added candidate email={args.email}")
    else:
        print(f"candidate already exists: {args.email}", file=sys.stderr)
    return 0 if added else 1


def _patch_from_args(args: argparse.Namespace) -> CandidatePatch:
    fields = {
        "first_name": args.first_name,
        "last_name": args.last_name,
        "full_name": args.full_name,
        "email": args.new_email,
        "current_role": args.role,
        "skills": args.skill,
        "spoken_languages": args.language,
    }
    provided = {k: v for k, v in fields.items() if v is not None}
    if not provided:
        raise CandidateValidationError("at least one field to update is required")
    return CandidatePatch(**provided)


def cmd_update(args: argparse.Namespace, registry: CandidateRegistry) -> int:
    patch = _patch_from_args(args)
    updated = registry.update_candidate(args.email, patch)
    if args.json:
        print(json.dumps({"email": args.email, "updated": updated, "fields": sorted(patch.changes())}, sort_keys=True))
    elif updated:
        print(f"updated candidate email={args.email} fields={','.join(sorted(patch.changes()))}")
    else:
        print(f"candidate not found: {args.email}", file=sys.stderr)
    return 0 if updated else 1


def cmd_remove(args: argparse.Namespace, registry: CandidateRegistry) -> int:
    removed = registry.remove_candidate(args.email)
    if args.json:
        print(json.dumps({"email": args.email, "removed": removed}, sort_keys=True))
    elif removed:
        print(f"removed candidate email={args.email}")
    else:
        print(f"candidate not found: {args.email}", file=sys.stderr)
    return 0 if removed else 1


def cmd_save(args: argparse.Namespace, registry: CandidateRegistry) -> int:
    saved = registry.save_snapshot()
    if args.json:
        path = registry.candidates_path
        print(json.dumps({"saved": saved, "path": str(path) if path else None}, sort_keys=True))
    else:
        print("candidates saved" if saved else "candidates NOT saved")
    return 0 if saved else 1


def _add_profile_args(cmd: argparse.ArgumentParser, *, required_names: bool) -> None:
    cmd.add_argument("--first-name", required=required_names)
    cmd.add_argument("--last-name", required=required_names)
    cmd.add_argument("--full-name")
    cmd.add_argument("--role", help="Current role")
    cmd.add_argument("--skill", action="append", help="Skill (repeatable)")
    cmd.add_argument("--language", action="append", help="Spoken language (repeatable)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage the in-memory candidate registry and its JSON file.")
    parser.add_argument(
        "--candidates-path",
        help="Override candidates file (defaults to HR_CANDIDATES_PATH).",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    list_cmd = sub.add_parser("list", help="List candidates")
    list_cmd.add_argument("--json", action="store_true")
    list_cmd.set_defaults(func=cmd_list)

    search_cmd = sub.add_parser("search", help="Case-insensitive substring search")
    search_cmd.add_argument("term")
    search_cmd.add_argument("--json", action="store_true")
    search_cmd.set_defaults(func=cmd_search)

    show_cmd = sub.add_parser("show", help="Show one candidate by email")
    show_cmd.add_argument("email")
    show_cmd.add_argument("--json", action="store_true")
    show_cmd.set_defaults(func=cmd_show)

    add_cmd = sub.add_parser("add", help="Add a candidate")
    add_cmd.add_argument("--email", required=True)
    _add_profile_args(add_cmd, required_names=True)
    add_cmd.add_argument("--json", action="store_true")
    add_cmd.set_defaults(func=cmd_add)

    update_cmd = sub.add_parser("update", help="Update fields of a candidate")
    update_cmd.add_argument("email")
    update_cmd.add_argument("--email", dest="new_email", help="Replace the stored email")
    _add_profile_args(update_cmd, required_names=False)
    update_cmd.add_argument("--json", action="store_true")
    update_cmd.set_defaults(func=cmd_update)

    remove_cmd = sub.add_parser("remove", help="Remove a candidate by email")
    remove_cmd.add_argument("email")
    remove_cmd.add_argument("--json", action="store_true")
    remove_cmd.set_defaults(func=cmd_remove)

    save_cmd = sub.add_parser("save", help="Write the candidates file now")
    save_cmd.add_argument("--json", action="store_true")
    save_cmd.set_defaults(func=cmd_save)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    _setup_logging()
    args = build_parser().parse_args(argv)
    path = Path(args.candidates_path).expanduser() if args.candidates_path else None

    try:
        registry = open_registry(path)
    except CandidateValidationError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    with registry:
        try:
            return args.func(args, registry)
        except CandidateValidationError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 2


if __name__ == "__main__":
    raise SystemExit(main())
