from __future__ import annotations

import importlib
import json
from pathlib import Path

import pytest

import hr_candidates.config as config
from hr_candidates import cli


def _read(path: Path):
    return json.loads(path.read_text(encoding="utf-8"))


def _add(path: Path, email: str, *extra: str) -> int:
    return cli.main(
        ["--candidates-path", str(path), "add", "--email", email, "--first-name", "Ann", "--last-name", "Lee", *extra]
    )


def test_add_list_and_persist(tmp_path: Path, capsys) -> None:
    path = tmp_path / "state" / "candidates.json"

    rc = _add(path, "ann@x.com", "--role", "Engineer", "--skill", "Kubernetes", "--skill", "Go", "--json")
    assert rc == 0
    assert json.loads(capsys.readouterr().out) == {"added": True, "email": "ann@x.com"}

    saved = _read(path)
    assert saved[0]["skills"] == ["Kubernetes", "Go"]
    assert saved[0]["full_name"] == "Ann Lee"

    rc = cli.main(["--candidates-path", str(path), "list", "--json"])
    assert rc == 0
    listed = json.loads(capsys.readouterr().out)["candidates"]
    assert [c["email"] for c in listed] == ["ann@x.com"]


def test_add_duplicate_exits_nonzero(tmp_path: Path, capsys) -> None:
    path = tmp_path / "candidates.json"
    assert _add(path, "ann@x.com") == 0
    capsys.readouterr()

    assert _add(path, "ANN@x.com") == 1
    assert "candidate already exists" in capsys.readouterr().err
    assert len(_read(path)) == 1


def test_update_search_and_remove(tmp_path: Path, capsys) -> None:
    path = tmp_path / "candidates.json"
    assert _add(path, "ann@x.com") == 0
    capsys.readouterr()

    rc = cli.main(["--candidates-path", str(path), "update", "ANN@X.COM", "--role", "Engineer", "--json"])
    assert rc == 0
    assert json.loads(capsys.readouterr().out) == {"email": "ANN@X.COM", "fields": ["current_role"], "updated": True}
    assert _read(path)[0]["current_role"] == "Engineer"

    rc = cli.main(["--candidates-path", str(path), "search", "engin", "--json"])
    assert rc == 0
    assert [c["email"] for c in json.loads(capsys.readouterr().out)["candidates"]] == ["ann@x.com"]

    rc = cli.main(["--candidates-path", str(path), "remove", "ann@x.com", "--json"])
    assert rc == 0
    assert json.loads(capsys.readouterr().out)["removed"] is True
    assert _read(path) == []

    rc = cli.main(["--candidates-path", str(path), "remove", "ann@x.com"])
    assert rc == 1
    assert "candidate not found" in capsys.readouterr().err


def test_update_without_fields_is_rejected(tmp_path: Path, capsys) -> None:
    path = tmp_path / "candidates.json"
    assert _add(path, "ann@x.com") == 0
    capsys.readouterr()

    rc = cli.main(["--candidates-path", str(path), "update", "ann@x.com"])
    assert rc == 2
    assert "at least one field" in capsys.readouterr().err


def test_update_can_rename_email(tmp_path: Path, capsys) -> None:
    path = tmp_path / "candidates.json"
    assert _add(path, "ann@x.com") == 0
    rc = cli.main(["--candidates-path", str(path), "update", "ann@x.com", "--email", "ann.lee@x.com"])
    assert rc == 0
    capsys.readouterr()

    assert cli.main(["--candidates-path", str(path), "show", "ann.lee@x.com", "--json"]) == 0
    assert json.loads(capsys.readouterr().out)["email"] == "ann.lee@x.com"
    assert cli.main(["--candidates-path", str(path), "show", "ann@x.com"]) == 1


def test_invalid_candidates_file_reports_error(tmp_path: Path, capsys) -> None:
    path = tmp_path / "candidates.json"
    path.write_text("{broken", encoding="utf-8")

    rc = cli.main(["--candidates-path", str(path), "list"])
    assert rc == 2
    assert "ERROR: invalid candidates file" in capsys.readouterr().err


def test_path_from_environment(tmp_path: Path, monkeypatch, capsys) -> None:
    path = tmp_path / "env" / "candidates.json"
    monkeypatch.setenv("HR_CANDIDATES_PATH", str(path))
    importlib.reload(config)
    try:
        assert cli.main(["add", "--email", "env@x.com", "--first-name", "E", "--last-name", "Nv"]) == 0
        assert cli.main(["save", "--json"]) == 0
        out = capsys.readouterr().out.strip().splitlines()[-1]
        assert json.loads(out) == {"path": str(path), "saved": True}
        assert [item["email"] for item in _read(path)] == ["env@x.com"]
    finally:
        monkeypatch.delenv("HR_CANDIDATES_PATH", raising=False)
        importlib.reload(config)


def test_save_without_path_fails(capsys) -> None:
    importlib.reload(config)
    assert cli.main(["save"]) == 1
    assert "NOT saved" in capsys.readouterr().out


def test_add_requires_email_argument(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        cli.main(["--candidates-path", str(tmp_path / "c.json"), "add", "--first-name", "A", "--last-name", "B"])
