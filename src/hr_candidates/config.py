"""
SignalCraft
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

# Load .env from the working directory into environment
load_dotenv(find_dotenv(usecwd=True))

DEFAULT_SAVE_WORKERS = 1
DEFAULT_LOG_LEVEL = "INFO"


def _get_path_env(name: str) -> Optional[Path]:
    value = (os.environ.get(name) or "").strip()
    if not value:
        return None
    return Path(value).expanduser()


def _get_int_env(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


CANDIDATES_PATH = _get_path_env("HR_CANDIDATES_PATH")
SAVE_WORKERS = max(1, _get_int_env("HR_CANDIDATES_SAVE_WORKERS", DEFAULT_SAVE_WORKERS))
LOG_LEVEL = (os.environ.get("HR_CANDIDATES_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
