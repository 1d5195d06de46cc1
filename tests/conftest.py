import pytest

_CANDIDATE_ENV_VARS = (
    "HR_CANDIDATES_PATH",
    "HR_CANDIDATES_SAVE_WORKERS",
    "HR_CANDIDATES_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clear_candidate_env(monkeypatch) -> None:
    for key in _CANDIDATE_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
