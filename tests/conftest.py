import os
from pathlib import Path

import pytest

from safebackup.reporting import base as reporting_base


@pytest.fixture(autouse=True)
def _isolated_reporter(monkeypatch):
    # Each test starts with the default reporter and verbosity.
    monkeypatch.setattr(reporting_base, "_ACTIVE_REPORTER", None)
    monkeypatch.setattr(reporting_base, "_VERBOSITY", 0)


@pytest.fixture
def sandbox(tmp_path: Path) -> Path:
    root = tmp_path / "work"
    root.mkdir()
    return root


@pytest.fixture
def outside(tmp_path: Path) -> Path:
    other = tmp_path / "outside"
    other.mkdir()
    (other / "secret.txt").write_text("top secret", encoding="utf-8")
    return other


def symlink_or_skip(link: Path, target: Path) -> None:
    try:
        os.symlink(target, link, target_is_directory=target.is_dir())
    except (OSError, NotImplementedError) as exc:
        pytest.skip(f"symlinks unavailable: {exc}")
