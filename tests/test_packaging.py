"""Tests for the project metadata in pyproject.toml."""

from __future__ import annotations

import tomllib
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent


def _project() -> dict:
    with (ROOT / "pyproject.toml").open("rb") as fh:
        return tomllib.load(fh)["project"]


def test_readme_is_project_readme():
    readme = _project()["readme"]
    assert readme == "README.md"
    assert (ROOT / readme).is_file()


def test_console_script_points_at_cli():
    assert _project()["scripts"]["mfparser"] == "mfparser.__main__:main"
