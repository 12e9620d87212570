"""Tests for the command-line entry point."""

from __future__ import annotations

import io
import json

import pytest

from mfparser.__main__ import main


def test_prints_document_json(fixture_path, capsys):
    assert main([str(fixture_path("hcard_nested.html"))]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["items"][0]["type"] == ["h-card"]
    assert data["rel-urls"] == {}


def test_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO('<p class="h-card">Ann</p>'))
    assert main(["-", "--indent", "0"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["items"][0]["properties"] == {"name": ["Ann"]}


def test_options_from_flags(fixture_path, capsys):
    path = str(fixture_path("geo.html"))
    assert main([path, "--filters", "h-geo", "--parse-geo"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["items"] == [
        {"type": ["h-geo"], "properties": {"latitude": [48.2], "longitude": [16.37]}},
    ]


def test_count_mode(fixture_path, capsys):
    assert main([str(fixture_path("hcard_nested.html")), "--count"]) == 0
    assert json.loads(capsys.readouterr().out)["h-org"] == 1


def test_count_pretty_table(fixture_path, capsys):
    assert main([str(fixture_path("hcard_nested.html")), "--count", "--pretty"]) == 0
    out = capsys.readouterr().out
    assert "h-card" in out
    assert "p-org" in out


def test_profile_file(tmp_path, fixture_path, capsys):
    profile = tmp_path / "mf.yaml"
    profile.write_text(
        "default:\n  dateFormat: raw\nprofiles:\n  iso:\n    dateFormat: normalized\n",
        encoding="utf-8",
    )
    args = [str(fixture_path("event.html")), "--profile", str(profile), "--profile-name", "iso"]
    assert main(args) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["items"][0]["properties"]["start"] == ["2009-06-26T19:00"]


def test_flag_overrides_profile(tmp_path, fixture_path, capsys):
    profile = tmp_path / "mf.yaml"
    profile.write_text("dateFormat: normalized\n", encoding="utf-8")
    args = [str(fixture_path("event.html")), "--profile", str(profile), "--date-format", "raw"]
    assert main(args) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["items"][0]["properties"]["start"] == ["2009-06-26 19:00"]


def test_invalid_profile_value(tmp_path, fixture_path, capsys):
    profile = tmp_path / "mf.yaml"
    profile.write_text("textFormat: shouty\n", encoding="utf-8")
    assert main([str(fixture_path("event.html")), "--profile", str(profile)]) == 1
    assert "ERROR" in capsys.readouterr().err


def test_profile_name_without_profile(fixture_path, capsys):
    assert main([str(fixture_path("event.html")), "--profile-name", "x"]) == 1
    assert "--profile" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.html")]) == 1
    assert "Could not read" in capsys.readouterr().err


def test_depth_limit(tmp_path, capsys):
    page = tmp_path / "deep.html"
    page.write_text("<div>" * 50 + "</div>" * 50, encoding="utf-8")
    assert main([str(page), "--max-depth", "10"]) == 1
    assert "depth" in capsys.readouterr().err


def test_bad_choice_exits():
    with pytest.raises(SystemExit) as exc_info:
        main(["-", "--date-format", "iso"])
    assert exc_info.value.code == 2


def test_max_depth_above_limit(fixture_path, capsys):
    assert main([str(fixture_path("event.html")), "--max-depth", "100000"]) == 1
    assert "ERROR" in capsys.readouterr().err
