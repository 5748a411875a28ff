"""Tests for the CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from mediashelf import cli
from mediashelf.models.bundle import ResultBundle, SourceSlot
from mediashelf.models.media import Movie

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MEDIASHELF_ENV_FILE", raising=False)
    monkeypatch.setenv("MEDIASHELF_ENTRIES_PATH", str(tmp_path / "entries.json"))
    monkeypatch.setenv("MEDIASHELF_LOG_LEVEL", "WARNING")
    return tmp_path


def test_save_list_remove() -> None:
    result = runner.invoke(cli.app, ["save", "Heat", "https://rt.example/heat", "--type", "movie"])
    assert result.exit_code == 0, result.output
    entry_id = result.output.strip()

    result = runner.invoke(cli.app, ["list", "--json"])
    assert result.exit_code == 0
    assert json.loads(result.output)["movie"][0]["id"] == entry_id

    assert runner.invoke(cli.app, ["remove", entry_id]).exit_code == 0
    assert runner.invoke(cli.app, ["remove", entry_id]).exit_code == 1


def test_search_json(monkeypatch: pytest.MonkeyPatch) -> None:
    bundle = ResultBundle(
        query="heat",
        slots=[
            SourceSlot(source="rt", items=[Movie(id="1", title="Heat")]),
            SourceSlot(source="gr", ok=False, error="down"),
        ],
    )
    monkeypatch.setattr(cli, "search_media", lambda query, settings: bundle)

    result = runner.invoke(cli.app, ["search", "heat", "--json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert [s["source"] for s in data["slots"]] == ["rt", "gr"]
    assert data["slots"][0]["items"][0]["title"] == "Heat"


def test_search_without_credentials_exits_with_error() -> None:
    result = runner.invoke(cli.app, ["search", "heat"])

    assert result.exit_code == 2
