"""Tests for the Click-based Simple Notes CLI commands."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest
from click.testing import CliRunner
from simplenotes import cli
from simplenotes import config as config_module
from simplenotes.cli import browse as browse_module
from simplenotes.session import SelectionSession


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(
        config_module, "DEFAULT_CONFIG_PATH", tmp_path / "no-config.toml"
    )


def _notes_dir(tmp_path: Path) -> Path:
    notes = tmp_path / "notes"
    notes.mkdir()
    (notes / "a.md").write_text("// +work\n# A\n", encoding="utf-8")
    (notes / "b.md").write_text("# B\n", encoding="utf-8")
    return notes


def _record_editor(monkeypatch) -> list[list[str]]:
    calls: list[list[str]] = []

    def fake_run(argv, check=False):
        calls.append(list(argv))
        return subprocess.CompletedProcess(argv, 0)

    monkeypatch.setenv("EDITOR", "vim")
    monkeypatch.setattr(subprocess, "run", fake_run)
    return calls


def test_ls_lists_notes_with_tags(tmp_path: Path) -> None:
    notes = _notes_dir(tmp_path)

    result = CliRunner().invoke(cli.cli, ["-d", str(notes), "ls"])

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["a  [tags: work]", "b"]


def test_ls_filters_and_reverses(tmp_path: Path) -> None:
    notes = _notes_dir(tmp_path)
    (notes / "workout.md").write_text("", encoding="utf-8")

    result = CliRunner().invoke(cli.cli, ["-d", str(notes), "ls", "-r", "WORK"])

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["workout", "a  [tags: work]"]


def test_missing_notes_dir_asks_before_creating(tmp_path: Path) -> None:
    notes = tmp_path / "fresh"
    runner = CliRunner()

    declined = runner.invoke(cli.cli, ["-d", str(notes), "ls"], input="n\n")
    assert declined.exit_code == 1
    assert "was not created" in declined.output
    assert not notes.exists()

    accepted = runner.invoke(cli.cli, ["-d", str(notes), "ls"], input="y\n")
    assert accepted.exit_code == 0, accepted.output
    assert notes.is_dir()


def test_config_can_skip_directory_confirmation(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        '["simple-notes"]\nnotes_dir = "notes"\nconfirm_create_dir = false\n',
        encoding="utf-8",
    )

    result = CliRunner().invoke(cli.cli, ["-c", str(config_path), "ls"])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "notes").is_dir()


def test_new_creates_note_and_opens_editor(tmp_path: Path, monkeypatch) -> None:
    notes = _notes_dir(tmp_path)
    calls = _record_editor(monkeypatch)

    result = CliRunner().invoke(
        cli.cli, ["-d", str(notes), "new", "meeting", "-t", "todo urgent"]
    )

    assert result.exit_code == 0, result.output
    target = notes / "meeting.md"
    assert target.read_text(encoding="utf-8") == "// +todo +urgent\n# Meeting\n\n"
    assert calls == [["vim", str(target)]]


def test_new_rejects_invalid_name(tmp_path: Path, monkeypatch) -> None:
    notes = _notes_dir(tmp_path)
    calls = _record_editor(monkeypatch)

    result = CliRunner().invoke(cli.cli, ["-d", str(notes), "new", "../evil"])

    assert result.exit_code == 1
    assert "path separators" in result.output
    assert calls == []


def test_new_without_editor_fails(tmp_path: Path, monkeypatch) -> None:
    notes = _notes_dir(tmp_path)
    monkeypatch.delenv("EDITOR", raising=False)

    result = CliRunner().invoke(cli.cli, ["-d", str(notes), "new", "idea"])

    assert result.exit_code == 1
    assert "EDITOR environment variable not set" in result.output
    assert not (notes / "idea.md").exists()


def test_default_command_browses_and_opens_choice(tmp_path: Path, monkeypatch) -> None:
    notes = _notes_dir(tmp_path)
    calls = _record_editor(monkeypatch)
    seen: dict[str, object] = {}

    def fake_run_session(session: SelectionSession, *, title: str, theme):
        seen["title"] = title
        session.move(1)
        session.confirm()
        return session.result

    monkeypatch.setattr(browse_module, "run_session", fake_run_session)

    result = CliRunner().invoke(cli.cli, ["-d", str(notes)])

    assert result.exit_code == 0, result.output
    assert seen["title"] == str(notes)
    assert calls == [["vim", str(notes / "b.md")]]


def test_browse_cancel_needs_no_editor(tmp_path: Path, monkeypatch) -> None:
    notes = tmp_path / "notes"
    monkeypatch.delenv("EDITOR", raising=False)

    def fake_run_session(session: SelectionSession, *, title: str, theme):
        session.cancel()
        return session.result

    monkeypatch.setattr(browse_module, "run_session", fake_run_session)

    result = CliRunner().invoke(cli.cli, ["-d", str(notes), "browse", "--yes"])

    assert result.exit_code == 0, result.output
    assert notes.is_dir()


def test_main_reports_errors_on_stderr(tmp_path: Path, capsys) -> None:
    notes = _notes_dir(tmp_path)

    assert cli.main(["-d", str(notes), "new", ".hidden"]) == 1
    captured = capsys.readouterr()
    assert "must not start with '.'" in captured.err

    assert cli.main(["-d", str(notes), "ls", "work"]) == 0
    assert capsys.readouterr().out == "a  [tags: work]\n"


def test_config_command_bootstraps_file(tmp_path: Path, monkeypatch) -> None:
    config_path = tmp_path / "conf" / "config.toml"
    edited: list[str] = []
    monkeypatch.setattr(
        "click.edit", lambda filename=None, **_: edited.append(filename)
    )

    result = CliRunner().invoke(cli.cli, ["-c", str(config_path), "config"])

    assert result.exit_code == 0, result.output
    assert config_path.exists()
    assert edited == [str(config_path)]
    assert f"Wrote default settings to {config_path}" in result.output
    assert "Notes directory:" in result.output


def test_config_path_flag_prints_location_only(tmp_path: Path, monkeypatch) -> None:
    config_path = tmp_path / "conf" / "config.toml"
    monkeypatch.setattr("click.edit", lambda **_: pytest.fail("editor launched"))

    result = CliRunner().invoke(cli.cli, ["-c", str(config_path), "config", "--path"])

    assert result.exit_code == 0, result.output
    assert result.output == f"{config_path}\n"
    assert not config_path.exists()


def test_config_path_flag_defaults_to_user_location(tmp_path: Path) -> None:
    result = CliRunner().invoke(cli.cli, ["config", "-p"])

    assert result.exit_code == 0, result.output
    assert result.output == f"{tmp_path / 'no-config.toml'}\n"


def test_config_reports_broken_settings_after_edit(tmp_path: Path, monkeypatch) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text('[simple-notes]\nnotes_dir = "notes"\n', encoding="utf-8")

    def break_settings(filename=None, **_):
        Path(filename).write_text(
            "[simple-notes]\nconfirm_create_dir = 'sometimes'\n", encoding="utf-8"
        )

    monkeypatch.setattr("click.edit", break_settings)

    result = CliRunner().invoke(cli.cli, ["-c", str(config_path), "config"])

    assert result.exit_code == 1
    assert "'confirm_create_dir' must be a boolean" in result.output
    assert "Wrote default settings" not in result.output


def test_config_shows_notes_directory_after_edit(tmp_path: Path, monkeypatch) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text('[simple-notes]\nnotes_dir = "journal"\n', encoding="utf-8")
    monkeypatch.setattr("click.edit", lambda **_: None)

    result = CliRunner().invoke(cli.cli, ["-c", str(config_path), "config"])

    assert result.exit_code == 0, result.output
    assert result.output == f"Notes directory: {(tmp_path / 'journal').resolve()}\n"
