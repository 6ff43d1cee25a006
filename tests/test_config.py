from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
from simplenotes import config as config_module
from simplenotes.config import (
    InvalidConfigError,
    MissingConfigError,
    SimpleNotesConfig,
    bootstrap_config_file,
    load_config,
)


def write_config(tmp_path: Path, content: str) -> Path:
    config_file = tmp_path / "config.toml"
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(textwrap.dedent(content), encoding="utf-8")
    return config_file


def test_load_config_success(tmp_path: Path) -> None:
    notes_dir = tmp_path / "my-notes"
    config_path = write_config(
        tmp_path,
        f"""
        ["simple-notes"]
        notes_dir = "{notes_dir.as_posix()}"
        confirm_create_dir = false

        [theme]
        "item.selected" = "fg:ansired"
        """,
    )

    config = load_config(config_path)
    assert isinstance(config, SimpleNotesConfig)
    assert config.notes_dir == notes_dir.resolve()
    assert config.confirm_create_dir is False
    assert config.theme == {"item.selected": "fg:ansired"}
    assert config.source_path == config_path


def test_relative_notes_dir_resolves_against_config_dir(tmp_path: Path) -> None:
    config_path = write_config(
        tmp_path / "nested",
        """
        ["simple-notes"]
        notes_dir = "notes"
        """,
    )

    config = load_config(config_path)
    assert config.notes_dir == (config_path.parent / "notes").resolve()
    assert config.confirm_create_dir is True


def test_missing_default_config_uses_defaults(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", tmp_path / "none.toml")

    config = load_config()
    assert config.notes_dir == config_module.DEFAULT_NOTES_DIR
    assert config.theme == {}
    assert config.source_path is None


def test_load_config_missing_explicit_file(tmp_path: Path) -> None:
    with pytest.raises(MissingConfigError):
        load_config(tmp_path / "missing.toml")


@pytest.mark.parametrize(
    "content",
    [
        '["simple-notes"]\nnotes_dir = 3\n',
        '["simple-notes"]\nnotes_dir = "  "\n',
        '["simple-notes"]\nconfirm_create_dir = "yes"\n',
        '"simple-notes" = "not a table"\n',
        "[theme]\nitem = 1\n",
        "theme = 'plain'\n",
        "not toml at all [",
    ],
)
def test_load_config_rejects_malformed_values(tmp_path: Path, content: str) -> None:
    config_path = write_config(tmp_path, content)

    with pytest.raises(InvalidConfigError):
        load_config(config_path)


def test_bootstrap_config_file_is_loadable(tmp_path: Path) -> None:
    path = tmp_path / "conf" / "config.toml"

    assert bootstrap_config_file(path) is True
    assert bootstrap_config_file(path) is False

    config = load_config(path)
    assert config.notes_dir == Path("~/notes").expanduser().resolve()
