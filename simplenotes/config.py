"""Configuration management for Simple Notes."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_DIR = Path("~/.config/simple-notes").expanduser()
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"
DEFAULT_NOTES_DIR = Path("~/notes").expanduser()
CONFIG_SECTION = "simple-notes"


class ConfigError(RuntimeError):
    """Base error for configuration related issues."""


class MissingConfigError(ConfigError):
    """Raised when an explicitly requested configuration file cannot be found."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Configuration file not found at {path}")
        self.path = path


class InvalidConfigError(ConfigError):
    """Raised when the configuration file holds malformed values."""


@dataclass(slots=True)
class SimpleNotesConfig:
    """In-memory representation of the Simple Notes configuration file."""

    notes_dir: Path = DEFAULT_NOTES_DIR
    confirm_create_dir: bool = True
    theme: dict[str, str] = field(default_factory=dict)
    source_path: Path | None = None


def load_config(path: Path | None = None) -> SimpleNotesConfig:
    """Load configuration from ``path`` or the default location.

    Parameters
    ----------
    path:
        Optional location of the configuration file. When ``None`` the default
        path (``~/.config/simple-notes/config.toml``) is used, and a missing
        default file simply yields the built-in defaults.

    Raises
    ------
    MissingConfigError
        If an explicitly given file cannot be found.
    InvalidConfigError
        If the file cannot be parsed or a setting has the wrong type.
    """

    config_path = (path or DEFAULT_CONFIG_PATH).expanduser()
    if not config_path.exists():
        if path is not None:
            raise MissingConfigError(config_path)
        return SimpleNotesConfig()

    try:
        with config_path.open("rb") as fh:
            raw = tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise InvalidConfigError(f"Cannot parse {config_path}: {exc}") from exc

    section = raw.get(CONFIG_SECTION, {})
    if not isinstance(section, dict):
        raise InvalidConfigError(f"'{CONFIG_SECTION}' must be a table")

    # Relative notes directories resolve against the configuration directory.
    config_dir = config_path.parent
    notes_dir_raw = section.get("notes_dir")
    if notes_dir_raw is None:
        notes_dir = DEFAULT_NOTES_DIR
    elif isinstance(notes_dir_raw, str) and notes_dir_raw.strip():
        candidate = Path(notes_dir_raw.strip()).expanduser()
        notes_dir = candidate if candidate.is_absolute() else config_dir / candidate
    else:
        raise InvalidConfigError("'notes_dir' must be a non-empty string")

    confirm_create_dir = section.get("confirm_create_dir", True)
    if not isinstance(confirm_create_dir, bool):
        raise InvalidConfigError("'confirm_create_dir' must be a boolean")

    return SimpleNotesConfig(
        notes_dir=notes_dir.resolve(),
        confirm_create_dir=confirm_create_dir,
        theme=_parse_theme(raw.get("theme")),
        source_path=config_path,
    )


def _parse_theme(section: Any) -> dict[str, str]:
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise InvalidConfigError("'theme' must be a table")

    theme: dict[str, str] = {}
    for key, value in section.items():
        if not isinstance(value, str):
            raise InvalidConfigError(f"Theme entry '{key}' must be a string")
        theme[str(key)] = value
    return theme


def bootstrap_config_file(path: Path) -> bool:
    """Create a default config file if missing.

    Returns True when the file was created, False if it already existed.
    """

    if path.exists():
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    default_content = (
        f"[{CONFIG_SECTION}]\n"
        'notes_dir = "~/notes"\n'
        "confirm_create_dir = true\n"
        "\n"
        "[theme]\n"
        '# "item.selected" = "fg:ansibrightgreen bold"\n'
    )
    path.write_text(default_content, encoding="utf-8")
    return True
