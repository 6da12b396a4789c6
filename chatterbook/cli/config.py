"""Configuration management for the chatterbook CLI.

Reads a TOML config file into a typed Config dataclass.
Default location: ``~/.config/chatterbook/config.toml``.
Override with the ``CHATTERBOOK_CONFIG`` environment variable.

Example file::

    [output]
    dir = "./transcripts"

    [uploads]
    dir = "/exports/chatgpt"

    [render]
    branch_policy = "last"
    skip_titles = ["New chat"]
    max_scan_entries = 10000

Environment variables override the file; command-line flags override both.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from chatterbook.render.assets import DEFAULT_MAX_SCAN_ENTRIES
from chatterbook.render.transcript import PLACEHOLDER_TITLES

_DEFAULT_CONFIG_DIR = Path("~/.config/chatterbook").expanduser()


def _config_path() -> Path:
    env = os.environ.get("CHATTERBOOK_CONFIG")
    if env:
        return Path(env).expanduser()
    return _DEFAULT_CONFIG_DIR / "config.toml"


@dataclass
class Config:
    output_dir: str = "."

    # Folder holding the user-* upload directories; defaults to the
    # directory of the input file
    uploads_dir: str | None = None

    branch_policy: str = "last"
    skip_titles: list[str] = field(default_factory=lambda: sorted(PLACEHOLDER_TITLES))
    max_scan_entries: int = DEFAULT_MAX_SCAN_ENTRIES

    def to_dict(self) -> dict[str, Any]:
        """Canonical config dict accepted by :meth:`Chatterbook.from_config`."""
        return {
            "output": {"path": self.output_dir},
            "uploads": {"path": self.uploads_dir},
            "render": {
                "branch_policy": self.branch_policy,
                "skip_titles": list(self.skip_titles),
                "max_scan_entries": self.max_scan_entries,
            },
        }


def _int_setting(name: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def load_config() -> Config:
    """Load config from disk, falling back to defaults + env overrides.

    Raises:
        ValueError: the file is not valid TOML or a numeric setting is not
            an integer.
    """
    path = _config_path()
    cfg = Config()

    if path.exists():
        with open(path, "rb") as f:
            data = tomllib.load(f)
        output_section = data.get("output", {})
        uploads_section = data.get("uploads", {})
        render_section = data.get("render", {})

        cfg.output_dir = output_section.get("dir", cfg.output_dir)
        cfg.uploads_dir = uploads_section.get("dir", cfg.uploads_dir)
        cfg.branch_policy = render_section.get("branch_policy", cfg.branch_policy)
        cfg.skip_titles = list(render_section.get("skip_titles", cfg.skip_titles))
        cfg.max_scan_entries = _int_setting(
            "max_scan_entries",
            render_section.get("max_scan_entries", cfg.max_scan_entries),
        )

    # Environment variables always take precedence
    cfg.output_dir = os.environ.get("CHATTERBOOK_OUTPUT_DIR", cfg.output_dir)
    cfg.uploads_dir = os.environ.get("CHATTERBOOK_UPLOADS_DIR", cfg.uploads_dir)
    cfg.branch_policy = os.environ.get("CHATTERBOOK_BRANCH_POLICY", cfg.branch_policy)
    cfg.max_scan_entries = _int_setting(
        "CHATTERBOOK_MAX_SCAN_ENTRIES",
        os.environ.get("CHATTERBOOK_MAX_SCAN_ENTRIES", cfg.max_scan_entries),
    )

    return cfg


def config_exists() -> bool:
    return _config_path().exists()


def config_path_display() -> str:
    return str(_config_path())
