from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from chatterbook.export.walker import DEFAULT_BRANCH_POLICY, BranchPolicy
from chatterbook.render.assets import DEFAULT_MAX_SCAN_ENTRIES
from chatterbook.render.transcript import PLACEHOLDER_TITLES
from chatterbook.storage.base import StorageBackend
from chatterbook.storage.disk import DiskStorage


@dataclass
class RenderSettings:
    """Knobs for turning conversations into transcripts."""

    branch_policy: BranchPolicy = DEFAULT_BRANCH_POLICY
    skip_titles: frozenset[str] = field(default_factory=lambda: PLACEHOLDER_TITLES)
    uploads_dir: str | None = None
    max_scan_entries: int = DEFAULT_MAX_SCAN_ENTRIES


def parse_config(config: dict[str, Any]) -> tuple[StorageBackend, RenderSettings]:
    """Parse a user config dict and return (output storage, render settings).

    Expected shape::

        {
            "output": {"path": "./transcripts"},
            "uploads": {"path": "/exports/chatgpt"},
            "render": {
                "branch_policy": "last",
                "skip_titles": ["New chat"],
                "max_scan_entries": 10000,
            },
        }

    ``uploads.path`` defaults to the directory holding the export.
    """
    output_cfg = config.get("output", {})
    uploads_cfg = config.get("uploads", {})
    render_cfg = config.get("render", {})

    output_path = output_cfg.get("path", ".")

    try:
        policy = BranchPolicy(render_cfg.get("branch_policy", DEFAULT_BRANCH_POLICY))
    except ValueError:
        raise ValueError(
            f"Unknown branch policy {render_cfg.get('branch_policy')!r}. "
            f"Available: {[p.value for p in BranchPolicy]}"
        ) from None

    max_scan_entries = int(
        render_cfg.get("max_scan_entries", DEFAULT_MAX_SCAN_ENTRIES)
    )
    if max_scan_entries < 1:
        raise ValueError("max_scan_entries must be at least 1")

    settings = RenderSettings(
        branch_policy=policy,
        skip_titles=frozenset(render_cfg.get("skip_titles", PLACEHOLDER_TITLES)),
        uploads_dir=uploads_cfg.get("path"),
        max_scan_entries=max_scan_entries,
    )
    storage = DiskStorage(base_path=str(output_path))
    return storage, settings
