"""High-level starter management operations."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..config import discover_starters_root, list_starters
from ..errors import ValidationFailure


def get_starter_dir(starter_name: str, root: Optional[Path] = None) -> Path:
    """Get the directory path for a starter."""
    root = root if root is not None else discover_starters_root()
    available = list_starters(root)
    if starter_name not in available:
        choices = ", ".join(available) or "none"
        raise ValidationFailure(
            f"Unknown starter {starter_name!r} (available: {choices})"
        )
    return root / starter_name
