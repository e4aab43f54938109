"""Starter template discovery.

Non-configurable by default:
- Use the directory named by ``$WEBSTARTER_STARTERS_DIR`` when it is set.
- Otherwise fall back to the ``starters`` directory bundled with the package.
"""

from __future__ import annotations

import os
from importlib.resources import files
from pathlib import Path
from typing import List, Optional

STARTERS_ENV_VAR = "WEBSTARTER_STARTERS_DIR"


def bundled_starters_root() -> Path:
    """Return the starters directory shipped inside the package."""
    return Path(str(files("webstarter").joinpath("starters")))


def discover_starters_root() -> Path:
    """Return the starters root, honouring the environment override."""
    override = os.getenv(STARTERS_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return bundled_starters_root()


def list_starters(root: Optional[Path] = None) -> List[str]:
    """List starter names (directories directly under the starters root)."""
    root = root if root is not None else discover_starters_root()
    if not root.is_dir():
        return []
    return sorted(p.name for p in root.iterdir() if p.is_dir())
