"""Git repository initialization."""

from __future__ import annotations

from pathlib import Path

from ..utils import console, run_command


def init_repository(project_dir: Path) -> bool:
    """Run ``git init`` and stage every file of the new project."""
    for command in (["git", "init"], ["git", "add", "."]):
        code = run_command(command, cwd=project_dir)
        if code:
            console.print(
                f"❌ '{' '.join(command)}' failed with exit code {code}", style="bold red"
            )
            return False
    console.print("✓ Git repository initialized", style="green")
    return True
