"""npm dependency installation and audit."""

from __future__ import annotations

from pathlib import Path
from typing import List

from ..utils import console, run_command


def _run_npm(args: List[str], project_dir: Path) -> bool:
    command = ["npm", *args]
    code = run_command(command, cwd=project_dir)
    if code:
        console.print(
            f"⚠️ '{' '.join(command)}' exited with code {code}", style="yellow"
        )
        return False
    return True


def install_dependencies(project_dir: Path) -> bool:
    """Install the project's dependencies with ``npm install``."""
    ok = _run_npm(["install"], project_dir)
    if ok:
        console.print("✓ Dependencies installed", style="green")
    return ok


def audit_dependencies(project_dir: Path) -> bool:
    """Fix known vulnerabilities with ``npm audit fix``."""
    ok = _run_npm(["audit", "fix"], project_dir)
    if ok:
        console.print("✓ Audit complete", style="green")
    return ok
