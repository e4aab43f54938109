"""Subprocess utilities for running commands."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from typing import List

from .console import console


def run_command(command: List[str], cwd: Path) -> int:
    """Run a command in ``cwd``, stream its output to stdout and return the exit code."""
    console.print(f"Running: {' '.join(command)}")
    try:
        process = subprocess.Popen(
            command,
            cwd=str(cwd),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
    except FileNotFoundError:
        console.print(f"Command not found: {command[0]}", style="bold red")
        return 127
    assert process.stdout is not None
    for line in process.stdout:
        sys.stdout.write(line)
    return process.wait()
