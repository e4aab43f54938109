"""Utility modules for webstarter."""

from .console import console
from .subprocess_utils import run_command

__all__ = ["console", "run_command"]
