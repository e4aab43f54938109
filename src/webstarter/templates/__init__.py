"""Starter rendering for webstarter."""

from .engine import RenderContext, Template, compile_template, render
from .manager import get_starter_dir
from .materializer import materialize
from .policy import Decision, decide

__all__ = [
    "RenderContext",
    "Template",
    "compile_template",
    "render",
    "get_starter_dir",
    "materialize",
    "Decision",
    "decide",
]
