"""Materialize a project directory from a starter tree."""

from __future__ import annotations

import errno
import logging
import shutil
from pathlib import Path
from typing import List

from ..config import ProjectConfig
from ..errors import IOFailure, TemplateSyntaxError
from .engine import RenderContext, compile_template
from .policy import decide, exclusion_reason

logger = logging.getLogger(__name__)


def materialize(template_root: Path, dest_root: Path, config: ProjectConfig) -> None:
    """Build ``dest_root`` from ``template_root`` for ``config``.

    ``dest_root`` must not exist yet. The starter is walked depth first with
    siblings in name order; each directory is created before its children.
    Directories requested through ``config.wanted_dirs`` are created at the
    destination root once the copy is complete. The first error aborts the
    run and whatever was already written is left in place.
    """
    if not template_root.is_dir():
        raise IOFailure(
            template_root,
            NotADirectoryError(errno.ENOTDIR, "Starter template is not a directory"),
        )
    _make_dir(dest_root)
    context = RenderContext(project=config)
    _copy_tree(template_root, dest_root, config, context)
    for name in config.wanted_dirs:
        _make_dir(dest_root / name)


def _entries(directory: Path) -> List[Path]:
    try:
        return sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise IOFailure(directory, e) from e


def _make_dir(path: Path) -> None:
    try:
        path.mkdir()
    except OSError as e:
        raise IOFailure(path, e) from e
    logger.debug(f"Created directory {path}")


def _copy_tree(
    source_dir: Path, dest_dir: Path, config: ProjectConfig, context: RenderContext
) -> None:
    for source in _entries(source_dir):
        is_dir = source.is_dir()
        decision = decide(source.name, config, is_dir=is_dir)
        if not decision.include:
            logger.debug(
                f"Skipping {source}: {exclusion_reason(source.name, config, is_dir)}"
            )
            continue
        target = dest_dir / (decision.rename or source.name)
        if is_dir:
            _make_dir(target)
            _copy_tree(source, target, config, context)
        else:
            _copy_file(source, target, context)


def _copy_file(source: Path, target: Path, context: RenderContext) -> None:
    try:
        raw = source.read_bytes()
    except OSError as e:
        raise IOFailure(source, e) from e

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        # binary assets (images, fonts) are copied untouched
        _write(target, raw)
    else:
        try:
            rendered = compile_template(text).render(context)
        except TemplateSyntaxError as e:
            raise TemplateSyntaxError(
                e.message, snippet=e.snippet, line=e.line, path=source
            ) from e
        _write(target, rendered.encode("utf-8"))

    try:
        shutil.copymode(source, target)
    except OSError as e:
        raise IOFailure(target, e) from e
    logger.debug(f"Wrote {target}")


def _write(target: Path, content: bytes) -> None:
    # "x" refuses to overwrite, e.g. a .npmignore renamed onto an existing .gitignore
    try:
        with open(target, "xb") as f:
            f.write(content)
    except OSError as e:
        raise IOFailure(target, e) from e
