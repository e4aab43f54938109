"""Project configuration for a new starter project.

A ``ProjectConfig`` is built once, from interactive prompts or from a YAML
answers file, and stays unchanged for the whole run. Option tags are kept in
vocabulary order so that templates render the same way however the tags were
selected.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

import yaml

from ..errors import ValidationFailure


# option tag -> label shown when prompting
OPTION_CHOICES: Dict[str, str] = {
    "sass": "Sass preprocessor",
    "jquery": "jQuery",
    "typescript": "TypeScript",
    "bootstrap-cdn-css": "Bootstrap CDN - CSS (compiled)",
    "bootstrap-cdn-js": "Bootstrap CDN - JS (adds jQuery automatically)",
    "eslint-standard": "ESLint StandardJS",
    "php-dirs": "PHP project structure (customizable)",
}
DEFAULT_OPTIONS: Tuple[str, ...] = ("bootstrap-cdn-css",)

PHP_DIRS: Tuple[str, ...] = ("app", "core", "views", "pages", "lib")
DEFAULT_WANTED_DIRS: Tuple[str, ...] = PHP_DIRS[:3]

NAME_RE = re.compile(r"^[A-Za-z0-9_-]+$")
VERSION_RE = re.compile(r"^(\d+\.)?(\d+\.)?(\*|\d+)$")
ENTRY_POINT_RE = re.compile(r'^[^<>:;,?"*|/]+$')


@dataclass(frozen=True)
class ProjectConfig:
    name: str
    version: str = "1.0.0"
    description: str = ""
    entry_point: str = "index.js"
    author: str = ""
    license: str = "ISC"
    options: Tuple[str, ...] = ()
    wanted_dirs: Tuple[str, ...] = ()
    git_init: bool = True

    def has_option(self, tag: str) -> bool:
        return tag in self.options


def check_name(value: str) -> str:
    if not NAME_RE.match(value):
        raise ValidationFailure(
            f"Invalid project name {value!r}: only letters, digits, underscores and hyphens"
        )
    return value


def check_version(value: str) -> str:
    if not VERSION_RE.match(value):
        raise ValidationFailure(f"Invalid version number {value!r}")
    return value


def check_entry_point(value: str) -> str:
    if not ENTRY_POINT_RE.match(value):
        raise ValidationFailure(f"Invalid entry point file name {value!r}")
    return value


def normalize_options(options: Iterable[str]) -> Tuple[str, ...]:
    """Deduplicate tags, add implied ones and sort them in vocabulary order.

    Bootstrap's JavaScript needs jQuery, so ``bootstrap-cdn-js`` pulls in
    ``jquery``.
    """
    selected = set(options)
    if "bootstrap-cdn-js" in selected:
        selected.add("jquery")
    unknown = selected - set(OPTION_CHOICES)
    if unknown:
        raise ValidationFailure(f"Unknown option(s): {', '.join(sorted(unknown))}")
    return tuple(tag for tag in OPTION_CHOICES if tag in selected)


def validate_project(config: ProjectConfig) -> ProjectConfig:
    """Raise ValidationFailure unless every field of ``config`` is well formed."""
    check_name(config.name)
    check_version(config.version)
    check_entry_point(config.entry_point)
    unknown = [tag for tag in config.options if tag not in OPTION_CHOICES]
    if unknown:
        raise ValidationFailure(f"Unknown option(s): {', '.join(unknown)}")
    bad_dirs = [d for d in config.wanted_dirs if d not in PHP_DIRS]
    if bad_dirs:
        raise ValidationFailure(f"Unknown directory choice(s): {', '.join(bad_dirs)}")
    if len(set(config.wanted_dirs)) != len(config.wanted_dirs):
        raise ValidationFailure("Directory choices must not repeat")
    if config.wanted_dirs and not config.has_option("php-dirs"):
        raise ValidationFailure("Directory choices require the 'php-dirs' option")
    if config.has_option("bootstrap-cdn-js") and not config.has_option("jquery"):
        raise ValidationFailure("'bootstrap-cdn-js' requires 'jquery'")
    return config


def build_project_config(
    name: str,
    *,
    version: str = "1.0.0",
    description: str = "",
    entry_point: str = "index.js",
    author: str = "",
    license: str = "ISC",
    options: Iterable[str] = (),
    wanted_dirs: Optional[Iterable[str]] = None,
    git_init: bool = True,
) -> ProjectConfig:
    """Build a normalized and validated ProjectConfig."""
    tags = normalize_options(options)
    if "php-dirs" in tags:
        dirs = tuple(wanted_dirs) if wanted_dirs is not None else DEFAULT_WANTED_DIRS
    else:
        dirs = ()
    config = ProjectConfig(
        name=name,
        version=version,
        description=description or "",
        entry_point=entry_point,
        author=author or "",
        license=license or "ISC",
        options=tags,
        wanted_dirs=dirs,
        git_init=git_init,
    )
    return validate_project(config)


# answers file key -> ProjectConfig field
_ANSWER_KEYS: Dict[str, str] = {
    "name": "name",
    "version": "version",
    "description": "description",
    "entryPoint": "entry_point",
    "entry_point": "entry_point",
    "author": "author",
    "license": "license",
    "options": "options",
    "wantedDirs": "wanted_dirs",
    "wanted_dirs": "wanted_dirs",
    "git-init": "git_init",
    "gitInit": "git_init",
    "git_init": "git_init",
}


def _parse_answers_dict(data: Mapping[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in data.items():
        if key == "starter":
            if not isinstance(value, str):
                raise ValidationFailure("'starter' must be a string")
            out["starter"] = value
            continue
        field = _ANSWER_KEYS.get(key)
        if field is None:
            raise ValidationFailure(f"Unknown answer {key!r}")
        if field in ("options", "wanted_dirs"):
            if value is None:
                value = []
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ValidationFailure(f"{key!r} must be a list of strings")
        elif field == "git_init":
            if not isinstance(value, bool):
                raise ValidationFailure(f"{key!r} must be true or false")
        elif value is None:
            value = ""
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            # YAML reads an unquoted 1.0 as a float
            value = str(value)
        elif not isinstance(value, str):
            raise ValidationFailure(f"{key!r} must be a string")
        out[field] = value
    return out


def load_answers(path: Path) -> Dict[str, Any]:
    """Load answers from a YAML file, keyed by ProjectConfig field names.

    The ``starter`` key, when present, is passed through unchanged.
    """
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValidationFailure(f"{path}: answers file must contain a mapping")
    return _parse_answers_dict(data)


def project_from_answers(answers: Mapping[str, Any]) -> ProjectConfig:
    """Build a ProjectConfig from parsed answers (``starter`` is ignored)."""
    fields = {k: v for k, v in answers.items() if k != "starter"}
    if "name" not in fields:
        raise ValidationFailure("Missing project name")
    return build_project_config(**fields)

