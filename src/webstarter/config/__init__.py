"""Configuration management for webstarter."""

from .project import (
    DEFAULT_OPTIONS,
    DEFAULT_WANTED_DIRS,
    OPTION_CHOICES,
    PHP_DIRS,
    ProjectConfig,
    build_project_config,
    check_entry_point,
    check_name,
    check_version,
    load_answers,
    normalize_options,
    project_from_answers,
    validate_project,
)
from .starters import (
    STARTERS_ENV_VAR,
    bundled_starters_root,
    discover_starters_root,
    list_starters,
)

__all__ = [
    "DEFAULT_OPTIONS",
    "DEFAULT_WANTED_DIRS",
    "OPTION_CHOICES",
    "PHP_DIRS",
    "ProjectConfig",
    "build_project_config",
    "check_entry_point",
    "check_name",
    "check_version",
    "load_answers",
    "normalize_options",
    "project_from_answers",
    "validate_project",
    "STARTERS_ENV_VAR",
    "bundled_starters_root",
    "discover_starters_root",
    "list_starters",
]
