"""Inclusion policy for starter entries.

Decides, from an entry's name and the project configuration, whether the entry
is copied into the new project and under which name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from ..config import ProjectConfig
from ..errors import PolicyAmbiguity

# source file name -> destination file name
FILE_RENAMES: Dict[str, str] = {
    # packaging tools drop files called .gitignore, so starters ship .npmignore
    ".npmignore": ".gitignore",
}


@dataclass(frozen=True)
class Decision:
    include: bool
    rename: Optional[str] = None


@dataclass(frozen=True)
class ExclusionRule:
    name: str
    excluded_when: Callable[[ProjectConfig], bool]
    reason: str


EXCLUSION_RULES = (
    ExclusionRule("scss", lambda c: not c.has_option("sass"), "sass not selected"),
    ExclusionRule("css", lambda c: c.has_option("sass"), "sass selected"),
    ExclusionRule("ts", lambda c: not c.has_option("typescript"), "typescript not selected"),
    ExclusionRule(
        "tsconfig.json", lambda c: not c.has_option("typescript"), "typescript not selected"
    ),
    ExclusionRule("js", lambda c: c.has_option("typescript"), "typescript selected"),
    ExclusionRule(
        ".eslintrc", lambda c: not c.has_option("eslint-standard"), "eslint-standard not selected"
    ),
    ExclusionRule(".gitignore", lambda c: not c.git_init, "git init not requested"),
)


def index_rules(rules: Iterable[ExclusionRule]) -> Dict[str, ExclusionRule]:
    """Key rules by entry name; two rules for one name are a programming error."""
    indexed: Dict[str, ExclusionRule] = {}
    for rule in rules:
        if rule.name in indexed:
            raise PolicyAmbiguity(f"More than one inclusion rule for {rule.name!r}")
        indexed[rule.name] = rule
    return indexed


_RULES_BY_NAME = index_rules(EXCLUSION_RULES)


def output_name(entry_name: str, is_dir: bool = False) -> str:
    """Name an entry is written under. Directories are never renamed."""
    if is_dir:
        return entry_name
    return FILE_RENAMES.get(entry_name, entry_name)


def exclusion_reason(entry_name: str, config: ProjectConfig, is_dir: bool = False) -> Optional[str]:
    """Return why an entry is left out, or None when it is included."""
    if is_dir and entry_name in FILE_RENAMES:
        return f"{entry_name} directories are never copied"
    rule = _RULES_BY_NAME.get(output_name(entry_name, is_dir))
    if rule is not None and rule.excluded_when(config):
        return rule.reason
    return None


def decide(entry_name: str, config: ProjectConfig, is_dir: bool = False) -> Decision:
    """Decide whether ``entry_name`` is copied and under which name.

    Exclusion rules are checked against the name the entry would be written
    under, so a ``.npmignore`` file is dropped along with ``.gitignore`` when
    git init is not requested.
    """
    if exclusion_reason(entry_name, config, is_dir) is not None:
        return Decision(include=False)
    target = output_name(entry_name, is_dir)
    return Decision(include=True, rename=target if target != entry_name else None)
