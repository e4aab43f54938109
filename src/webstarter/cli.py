"""CLI interface for webstarter - front-end project generator."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import click
from rich.logging import RichHandler

from .config import (
    DEFAULT_OPTIONS,
    DEFAULT_WANTED_DIRS,
    OPTION_CHOICES,
    PHP_DIRS,
    check_entry_point,
    check_name,
    check_version,
    discover_starters_root,
    list_starters,
    load_answers,
    project_from_answers,
)
from .errors import WebstarterError
from .post import audit_dependencies, init_repository, install_dependencies
from .templates import get_starter_dir, materialize
from .utils import console


def _configure_logging() -> None:
    handler = RichHandler(console=console, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logging.basicConfig(level=logging.DEBUG, handlers=[handler], force=True)


def _checked(check: Callable[[str], str]) -> Callable[[str], str]:
    """Adapt a validator so click re-prompts on a bad value."""

    def proc(value: str) -> str:
        try:
            return check(value)
        except WebstarterError as e:
            raise click.UsageError(str(e))

    return proc


def _prompt_starter() -> str:
    starters = list_starters()
    if not starters:
        raise click.ClickException(f"No starters found in {discover_starters_root()}")
    return click.prompt(
        "Which starter do you want to use?",
        type=click.Choice(starters),
        default=starters[0],
        show_choices=True,
    )


def _prompt_answers(answers: Dict[str, Any]) -> Dict[str, Any]:
    """Prompt for every answer not already provided."""
    out = dict(answers)
    if "name" not in out:
        out["name"] = click.prompt("Project name", value_proc=_checked(check_name))
    if "version" not in out:
        out["version"] = click.prompt(
            "Project version", default="1.0.0", value_proc=_checked(check_version)
        )
    if "description" not in out:
        out["description"] = click.prompt("Description", default="", show_default=False)
    if "entry_point" not in out:
        out["entry_point"] = click.prompt(
            "Entry point", default="index.js", value_proc=_checked(check_entry_point)
        )
    if "author" not in out:
        out["author"] = click.prompt("Author", default="", show_default=False)
    if "license" not in out:
        out["license"] = click.prompt("License", default="ISC")
    if "options" not in out:
        out["options"] = [
            tag
            for tag, label in OPTION_CHOICES.items()
            if click.confirm(label, default=tag in DEFAULT_OPTIONS)
        ]
    if "wanted_dirs" not in out and "php-dirs" in out["options"]:
        out["wanted_dirs"] = [
            name
            for name in PHP_DIRS
            if click.confirm(f"  Create {name}/?", default=name in DEFAULT_WANTED_DIRS)
        ]
    if "git_init" not in out:
        out["git_init"] = click.confirm("Initialize a git repository?", default=True)
    return out


@click.group()
def cli() -> None:
    """Front-end project generator."""
    pass


@cli.command("list")
@click.option("--detail", "detail", is_flag=True, default=False)
def list_cmd(detail: bool) -> None:
    """
    List available starters.
    """
    root = discover_starters_root()
    for name in list_starters(root):
        print(name)
        if detail:
            print(f"  path: {root / name}")


@cli.command("new")
@click.option("--starter", "starter_name", default=None, help="Starter to use")
@click.option(
    "--answers",
    "answers_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML file with project answers; missing answers fall back to defaults",
)
@click.option(
    "--dest",
    "dest_parent",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory to create the project in (default: current directory)",
)
@click.option(
    "--install/--no-install",
    default=None,
    help="Run 'npm install' afterwards (asks when omitted)",
)
@click.option(
    "--audit/--no-audit",
    default=None,
    help="Run 'npm audit fix' afterwards (asks when omitted)",
)
@click.option("-v", "--verbose", is_flag=True, help="Log every created and skipped entry")
def new_cmd(
    starter_name: Optional[str],
    answers_file: Optional[Path],
    dest_parent: Optional[Path],
    install: Optional[bool],
    audit: Optional[bool],
    verbose: bool,
) -> None:
    """
    Create a new project from a starter.

    Asks for the project settings (or reads them from --answers), renders the
    starter into <dest>/<name>, then optionally initializes git, installs
    dependencies and runs an audit.
    """
    if verbose:
        _configure_logging()

    try:
        answers = load_answers(answers_file) if answers_file is not None else {}
        starter = starter_name or answers.get("starter") or _prompt_starter()
        template_dir = get_starter_dir(starter)
        if answers_file is None:
            answers = _prompt_answers(answers)
        elif "name" not in answers:
            answers["name"] = click.prompt("Project name", value_proc=_checked(check_name))
        config = project_from_answers(answers)

        project_dir = (dest_parent or Path.cwd()) / config.name
        console.print("Creating project...")
        console.print(f" - Copying files from {starter}")
        materialize(template_dir, project_dir, config)
        for name in config.wanted_dirs:
            console.print(f" - Created {name}/")
        console.print(f"✓ Project created in {project_dir}", style="green")
    except WebstarterError as e:
        console.print(f"❌ {e}", style="bold red", markup=False)
        raise SystemExit(1)

    if config.git_init:
        console.print(" - Creating git repository")
        init_repository(project_dir)

    if install is None:
        install = click.confirm("Install dependencies now?", default=True)
    if install:
        console.print("Running 'npm install'...")
        install_dependencies(project_dir)

    if audit is None:
        audit = click.confirm("Scan the project for vulnerabilities?", default=True)
    if audit:
        console.print("Running 'npm audit fix'...")
        audit_dependencies(project_dir)
