"""Command-line options and their interactive resolution.

Every option can come from a flag; anything not given on the command line is
asked for interactively, in a fixed order: project name, install, database
setup, deployment adapter.
"""

from __future__ import annotations

import argparse
import re
from typing import Optional

from pydantic import BaseModel, Field

from atsdc_cli.adapters import ADAPTERS, Adapter, default_adapter, get_adapter
from atsdc_cli.errors import ScaffoldError
from atsdc_cli.prompts import Prompter, resolve_option
from atsdc_cli.utils import Style, console, print_rule, print_success, print_warning, styled

PROJECT_NAME_PATTERN = r"^[A-Za-z0-9_-]+$"
_PROJECT_NAME_RE = re.compile(PROJECT_NAME_PATTERN)

HELP_FLAGS: frozenset[str] = frozenset({"-h", "--help"})
VERSION_FLAGS: frozenset[str] = frozenset({"-v", "--version"})


# ---------------------------------------------------------------------------
# Resolved options
# ---------------------------------------------------------------------------

class ScaffoldOptions(BaseModel):
    """Fully resolved options for one scaffolding run."""

    project_name: str = Field(..., pattern=PROJECT_NAME_PATTERN)
    install: bool = Field(default=False)
    setup_db: bool = Field(default=False, description="Only acted on when install is true")
    adapter: Adapter = Field(default_factory=default_adapter)

    @property
    def should_push_schema(self) -> bool:
        return self.install and self.setup_db


def validate_project_name(name: Optional[str]) -> str:
    """Return the stripped *name* or raise ``ScaffoldError``."""
    name = (name or "").strip()
    if not name:
        raise ScaffoldError("Project name is required")
    if not _PROJECT_NAME_RE.match(name):
        raise ScaffoldError(
            "Project name can only contain letters, numbers, hyphens, and underscores"
        )
    return name


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """Build the ``create-atsdc-stack`` argument parser.

    Help and version are declared for the usage text only; :func:`atsdc_cli.cli.main`
    handles them before parsing.
    """
    adapter_names = ", ".join(name.value for name in ADAPTERS)
    parser = argparse.ArgumentParser(
        prog="create-atsdc-stack",
        description=(
            "Scaffold a production-ready ATSDC Stack application "
            "(Astro, TypeScript, SCSS, Drizzle ORM, Clerk, Vercel AI SDK).\n"
            "Any option not given on the command line is asked for interactively."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        epilog=(
            "Examples:\n"
            "  create-atsdc-stack\n"
            "  create-atsdc-stack my-app --install\n"
            "  create-atsdc-stack my-app -i --db -a vercel\n"
            "  create-atsdc-stack my-app --adapter static --install\n"
        ),
    )
    parser.add_argument(
        "project_name",
        nargs="?",
        default=None,
        metavar="project-name",
        help="Name of the new project directory (letters, numbers, - and _)",
    )
    parser.add_argument(
        "--install", "-i",
        action="store_true",
        default=None,
        help="Install npm dependencies after creating the project (prompted, default: yes)",
    )
    parser.add_argument(
        "--setup-db", "--db",
        dest="setup_db",
        action="store_true",
        default=None,
        help="Push the database schema after installing (requires --install; prompted, default: no)",
    )
    parser.add_argument(
        "--adapter", "-a",
        nargs="?",
        const="",
        default=None,
        metavar="ADAPTER",
        help=f"Deployment adapter: {adapter_names} (prompted, default: vercel)",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Parent directory for the new project (default: current directory)",
    )
    parser.add_argument("--help", "-h", action="store_true", help="Show this help message and exit")
    parser.add_argument("--version", "-v", action="store_true", help="Show the CLI version and exit")
    return parser


def wants_help(argv: list[str]) -> bool:
    return any(arg in HELP_FLAGS for arg in argv)


def wants_version(argv: list[str]) -> bool:
    return any(arg in VERSION_FLAGS for arg in argv)


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def adapter_from_flag(value: Optional[str]) -> Optional[Adapter]:
    """Map an ``--adapter`` value to an adapter.

    ``None`` or an empty value means "ask".  Unknown values fall back to the
    default adapter with a warning.
    """
    if not value:
        return None
    adapter = get_adapter(value)
    if adapter is None:
        print_warning(f"Invalid adapter '{value}', using default")
        return default_adapter()
    print_success(f"Using {adapter.name} adapter")
    return adapter


def resolve_options(args: argparse.Namespace, prompter: Prompter) -> ScaffoldOptions:
    """Combine parsed flags with interactive prompts.

    Raises:
        ScaffoldError: If the project name is missing or invalid.
    """
    project_name = args.project_name
    if not project_name:
        print_rule()
        console.print(styled("Welcome to ATSDC Stack!", Style.CYAN))
        print_rule()
        console.print()
        project_name = prompter.ask_text("What would you like to name your project?")
        console.print()
    project_name = validate_project_name(project_name)

    install = resolve_option(
        args.install,
        lambda default: prompter.ask_yes_no("Install dependencies now?", default),
        True,
    )

    if install:
        setup_db = resolve_option(
            args.setup_db,
            lambda default: prompter.ask_yes_no("Set up the database now?", default),
            False,
        )
    else:
        setup_db = bool(args.setup_db)

    adapter = resolve_option(
        adapter_from_flag(args.adapter),
        prompter.ask_adapter,
        default_adapter(),
    )

    return ScaffoldOptions(
        project_name=project_name,
        install=install,
        setup_db=setup_db,
        adapter=adapter,
    )
