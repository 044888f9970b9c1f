"""``create-atsdc-stack`` entry point.

Usage::

    create-atsdc-stack [project-name] [--install] [--setup-db] [--adapter NAME]
    python -m atsdc_cli my-app -i --db -a netlify

Exit status is 0 on success and for ``--help``/``--version``, 1 when the
project name is missing or invalid, the target directory already exists, or
anything else stops the run.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from atsdc_cli import __version__
from atsdc_cli.assembler import ProjectAssembler
from atsdc_cli.config import ScaffoldConfig, template_dir_from_env
from atsdc_cli.errors import ScaffoldError
from atsdc_cli.options import build_parser, resolve_options, wants_help, wants_version
from atsdc_cli.prompts import Prompter
from atsdc_cli.scaffolder.manifest import read_version
from atsdc_cli.utils import console, print_error, print_warning


def cli_version(template_dir: Optional[Path] = None) -> str:
    """Version of the template manifest, or of this package as a fallback."""
    template_dir = template_dir or template_dir_from_env()
    return read_version(template_dir / "package.json") or __version__


def main(argv: Optional[list[str]] = None, prompter: Optional[Prompter] = None) -> int:
    """Run the CLI and return the process exit status."""
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()

    # Help and version win over everything else, including invalid settings.
    if wants_help(argv):
        console.print(parser.format_help(), markup=False, highlight=False)
        return 0
    if wants_version(argv):
        console.print(cli_version(), markup=False, highlight=False)
        return 0

    try:
        config = ScaffoldConfig.from_env()
    except ValidationError as exc:
        print_error(f"Invalid configuration: {exc}")
        return 1

    args, unknown = parser.parse_known_args(argv)
    if unknown:
        print_warning(f"Ignoring unrecognised arguments: {' '.join(unknown)}")

    if args.output:
        config = config.model_copy(update={"output_dir": Path(args.output)})

    prompter = prompter or Prompter()
    try:
        options = resolve_options(args, prompter)
        assembler = ProjectAssembler(config, prompter=prompter)
        asyncio.run(assembler.run(options))
    except ScaffoldError as exc:
        print_error(str(exc))
        return 1
    except Exception as exc:
        print_error(f"Failed to create project: {exc}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
