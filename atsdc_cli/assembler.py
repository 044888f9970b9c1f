"""Project assembler.

Drives a full scaffolding run for a set of resolved options:

* materialise the project directory (:class:`ProjectGenerator`)
* optionally install dependencies
* optionally push the database schema
* print next steps
* optionally log into the adapter's deployment CLI

Only the materialisation step is fatal.  Install, schema push and login
failures are reported as warnings with the command to run by hand, and the
run carries on.
"""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from rich.markup import escape

from atsdc_cli.adapters import Adapter
from atsdc_cli.config import ScaffoldConfig
from atsdc_cli.options import ScaffoldOptions
from atsdc_cli.prompts import Prompter
from atsdc_cli.scaffolder import ProjectGenerator
from atsdc_cli.utils import (
    Style,
    console,
    print_info,
    print_rule,
    print_step,
    print_success,
    print_warning,
    run_command,
    styled,
)

DOCUMENTATION_LINKS: dict[str, str] = {
    "Astro": "https://astro.build",
    "Drizzle ORM": "https://orm.drizzle.team",
    "Clerk": "https://clerk.com/docs",
    "Vercel AI SDK": "https://sdk.vercel.ai",
    "Exa Search": "https://docs.exa.ai",
}


class ScaffoldResult(BaseModel):
    """Outcome of one scaffolding run."""

    project_path: Path
    adapter: Adapter
    installed: bool = Field(default=False, description="Dependency install succeeded")
    database_pushed: bool = Field(default=False)
    logged_in: bool = Field(default=False)


class ProjectAssembler:
    """Runs the scaffolding sequence for one project.

    Attributes:
        config: Template location, output directory and external commands.
        prompter: Used for the final deployment-login question.
        generator: Materialises the project files.
    """

    def __init__(
        self,
        config: ScaffoldConfig,
        prompter: Optional[Prompter] = None,
        generator: Optional[ProjectGenerator] = None,
    ) -> None:
        self.config = config
        self.prompter = prompter or Prompter()
        self.generator = generator or ProjectGenerator(config)

    async def run(self, options: ScaffoldOptions) -> ScaffoldResult:
        """Create the project described by *options*.

        Raises:
            ScaffoldError: If the target directory already exists or the
                template is unusable.
        """
        console.print()
        console.print(styled("Creating ATSDC Stack project...", Style.CYAN))
        console.print()

        project_path = await self.generator.generate(options.project_name, options.adapter)
        result = ScaffoldResult(project_path=project_path, adapter=options.adapter)

        if options.install:
            result.installed = await self.install_dependencies(project_path)

        if options.should_push_schema:
            result.database_pushed = await self.push_schema(project_path)

        self.print_next_steps(options)

        if result.installed:
            result.logged_in = await self.deployment_login(project_path, options.adapter)

        return result

    # ------------------------------------------------------------------
    # Optional steps
    # ------------------------------------------------------------------

    async def install_dependencies(self, project_path: Path) -> bool:
        """Run the package manager's install command in *project_path*."""
        command = self.config.install_command
        print_step(6, "Installing dependencies...")
        if await self._run_step(command, project_path):
            print_success("Dependencies installed")
            return True
        print_warning(
            f"Failed to install dependencies. You can run {shlex.join(command)} manually."
        )
        return False

    async def push_schema(self, project_path: Path) -> bool:
        """Push the Drizzle schema to the database configured in ``.env``."""
        command = self.config.db_push_command
        print_step("DB", "Setting up database...")

        if not (project_path / ".env").is_file():
            print_warning("No .env file found. Skipping database setup.")
            print_warning("Please copy .env.example to .env and configure your DATABASE_URL")
            return False

        if await self._run_step(command, project_path):
            print_success("Database schema pushed successfully")
            return True
        print_warning("Failed to push database schema")
        print_warning(
            f"Please configure your DATABASE_URL in .env and run: {shlex.join(command)}"
        )
        return False

    async def deployment_login(self, project_path: Path, adapter: Adapter) -> bool:
        """Offer to log into the adapter's deployment CLI."""
        command = self.config.login_command(adapter)
        if command is None:
            return False

        cli_name = adapter.name
        if not self.prompter.ask_yes_no(f"Login to {cli_name} now?", True):
            print_info(f"You can login to {cli_name} later with: {shlex.join(command)}")
            return False

        print_rule()
        print_step(cli_name, f"Launching {cli_name} CLI login...")
        if await self._run_step(command, project_path):
            print_success(f"{cli_name} login completed")
            print_rule()
            return True
        print_warning(
            f"{cli_name} login skipped or failed. You can login later with: {shlex.join(command)}"
        )
        return False

    async def _run_step(self, command: list[str], cwd: Path) -> bool:
        """Run *command* attached to the terminal; ``True`` on exit code 0."""
        try:
            returncode, _, _ = await run_command(command, cwd=cwd, capture=False)
        except OSError as exc:
            console.print(styled(escape(f"Error details: {exc}"), Style.DIM))
            return False
        if returncode != 0:
            console.print(
                styled(
                    escape(f"Error details: {shlex.join(command)} exited with code {returncode}"),
                    Style.DIM,
                )
            )
            return False
        return True

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    def print_next_steps(self, options: ScaffoldOptions) -> None:
        """Print the success banner, next steps and documentation links."""
        pm = self.config.package_manager

        console.print()
        print_rule()
        console.print(styled("Project created successfully!", Style.GREEN))
        print_rule()

        steps = [styled(f"cd {options.project_name}", Style.CYAN)]
        if not options.install:
            steps.append(styled(shlex.join(self.config.install_command), Style.CYAN))
        steps.append(
            f"Edit {styled('.env', Style.YELLOW)} and fill in your database credentials and API keys"
        )
        if not options.should_push_schema:
            steps.append(
                f"{styled(shlex.join(self.config.db_push_command), Style.CYAN)} - Push database schema"
            )
        steps.append(f"{styled(f'{pm} run dev', Style.CYAN)} - Start development server")

        console.print("\nNext steps:")
        for number, step in enumerate(steps, start=1):
            console.print(f"  {number}. {step}")

        console.print("\nDocumentation:")
        for name, url in DOCUMENTATION_LINKS.items():
            console.print(f"  • {name}: {styled(url, Style.CYAN)}")
        console.print()
        print_rule()
