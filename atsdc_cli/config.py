"""ATSDC Stack CLI configuration.

Typed configuration for a scaffolding run.  Settings use a Pydantic v2 model
so they are validated at construction time and can be built from environment
variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from atsdc_cli.adapters import Adapter

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "app"

SUPPORTED_PACKAGE_MANAGERS: tuple[str, ...] = ("npm", "pnpm", "yarn", "bun")

DEFAULT_STATIC_FILES: list[str] = [
    "package.json",
    "tsconfig.json",
    "drizzle.config.ts",
    ".env.example",
    ".gitignore",
    "README.md",
]

DEFAULT_COPY_DIRS: list[str] = ["src", "public"]


def template_dir_from_env() -> Path:
    """Template directory from ``ATSDC_TEMPLATE_DIR``, else the bundled one.

    Reads only that one variable, so it works even when other ``ATSDC_*``
    settings are invalid.
    """
    value = os.environ.get("ATSDC_TEMPLATE_DIR")
    return Path(value) if value else DEFAULT_TEMPLATE_DIR


class ScaffoldConfig(BaseModel):
    """Global scaffolding configuration.

    Holds the template location, the parent directory for new projects and
    the external tools invoked after the files are in place.  Instances are
    created once by the CLI entry point and passed to the assembler.
    """

    template_dir: Path = Field(default=DEFAULT_TEMPLATE_DIR)
    output_dir: Path = Field(default=Path("."))
    package_manager: str = Field(default="npm")
    runner: str = Field(default="npx", description="Package executor for deployment CLIs")
    static_files: list[str] = Field(default_factory=lambda: list(DEFAULT_STATIC_FILES))
    copy_dirs: list[str] = Field(default_factory=lambda: list(DEFAULT_COPY_DIRS))

    @field_validator("package_manager")
    @classmethod
    def _check_package_manager(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in SUPPORTED_PACKAGE_MANAGERS:
            raise ValueError(
                f"Unsupported package manager {value!r} "
                f"(expected one of: {', '.join(SUPPORTED_PACKAGE_MANAGERS)})"
            )
        return value

    # ------------------------------------------------------------------
    # Derived paths and commands
    # ------------------------------------------------------------------

    def target_path(self, project_name: str) -> Path:
        """Directory a project named *project_name* is created in."""
        return self.output_dir / project_name

    @property
    def install_command(self) -> list[str]:
        return [self.package_manager, "install"]

    @property
    def db_push_command(self) -> list[str]:
        return [self.package_manager, "run", "db:push"]

    def login_command(self, adapter: Adapter) -> list[str] | None:
        """Command that logs into the adapter's deployment CLI, if it has one."""
        if not adapter.login_cli:
            return None
        return [self.runner, adapter.login_cli, "login"]

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, **overrides: Any) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            ATSDC_TEMPLATE_DIR, ATSDC_OUTPUT_DIR, ATSDC_PACKAGE_MANAGER,
            ATSDC_RUNNER.

        Keyword *overrides* that are not ``None`` take precedence over the
        environment.
        """
        kwargs: dict[str, Any] = {}
        kwargs["template_dir"] = template_dir_from_env()
        if os.environ.get("ATSDC_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["ATSDC_OUTPUT_DIR"])
        if os.environ.get("ATSDC_PACKAGE_MANAGER"):
            kwargs["package_manager"] = os.environ["ATSDC_PACKAGE_MANAGER"]
        if os.environ.get("ATSDC_RUNNER"):
            kwargs["runner"] = os.environ["ATSDC_RUNNER"]

        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)
