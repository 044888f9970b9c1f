"""Project materialisation.

Takes a project name and a deployment adapter and produces a new directory
containing a customised copy of the bundled template project:

1. fail if the target directory already exists
2. create the target directory
3. copy the top-level template files
4. generate ``astro.config.mjs`` for the adapter
5. copy the ``src/`` and ``public/`` trees
6. rewrite ``package.json`` (name + adapter dependency)
7. write ``.env.example`` and ``.env`` placeholders

Dependency installation and the other interactive follow-up steps live in
:mod:`atsdc_cli.assembler`.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from atsdc_cli.adapters import Adapter
from atsdc_cli.config import ScaffoldConfig
from atsdc_cli.errors import ScaffoldError
from atsdc_cli.utils import print_step, print_success

from .copier import copy_directories, copy_static_files
from .manifest import MANIFEST_NAME, rewrite_manifest
from .templates import (
    ASTRO_CONFIG_TEMPLATE,
    ENV_TEMPLATE,
    TemplateRenderer,
    astro_config_context,
)

ASTRO_CONFIG_NAME = "astro.config.mjs"
ENV_FILE_NAMES: tuple[str, ...] = (".env.example", ".env")


class ProjectGenerator:
    """Copies and customises the template project for one run."""

    def __init__(
        self,
        config: ScaffoldConfig,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    async def generate(self, project_name: str, adapter: Adapter) -> Path:
        """Generate the project directory.

        Args:
            project_name: Name of the new project; also the directory name
                under ``config.output_dir``.
            adapter: Deployment adapter used for the config file and the
                manifest's dependencies.

        Returns:
            Path to the generated project root.

        Raises:
            ScaffoldError: If the target directory already exists or the
                template has no ``package.json``.
        """
        project_root = self.config.target_path(project_name)

        # 1. Target must not exist
        print_step(1, "Checking project directory...")
        if project_root.exists():
            raise ScaffoldError(f'Directory "{project_name}" already exists!')

        # 2. Create it
        print_step(2, f"Creating project directory: {project_name}")
        await asyncio.to_thread(project_root.mkdir, parents=True)
        print_success("Directory created")

        # 3-5. Template files, generated config, source trees
        print_step(3, "Copying template files...")
        await self._copy_template(project_root)
        await self._write_astro_config(project_root, adapter)
        print_success(f"Generated {ASTRO_CONFIG_NAME} with {adapter.value.value} adapter")
        await asyncio.to_thread(
            copy_directories,
            self.config.template_dir,
            project_root,
            self.config.copy_dirs,
        )
        print_success("Template files copied")

        # 6. package.json
        print_step(4, f"Updating {MANIFEST_NAME}...")
        await self._rewrite_manifest(project_root, project_name, adapter)
        print_success(f"{MANIFEST_NAME} updated")

        # 7. Environment files
        print_step(5, "Creating environment files...")
        await self._write_env_files(project_root)
        print_success(f"{' and '.join(ENV_FILE_NAMES)} created")

        return project_root

    # -- Steps -------------------------------------------------------------

    async def _copy_template(self, root: Path) -> list[Path]:
        """Copy the fixed list of top-level template files."""
        return await asyncio.to_thread(
            copy_static_files,
            self.config.template_dir,
            root,
            self.config.static_files,
        )

    async def _write_astro_config(self, root: Path, adapter: Adapter) -> Path:
        """Render ``astro.config.mjs``, replacing any template copy."""
        return await self.renderer.render_to_file(
            ASTRO_CONFIG_TEMPLATE,
            root / ASTRO_CONFIG_NAME,
            astro_config_context(adapter),
        )

    async def _rewrite_manifest(
        self, root: Path, project_name: str, adapter: Adapter
    ) -> None:
        manifest_path = root / MANIFEST_NAME
        if not manifest_path.is_file():
            raise ScaffoldError(
                f"Template at {self.config.template_dir} has no {MANIFEST_NAME}"
            )
        await asyncio.to_thread(rewrite_manifest, manifest_path, project_name, adapter)

    async def _write_env_files(self, root: Path) -> list[Path]:
        """Write the placeholder environment file under each env file name."""
        written: list[Path] = []
        for name in ENV_FILE_NAMES:
            path = await self.renderer.render_to_file(ENV_TEMPLATE, root / name, {})
            written.append(path)
        return written
