"""ATSDC Stack scaffolder -- materialises the template project on disk.

Quick usage::

    from atsdc_cli.adapters import get_adapter
    from atsdc_cli.config import ScaffoldConfig
    from atsdc_cli.scaffolder import ProjectGenerator

    generator = ProjectGenerator(ScaffoldConfig(output_dir=Path("/tmp")))
    project_path = await generator.generate("my-app", get_adapter("netlify"))
"""

from atsdc_cli.scaffolder.generator import ProjectGenerator
from atsdc_cli.scaffolder.templates import (
    TemplateRenderer,
    render_astro_config,
    render_astro_config_for,
    render_env_file,
)

__all__ = [
    "ProjectGenerator",
    "TemplateRenderer",
    "render_astro_config",
    "render_astro_config_for",
    "render_env_file",
]
