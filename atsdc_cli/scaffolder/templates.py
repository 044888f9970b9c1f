"""Jinja2 template rendering for generated project files.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``atsdc_cli/scaffolder/templates/`` directory, plus the two renderers the
scaffolder needs: ``astro.config.mjs`` for a deployment adapter and the
placeholder environment file.

All five adapter variants of ``astro.config.mjs`` come from one template;
only the adapter import, the ``output`` mode and the ``adapter:`` entry vary.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from atsdc_cli.adapters import Adapter, default_adapter, get_adapter


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

ASTRO_CONFIG_TEMPLATE = "astro.config.mjs.j2"
ENV_TEMPLATE = "env.j2"

STACK_SHORT_NAME = "ATSDC"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    Generated files are JavaScript, TypeScript and dotenv, so autoescaping is
    off and undefined variables fail loudly.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"astro.config.mjs.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    # -- File-based rendering (async) --------------------------------------

    async def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Parent directories are created automatically.  An existing file is
        overwritten.
        """
        content = self.render(template_path, context)
        out = Path(output_path)
        await asyncio.to_thread(_write_file, out, content)
        return out


# ---------------------------------------------------------------------------
# Context builders
# ---------------------------------------------------------------------------

def astro_config_context(adapter: Adapter) -> dict[str, Any]:
    """Template variables for ``astro.config.mjs``."""
    return {
        "adapter": adapter,
        "app_name": f"{STACK_SHORT_NAME} Stack App",
        "app_short_name": STACK_SHORT_NAME,
        "stack_name": f"{STACK_SHORT_NAME} Stack",
    }


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------

def render_astro_config(
    adapter: Adapter, renderer: TemplateRenderer | None = None
) -> str:
    """Return the ``astro.config.mjs`` text for *adapter*."""
    renderer = renderer or TemplateRenderer()
    return renderer.render(ASTRO_CONFIG_TEMPLATE, astro_config_context(adapter))


def render_astro_config_for(
    value: str | None, renderer: TemplateRenderer | None = None
) -> str:
    """Like :func:`render_astro_config` but keyed by identifier.

    Unknown identifiers render the default (vercel) variant.
    """
    adapter = get_adapter(value) or default_adapter()
    return render_astro_config(adapter, renderer)


def render_env_file(renderer: TemplateRenderer | None = None) -> str:
    """Return the placeholder environment file contents."""
    renderer = renderer or TemplateRenderer()
    return renderer.render(ENV_TEMPLATE, {})


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
