"""Shared pytest fixtures for the ATSDC Stack CLI test suite.

Provides reusable fixtures for:
- A small on-disk template project
- Output directories and a matching ScaffoldConfig
- Scripted prompt answers
- A mocked ``run_command`` so no package manager is ever spawned
"""

from __future__ import annotations

import io
import json
from pathlib import Path
from typing import Callable
from unittest.mock import AsyncMock, patch

import pytest
from rich.console import Console

from atsdc_cli.config import ScaffoldConfig
from atsdc_cli.prompts import Prompter


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop ATSDC_* overrides from the developer's shell."""
    for name in (
        "ATSDC_TEMPLATE_DIR",
        "ATSDC_OUTPUT_DIR",
        "ATSDC_PACKAGE_MANAGER",
        "ATSDC_RUNNER",
    ):
        monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Template & output directories
# ---------------------------------------------------------------------------

TEMPLATE_MANIFEST = {
    "name": "atsdc-stack-app",
    "version": "2.3.4",
    "type": "module",
    "scripts": {"dev": "astro dev", "db:push": "drizzle-kit push"},
    "dependencies": {
        "astro": "^4.16.0",
        "@astrojs/vercel": "^7.8.1",
        "drizzle-orm": "^0.34.1",
    },
}


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """A minimal template project.

    Contains a manifest, some top-level files, nested ``src/`` and
    ``public/`` trees and a stale ``astro.config.mjs`` that the generator
    must replace.  ``drizzle.config.ts`` and ``.gitignore`` are deliberately
    absent.
    """
    root = tmp_path / "template"
    (root / "src" / "db").mkdir(parents=True)
    (root / "src" / "pages" / "api").mkdir(parents=True)
    (root / "public").mkdir()

    (root / "package.json").write_text(json.dumps(TEMPLATE_MANIFEST, indent=4), encoding="utf-8")
    (root / "tsconfig.json").write_text('{"extends": "astro/tsconfigs/strict"}\n', encoding="utf-8")
    (root / "README.md").write_text("# Template\n", encoding="utf-8")
    (root / "astro.config.mjs").write_text("// stale template copy\n", encoding="utf-8")
    (root / "src" / "db" / "schema.ts").write_text("export const posts = {};\n", encoding="utf-8")
    (root / "src" / "pages" / "index.astro").write_text("<h1>Hi</h1>\n", encoding="utf-8")
    (root / "src" / "pages" / "api" / "chat.ts").write_text("export const POST = 1;\n", encoding="utf-8")
    (root / "public" / "favicon.ico").write_bytes(b"\x00\x01\x02icon")
    return root


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Parent directory that new projects are created in."""
    out = tmp_path / "projects"
    out.mkdir()
    return out


@pytest.fixture
def config(template_dir: Path, output_dir: Path) -> ScaffoldConfig:
    return ScaffoldConfig(template_dir=template_dir, output_dir=output_dir)


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------

@pytest.fixture
def make_prompter() -> Callable[..., Prompter]:
    """Factory for a Prompter fed with scripted answers.

    Each positional argument is one line of input; ``""`` presses Enter.
    Once the answers run out, every further question reads end-of-input.
    """

    def _make(*answers: str) -> Prompter:
        stream = io.StringIO("".join(f"{answer}\n" for answer in answers))
        return Prompter(console=Console(file=io.StringIO()), stream=stream)

    return _make


# ---------------------------------------------------------------------------
# Subprocesses
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_run_command():
    """Patch the assembler's ``run_command`` so every command succeeds."""
    with patch(
        "atsdc_cli.assembler.run_command",
        new=AsyncMock(return_value=(0, "", "")),
    ) as mocked:
        yield mocked
