"""``package.json`` handling for generated projects.

Renames the copied manifest after the project and swaps the deployment
adapter dependency to match the selected adapter.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from atsdc_cli.adapters import DEFAULT_ADAPTER_PACKAGE, DEFAULT_ADAPTER_VERSION, Adapter
from atsdc_cli.utils import dump_json, load_json

MANIFEST_NAME = "package.json"


def apply_project_settings(
    manifest: dict[str, Any], project_name: str, adapter: Adapter
) -> dict[str, Any]:
    """Return a copy of *manifest* customised for the project.

    * ``name`` becomes *project_name*.
    * An adapter with a package gets a dependency pinned to the template's
      default adapter version; the default adapter dependency is dropped
      unless it is the one selected.
    * The static adapter drops the default adapter dependency and adds none.
    """
    updated = dict(manifest)
    updated["name"] = project_name

    dependencies = dict(updated.get("dependencies") or {})
    version = dependencies.get(DEFAULT_ADAPTER_PACKAGE, DEFAULT_ADAPTER_VERSION)

    if adapter.package:
        dependencies[adapter.package] = version
        if adapter.package != DEFAULT_ADAPTER_PACKAGE:
            dependencies.pop(DEFAULT_ADAPTER_PACKAGE, None)
    else:
        dependencies.pop(DEFAULT_ADAPTER_PACKAGE, None)

    if dependencies or "dependencies" in updated:
        updated["dependencies"] = dependencies
    return updated


def rewrite_manifest(path: str | Path, project_name: str, adapter: Adapter) -> dict[str, Any]:
    """Rewrite the manifest at *path* in place and return the new contents."""
    manifest = load_json(path)
    updated = apply_project_settings(manifest, project_name, adapter)
    dump_json(updated, path, indent=4)
    return updated


def read_version(path: str | Path) -> str | None:
    """Return the ``version`` field of the manifest at *path*.

    Returns ``None`` if the file is missing, unreadable or has no version.
    """
    try:
        manifest = load_json(path)
    except (OSError, ValueError):
        return None
    version = manifest.get("version")
    return str(version) if version else None
