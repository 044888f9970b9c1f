"""Deployment adapter descriptors.

Each adapter describes how the generated ``astro.config.mjs`` imports and
invokes the Astro deployment integration, which npm package backs it, and
which deployment CLI (if any) offers a ``login`` command.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class AdapterName(str, Enum):
    """Supported deployment targets."""
    VERCEL = "vercel"
    NETLIFY = "netlify"
    CLOUDFLARE = "cloudflare"
    NODE = "node"
    STATIC = "static"


DEFAULT_ADAPTER = AdapterName.VERCEL

# Dependency pinned in the template manifest and reused for other adapters.
DEFAULT_ADAPTER_PACKAGE = "@astrojs/vercel"
DEFAULT_ADAPTER_VERSION = "^7.8.1"

_UNSET: Any = object()


# ---------------------------------------------------------------------------
# Descriptor
# ---------------------------------------------------------------------------

class Adapter(BaseModel):
    """Immutable description of one deployment adapter."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Display name shown in prompts")
    value: AdapterName = Field(..., description="Identifier accepted by --adapter")
    package: Optional[str] = Field(
        default=None, description="npm package added to dependencies"
    )
    import_path: Optional[str] = Field(
        default=None, description="Module imported by astro.config.mjs"
    )
    init_expression: Optional[str] = Field(
        default=None, description="Expression assigned to the config's adapter key"
    )
    output_mode: str = Field(default="server", description="Astro output mode")
    login_cli: Optional[str] = Field(
        default=None, description="Deployment CLI that provides a login command"
    )

    @property
    def import_line(self) -> Optional[str]:
        """The ``import`` statement for the adapter, or ``None`` for static."""
        if not self.import_path:
            return None
        return f"import {self.value.value} from '{self.import_path}';"

    @property
    def is_static(self) -> bool:
        return self.package is None


def create_adapter(
    name: str,
    value: Optional[str] = None,
    package: Any = _UNSET,
    **extra: Any,
) -> Adapter:
    """Build an ``Adapter`` from a display name.

    The identifier defaults to the lower-cased first word of *name*, and the
    package defaults to ``@astrojs/<value>`` except for ``static``, which has
    none.  Pass ``package=None`` explicitly to suppress the package.
    """
    adapter_value = value or name.lower().split(" ")[0]
    if package is _UNSET:
        package = None if adapter_value == AdapterName.STATIC.value else f"@astrojs/{adapter_value}"

    if package is not None:
        extra.setdefault("import_path", package)
        extra.setdefault("init_expression", f"{adapter_value}()")
    else:
        extra.setdefault("output_mode", "static")

    return Adapter(name=name, value=AdapterName(adapter_value), package=package, **extra)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

ADAPTERS: dict[AdapterName, Adapter] = {
    AdapterName.VERCEL: create_adapter(
        "Vercel",
        import_path="@astrojs/vercel/serverless",
        login_cli="vercel",
    ),
    AdapterName.NETLIFY: create_adapter("Netlify", login_cli="netlify"),
    AdapterName.CLOUDFLARE: create_adapter("Cloudflare", login_cli="wrangler"),
    AdapterName.NODE: create_adapter(
        "Node",
        init_expression="node({\n        mode: 'standalone'\n    })",
    ),
    AdapterName.STATIC: create_adapter("Static (no adapter)"),
}

# Menu number -> adapter, in the order shown to the user.
ADAPTER_MENU: dict[str, AdapterName] = {
    str(index): name for index, name in enumerate(ADAPTERS, start=1)
}


def get_adapter(value: str | AdapterName | None) -> Optional[Adapter]:
    """Look up an adapter by identifier (case-insensitive).

    Returns ``None`` for unknown or empty identifiers.
    """
    if value is None:
        return None
    if isinstance(value, AdapterName):
        return ADAPTERS[value]
    try:
        return ADAPTERS[AdapterName(value.strip().lower())]
    except ValueError:
        return None


def default_adapter() -> Adapter:
    return ADAPTERS[DEFAULT_ADAPTER]
