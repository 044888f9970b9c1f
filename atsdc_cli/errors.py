"""Exceptions raised by the ATSDC Stack CLI."""

from __future__ import annotations


class ScaffoldError(Exception):
    """Raised when scaffolding cannot continue (the CLI exits with status 1)."""
