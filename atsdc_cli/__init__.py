"""ATSDC Stack CLI -- scaffolds new Astro + Drizzle + Clerk projects.

Copies the bundled template application into a new directory, renames the
package, generates ``astro.config.mjs`` for the selected deployment adapter,
writes placeholder environment files and optionally installs dependencies,
pushes the database schema and logs into the deployment CLI.

Usage::

    create-atsdc-stack my-app --install --adapter netlify
    python -m atsdc_cli my-app -i --db -a vercel
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
