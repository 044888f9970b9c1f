"""Allow ``python -m atsdc_cli``."""

import sys

from atsdc_cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
