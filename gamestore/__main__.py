"""Entry point: ``python -m gamestore``."""

import sys

from gamestore.cli import main

if __name__ == "__main__":
    sys.exit(main())
