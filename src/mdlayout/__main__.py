#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Allow ``python -m mdlayout``."""

import sys

from mdlayout.cli import main

if __name__ == "__main__":
    sys.exit(main())
