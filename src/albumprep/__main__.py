"""Entry point for ``python -m albumprep``."""

import sys

from albumprep.ui.cli import main

if __name__ == "__main__":
    sys.exit(main())
