"""Allow ``python -m gridroute``."""

import sys

from gridroute.cli import main

if __name__ == "__main__":
    sys.exit(main())
