"""Allow running as ``python -m branch_sweeper``."""

import sys

from branch_sweeper.cli import main

sys.exit(main())
