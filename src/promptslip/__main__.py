"""Entry point for ``python -m promptslip``."""

import sys

from promptslip.cli import main

sys.exit(main())
