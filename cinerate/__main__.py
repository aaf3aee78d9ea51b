"""Allow ``python -m cinerate``."""

import sys

from .cli import main

sys.exit(main())
