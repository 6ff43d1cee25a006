"""Allow ``python -m simplenotes``."""

import sys

from .cli import main

sys.exit(main())
