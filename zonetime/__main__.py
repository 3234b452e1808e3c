"""Allow `python -m zonetime`."""

import sys

from .cli import main

sys.exit(main())
