"""Entry point for ``python -m studyplan``."""

import sys

from .cli import main

sys.exit(main())
