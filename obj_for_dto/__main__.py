"""Allow ``python -m obj_for_dto``."""

import sys

from .cli import main

sys.exit(main())
