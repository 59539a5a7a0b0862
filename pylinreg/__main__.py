"""Allow ``python -m pylinreg``."""

import sys

from pylinreg.cli import main

sys.exit(main())
