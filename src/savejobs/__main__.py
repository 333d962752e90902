"""Allow ``python -m savejobs``."""

import sys

from savejobs.app import main

sys.exit(main())
