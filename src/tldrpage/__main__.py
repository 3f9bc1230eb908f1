from __future__ import annotations

import sys

from tldrpage.cli import main

sys.exit(main())
