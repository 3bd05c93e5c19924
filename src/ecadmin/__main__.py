"""ecadmin executable module.

The console script entry point is cli.main(); this module is only invoked via
`python -m ecadmin` and delegates immediately to the same main().
"""

from __future__ import annotations

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
