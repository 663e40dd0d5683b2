"""Allow ``python -m kickstart``."""

from kickstart.cli import main

raise SystemExit(main())
