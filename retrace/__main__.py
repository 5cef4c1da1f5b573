"""Run the retracement scan display with ``python -m retrace``."""

from .cli import main

raise SystemExit(main())
