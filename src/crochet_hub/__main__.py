"""Module executed when running ``python -m crochet_hub``."""

from __future__ import annotations

import sys

from crochet_hub.cli import main

if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
