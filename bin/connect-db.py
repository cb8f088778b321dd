"""Open psql for a database whose secrets live in .vault/secrets.

Runs straight from a checkout, without installing the package.

Usage:
    bin/connect-db.py orders              # psql with the resolved orders URL
    bin/connect-db.py orders --print-url  # show the URL only
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT))

from connect_db.cli import main

if __name__ == "__main__":
    sys.exit(main())
