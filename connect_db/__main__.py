"""Allow ``python -m connect_db <database_name>``."""

import sys

from connect_db.cli import main

if __name__ == "__main__":
    sys.exit(main())
