"""connect-db — open a database client session from vault-rendered secrets."""

__version__ = "0.1.0"
