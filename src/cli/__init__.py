"""Command-line tools for songCache.

- ``python -m src.cli`` / ``python -m src.cli.lookup``: run one or more
  lookups through the cache and print metadata (text or ``--json``).
"""
