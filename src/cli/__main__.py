"""Allow ``python -m src.cli`` execution."""

from src.cli.lookup import main

main()
