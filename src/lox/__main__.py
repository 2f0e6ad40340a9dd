"""Allow running as ``python -m lox``."""

from .cli import main

main()
