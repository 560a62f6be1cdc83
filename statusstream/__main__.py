"""Allow running as ``python -m statusstream``."""

from . import main

main()
