"""Allow running as ``python -m tempuser_wordnames``."""

from .main import main

main()
