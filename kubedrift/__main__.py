"""Allow running kubedrift with ``python -m kubedrift``."""

from kubedrift.cli import main

main()
