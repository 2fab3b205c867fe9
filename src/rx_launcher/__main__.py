"""Allow ``python -m rx_launcher``."""

from rx_launcher.cli import main

main()
