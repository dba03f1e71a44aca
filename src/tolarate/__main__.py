# src/tolarate/__main__.py
"""Module entry point: ``python -m tolarate``."""

import sys

from tolarate.app import main

if __name__ == "__main__":
    sys.exit(main())
