"""
Module execution entry point.

Allows running with: python -m cidtree_cli
"""

import sys
from cidtree_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
