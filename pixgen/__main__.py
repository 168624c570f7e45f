"""
Main entry point for running the package as a module.

Usage:
    python -m pixgen -o gallery -t "Title" photo1.jpg photo2.png
"""

import sys
from .cli import main

if __name__ == '__main__':
    sys.exit(main())
