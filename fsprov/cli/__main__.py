#!/usr/bin/env python3
"""
Entry point for fsprov CLI tool.
"""

import sys

from fsprov.cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
