#!/usr/bin/env python3
"""Run convlog from a source checkout: python main.py INPUT [-o OUTPUT]"""

import sys

from convlog.cli import main

if __name__ == "__main__":
    sys.exit(main())
