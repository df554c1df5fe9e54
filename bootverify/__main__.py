#!/usr/bin/env python3
# bootverify/__main__.py
from __future__ import annotations

import sys

from bootverify.cli import main

if __name__ == "__main__":
    sys.exit(main())
