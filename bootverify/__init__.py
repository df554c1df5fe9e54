#!/usr/bin/env python3
# bootverify/__init__.py
from __future__ import annotations
"""
bootverify: boot-time health checks that gate the graphical session.

Keep this module light; subpackages expose their own APIs.
"""

__version__ = "0.1.0"
