#!/usr/bin/env python3
# bootverify/ui/animated/__init__.py
from __future__ import annotations
from .countdown import Countdown

__all__ = ["Countdown"]
