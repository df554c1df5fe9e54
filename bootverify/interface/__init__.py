#!/usr/bin/env python3
# bootverify/interface/__init__.py
from __future__ import annotations
from .prompt import DEFAULT_MESSAGE, Acknowledge, wait_for_acknowledgement

__all__ = ["Acknowledge", "DEFAULT_MESSAGE", "wait_for_acknowledgement"]
