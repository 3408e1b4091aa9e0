#!/usr/bin/env python3
# hubuum_shell/__init__.py
from __future__ import annotations
"""
Interactive shell for the Hubuum management API.

Keep this module light: subpackages expose their APIs through their own
__init__.py files, and `python -m hubuum_shell` is the entry point.
"""

__version__ = "0.1.0"
