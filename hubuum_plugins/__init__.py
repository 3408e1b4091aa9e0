# hubuum_plugins/__init__.py
from __future__ import annotations

"""
Command plugins for the Hubuum shell.

Every subpackage is one top-level scope; its entrypoint.py registers the
scope's commands with the @command decorator.
"""
