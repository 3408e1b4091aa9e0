# hubuum_plugins/objects/__init__.py
from __future__ import annotations

"""
Object command group:
- create, list, inspect and delete objects of a class
"""

SCOPE = "object"

SCOPE_DESCRIPTION = "Manage objects (instances of a class with JSON data)"
