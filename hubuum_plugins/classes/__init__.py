# hubuum_plugins/classes/__init__.py
from __future__ import annotations

"""
Class command group:
- create, list, inspect and delete object classes
"""

SCOPE = "class"

SCOPE_DESCRIPTION = "Manage classes (object types with optional JSON schema)"
