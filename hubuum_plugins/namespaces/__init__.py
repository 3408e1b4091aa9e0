# hubuum_plugins/namespaces/__init__.py
from __future__ import annotations

"""
Namespace command group:
- create, list, inspect and delete namespaces
"""

SCOPE = "namespace"

SCOPE_DESCRIPTION = "Manage namespaces (ownership and permission boundaries)"
