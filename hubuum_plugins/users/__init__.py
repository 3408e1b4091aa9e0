# hubuum_plugins/users/__init__.py
from __future__ import annotations

"""
User command group:
- create (with a generated password), list, inspect and delete users
"""

SCOPE = "user"

SCOPE_DESCRIPTION = "Manage users"
