#!/usr/bin/env python3
# hubuum_shell/client.py
from __future__ import annotations

"""
Minimal blocking client for the Hubuum REST API.

Notes:
- JSON over HTTP(S) with a bearer token obtained from the login endpoint.
- Resource collections support query-parameter filters such as
  `name=...` (exact) and `name__startswith=...`.
- Every failure surfaces as ApiError; the shell never sees urllib errors.
"""

import json
import logging
import ssl
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Optional

from hubuum_shell.errors import ApiError, EntityNotFound, MultipleEntitiesFound

logger = logging.getLogger(__name__)

USER_AGENT = "hubuum-shell/0.1"
LOGIN_PATH = "/api/v0/auth/login"


class Resource:
    """One collection endpoint (classes, namespaces, users, objects of a class)."""

    def __init__(self, client: "HubuumClient", path: str, label: str) -> None:
        self._client = client
        self.path = path.rstrip("/") + "/"
        self.label = label

    def find(self, **filters: Any) -> list[dict]:
        """List entries matching all `filters`."""
        result = self._client.request("GET", self.path, params=filters)
        return list(result or [])

    def get_single(self, **filters: Any) -> dict:
        """Exactly one entry matching `filters`, else EntityNotFound / MultipleEntitiesFound."""
        matches = self.find(**filters)
        described = ", ".join(f"{k}={v}" for k, v in filters.items())
        what = f"{self.label} ({described})" if described else self.label
        if not matches:
            raise EntityNotFound(what)
        if len(matches) > 1:
            raise MultipleEntitiesFound(what, len(matches))
        return matches[0]

    def create(self, payload: dict) -> dict:
        return self._client.request("POST", self.path, payload=payload)

    def delete(self, entity_id: Any) -> None:
        self._client.request("DELETE", f"{self.path}{entity_id}")


class HubuumClient:
    """Blocking JSON client; one instance is shared for the whole session."""

    def __init__(
        self,
        base_url: str,
        *,
        verify_ssl: bool = True,
        timeout: float | None = None,
        token: str | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.token = token
        self._ssl_context: Optional[ssl.SSLContext] = None
        if not verify_ssl:
            context = ssl.create_default_context()
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
            self._ssl_context = context

    # ---------------- Session ----------------

    def login(self, username: str, password: str) -> str:
        """Exchange credentials for a token and keep it for later requests."""
        result = self.request(
            "POST", LOGIN_PATH,
            payload={"username": username, "password": password},
            authenticated=False,
        )
        token = (result or {}).get("token")
        if not token:
            raise ApiError(None, "login response did not contain a token")
        self.token = token
        logger.debug("Logged in to %s as %s", self.base_url, username)
        return token

    # ---------------- Resources ----------------

    def classes(self) -> Resource:
        return Resource(self, "/api/v1/classes/", "class")

    def namespaces(self) -> Resource:
        return Resource(self, "/api/v1/namespaces/", "namespace")

    def users(self) -> Resource:
        return Resource(self, "/api/v1/iam/users/", "user")

    def groups(self) -> Resource:
        return Resource(self, "/api/v1/iam/groups/", "group")

    def objects(self, class_id: Any) -> Resource:
        return Resource(self, f"/api/v1/classes/{class_id}/", "object")

    # ---------------- Transport ----------------

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        payload: Any = None,
        authenticated: bool = True,
    ) -> Any:
        """Perform one request and return the decoded JSON body (or None)."""
        url = f"{self.base_url}{path}"
        if params:
            url = f"{url}?{urllib.parse.urlencode(params)}"

        headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
        data = None
        if payload is not None:
            data = json.dumps(payload).encode("utf-8")
            headers["Content-Type"] = "application/json"
        if authenticated and self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        request = urllib.request.Request(url, data=data, headers=headers, method=method)
        logger.debug("%s %s", method, url)
        try:
            with urllib.request.urlopen(request, timeout=self.timeout, context=self._ssl_context) as response:
                body = response.read().decode("utf-8", errors="replace")
        except urllib.error.HTTPError as exc:
            raise ApiError(exc.code, _error_message(exc)) from None
        except (urllib.error.URLError, OSError) as exc:
            raise ApiError(None, str(getattr(exc, "reason", exc))) from None

        if not body.strip():
            return None
        try:
            return json.loads(body)
        except json.JSONDecodeError as exc:
            raise ApiError(None, f"invalid JSON from {path}: {exc.msg}") from None


def _error_message(exc: urllib.error.HTTPError) -> str:
    """Prefer the server's structured message over the HTTP reason phrase."""
    try:
        body = exc.read().decode("utf-8", errors="replace")
        payload = json.loads(body)
    except Exception:
        return str(exc.reason)
    if isinstance(payload, dict):
        for key in ("message", "error", "detail"):
            if payload.get(key):
                return str(payload[key])
    return str(exc.reason)
