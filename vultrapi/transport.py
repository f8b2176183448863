"""HTTP transport shared by all API areas."""

from __future__ import annotations

import json
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Mapping, Sequence, Union

DEFAULT_BASE_URL = "https://api.vultr.com/v1/"
_TIMEOUT = 30.0

FormValue = Union[str, Sequence[str]]


class VultrError(Exception):
    """Raised when the API reports an error or sends an unusable reply."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status

    def __str__(self) -> str:
        return self.message


class Transport:
    """Sends authenticated GET and form POST requests to the API."""

    def __init__(self, api_key: str, base_url: str = DEFAULT_BASE_URL) -> None:
        self.api_key = api_key
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"

    def _url(self, path: str) -> str:
        return self.base_url + path.lstrip("/")

    def _send(self, request: urllib.request.Request) -> str:
        request.add_header("API-Key", self.api_key)
        request.add_header("Accept", "application/json")
        try:
            with urllib.request.urlopen(request, timeout=_TIMEOUT) as response:
                status = response.status
                raw = response.read()
        except urllib.error.HTTPError as exc:
            status = exc.code
            raw = exc.read()
            exc.close()
        except urllib.error.URLError as exc:
            raise VultrError(str(exc.reason)) from exc
        except OSError as exc:
            raise VultrError(str(exc)) from exc

        text = raw.decode("utf-8", errors="replace")
        if status != 200:
            raise VultrError(text or f"HTTP status {status}", status)
        return text

    def get(self, path: str) -> Any:
        """Fetch ``path`` and return the decoded JSON reply."""
        text = self._send(urllib.request.Request(self._url(path), method="GET"))
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise VultrError(f"invalid JSON in reply: {exc}") from exc

    def post(self, path: str, values: Mapping[str, FormValue]) -> Any:
        """Post ``values`` as a form; return the decoded reply, or None if it is not JSON."""
        body = urllib.parse.urlencode(
            {key: value if isinstance(value, str) else list(value) for key, value in values.items()},
            doseq=True,
        ).encode("ascii")
        request = urllib.request.Request(self._url(path), data=body, method="POST")
        request.add_header("Content-Type", "application/x-www-form-urlencoded")
        text = self._send(request)
        if not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            return None