"""
HTTP client for the PitchScore API.

The token returned by register/login is cached in a small file (the terminal
counterpart of a browser's localStorage) and sent as a bearer header on the
protected routes.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3000"
DEFAULT_TOKEN_FILE = Path.home() / ".pitchscore" / "token"

UNREACHABLE_MESSAGE = "Couldn't reach the server."
GENERIC_FAILURE_MESSAGE = "Something went wrong."


class ApiError(Exception):
    """A failed API call. ``status_code`` is None when the server was unreachable."""

    def __init__(self, status_code: Optional[int], message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class TokenStore:
    """File-backed cache for a single bearer token."""

    def __init__(self, path: Optional[Path] = None):
        env_path = os.getenv("PITCHSCORE_TOKEN_FILE")
        self.path = Path(path or env_path or DEFAULT_TOKEN_FILE)

    def load(self) -> Optional[str]:
        if not self.path.exists():
            return None
        token = self.path.read_text(encoding="utf-8").strip()
        return token or None

    def save(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(token, encoding="utf-8")
        self.path.chmod(0o600)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class PitchScoreClient:
    """Thin wrapper over ``httpx.Client`` for every API route."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token_store: Optional[TokenStore] = None,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url or os.getenv("PITCHSCORE_API_URL", DEFAULT_API_URL)
        self.tokens = token_store or TokenStore()
        self._http = httpx.Client(base_url=self.base_url, transport=transport, timeout=timeout)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "PitchScoreClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ── Plumbing ──

    def _send(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        token: Optional[str] = None,
    ) -> httpx.Response:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        try:
            return self._http.request(method, path, json=json, headers=headers)
        except httpx.TransportError as e:
            logger.debug(f"{method} {path} failed: {e}")
            raise ApiError(None, UNREACHABLE_MESSAGE) from e

    @staticmethod
    def _result(response: httpx.Response) -> Any:
        """Return the JSON body of a success, or raise ApiError with the server's message."""
        if response.is_success:
            try:
                return response.json()
            except ValueError as e:
                logger.debug(f"Unreadable {response.status_code} body: {e}")
                raise ApiError(response.status_code, GENERIC_FAILURE_MESSAGE) from e
        try:
            message = response.json().get("message")
        except (ValueError, AttributeError):
            message = None
        raise ApiError(response.status_code, message or GENERIC_FAILURE_MESSAGE)

    # ── Public routes ──

    def health(self) -> Dict[str, Any]:
        return self._result(self._send("GET", "/api/health"))

    def register(self, email: str, password: str) -> Dict[str, Any]:
        data = self._result(
            self._send("POST", "/api/register", json={"email": email, "password": password})
        )
        self.tokens.save(data["token"])
        return data

    def login(self, email: str, password: str) -> Dict[str, Any]:
        data = self._result(
            self._send("POST", "/api/login", json={"email": email, "password": password})
        )
        self.tokens.save(data["token"])
        return data

    def logout(self) -> None:
        """Forget the cached token (tokens cannot be revoked server-side)."""
        self.tokens.clear()

    # ── Protected routes ──

    def me(self) -> Dict[str, Any]:
        return self._result(self._send("GET", "/api/me", token=self.tokens.load()))

    def update_me(self, email: Optional[str] = None, password: Optional[str] = None) -> Dict[str, Any]:
        body = {key: value for key, value in (("email", email), ("password", password)) if value}
        return self._result(self._send("PUT", "/api/me", json=body, token=self.tokens.load()))

    def submit_idea(self, title: str, content: str) -> Dict[str, Any]:
        """
        Submit with the cached token. On 401 the cached token is discarded and
        the same body is sent once more without a token; that answer is final.
        Without a cached token the request goes out anonymously, once.
        """
        body = {"title": title, "content": content}
        token = self.tokens.load()
        response = self._send("POST", "/api/ideas", json=body, token=token)
        if response.status_code == 401 and token:
            logger.info("Submission rejected with 401, retrying once without token")
            self.tokens.clear()
            response = self._send("POST", "/api/ideas", json=body)
        return self._result(response)

    def list_ideas(self) -> List[Dict[str, Any]]:
        return self._result(self._send("GET", "/api/ideas", token=self.tokens.load()))
