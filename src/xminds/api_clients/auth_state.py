"""Token state owned by a single API client instance."""

import threading
from dataclasses import dataclass


@dataclass(frozen=True)
class Credentials:
    """Snapshot of the tokens held by a client."""

    access_token: str = ""
    refresh_token: str = ""

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token)


class AuthState:
    """Holds the access token and the refresh token.

    Fields are only reachable through the accessors below; a lock keeps the
    dual-token writes of ``update`` and ``clear`` from interleaving.
    """

    def __init__(self, access_token: str = "", refresh_token: str = ""):
        self._lock = threading.Lock()
        self._access_token = access_token or ""
        self._refresh_token = refresh_token or ""

    def get_access_token(self) -> str:
        with self._lock:
            return self._access_token

    def set_access_token(self, token: str) -> None:
        with self._lock:
            self._access_token = token or ""

    def clear_access_token(self) -> None:
        with self._lock:
            self._access_token = ""

    def get_refresh_token(self) -> str:
        with self._lock:
            return self._refresh_token

    def set_refresh_token(self, token: str) -> None:
        with self._lock:
            self._refresh_token = token or ""

    def update(self, access_token: str, refresh_token: str) -> None:
        """Replace both tokens at once."""
        with self._lock:
            self._access_token = access_token or ""
            self._refresh_token = refresh_token or ""

    def clear(self) -> None:
        """Forget both tokens (account deletion or explicit logout)."""
        self.update("", "")

    def snapshot(self) -> Credentials:
        with self._lock:
            return Credentials(self._access_token, self._refresh_token)

    def __repr__(self) -> str:
        creds = self.snapshot()
        return (
            f"AuthState(authenticated={creds.is_authenticated}, "
            f"has_refresh_token={bool(creds.refresh_token)})"
        )
