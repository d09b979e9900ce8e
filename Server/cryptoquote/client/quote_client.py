"""
Quote Client

Fetches encrypted quotes from a running cryptoquote server.
"""

import json
import urllib.error
import urllib.parse
import urllib.request
from datetime import datetime, timezone

from ..exceptions import FetchError
from ..models.quote import EncryptedQuote

DEFAULT_ERROR_MESSAGE = "Getting quotes failed"


class QuoteClient:
    """HTTP client for the quote endpoint. Failures are not retried."""

    def __init__(self, base_url: str = "http://127.0.0.1:5000", timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"QuoteClient({self.base_url})"

    def _quotes_url(self) -> str:
        query = urllib.parse.urlencode({"dt": datetime.now(timezone.utc).isoformat()})
        return f"{self.base_url}/quotes?{query}"

    @staticmethod
    def _error_message(body: bytes) -> str:
        """Pick the server's error text out of a failure body, if any."""
        try:
            data = json.loads(body.decode("utf-8"))
        except (ValueError, UnicodeDecodeError):
            return DEFAULT_ERROR_MESSAGE
        if isinstance(data, dict):
            return data.get("message") or data.get("error") or DEFAULT_ERROR_MESSAGE
        return DEFAULT_ERROR_MESSAGE

    def get_encrypted_quote(self) -> EncryptedQuote:
        """
        Fetch one encrypted quote.

        Raises:
            FetchError: On transport failure, a non-2xx response or an
                unreadable payload
        """
        request = urllib.request.Request(
            self._quotes_url(),
            headers={"Accept": "application/json", "User-Agent": "cryptoquote-client/1.0"}
        )
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                raw = response.read()
        except urllib.error.HTTPError as e:
            raise FetchError(self._error_message(e.read() or b"")) from e
        except (urllib.error.URLError, OSError) as e:
            raise FetchError(str(getattr(e, "reason", e)) or DEFAULT_ERROR_MESSAGE) from e

        try:
            return EncryptedQuote.from_dict(json.loads(raw.decode("utf-8")))
        except (ValueError, UnicodeDecodeError) as e:
            raise FetchError(f"Invalid quote payload: {e}") from e
