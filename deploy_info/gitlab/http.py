"""HTTP client abstraction for the GitLab REST API.

This module provides:
- HttpClient: Protocol for authenticated GET requests (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing
"""

from __future__ import annotations

import http.client
import json
import ssl
import urllib.error
import urllib.request
from typing import Any, Protocol, runtime_checkable

from deploy_info import __version__
from deploy_info.core.result import Err, Ok, Result
from deploy_info.gitlab.errors import TransportError

__all__ = [
    "HttpClient",
    "RealHttpClient",
    "MockHttpClient",
    "TOKEN_HEADER",
]

TOKEN_HEADER = "PRIVATE-TOKEN"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for read-only HTTP operations.

    Implementations own the credentials; callers only pass URLs.
    """

    def get(self, url: str) -> Result[bytes, TransportError]:
        """Fetch URL and return the full response body.

        Args:
            url: URL to fetch

        Returns:
            Ok with the body bytes, or Err with TransportError
        """
        ...


class RealHttpClient:
    """Real HTTP client using urllib.

    Every request is a blocking GET carrying the token in the PRIVATE-TOKEN
    header. Nothing is retried.
    """

    def __init__(
        self,
        token: str,
        timeout: float | None = None,
        user_agent: str = f"deploy-info/{__version__}",
    ) -> None:
        """Initialize HTTP client.

        Args:
            token: GitLab private token (must be non-empty)
            timeout: Request timeout in seconds, None for the socket default
            user_agent: User-Agent header value

        Raises:
            ValueError: If the token is empty.
        """
        if not token:
            raise ValueError("a non-empty GitLab token is required")
        self._token = token
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def _headers(self) -> dict[str, str]:
        return {
            TOKEN_HEADER: self._token,
            "User-Agent": self.user_agent,
        }

    def get(self, url: str) -> Result[bytes, TransportError]:
        kwargs: dict[str, Any] = {"context": self._ssl_context}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout

        try:
            req = urllib.request.Request(url, headers=self._headers(), method="GET")
            with urllib.request.urlopen(req, **kwargs) as response:
                return Ok(response.read())
        except urllib.error.HTTPError as e:
            return Err(TransportError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(TransportError(url=url, status=0, message=str(e.reason)))
        except http.client.HTTPException as e:
            return Err(TransportError(url=url, status=0, message=str(e) or type(e).__name__))
        except TimeoutError:
            return Err(TransportError(url=url, status=0, message="Request timed out"))
        except ValueError as e:
            return Err(TransportError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(TransportError(url=url, status=0, message=str(e)))


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_json("https://gitlab.example/api/v4/projects?search=x", [{"id": 1}])
        result = client.get("https://gitlab.example/api/v4/projects?search=x")
    """

    def __init__(self) -> None:
        self._responses: dict[str, bytes | TransportError] = {}
        self.calls: list[str] = []

    def set_body(self, url: str, response: bytes | str | TransportError) -> None:
        """Set raw body (or error) for URL."""
        if isinstance(response, str):
            response = response.encode("utf-8")
        self._responses[url] = response

    def set_json(self, url: str, payload: object) -> None:
        """Set a JSON-encoded body for URL."""
        self._responses[url] = json.dumps(payload).encode("utf-8")

    def get(self, url: str) -> Result[bytes, TransportError]:
        self.calls.append(url)

        if url not in self._responses:
            return Err(TransportError(url=url, status=404, message="Not found (mock)"))

        response = self._responses[url]
        if isinstance(response, TransportError):
            return Err(response)
        return Ok(response)
