"""Client for the legacy recruitment system.

Calls are best effort: every failure path resolves to a result object or
``False`` and is logged, nothing is raised to the caller.
"""

import threading
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Optional

import requests
import structlog

from recruitment_api.core.config import settings

logger = structlog.get_logger(__name__)


@dataclass
class SyncResult:
    """Outcome of a legacy API call."""
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None


def _json_message(response: requests.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("message")
    return None


class LegacyApiClient:
    """HTTP client notifying the legacy system about new candidates."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 5.0,
        health_timeout: float = 3.0,
        max_redirects: int = 3,
        session: Optional[requests.Session] = None
    ):
        """Initialize the client.

        Args:
            base_url: Legacy API root URL
            api_key: Value for the x-api-key header
            timeout: Seconds allowed for a candidate sync request
            health_timeout: Seconds allowed for a health check
            max_redirects: Redirects followed before giving up
            session: Optional preconfigured session shared by every call;
                by default each thread gets its own session
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.health_timeout = health_timeout
        self.max_redirects = max_redirects
        self._session = session
        if session is not None:
            session.max_redirects = max_redirects
        self._local = threading.local()

        logger.info("Legacy API client configured", legacy_api_url=self.base_url)

    @property
    def session(self) -> requests.Session:
        """Session for the calling thread; requests sessions are not thread-safe."""
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.max_redirects = self.max_redirects
            self._local.session = session
        return session

    @classmethod
    def from_settings(cls) -> "LegacyApiClient":
        return cls(
            base_url=settings.legacy_api_url,
            api_key=settings.legacy_api_key,
            timeout=settings.legacy_api_timeout_seconds,
            health_timeout=settings.legacy_health_timeout_seconds,
            max_redirects=settings.legacy_api_max_redirects,
        )

    def send_candidate(self, first_name: str, last_name: str, email: str) -> SyncResult:
        """Send a newly created candidate to the legacy API.

        Args:
            first_name: Candidate first name
            last_name: Candidate last name
            email: Candidate email

        Returns:
            SyncResult describing the outcome
        """
        payload: Dict[str, Any] = {
            "firstName": first_name,
            "lastName": last_name,
            "email": email,
        }
        headers = {
            "x-api-key": self.api_key,
            "Content-Type": "application/json",
        }

        logger.info("Sending candidate to legacy API", email=email)

        try:
            response = self.session.post(
                f"{self.base_url}/candidates",
                json=payload,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()

            if not 200 <= response.status_code < 300:
                logger.error(
                    "Legacy API returned a non-success status",
                    email=email,
                    status_code=response.status_code
                )
                return SyncResult(success=False, error=_json_message(response) or "Legacy API error")

            logger.info("Legacy API accepted candidate", email=email, status_code=response.status_code)
            return SyncResult(success=True, message=_json_message(response))

        except requests.HTTPError as e:
            logger.error(
                "Legacy API rejected candidate",
                email=email,
                status_code=e.response.status_code if e.response is not None else None,
                error=str(e)
            )
            message = _json_message(e.response) if e.response is not None else None
            return SyncResult(success=False, error=message or "Legacy API error")

        except Exception as e:
            logger.error("Legacy API request failed", email=email, error=str(e))
            return SyncResult(success=False, error=str(e) or "Unknown error")

    def health_check(self) -> bool:
        """Check whether the legacy API root answers with 200."""
        try:
            response = self.session.get(f"{self.base_url}/", timeout=self.health_timeout)
            return response.status_code == 200
        except Exception as e:
            logger.warning(
                "Legacy API health check failed - API may be unavailable",
                error=str(e)
            )
            return False


@lru_cache(maxsize=1)
def get_legacy_api_client() -> LegacyApiClient:
    """Process-wide legacy client, also used as a FastAPI dependency."""
    return LegacyApiClient.from_settings()
