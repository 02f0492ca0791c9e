"""Hosting API operations.

Only pull request creation is needed. HostingApi is the interface the
pipeline depends on; GitHubApi implements it against the GitHub REST API
(github.com or an Enterprise instance) with requests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import requests

from .errors import HostingApiError
from .models import Credentials, PullRequest

PUBLIC_HOST = "github.com"
PUBLIC_API_URL = "https://api.github.com"


def resolve_base_url(host: str) -> str:
    """Map a git remote host to its REST API base URL.

    Examples:
        "github.com" → "https://api.github.com"
        "git.example.com" → "https://git.example.com/api/v3"
    """
    if host == PUBLIC_HOST:
        return PUBLIC_API_URL
    return f"https://{host}/api/v3"


class HostingApi(ABC):
    """Operations the bump workflow needs from the code hosting service."""

    @abstractmethod
    def create_pull_request(
        self, owner: str, repo: str, *, head: str, base: str, title: str
    ) -> PullRequest:
        """Open a pull request from head into base.

        Raises:
            HostingApiError: On network errors, rejected credentials, or
                validation failures (PR already open, unknown branch, ...).
        """


class GitHubApi(HostingApi):
    """HostingApi for GitHub, authenticated with basic auth."""

    def __init__(self, base_url: str, session: requests.Session) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session

    @classmethod
    def authenticate(cls, base_url: str, credentials: Credentials) -> GitHubApi:
        """Create a client whose session carries the given credentials."""
        if not credentials.is_complete:
            raise HostingApiError("Cannot authenticate without username and password")
        session = requests.Session()
        session.auth = (
            credentials.username,
            credentials.password.get_secret_value(),
        )
        session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "User-Agent": "dep-bump",
            }
        )
        return cls(base_url, session)

    def create_pull_request(
        self, owner: str, repo: str, *, head: str, base: str, title: str
    ) -> PullRequest:
        url = f"{self.base_url}/repos/{owner}/{repo}/pulls"
        try:
            response = self.session.post(
                url, json={"title": title, "head": head, "base": base}
            )
        except requests.RequestException as exc:
            raise HostingApiError(f"Request to {url} failed: {exc}") from exc

        if not response.ok:
            raise HostingApiError(
                f"Creating pull request failed ({response.status_code}): "
                f"{_error_detail(response)}"
            )

        try:
            data = response.json()
            return PullRequest(url=data["html_url"], number=data.get("number"))
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise HostingApiError(
                f"Unexpected pull request response ({response.status_code}) "
                f"from {url}: {exc!r}"
            ) from exc


def _error_detail(response: requests.Response) -> str:
    """Flatten GitHub's error payload into a single line.

    GitHub reports validation failures as
    {"message": "Validation Failed", "errors": [{"message": "..."}]}.
    """
    try:
        payload = response.json()
    except ValueError:
        return response.text.strip() or response.reason or "no details"
    if not isinstance(payload, dict):
        return str(payload)

    parts = [str(payload.get("message", "")).strip()]
    for err in payload.get("errors") or []:
        if isinstance(err, dict):
            parts.append(str(err.get("message") or err.get("code") or err))
        else:
            parts.append(str(err))
    return "; ".join(p for p in parts if p) or "no details"
