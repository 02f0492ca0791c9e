"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import SecretStr

from depbump.config import Settings
from depbump.errors import HostingApiError, VersionControlError
from depbump.fakes import FakeHostingApi, FakeRepository
from depbump.models import BumpRequest, Credentials

MANIFEST = {
    "name": "my-app",
    "version": "3.1.4",
    "private": True,
    "scripts": {"test": "lab -a code -L"},
    "dependencies": {
        "hoek": "5.x.x",
        "left-pad": "1.0.0",
        "@hapi/joi": "^15.0.0",
    },
    "devDependencies": {"lab": "^18.0.0"},
}


@pytest.fixture
def manifest_data() -> dict:
    """A fresh copy of the manifest written by repo_root."""
    return json.loads(json.dumps(MANIFEST))


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    """A directory holding a package.json."""
    (tmp_path / "package.json").write_text(json.dumps(MANIFEST, indent=2) + "\n")
    return tmp_path


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(username="octocat", password=SecretStr("hunter2"))


@pytest.fixture
def settings(credentials: Credentials) -> Settings:
    return Settings(credentials=credentials)


@pytest.fixture
def bump_request(repo_root: Path) -> BumpRequest:
    return BumpRequest(
        repository_path=repo_root,
        package_name="left-pad",
        before_version="1.0.0",
        after_version="^1.2.0",
    )


@pytest.fixture
def fake_repo(repo_root: Path) -> FakeRepository:
    return FakeRepository(repo_root)


@pytest.fixture
def fake_api() -> FakeHostingApi:
    return FakeHostingApi()


@pytest.fixture
def non_fast_forward() -> VersionControlError:
    return VersionControlError(
        "git push failed: ! [rejected] bump-left-pad-v1.2.0 (non-fast-forward)"
    )


@pytest.fixture
def duplicate_pr() -> HostingApiError:
    return HostingApiError(
        "Creating pull request failed (422): Validation Failed; "
        "A pull request already exists for acme:bump-left-pad-v1.2.0."
    )
