"""Run configuration.

The environment is read exactly once, here, and turned into an immutable
Settings value that is passed explicitly into the pipeline.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from .manifest import DEFAULT_MANIFEST
from .models import Credentials

USERNAME_ENV = "GITHUB_USERNAME"
PASSWORD_ENV = "GITHUB_PASSWORD"

DEFAULT_BASE_BRANCH = "master"
DEFAULT_REMOTE = "origin"


class Settings(BaseModel):
    """Everything a run needs besides the BumpRequest itself.

    Attributes:
        credentials: GitHub username/password for push and the API.
        base_branch: Default branch to sync from and open the PR against.
        remote: Remote to fetch from and push to.
        manifest_name: Manifest file name, relative to the repository root.
    """

    model_config = ConfigDict(frozen=True)

    credentials: Credentials = Field(default_factory=Credentials)
    base_branch: str = DEFAULT_BASE_BRANCH
    remote: str = DEFAULT_REMOTE
    manifest_name: str = DEFAULT_MANIFEST


def load_credentials(environ: Mapping[str, str] | None = None) -> Credentials:
    """Read GITHUB_USERNAME / GITHUB_PASSWORD.

    Missing values are kept as None; the pipeline decides whether that is
    fatal so the failure is reported as part of the run.
    """
    env = os.environ if environ is None else environ
    password = env.get(PASSWORD_ENV)
    return Credentials(
        username=env.get(USERNAME_ENV) or None,
        password=SecretStr(password) if password else None,
    )


def load_settings(
    environ: Mapping[str, str] | None = None,
    *,
    base_branch: str = DEFAULT_BASE_BRANCH,
    remote: str = DEFAULT_REMOTE,
    manifest_name: str = DEFAULT_MANIFEST,
) -> Settings:
    """Build Settings from the environment plus explicit overrides."""
    return Settings(
        credentials=load_credentials(environ),
        base_branch=base_branch,
        remote=remote,
        manifest_name=manifest_name,
    )
