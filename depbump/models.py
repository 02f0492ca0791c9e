"""Data models for dep-bump.

These Pydantic models represent the values that flow through a single bump
run. All of them are immutable; nothing here is persisted between runs.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, SecretStr


class BumpRequest(BaseModel):
    """Input to one bump run.

    Attributes:
        repository_path: Path to the local working copy.
        package_name: Dependency to bump, exactly as it appears in the manifest.
        before_version: Version range the manifest must currently record.
        after_version: Version range to write (e.g. "^1.2.0").
    """

    model_config = ConfigDict(frozen=True)

    repository_path: Path
    package_name: str
    before_version: str
    after_version: str


class RepoInfo(BaseModel):
    """Coordinates of the hosted repository behind the "origin" remote."""

    model_config = ConfigDict(frozen=True)

    host: str
    owner: str
    name: str


class Credentials(BaseModel):
    """Username/password pair used for git transport and the hosting API.

    The password is a SecretStr so it never shows up in reprs or output.
    """

    model_config = ConfigDict(frozen=True)

    username: str | None = None
    password: SecretStr | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.username) and bool(
            self.password and self.password.get_secret_value()
        )


class PullRequest(BaseModel):
    """A pull request created on the hosting service."""

    model_config = ConfigDict(frozen=True)

    url: str
    number: int | None = None


class BumpResult(BaseModel):
    """What a successful run produced.

    Attributes:
        branch: Name of the branch that was created and pushed.
        commit_message: Message of the bump commit.
        pull_request: The pull request opened for the branch.
    """

    model_config = ConfigDict(frozen=True)

    branch: str
    commit_message: str
    pull_request: PullRequest
