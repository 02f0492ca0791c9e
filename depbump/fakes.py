"""In-memory Repository and HostingApi implementations.

These accept pre-configured state in their constructors and record every
call, so the pipeline can be exercised without a working copy or network.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from .errors import VersionControlError
from .git import Repository
from .hosting import HostingApi
from .models import Credentials, PullRequest


class FakeRepository(Repository):
    """In-memory Repository.

    Records every call in `calls` so tests can assert on what the pipeline
    did (or did not) do. Failures are injected with the *_raises arguments.
    """

    def __init__(
        self,
        root: Path,
        *,
        status: list[str] | None = None,
        branches: set[str] | None = None,
        remotes: dict[str, str] | None = None,
        merge_raises: Exception | None = None,
        commit_raises: Exception | None = None,
        push_raises: Exception | None = None,
    ) -> None:
        self._root = root
        self._status = status or []
        self.branches = branches if branches is not None else {"master"}
        self.remotes = (
            remotes
            if remotes is not None
            else {"origin": "git@github.com:acme/my-app.git"}
        )
        self._merge_raises = merge_raises
        self._commit_raises = commit_raises
        self._push_raises = push_raises

        self.current = "master"
        self.heads = {name: "a" * 40 for name in self.branches}
        self.calls: list[tuple] = []
        self.commits: list[tuple[str, list[str], str, str]] = []
        self.pushed: list[tuple[str, str]] = []

    @property
    def root(self) -> Path:
        return self._root

    def status(self) -> list[str]:
        self.calls.append(("status",))
        return list(self._status)

    def checkout(self, branch: str) -> None:
        self.calls.append(("checkout", branch))
        if branch not in self.branches:
            raise VersionControlError(f"pathspec '{branch}' did not match")
        self.current = branch

    def remote_url(self, name: str) -> str:
        self.calls.append(("remote_url", name))
        if name not in self.remotes:
            raise VersionControlError(f"No such remote '{name}'")
        return self.remotes[name]

    def fetch_all(self) -> None:
        self.calls.append(("fetch_all",))

    def merge(self, local: str, upstream: str) -> None:
        self.calls.append(("merge", local, upstream))
        if self._merge_raises is not None:
            raise self._merge_raises

    def head_commit(self) -> str:
        return self.heads[self.current]

    def create_branch(self, name: str, commit: str) -> None:
        self.calls.append(("create_branch", name, commit))
        if name in self.branches:
            raise VersionControlError(f"a branch named '{name}' already exists")
        self.branches.add(name)
        self.heads[name] = commit

    def commit_paths(self, paths: Sequence[str], message: str) -> str:
        self.calls.append(("commit_paths", list(paths), message))
        if self._commit_raises is not None:
            raise self._commit_raises
        parent = self.heads[self.current]
        sha = f"{len(self.commits) + 1:040x}"
        self.commits.append((self.current, list(paths), message, parent))
        self.heads[self.current] = sha
        return sha

    def push(self, remote: str, refspec: str) -> None:
        self.calls.append(("push", remote, refspec))
        if self._push_raises is not None:
            raise self._push_raises
        self.pushed.append((remote, refspec))

    def mutations(self) -> list[tuple]:
        """Calls that change repository state."""
        return [
            c
            for c in self.calls
            if c[0] in {"checkout", "merge", "create_branch", "commit_paths", "push"}
        ]


class FakeHostingApi(HostingApi):
    """In-memory HostingApi that records created pull requests."""

    def __init__(self, *, raises: Exception | None = None) -> None:
        self._raises = raises
        self.base_url: str | None = None
        self.credentials: Credentials | None = None
        self.created: list[dict[str, str]] = []

    def connect(self, base_url: str, credentials: Credentials) -> FakeHostingApi:
        self.base_url = base_url
        self.credentials = credentials
        return self

    def create_pull_request(
        self, owner: str, repo: str, *, head: str, base: str, title: str
    ) -> PullRequest:
        if self._raises is not None:
            raise self._raises
        self.created.append(
            {"owner": owner, "repo": repo, "head": head, "base": base, "title": title}
        )
        number = len(self.created)
        return PullRequest(
            url=f"https://github.com/{owner}/{repo}/pull/{number}", number=number
        )
