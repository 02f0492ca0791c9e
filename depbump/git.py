"""Repository state operations.

The pipeline talks to the working copy only through the Repository
interface below. GitRepository is the production implementation and drives
the git CLI; depbump.fakes holds the in-memory version.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path
from urllib.parse import urlsplit

from .errors import VersionControlError
from .models import Credentials, RepoInfo
from .shell import git

# Answers git's credential requests from the subprocess environment so the
# username and password never appear on the command line.
_CREDENTIAL_HELPER = (
    "!f() { test \"$1\" = get || exit 0; "
    'echo "username=$DEPBUMP_GIT_USERNAME"; '
    'echo "password=$DEPBUMP_GIT_PASSWORD"; }; f'
)

_SCP_LIKE = re.compile(r"^(?:[^@/]+@)?(?P<host>[^:/]+):(?P<path>[^/].*)$")


class Repository(ABC):
    """Operations the bump workflow needs from a single working copy."""

    @property
    @abstractmethod
    def root(self) -> Path:
        """Top-level directory of the working copy."""

    @abstractmethod
    def status(self) -> list[str]:
        """Return paths with uncommitted changes (tracked or untracked)."""

    @abstractmethod
    def checkout(self, branch: str) -> None:
        """Check out an existing local branch."""

    @abstractmethod
    def remote_url(self, name: str) -> str:
        """Return the URL of a remote. Fails if the remote does not exist."""

    @abstractmethod
    def fetch_all(self) -> None:
        """Fetch every remote."""

    @abstractmethod
    def merge(self, local: str, upstream: str) -> None:
        """Merge upstream into local. Fails on conflict; nothing is resolved."""

    @abstractmethod
    def head_commit(self) -> str:
        """Return the sha of the commit HEAD points at."""

    @abstractmethod
    def create_branch(self, name: str, commit: str) -> None:
        """Create a branch at commit. Fails if the branch already exists."""

    @abstractmethod
    def commit_paths(self, paths: Sequence[str], message: str) -> str:
        """Stage paths, write the tree and commit on top of HEAD.

        The new commit has exactly one parent, the previous HEAD. Returns
        the new commit's sha.
        """

    @abstractmethod
    def push(self, remote: str, refspec: str) -> None:
        """Push a refspec. Never forced; non-fast-forward pushes fail."""


class GitRepository(Repository):
    """Repository backed by the git command line."""

    def __init__(self, root: Path, credentials: Credentials | None = None) -> None:
        self._root = root
        self._credentials = credentials

    @classmethod
    def open(
        cls, path: Path, credentials: Credentials | None = None
    ) -> GitRepository:
        """Open the working copy containing path.

        Raises:
            VersionControlError: If path is not inside a git repository.
        """
        if not Path(path).is_dir():
            raise VersionControlError(f"{path} is not a directory")
        try:
            top = git("rev-parse", "--show-toplevel", cwd=path)
        except VersionControlError as exc:
            raise VersionControlError(f"{path} is not a git repository") from exc
        return cls(Path(top), credentials)

    @property
    def root(self) -> Path:
        return self._root

    def _git(self, *args: str) -> str:
        return git(*args, cwd=self._root)

    def _network_git(self, *args: str) -> str:
        """Run a git command that may need to authenticate against the remote."""
        env = {"GIT_TERMINAL_PROMPT": "0"}
        if self._credentials is None or not self._credentials.is_complete:
            return git(*args, cwd=self._root, env=env)
        env["DEPBUMP_GIT_USERNAME"] = self._credentials.username or ""
        env["DEPBUMP_GIT_PASSWORD"] = self._credentials.password.get_secret_value()
        return git(
            "-c",
            "credential.helper=",
            "-c",
            f"credential.helper={_CREDENTIAL_HELPER}",
            *args,
            cwd=self._root,
            env=env,
        )

    def status(self) -> list[str]:
        out = self._git("status", "--porcelain", "-z", "--untracked-files=all")
        # Entries are "XY <path>\0"; renames and copies add "<source>\0" after
        paths: list[str] = []
        entries = iter(out.split("\0"))
        for entry in entries:
            if len(entry) < 4:
                continue
            paths.append(entry[3:])
            if entry[0] in "RC":
                next(entries, None)
        return paths

    def checkout(self, branch: str) -> None:
        self._git("checkout", branch)

    def current_branch(self) -> str:
        return self._git("rev-parse", "--abbrev-ref", "HEAD")

    def remote_url(self, name: str) -> str:
        return self._git("remote", "get-url", name)

    def fetch_all(self) -> None:
        self._network_git("fetch", "--all")

    def merge(self, local: str, upstream: str) -> None:
        if self.current_branch() != local:
            self.checkout(local)
        self._git("merge", "--no-edit", upstream)

    def head_commit(self) -> str:
        return self._git("rev-parse", "HEAD")

    def create_branch(self, name: str, commit: str) -> None:
        # `git branch` refuses to overwrite an existing branch without -f
        self._git("branch", name, commit)

    def commit_paths(self, paths: Sequence[str], message: str) -> str:
        self._git("add", "--", *paths)
        tree = self._git("write-tree")
        parent = self.head_commit()
        commit = self._git("commit-tree", tree, "-p", parent, "-m", message)
        # Compare-and-swap against the parent so a concurrent move of HEAD fails
        self._git("update-ref", "-m", f"commit: {message}", "HEAD", commit, parent)
        return commit

    def push(self, remote: str, refspec: str) -> None:
        # Per-ref rejection lines ("! [rejected] ... (non-fast-forward)") go
        # to stderr and end up in the VersionControlError raised by git()
        self._network_git("push", remote, refspec)


def parse_remote_url(url: str) -> RepoInfo:
    """Extract host, owner and repository name from a remote URL.

    Accepts the shapes GitHub hands out:
    - https://github.com/owner/name.git
    - git@github.com:owner/name.git
    - ssh://git@github.example.com:2222/owner/name.git

    Raises:
        VersionControlError: If the URL has none of these shapes.
    """
    url = url.strip()
    if "://" in url:
        parts = urlsplit(url)
        host, path = parts.hostname, parts.path
    else:
        m = _SCP_LIKE.match(url)
        host, path = (m.group("host"), m.group("path")) if m else (None, "")

    segments = [s for s in path.strip("/").split("/") if s]
    if not host or len(segments) != 2:
        raise VersionControlError(f"Unrecognized remote URL: {url}")

    owner, name = segments
    if name.endswith(".git"):
        name = name[: -len(".git")]
    return RepoInfo(host=host, owner=owner, name=name)
