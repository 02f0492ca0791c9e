"""Bump pipeline: check → sync → verify → branch → edit → commit → push → PR.

This module orchestrates a single dependency bump:
1. Check that credentials are configured
2. Refuse to run on a working copy with uncommitted changes
3. Check out the default branch and bring it up to date with the remote
4. Verify the manifest records the version the caller expects
5. Create and check out the bump branch
6. Rewrite the manifest entry
7. Commit the manifest on the new branch
8. Push the branch
9. Open a pull request against the default branch

Every step either succeeds or raises; the first failure ends the run. Nothing
is rolled back, so a failure after step 5 leaves the branch (and possibly the
commit or the pushed ref) in place. Re-running requires deleting the branch.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from .config import Settings
from .errors import ConfigurationError, PreconditionError
from .git import GitRepository, Repository, parse_remote_url
from .hosting import GitHubApi, HostingApi, resolve_base_url
from .manifest import (
    get_dependency_version,
    load_manifest,
    save_manifest,
    set_dependency_version,
)
from .models import BumpRequest, BumpResult, Credentials, PullRequest
from .naming import branch_name, commit_message, pull_request_title
from .shell import step

RepositoryOpener = Callable[[Path, Credentials], Repository]
HostingConnector = Callable[[str, Credentials], HostingApi]


def check_credentials(credentials: Credentials) -> None:
    """Fail before touching anything if the credentials are incomplete."""
    step("Checking credentials")
    if not credentials.username:
        raise ConfigurationError("GITHUB_USERNAME required")
    if not credentials.is_complete:
        raise ConfigurationError("GITHUB_PASSWORD required")
    print("  GITHUB_USERNAME and GITHUB_PASSWORD set")


def ensure_clean_tree(repo: Repository) -> None:
    """Refuse to switch branches while unrelated edits are lying around."""
    step("Checking working copy")
    changed = repo.status()
    if changed:
        raise PreconditionError(
            f"The repo ({repo.root}) has uncommitted changes: {', '.join(changed)}"
        )
    print("  clean")


def sync_default_branch(repo: Repository, base_branch: str, remote: str) -> None:
    """Check out the default branch and merge in the remote's latest commits.

    Merge conflicts are fatal; no resolution is attempted.
    """
    step(f"Syncing {base_branch} with {remote}")
    repo.checkout(base_branch)
    repo.fetch_all()
    repo.merge(base_branch, f"{remote}/{base_branch}")
    print(f"  {base_branch} at {repo.head_commit()[:12]}")


def verify_current_version(manifest_path: Path, request: BumpRequest) -> dict:
    """Load the manifest and check it records request.before_version.

    Guards against bumping twice or bumping a manifest that has drifted
    from what the caller expects.

    Returns:
        The parsed manifest, ready to be modified.
    """
    step(f"Verifying {request.package_name} version")
    doc = load_manifest(manifest_path)
    current = get_dependency_version(doc, request.package_name)
    if current != request.before_version:
        raise PreconditionError(
            f"{request.package_name} is at {current}, "
            f"expected {request.before_version}"
        )
    print(f"  {request.package_name}: {current}")
    return doc


def create_bump_branch(repo: Repository, name: str) -> None:
    """Create the bump branch at HEAD and check it out.

    An existing branch with the same name is never reused.
    """
    step(f"Creating branch {name}")
    repo.create_branch(name, repo.head_commit())
    repo.checkout(name)


def update_manifest(manifest_path: Path, doc: dict, request: BumpRequest) -> None:
    """Write the new version into the manifest."""
    step("Updating manifest")
    set_dependency_version(doc, request.package_name, request.after_version)
    save_manifest(manifest_path, doc)
    print(
        f"  {request.package_name}: {request.before_version} → "
        f"{request.after_version}"
    )


def commit_manifest(repo: Repository, manifest_name: str, message: str) -> str:
    """Commit exactly the manifest on the current branch."""
    step("Committing")
    sha = repo.commit_paths([manifest_name], message)
    print(f"  {sha[:12]} {message}")
    return sha


def push_branch(repo: Repository, remote: str, name: str) -> None:
    """Push the bump branch under the same name, without forcing."""
    step(f"Pushing {name} to {remote}")
    repo.push(remote, f"refs/heads/{name}:refs/heads/{name}")
    print(f"  Pushed {name}")


def open_pull_request(
    repo: Repository,
    settings: Settings,
    head: str,
    title: str,
    connect: HostingConnector,
) -> PullRequest:
    """Open a pull request for the pushed branch against the default branch."""
    step("Opening pull request")
    info = parse_remote_url(repo.remote_url(settings.remote))
    api = connect(resolve_base_url(info.host), settings.credentials)
    pr = api.create_pull_request(
        info.owner, info.name, head=head, base=settings.base_branch, title=title
    )
    print(f"  {pr.url}")
    return pr


def run_bump(
    request: BumpRequest,
    settings: Settings,
    *,
    open_repository: RepositoryOpener | None = None,
    connect: HostingConnector | None = None,
) -> BumpResult:
    """Execute the full bump workflow.

    Args:
        request: What to bump and from/to which version.
        settings: Credentials and repository conventions for this run.
        open_repository: Opens the working copy. Defaults to GitRepository.open.
        connect: Builds an authenticated hosting client. Defaults to
            GitHubApi.authenticate.

    Returns:
        The pushed branch, the commit message and the created pull request.
    """
    open_repository = open_repository or GitRepository.open
    connect = connect or GitHubApi.authenticate

    check_credentials(settings.credentials)

    repo = open_repository(request.repository_path, settings.credentials)
    ensure_clean_tree(repo)
    sync_default_branch(repo, settings.base_branch, settings.remote)

    manifest_path = repo.root / settings.manifest_name
    doc = verify_current_version(manifest_path, request)

    branch = branch_name(request.package_name, request.after_version)
    message = commit_message(request.package_name, request.after_version)

    create_bump_branch(repo, branch)
    update_manifest(manifest_path, doc, request)
    commit_manifest(repo, settings.manifest_name, message)
    push_branch(repo, settings.remote, branch)

    pr = open_pull_request(
        repo, settings, branch, pull_request_title(message), connect
    )
    return BumpResult(branch=branch, commit_message=message, pull_request=pr)
